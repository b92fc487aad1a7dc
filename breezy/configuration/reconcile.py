"""Reconciles configuration between CLI arguments and environment variables."""

from pathlib import Path

from breezy.configuration.env import Settings
from breezy.configuration.exceptions import RequiredConfigurationElementError
from breezy.configuration.models import ReleaseRunConfig
from breezy.release_notes.versioning import parse_languages
from breezy.utils.constants import DEFAULT_TAG_PREFIX
from breezy.utils.github import split_repository


def _clean(value: str | None) -> str | None:
    """Strip a value, treating blank strings as missing."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def reconcile_release_configuration(
    cli_branch: str | None,
    cli_language: str | None,
    cli_tag_prefix: str | None,
    cli_github_token: str | None,
    cli_repo: str | None,
    cli_github_api_url: str | None,
    cli_config_path: str | None,
    cli_dry_run: bool = False,
    cli_debug: bool = False,
    settings: Settings | None = None,
    cwd: Path | None = None,
) -> ReleaseRunConfig:
    """Merge command line values with environment settings into a run config.

    Command line values (which typer already fills from the GitHub Action
    `INPUT_*` variables) win over the settings.

    Args:
        cli_branch: Branch whose draft release is maintained.
        cli_language: Comma or whitespace separated language list; may be empty
            when the release config declares a language.
        cli_tag_prefix: Prefix put in front of the version to form the tag.
        cli_github_token: Token for the GitHub API.
        cli_repo: Repository in 'owner/repo' format.
        cli_github_api_url: GitHub API URL.
        cli_config_path: Explicit release config path.
        cli_dry_run: Compute the release without writing it.
        cli_debug: Enable debug logging.
        settings: Environment settings; loaded from the environment when None.
        cwd: Fallback workspace when GITHUB_WORKSPACE is unset; defaults to the current directory.

    Raises:
        RequiredConfigurationElementError: If the branch, token or repository is missing.
        ValueError: If the repository is not in 'owner/repo' format.
    """
    if settings is None:
        settings = Settings()

    branch = _clean(cli_branch)
    if branch is None:
        raise RequiredConfigurationElementError("branch", "--branch", "INPUT_BRANCH")

    github_token = _clean(cli_github_token) or _clean(settings.GITHUB_TOKEN)
    if github_token is None:
        raise RequiredConfigurationElementError("github-token", "--github-token", "INPUT_GITHUB-TOKEN or GITHUB_TOKEN")

    repo = _clean(cli_repo) or _clean(settings.GITHUB_REPOSITORY)
    if repo is None:
        raise RequiredConfigurationElementError("repository", "--repo", "GITHUB_REPOSITORY")
    owner, repo_name = split_repository(repo)

    tag_prefix = cli_tag_prefix.strip() if cli_tag_prefix is not None else DEFAULT_TAG_PREFIX
    workspace = settings.GITHUB_WORKSPACE or cwd or Path.cwd()

    return ReleaseRunConfig(
        github_api_url=_clean(cli_github_api_url) or settings.GITHUB_API_URL,
        github_token=github_token,
        repo=f"{owner}/{repo_name}",
        branch=branch,
        workspace=workspace,
        home=settings.HOME,
        languages=parse_languages(cli_language),
        tag_prefix=tag_prefix,
        config_path=_clean(cli_config_path),
        dry_run=cli_dry_run,
        debug=cli_debug or settings.DEBUG,
    )
