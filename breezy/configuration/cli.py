"""Defines the Command Line Interface (CLI) using Typer.

Every option can also be given through the environment variables a GitHub
Action receives its inputs in (``INPUT_<NAME>``), so the same command works
locally and as an action step.
"""

import asyncio
import logging
import sys
from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from breezy.configuration.env import Settings
from breezy.configuration.exceptions import RequiredConfigurationElementError
from breezy.configuration.reconcile import reconcile_release_configuration
from breezy.release_notes.config import parse_release_config
from breezy.release_notes.exceptions import ConfigError
from breezy.release_notes.generator import DraftReleaseGenerator
from breezy.release_notes.models import DraftReleaseStatus
from breezy.utils.yaml import read_text_file

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Keep one draft release per branch up to date.")


def configure_logging(debug: bool) -> None:
    """Configure structlog to write human readable events to stderr."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


@typer_app.command(name="sync")
def sync_cli(
    branch: Annotated[str | None, Option(envvar="INPUT_BRANCH", help="Branch whose draft release is maintained.")] = None,
    language: Annotated[
        str | None,
        Option(envvar="INPUT_LANGUAGE", help="Comma separated languages whose manifests hold the version (python, node, rust, generic)."),
    ] = None,
    tag_prefix: Annotated[
        str | None, Option("--tag-prefix", envvar=["INPUT_TAG-PREFIX", "INPUT_TAG_PREFIX"], help="Prefix of the release tag. Defaults to 'v'.")
    ] = None,
    github_token: Annotated[
        str | None,
        Option("--github-token", envvar=["INPUT_GITHUB-TOKEN", "INPUT_GITHUB_TOKEN", "GITHUB_TOKEN"], help="GitHub token."),
    ] = None,
    config: Annotated[
        str | None,
        Option("--config", envvar=["INPUT_CONFIG", "INPUT_CONFIG-PATH", "INPUT_CONFIG_PATH"], help="Path to the breezy.yml release config."),
    ] = None,
    repo: Annotated[str | None, Option(envvar="GITHUB_REPOSITORY", help="Repository name (owner/repo).")] = None,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    dry_run: Annotated[
        bool, Option("--dry-run", envvar=["INPUT_DRY-RUN", "INPUT_DRY_RUN"], help="Print the release instead of writing it.")
    ] = False,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Create or update the draft release of a branch."""
    configure_logging(debug)
    try:
        run_config = reconcile_release_configuration(
            cli_branch=branch,
            cli_language=language,
            cli_tag_prefix=tag_prefix,
            cli_github_token=github_token,
            cli_repo=repo,
            cli_github_api_url=github_api_url,
            cli_config_path=config,
            cli_dry_run=dry_run,
            cli_debug=debug,
            settings=Settings(),
        )
    except (RequiredConfigurationElementError, ValueError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    configure_logging(run_config.debug)
    generator = DraftReleaseGenerator(run_config)
    result = asyncio.run(generator.run(dry_run=run_config.dry_run))

    if result.status == DraftReleaseStatus.ERROR:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(1)

    if result.status == DraftReleaseStatus.DRY_RUN:
        for release_id in result.extra_release_ids:
            typer.echo(f"Would delete extra draft release {release_id} for {run_config.branch}")
        action = f"update draft release {result.release_id}" if result.release_id is not None else "create draft release"
        typer.echo(f"Would {action} for {run_config.branch}: {result.release_name} [{result.tag_name}]")
        typer.echo("")
        typer.echo(result.body or "")
        return

    for release_id in result.extra_release_ids:
        typer.echo(f"Deleted extra draft release {release_id} for {run_config.branch}")
    if result.status == DraftReleaseStatus.UPDATED:
        typer.echo(f"Updated draft release {result.release_id} for {run_config.branch}")
    else:
        typer.echo(f"Created draft release for {run_config.branch}")


@typer_app.command(name="check-config")
def check_config_cli(
    config_path: Annotated[Path, Argument(envvar="INPUT_CONFIG", help="Path to the breezy.yml release config.")],
) -> None:
    """Validate a release config file and summarize its categories."""
    if not config_path.exists():
        typer.echo(f"Config file not found: {config_path.absolute()}", err=True)
        raise typer.Exit(1)

    try:
        release_config = parse_release_config(read_text_file(config_path))
    except ConfigError as e:
        typer.echo(f"Invalid release config: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Release config {config_path} is valid")
    typer.echo(f"Change template: {release_config.change_template}")
    if release_config.exclude_labels:
        typer.echo(f"Excluded labels: {', '.join(release_config.exclude_labels)}")
    if not release_config.categories:
        typer.echo("No categories defined - changelog will not be categorized")
    for category in release_config.categories:
        labels = ", ".join(category.labels) or "(no labels)"
        typer.echo(f"{'#' * category.heading_level} {category.title}: {labels}")


if __name__ == "__main__":
    typer_app()
