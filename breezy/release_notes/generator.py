"""Main draft release orchestration."""

import structlog

from ..configuration.exceptions import RequiredConfigurationElementError
from ..configuration.models import ReleaseRunConfig
from ..github.abc import GitHubClientBase
from ..github.adapter import GitHubKitAdapter
from ..utils.constants import (
    BRANCH_PLACEHOLDER,
    PREFIX_PLACEHOLDER,
    TAG_PLACEHOLDER,
    VERSION_PLACEHOLDER,
)
from .builder import apply_body_template, build_release_notes, release_marker
from .config import ReleaseConfig
from .loader import load_release_config
from .models import DraftReleaseResult, DraftReleaseStatus
from .reconciler import release_timestamp, select_draft_releases, select_latest_published_release
from .versioning import parse_languages, resolve_version

logger = structlog.get_logger(__name__)


def render_tag_name(tag_prefix: str, version: str, template: str | None = None) -> str:
    """Tag of the release: the configured template, else prefix followed by version."""
    if template:
        return template.replace(PREFIX_PLACEHOLDER, tag_prefix).replace(VERSION_PLACEHOLDER, version)
    return f"{tag_prefix}{version}"


def render_release_name(tag_name: str, version: str, branch: str, template: str | None = None) -> str:
    """Title of the release: the configured template, else "<tag> (<branch>)"."""
    if template:
        return template.replace(TAG_PLACEHOLDER, tag_name).replace(VERSION_PLACEHOLDER, version).replace(BRANCH_PLACEHOLDER, branch)
    return f"{tag_name} ({branch})"


class DraftReleaseGenerator:
    """Keeps exactly one draft release per branch, with a changelog of merged pull requests.

    Every run starts from a fresh snapshot of the repository's releases:

    1. The draft owning the branch is found through the marker in its body;
       duplicates left behind by racing runs are deleted.
    2. The latest published release of the branch is the baseline; pull requests
       merged after it make up the changelog.
    3. The draft is updated in place, or created when the branch has none.

    Nothing is written until the whole release has been computed, so a failing
    run leaves the repository untouched.
    """

    def __init__(self, run_config: ReleaseRunConfig, adapter: GitHubClientBase | None = None) -> None:
        """Initialize with the reconciled run configuration.

        Args:
            run_config: Inputs of this run
            adapter: GitHub client to use; one is created from the run config when omitted
        """
        self.run_config = run_config
        self.adapter = adapter

    async def initialize(self) -> None:
        """Initialize GitHub adapter."""
        self.adapter = await GitHubKitAdapter.create(
            repo=self.run_config.repo,
            github_token=self.run_config.github_token,
            github_api_url=self.run_config.github_api_url,
        )
        logger.info("GitHub adapter initialized", repo=self.run_config.repo)

    def _languages(self, release_config: ReleaseConfig | None) -> list[str]:
        if self.run_config.languages:
            return self.run_config.languages
        languages = parse_languages(release_config.language if release_config else None)
        if not languages:
            raise RequiredConfigurationElementError("language", "--language", "INPUT_LANGUAGE")
        return languages

    async def run(self, dry_run: bool = False) -> DraftReleaseResult:
        """Create or update the branch's draft release.

        Args:
            dry_run: If True, compute the release but do not write anything

        Returns:
            Result of the run
        """
        branch = self.run_config.branch
        try:
            release_config = load_release_config(self.run_config.config_path, self.run_config.workspace, self.run_config.home)
            version_info = resolve_version(self.run_config.workspace, self._languages(release_config))

            tag_name = render_tag_name(
                self.run_config.tag_prefix,
                version_info.version,
                release_config.tag_template if release_config else None,
            )
            release_name = render_release_name(
                tag_name,
                version_info.version,
                branch,
                release_config.name_template if release_config else None,
            )
            marker = release_marker(branch)
            logger.info("Preparing draft release", branch=branch, tag_name=tag_name, release_name=release_name)

            if not self.adapter:
                await self.initialize()
            assert self.adapter is not None

            releases = await self.adapter.list_releases()
            selection = select_draft_releases(releases, marker)
            baseline = select_latest_published_release(releases, branch)
            since = release_timestamp(baseline) if baseline else None
            if baseline:
                logger.info("Using published release as baseline", release_id=baseline.id, tag_name=baseline.tag_name, since=since.isoformat() if since else None)
            else:
                logger.info("No published release for branch, changelog covers all history", branch=branch)

            pull_requests = await self.adapter.list_merged_pull_requests(branch, since)
            body = build_release_notes(marker, release_config, pull_requests)
            if release_config and release_config.template:
                body = apply_body_template(marker, body, release_config.template)

            if dry_run:
                logger.info("Dry run mode - not writing draft release", primary=selection.primary, extras=selection.extras)
                return DraftReleaseResult(
                    status=DraftReleaseStatus.DRY_RUN,
                    release_id=selection.primary,
                    tag_name=tag_name,
                    release_name=release_name,
                    body=body,
                    extra_release_ids=selection.extras,
                )

            for release_id in selection.extras:
                await self.adapter.delete_release(release_id)
                logger.info("Deleted extra draft release", release_id=release_id, branch=branch)

            if selection.primary is not None:
                release = await self.adapter.update_release(selection.primary, tag_name, release_name, body, branch)
                status = DraftReleaseStatus.UPDATED
            else:
                release = await self.adapter.create_release(tag_name, release_name, body, branch, draft=True)
                status = DraftReleaseStatus.CREATED
            logger.info("Wrote draft release", status=status.value, release_id=release.id, branch=branch)

            return DraftReleaseResult(
                status=status,
                release_id=release.id,
                tag_name=tag_name,
                release_name=release_name,
                body=body,
                extra_release_ids=selection.extras,
            )

        except Exception as e:
            logger.exception("Failed to update draft release", branch=branch)
            return DraftReleaseResult(status=DraftReleaseStatus.ERROR, error=str(e))
