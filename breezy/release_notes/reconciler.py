"""Selects the draft release owned by a branch and the baseline to diff against."""

from datetime import datetime

import structlog

from .models import DraftSelection, ReleaseInfo

logger = structlog.get_logger(__name__)


def release_timestamp(release: ReleaseInfo) -> datetime:
    """Effective timestamp of a release: when it was published, else when it was created."""
    return release.published_at or release.created_at


def select_draft_releases(releases: list[ReleaseInfo], marker: str) -> DraftSelection:
    """Pick the draft release to update for the branch owning `marker`.

    A draft belongs to the branch when its body contains the marker. The newest
    draft (by creation time, ties keep input order) is the primary; every other
    matching draft is an extra left over from a racing run and should be deleted.

    Args:
        releases: Every release of the repository.
        marker: The branch's release marker.

    Returns:
        The selection. An empty selection means a new draft must be created.
    """
    drafts = [release for release in releases if release.draft and marker in (release.body or "")]
    drafts = sorted(drafts, key=lambda release: release.created_at, reverse=True)

    if not drafts:
        return DraftSelection()

    primary = drafts[0].id
    extras: list[int] = []
    # Overlapping pages can list the same release twice.
    for release in drafts[1:]:
        if release.id != primary and release.id not in extras:
            extras.append(release.id)

    selection = DraftSelection(primary=primary, extras=extras)
    if selection.extras:
        logger.warning("Found more than one draft release for branch", primary=selection.primary, extras=selection.extras)
    return selection


def select_latest_published_release(releases: list[ReleaseInfo], branch: str) -> ReleaseInfo | None:
    """Return the most recently published release targeting exactly `branch`, if any."""
    published = [release for release in releases if not release.draft and release.target_commitish == branch]
    if not published:
        return None
    return sorted(published, key=release_timestamp, reverse=True)[0]
