"""Unit tests for draft and baseline release selection."""

from datetime import datetime, timezone

from breezy.release_notes.builder import release_marker
from breezy.release_notes.models import DraftSelection, ReleaseInfo
from breezy.release_notes.reconciler import (
    release_timestamp,
    select_draft_releases,
    select_latest_published_release,
)

MARKER = release_marker("main")


def at(year: int, month: int, day: int) -> datetime:
    """A UTC midnight timestamp."""
    return datetime(year, month, day, tzinfo=timezone.utc)


def release(
    release_id: int,
    draft: bool,
    created_at: datetime,
    body: str | None = None,
    published_at: datetime | None = None,
    target: str = "main",
) -> ReleaseInfo:
    """Build a release record."""
    return ReleaseInfo(
        id=release_id,
        draft=draft,
        body=body,
        created_at=created_at,
        published_at=published_at,
        target_commitish=target,
    )


def test_newest_draft_is_primary() -> None:
    """Test that the newest matching draft is updated and the older one deleted."""
    releases = [
        release(1, True, at(2024, 1, 1), body=MARKER),
        release(2, True, at(2024, 2, 1), body=MARKER),
    ]
    assert select_draft_releases(releases, MARKER) == DraftSelection(primary=2, extras=[1])


def test_extras_are_newest_first() -> None:
    """Test that extras are ordered newest first, oldest last."""
    releases = [
        release(10, True, at(2024, 1, 1), body=f"{MARKER}\n\nA"),
        release(11, True, at(2024, 3, 1), body=f"{MARKER}\n\nB"),
        release(12, True, at(2024, 2, 1), body=f"{MARKER}\n\nC"),
    ]
    selection = select_draft_releases(releases, MARKER)
    assert selection.primary == 11
    assert selection.extras == [12, 10]


def test_ties_keep_input_order() -> None:
    """Test that drafts created at the same time keep their input order."""
    releases = [release(5, True, at(2024, 1, 1), body=MARKER), release(4, True, at(2024, 1, 1), body=MARKER)]
    assert select_draft_releases(releases, MARKER) == DraftSelection(primary=5, extras=[4])


def test_only_drafts_with_marker_are_owned() -> None:
    """Test that published releases, other branches and empty bodies are ignored."""
    releases = [
        release(1, False, at(2024, 5, 1), body=MARKER),
        release(2, True, at(2024, 5, 2), body=release_marker("dev")),
        release(3, True, at(2024, 5, 3), body=None),
        release(4, True, at(2024, 1, 1), body=f"Intro\n{MARKER}"),
    ]
    assert select_draft_releases(releases, MARKER) == DraftSelection(primary=4, extras=[])


def test_no_matching_draft() -> None:
    """Test that no match means a new draft must be created."""
    selection = select_draft_releases([release(1, False, at(2024, 1, 1), body=MARKER)], MARKER)
    assert selection.primary is None
    assert selection.extras == []


def test_primary_never_listed_in_extras() -> None:
    """Test that a release listed twice does not schedule its own deletion."""
    duplicate = release(7, True, at(2024, 1, 1), body=MARKER)
    assert select_draft_releases([duplicate, duplicate], MARKER) == DraftSelection(primary=7, extras=[])


def test_baseline_is_latest_published_on_branch() -> None:
    """Test that the latest published release of the exact branch is the baseline."""
    releases = [
        release(1, False, at(2023, 12, 1), published_at=at(2024, 1, 1)),
        release(2, False, at(2024, 2, 20), published_at=at(2024, 3, 1)),
        release(3, False, at(2024, 5, 1), published_at=at(2024, 6, 1), target="dev"),
    ]
    baseline = select_latest_published_release(releases, "main")
    assert baseline is not None
    assert baseline.id == 2
    assert release_timestamp(baseline) == at(2024, 3, 1)


def test_baseline_ignores_drafts_and_branch_prefixes() -> None:
    """Test that drafts and branches merely sharing a prefix are not baselines."""
    releases = [
        release(1, True, at(2024, 6, 1)),
        release(2, False, at(2024, 5, 1), published_at=at(2024, 5, 2), target="main-old"),
    ]
    assert select_latest_published_release(releases, "main") is None


def test_baseline_falls_back_to_created_at() -> None:
    """Test that a release without a publish time is ordered by its creation time."""
    releases = [
        release(1, False, at(2024, 4, 1)),
        release(2, False, at(2024, 1, 1), published_at=at(2024, 3, 1)),
    ]
    baseline = select_latest_published_release(releases, "main")
    assert baseline is not None
    assert baseline.id == 1
    assert release_timestamp(baseline) == at(2024, 4, 1)


def test_no_baseline_without_releases() -> None:
    """Test that an empty release list has no baseline."""
    assert select_latest_published_release([], "main") is None
