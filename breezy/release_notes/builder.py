"""Builds the markdown body of a draft release from merged pull requests."""

import structlog

from breezy.utils.constants import (
    CHANGES_PLACEHOLDER,
    DEFAULT_CHANGE_TEMPLATE,
    NUMBER_PLACEHOLDER,
    RELEASE_MARKER_TEMPLATE,
    TITLE_PLACEHOLDER,
)

from .config import ReleaseCategory, ReleaseConfig
from .models import PullRequestInfo

logger = structlog.get_logger(__name__)


def release_marker(branch: str) -> str:
    """Return the hidden marker identifying the draft release owned by `branch`.

    The branch name is embedded as-is, so a branch containing ``-->`` produces
    a broken marker.
    """
    return RELEASE_MARKER_TEMPLATE.format(branch=branch)


def sort_by_merge_date(pull_requests: list[PullRequestInfo]) -> list[PullRequestInfo]:
    """Stable sort by merge time, oldest first; unmerged entries sort first."""
    return sorted(pull_requests, key=lambda pr: (pr.merged_at is not None, pr.merged_at))


def unique_pull_requests(pull_requests: list[PullRequestInfo]) -> list[PullRequestInfo]:
    """Sort by merge time and keep only the first occurrence of each pull request number."""
    seen: set[int] = set()
    unique: list[PullRequestInfo] = []
    for pull_request in sort_by_merge_date(pull_requests):
        if pull_request.number in seen:
            continue
        seen.add(pull_request.number)
        unique.append(pull_request)
    return unique


def format_change(template: str, pull_request: PullRequestInfo) -> str:
    """Render one changelog line from the change template."""
    return template.replace(NUMBER_PLACEHOLDER, str(pull_request.number)).replace(TITLE_PLACEHOLDER, pull_request.title)


def pull_request_labels(pull_request: PullRequestInfo) -> set[str]:
    """Labels of a pull request normalized for matching against the config."""
    return {label.strip().lower() for label in pull_request.labels if label.strip()}


def match_category(labels: set[str], categories: list[ReleaseCategory]) -> int | None:
    """Index of the first declared category sharing a label, or None."""
    for index, category in enumerate(categories):
        if labels.intersection(category.labels):
            return index
    return None


def render_sections(config: ReleaseConfig, pull_requests: list[PullRequestInfo]) -> list[str]:
    """Group pull requests into the configured categories and render each non-empty section.

    Sections follow declaration order with headingless uncategorized changes last.
    Pull requests carrying an excluded label are left out entirely.
    """
    excluded = set(config.exclude_labels)
    grouped: list[list[str]] = [[] for _ in config.categories]
    other: list[str] = []

    for pull_request in pull_requests:
        labels = pull_request_labels(pull_request)
        if labels & excluded:
            logger.debug("Skipping pull request with excluded label", number=pull_request.number, labels=sorted(labels & excluded))
            continue
        line = format_change(config.change_template, pull_request)
        index = match_category(labels, config.categories)
        if index is None:
            other.append(line)
        else:
            grouped[index].append(line)

    sections: list[str] = []
    for category, lines in zip(config.categories, grouped):
        if lines:
            heading = "#" * category.heading_level + " " + category.title
            sections.append("\n".join([heading, *lines]))
    if other:
        sections.append("\n".join(other))
    return sections


def build_release_notes(marker: str, config: ReleaseConfig | None, pull_requests: list[PullRequestInfo]) -> str:
    """Build the release body for a branch.

    The marker is always the first line. Without categories every pull request
    is one line in merge order; with categories the lines are grouped under
    headings. When nothing is left to list the body is the marker alone.

    Args:
        marker: The branch's release marker.
        config: The release config, or None when no config file was found.
        pull_requests: Merged pull requests since the baseline, possibly with duplicates.

    Returns:
        The markdown release body.
    """
    unique = unique_pull_requests(pull_requests)

    if config is None or not config.categories:
        change_template = config.change_template if config is not None else DEFAULT_CHANGE_TEMPLATE
        sections = ["\n".join(format_change(change_template, pull_request) for pull_request in unique)] if unique else []
    else:
        sections = render_sections(config, unique)

    logger.debug("Built release notes", pull_requests=len(unique), sections=len(sections))
    if not sections:
        return marker
    return "\n\n".join([marker, *sections])


def apply_body_template(marker: str, notes: str, template: str) -> str:
    """Place the generated changes into a full-body template.

    The changes below the marker replace the ``$CHANGES`` placeholder and the
    marker stays the first line.
    """
    changes = notes[len(marker) :].lstrip("\n") if notes.startswith(marker) else notes
    return f"{marker}\n\n{template.replace(CHANGES_PLACEHOLDER, changes)}"
