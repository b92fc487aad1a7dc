"""Shared constants used across the application."""

# Release Marker Constants
# ------------------------

RELEASE_MARKER_TEMPLATE = "<!-- breezy:branch={branch} -->"
"""Hidden HTML comment embedded as the first line of every draft release body."""

# Release Config Constants
# ------------------------

DEFAULT_CHANGE_TEMPLATE = "$TITLE"
"""Template used for a changelog line when the config does not define one."""

DEFAULT_CATEGORY_HEADING_LEVEL = 2
"""Heading level implied by the `title` key of a category."""

CATEGORY_HEADING_KEYS: dict[str, int] = {"title": DEFAULT_CATEGORY_HEADING_LEVEL, "h1": 1, "h2": 2, "h3": 3}
"""Category keys that select the heading text, mapped to the heading level they imply."""

CONFIG_DIRECTORY_NAME = ".github"
CONFIG_FILE_NAME = "breezy.yml"

# Template Placeholders
# ---------------------

TITLE_PLACEHOLDER = "$TITLE"
NUMBER_PLACEHOLDER = "$NUMBER"
CHANGES_PLACEHOLDER = "$CHANGES"
PREFIX_PLACEHOLDER = "$PREFIX"
VERSION_PLACEHOLDER = "$VERSION"
TAG_PLACEHOLDER = "$TAG"
BRANCH_PLACEHOLDER = "$BRANCH"

# GitHub Constants
# ----------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_TAG_PREFIX = "v"

MAX_PER_PAGE = 100
"""Largest page size accepted by the GitHub REST API."""
