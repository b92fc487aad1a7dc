"""Parses the breezy release configuration document.

The document is YAML. It is validated against a raw Pydantic schema mirroring
its keys and then normalized into a ReleaseConfig: labels are trimmed,
lower-cased and de-duplicated, each category's alternative heading keys are
collapsed into one (title, heading level) pair, and the change template gets its
default. Any problem raises ConfigError; a partial config is never returned.
"""

from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from ruamel.yaml.error import YAMLError

from breezy.release_notes.exceptions import ConfigError
from breezy.utils.constants import CATEGORY_HEADING_KEYS, DEFAULT_CHANGE_TEMPLATE
from breezy.utils.yaml import load_yaml_text

logger = structlog.get_logger(__name__)


class RawCategory(BaseModel):
    """Pydantic model for a category record as written in the config document."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title: str | None = None
    h1: str | None = None
    h2: str | None = None
    h3: str | None = None
    labels: list[str] | None = None
    label: str | None = None


class RawReleaseConfig(BaseModel):
    """Pydantic model for the config document as written on disk."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    language: str | None = None
    tag_template: str | None = Field(default=None, alias="tag-template")
    name_template: str | None = Field(default=None, alias="name-template")
    categories: list[RawCategory] | None = None
    exclude_labels: list[str] | None = Field(default=None, alias="exclude-labels")
    change_template: str | None = Field(default=None, alias="change-template")
    template: str | None = None


class ReleaseCategory(BaseModel):
    """A changelog section matched by pull request label."""

    model_config = ConfigDict(frozen=True)

    title: str
    heading_level: int = Field(ge=1, le=3)
    labels: list[str] = []


class ReleaseConfig(BaseModel):
    """Validated and normalized release configuration."""

    model_config = ConfigDict(frozen=True)

    language: str | None = None
    tag_template: str | None = None
    name_template: str | None = None
    categories: list[ReleaseCategory] = []
    exclude_labels: list[str] = []
    change_template: str = DEFAULT_CHANGE_TEMPLATE
    template: str | None = None


def normalize_labels(labels: list[str]) -> list[str]:
    """Trim and lower-case labels, dropping empty and repeated ones while keeping order."""
    normalized: list[str] = []
    for label in labels:
        value = label.strip().lower()
        if value and value not in normalized:
            normalized.append(value)
    return normalized


def resolve_category_heading(category: RawCategory, index: int = 0) -> tuple[str, int]:
    """Collapse the title/h1/h2/h3 keys of a category into a (title, heading level) pair.

    Args:
        category: The raw category record.
        index: Position of the category in the document, used in error messages.

    Raises:
        ConfigError: If zero or several heading keys are present, or the heading is blank.
    """
    candidates: list[tuple[str, str, int]] = []
    for key, level in CATEGORY_HEADING_KEYS.items():
        value = getattr(category, key)
        if value is not None:
            candidates.append((key, value, level))

    if len(candidates) != 1:
        found = ", ".join(key for key, _, _ in candidates) or "none"
        raise ConfigError(
            f"ambiguous or missing category heading: category {index + 1} must include exactly one of: "
            f"{', '.join(CATEGORY_HEADING_KEYS)} (found: {found})"
        )

    key, value, level = candidates[0]
    title = value.strip()
    if not title:
        raise ConfigError(f"category {index + 1} has an empty '{key}' heading")
    return title, level


def _strip_optional(value: str | None) -> str | None:
    return value.strip() if value is not None else None


def build_release_config(raw: RawReleaseConfig) -> ReleaseConfig:
    """Normalize a validated raw config into a ReleaseConfig."""
    categories: list[ReleaseCategory] = []
    for index, raw_category in enumerate(raw.categories or []):
        title, heading_level = resolve_category_heading(raw_category, index)
        labels = list(raw_category.labels or [])
        if raw_category.label is not None:
            labels.append(raw_category.label)
        categories.append(ReleaseCategory(title=title, heading_level=heading_level, labels=normalize_labels(labels)))

    change_template = (raw.change_template or "").strip() or DEFAULT_CHANGE_TEMPLATE
    language = raw.language.strip().lower() if raw.language is not None else None

    return ReleaseConfig(
        language=language or None,
        tag_template=_strip_optional(raw.tag_template),
        name_template=_strip_optional(raw.name_template),
        categories=categories,
        exclude_labels=normalize_labels(raw.exclude_labels or []),
        change_template=change_template,
        template=_strip_optional(raw.template),
    )


def parse_release_config(document: str) -> ReleaseConfig:
    """Parse a YAML release configuration document.

    Args:
        document: The already-read text of the config file.

    Returns:
        The normalized ReleaseConfig. An empty document yields the defaults.

    Raises:
        ConfigError: If the YAML is malformed, is not a mapping, does not match
            the schema, or declares an invalid category.
    """
    try:
        data: Any = load_yaml_text(document)
    except YAMLError as e:
        raise ConfigError(f"Invalid config YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config YAML: expected a mapping at the top level, got {type(data).__name__}")

    try:
        raw = RawReleaseConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config: {e}") from e

    config = build_release_config(raw)
    logger.debug(
        "Parsed release config",
        categories=[category.title for category in config.categories],
        exclude_labels=config.exclude_labels,
        change_template=config.change_template,
    )
    return config
