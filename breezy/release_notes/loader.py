"""Locates and reads the release configuration file.

Resolution order, first found wins:

1. An explicit path (``~`` and ``~/`` expand against the home directory,
   relative paths are taken from the working directory).
2. ``<home>/.github/breezy.yml``
3. ``<cwd>/.github/breezy.yml``

When nothing is found no config is used and the changelog is uncategorized.
The fallback locations are plain resolver callables so callers and tests
decide where "home" and the repository root are.
"""

from pathlib import Path
from typing import Callable

import structlog

from breezy.release_notes.config import ReleaseConfig, parse_release_config
from breezy.release_notes.exceptions import ConfigError
from breezy.utils.constants import CONFIG_DIRECTORY_NAME, CONFIG_FILE_NAME
from breezy.utils.yaml import read_text_file

logger = structlog.get_logger(__name__)

ConfigCandidate = Callable[[], Path | None]


def resolve_explicit_path(raw_path: str, cwd: Path, home: Path | None) -> Path:
    """Turn a user supplied config path into an absolute path.

    Raises:
        ConfigError: If the path starts with ``~`` and the home directory is unknown.
    """
    raw_path = raw_path.strip()
    if raw_path == "~" or raw_path.startswith("~/"):
        if home is None:
            raise ConfigError("HOME is not set.")
        return home if raw_path == "~" else home / raw_path[2:]

    path = Path(raw_path)
    if path.is_absolute():
        return path
    return cwd / path


def config_file_candidate(directory: Path | None) -> ConfigCandidate:
    """Build a resolver returning ``<directory>/.github/breezy.yml`` when it exists."""

    def candidate() -> Path | None:
        if directory is None:
            return None
        path = directory / CONFIG_DIRECTORY_NAME / CONFIG_FILE_NAME
        return path if path.is_file() else None

    return candidate


def default_config_candidates(cwd: Path, home: Path | None) -> list[ConfigCandidate]:
    """The fallback locations tried when no explicit config path is given, in order."""
    return [config_file_candidate(home), config_file_candidate(cwd)]


def resolve_config_path(candidates: list[ConfigCandidate]) -> Path | None:
    """Return the path produced by the first candidate that finds a file."""
    for candidate in candidates:
        path = candidate()
        if path is not None:
            return path
    return None


def read_release_config(path: Path) -> ReleaseConfig:
    """Read and parse a config file.

    Raises:
        ConfigError: If the file cannot be read or its content is invalid.
    """
    try:
        content = read_text_file(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e
    logger.info("Loading release config", path=str(path))
    return parse_release_config(content)


def load_release_config(
    explicit_path: str | None,
    cwd: Path,
    home: Path | None,
    candidates: list[ConfigCandidate] | None = None,
) -> ReleaseConfig | None:
    """Load the release config following the resolution order.

    Args:
        explicit_path: Path given by the user; blank values are ignored.
        cwd: Working directory, usually the repository root.
        home: Home directory, or None when unknown.
        candidates: Fallback resolvers; defaults to `default_config_candidates`.

    Returns:
        The parsed config, or None when no config file exists.

    Raises:
        ConfigError: If an explicit path does not exist or a found file is invalid.
    """
    if explicit_path is not None and explicit_path.strip():
        path = resolve_explicit_path(explicit_path, cwd, home)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        return read_release_config(path)

    if candidates is None:
        candidates = default_config_candidates(cwd, home)
    path = resolve_config_path(candidates)
    if path is None:
        logger.info("No release config found, changelog will not be categorized")
        return None
    return read_release_config(path)
