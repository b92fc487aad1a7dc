"""Resolves the project version from language specific manifests."""

import configparser
import json
import re
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import structlog
from packaging.version import InvalidVersion, Version

from .exceptions import VersionResolutionError

logger = structlog.get_logger(__name__)

LANGUAGE_ALIASES: dict[str, str] = {
    "py": "python",
    "js": "node",
    "javascript": "node",
    "ts": "node",
    "typescript": "node",
    "npm": "node",
    "cargo": "rust",
}


@dataclass
class VersionInfo:
    """A resolved project version and where it came from."""

    version: str
    language: str
    source: Path


def parse_languages(value: str | None) -> list[str]:
    """Split a comma or whitespace separated list of language names.

    Names are lower-cased, aliases are mapped to their canonical language and
    duplicates are dropped, keeping the first occurrence.
    """
    languages: list[str] = []
    for item in re.split(r"[,\s]+", value or ""):
        name = item.strip().lower()
        if not name:
            continue
        name = LANGUAGE_ALIASES.get(name, name)
        if name not in languages:
            languages.append(name)
    return languages


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise VersionResolutionError(f"Invalid TOML in {path}: {e}") from e


def _nested(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)  # type: ignore[assignment]
    return data


def _python_version(root: Path) -> tuple[str, Path] | None:
    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        data = _read_toml(pyproject)
        version = _nested(data, "project", "version") or _nested(data, "tool", "poetry", "version")
        if isinstance(version, str) and version.strip():
            return version.strip(), pyproject

    setup_cfg = root / "setup.cfg"
    if setup_cfg.is_file():
        parser = configparser.ConfigParser()
        parser.read(setup_cfg, encoding="utf-8")
        version = parser.get("metadata", "version", fallback="").strip()
        if version:
            return version, setup_cfg
    return None


def _node_version(root: Path) -> tuple[str, Path] | None:
    package_json = root / "package.json"
    if not package_json.is_file():
        return None
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise VersionResolutionError(f"Invalid JSON in {package_json}: {e}") from e
    version = data.get("version") if isinstance(data, dict) else None
    if isinstance(version, str) and version.strip():
        return version.strip(), package_json
    return None


def _rust_version(root: Path) -> tuple[str, Path] | None:
    cargo_toml = root / "Cargo.toml"
    if not cargo_toml.is_file():
        return None
    data = _read_toml(cargo_toml)
    version = _nested(data, "package", "version")
    if not isinstance(version, str):
        version = _nested(data, "workspace", "package", "version")
    if isinstance(version, str) and version.strip():
        return version.strip(), cargo_toml
    return None


def _generic_version(root: Path) -> tuple[str, Path] | None:
    version_file = root / "VERSION"
    if not version_file.is_file():
        return None
    for line in version_file.read_text(encoding="utf-8").splitlines():
        if line.strip():
            return line.strip(), version_file
    return None


VERSION_READERS: dict[str, Callable[[Path], tuple[str, Path] | None]] = {
    "python": _python_version,
    "node": _node_version,
    "rust": _rust_version,
    "generic": _generic_version,
}

MANIFESTS: dict[str, str] = {
    "python": "pyproject.toml or setup.cfg",
    "node": "package.json",
    "rust": "Cargo.toml",
    "generic": "VERSION",
}


def resolve_version(root: Path, languages: list[str]) -> VersionInfo:
    """Return the version declared by the first language whose manifest has one.

    Args:
        root: Repository root holding the manifests.
        languages: Canonical language names, in priority order.

    Raises:
        VersionResolutionError: If a language is unknown, a manifest is invalid,
            or no manifest declares a version.
    """
    unknown = [language for language in languages if language not in VERSION_READERS]
    if unknown:
        raise VersionResolutionError(
            f"Unsupported language(s): {', '.join(unknown)}. Supported: {', '.join(VERSION_READERS)}",
        )

    tried: list[str] = []
    for language in languages:
        tried.append(f"{language} ({MANIFESTS[language]})")
        found = VERSION_READERS[language](root)
        if found is None:
            logger.debug("No version found for language", language=language, root=str(root))
            continue
        version, source = found
        if language == "python":
            try:
                Version(version)
            except InvalidVersion as e:
                raise VersionResolutionError(f"Invalid Python version '{version}' in {source}") from e
        logger.info("Resolved project version", version=version, language=language, source=str(source))
        return VersionInfo(version=version, language=language, source=source)

    raise VersionResolutionError(f"Unable to resolve a version from: {', '.join(tried)}", tried=tried)
