"""Draft release reconciliation and changelog generation."""

from .builder import build_release_notes, release_marker
from .config import ReleaseCategory, ReleaseConfig, parse_release_config
from .exceptions import ConfigError, VersionResolutionError
from .loader import load_release_config
from .models import (
    DraftReleaseResult,
    DraftReleaseStatus,
    DraftSelection,
    PullRequestInfo,
    ReleaseInfo,
)
from .reconciler import select_draft_releases, select_latest_published_release

__all__ = [
    "ReleaseCategory",
    "ReleaseConfig",
    "ReleaseInfo",
    "PullRequestInfo",
    "DraftSelection",
    "DraftReleaseStatus",
    "DraftReleaseResult",
    "ConfigError",
    "VersionResolutionError",
    "parse_release_config",
    "load_release_config",
    "select_draft_releases",
    "select_latest_published_release",
    "release_marker",
    "build_release_notes",
]
