"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_CHANGE_TEMPLATE,
    MAX_PER_PAGE,
    RELEASE_MARKER_TEMPLATE,
)
from .retry import retry_on_rate_limit

__all__ = [
    "RELEASE_MARKER_TEMPLATE",
    "DEFAULT_CHANGE_TEMPLATE",
    "MAX_PER_PAGE",
    "retry_on_rate_limit",
]
