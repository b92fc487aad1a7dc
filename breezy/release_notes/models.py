"""Data models for draft release reconciliation and changelog generation."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class ReleaseInfo(BaseModel):
    """A release as read from GitHub, reduced to what reconciliation needs."""

    model_config = ConfigDict(frozen=True)

    id: int
    draft: bool
    body: str | None = None
    created_at: datetime
    published_at: datetime | None = None
    target_commitish: str
    tag_name: str | None = None
    name: str | None = None


class PullRequestInfo(BaseModel):
    """A merged pull request contributing a line to the changelog."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    merged_at: datetime | None = None
    labels: list[str] = []


@dataclass
class DraftSelection:
    """Outcome of draft reconciliation for one branch.

    `primary` is the draft to update (None means a new draft must be created)
    and `extras` are stale duplicate drafts to delete.
    """

    primary: int | None = None
    extras: list[int] = field(default_factory=list)


class DraftReleaseStatus(str, Enum):
    """Status of a draft release run."""

    CREATED = "created"
    UPDATED = "updated"
    DRY_RUN = "dry_run"
    ERROR = "error"


class DraftReleaseResult(BaseModel):
    """Result of a draft release run."""

    status: DraftReleaseStatus
    release_id: int | None = None
    tag_name: str | None = None
    release_name: str | None = None
    body: str | None = None
    extra_release_ids: list[int] = []
    error: str | None = None
