"""Base ABC for GitHub clients."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from breezy.release_notes.models import PullRequestInfo, ReleaseInfo


class GitHubClientBase(ABC):
    """Release and pull request operations a draft release run depends on."""

    # Release CRUD
    @abstractmethod
    async def list_releases(self, per_page: int = 100, **kwargs: Any) -> list[ReleaseInfo]:
        """List every release of the repository."""
        pass

    @abstractmethod
    async def create_release(self, tag_name: str, name: str, body: str, target_commitish: str, draft: bool = True, **kwargs: Any) -> ReleaseInfo:
        """Create a release."""
        pass

    @abstractmethod
    async def update_release(self, release_id: int, tag_name: str, name: str, body: str, target_commitish: str, **kwargs: Any) -> ReleaseInfo:
        """Replace the tag, name, body and target of a release."""
        pass

    @abstractmethod
    async def delete_release(self, release_id: int) -> None:
        """Delete a release."""
        pass

    # Pull Requests
    @abstractmethod
    async def list_merged_pull_requests(self, branch: str, since: datetime | None = None, per_page: int = 100) -> list[PullRequestInfo]:
        """List pull requests merged into a branch after `since` (all history when None)."""
        pass
