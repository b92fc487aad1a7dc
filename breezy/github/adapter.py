"""GitHub client adapter for the githubkit library."""

from datetime import datetime
from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestFailed
from githubkit.versions.latest.models import PullRequestSimple, Release

from breezy.release_notes.models import PullRequestInfo, ReleaseInfo
from breezy.utils.constants import DEFAULT_GITHUB_API_URL, MAX_PER_PAGE
from breezy.utils.github import split_repository
from breezy.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_github_422(func: F) -> F:
    """Decorator to handle GitHub 422 Unprocessable Entity errors, logging and raising with details."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            if exc.response.status_code == 422:
                try:
                    error_data = exc.response.json()
                except Exception:
                    error_data = {}
                message = error_data.get("message", "Unprocessable Entity")
                errors = error_data.get("errors", [])
                logger.error(
                    "GitHub 422 Unprocessable Entity",
                    function=func.__name__,
                    message=message,
                    errors=errors,
                    url=getattr(exc.response, "url", None),
                    status_code=422,
                )
                raise ValueError(
                    f"GitHub 422 error in {func.__name__}: {message} | errors: {errors} | url: {getattr(exc.response, 'url', None)}"
                ) from exc
            raise

    return wrapper  # type: ignore


def release_info_from_github(release: Release) -> ReleaseInfo:
    """Convert a githubkit release into a ReleaseInfo."""
    return ReleaseInfo(
        id=release.id,
        draft=release.draft,
        body=release.body or None,
        created_at=release.created_at,
        published_at=release.published_at,
        target_commitish=release.target_commitish,
        tag_name=release.tag_name,
        name=release.name,
    )


def pull_request_info_from_github(pull_request: PullRequestSimple) -> PullRequestInfo:
    """Convert a githubkit pull request into a PullRequestInfo."""
    return PullRequestInfo(
        number=pull_request.number,
        title=pull_request.title,
        merged_at=pull_request.merged_at,
        labels=[label.name for label in pull_request.labels if label.name],
    )


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, owner: str, repo_name: str) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.owner = owner
        self.repo_name = repo_name

    @classmethod
    async def create(cls, repo: str, github_token: str, github_api_url: str = DEFAULT_GITHUB_API_URL) -> Self:
        """Create a new GitHub client adapter.

        Args:
            repo: Repository in 'owner/repo' format
            github_token: Token used to authenticate against the API
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance

        Raises:
            ValueError: If the repository is not in 'owner/repo' format
        """
        owner, repo_name = split_repository(repo)
        logger.info(
            "Creating client for GitHub instance and repository",
            github_api_url=github_api_url,
            owner=owner,
            repo_name=repo_name,
        )
        client = await get_github_client(github_token=github_token, github_api_url=github_api_url)
        return cls(client, owner, repo_name)

    # Release CRUD
    @handle_github_422
    @retry_on_rate_limit()
    async def list_releases(self, per_page: int = MAX_PER_PAGE, **kwargs: Any) -> list[ReleaseInfo]:
        """List all releases for a repository, handling pagination."""
        logger.debug("Fetching releases", owner=self.owner, repo=self.repo_name, per_page=per_page)
        all_releases: list[ReleaseInfo] = []
        page: int = 1
        while True:
            response: Response[list[Release]] = await self.client.rest.repos.async_list_releases(
                owner=self.owner,
                repo=self.repo_name,
                per_page=per_page,
                page=page,
                **kwargs,
            )
            releases: list[Release] = response.parsed_data
            logger.debug("Fetched releases page", page=page, count=len(releases))
            if not releases:
                break
            all_releases.extend(release_info_from_github(release) for release in releases)
            if len(releases) < per_page:
                break
            page += 1

        logger.info("Fetched releases", total=len(all_releases))
        return all_releases

    @handle_github_422
    @retry_on_rate_limit()
    async def create_release(
        self,
        tag_name: str,
        name: str,
        body: str,
        target_commitish: str,
        draft: bool = True,
        **kwargs: Any,
    ) -> ReleaseInfo:
        """Create a release, a draft unless told otherwise."""
        response: Response[Release] = await self.client.rest.repos.async_create_release(
            owner=self.owner,
            repo=self.repo_name,
            tag_name=tag_name,
            name=name,
            body=body,
            target_commitish=target_commitish,
            draft=draft,
            **kwargs,
        )
        return release_info_from_github(response.parsed_data)

    @handle_github_422
    @retry_on_rate_limit()
    async def update_release(
        self,
        release_id: int,
        tag_name: str,
        name: str,
        body: str,
        target_commitish: str,
        **kwargs: Any,
    ) -> ReleaseInfo:
        """Replace the tag, name, body and target branch of a release."""
        response: Response[Release] = await self.client.rest.repos.async_update_release(
            owner=self.owner,
            repo=self.repo_name,
            release_id=release_id,
            tag_name=tag_name,
            name=name,
            body=body,
            target_commitish=target_commitish,
            **kwargs,
        )
        return release_info_from_github(response.parsed_data)

    @retry_on_rate_limit()
    async def delete_release(self, release_id: int) -> None:
        """Delete a release."""
        await self.client.rest.repos.async_delete_release(owner=self.owner, repo=self.repo_name, release_id=release_id)

    # Pull Requests
    @retry_on_rate_limit()
    async def list_merged_pull_requests(
        self,
        branch: str,
        since: datetime | None = None,
        per_page: int = MAX_PER_PAGE,
    ) -> list[PullRequestInfo]:
        """List pull requests merged into `branch` strictly after `since`, handling pagination.

        Closed pull requests are walked from the most recently updated. A pull
        request merged after `since` was also updated after it, so paging stops
        once a page ends at or before `since`.
        """
        logger.debug("Fetching merged pull requests", branch=branch, since=since.isoformat() if since else None)
        merged: list[PullRequestInfo] = []
        page: int = 1
        while True:
            response: Response[list[PullRequestSimple]] = await self.client.rest.pulls.async_list(
                owner=self.owner,
                repo=self.repo_name,
                state="closed",
                base=branch,
                sort="updated",
                direction="desc",
                per_page=per_page,
                page=page,
            )
            pull_requests: list[PullRequestSimple] = response.parsed_data
            if not pull_requests:
                break
            for pull_request in pull_requests:
                if pull_request.merged_at is None:
                    continue
                if since is not None and pull_request.merged_at <= since:
                    continue
                merged.append(pull_request_info_from_github(pull_request))
            if len(pull_requests) < per_page:
                break
            if since is not None and pull_requests[-1].updated_at <= since:
                break
            page += 1

        logger.info("Fetched merged pull requests", branch=branch, total=len(merged))
        return merged
