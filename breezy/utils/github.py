"""Contains utility functions for GitHub interactions."""


def split_repository(repo: str | None) -> tuple[str, str]:
    """Splits an 'owner/repo' string into owner and repository."""
    if repo is None:
        raise ValueError("Repository is required (GITHUB_REPOSITORY or --repo).")
    repo = repo.strip().strip("/")
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Invalid repository value; expected owner/repo.")
    owner, repository = parts
    return owner, repository
