"""Sets up the authenticated githubkit client."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy]


async def get_github_client(github_token: str, github_api_url: str) -> GitHubClient:
    """Returns a GitHub client authenticated with a token.

    Works with the workflow GITHUB_TOKEN as well as personal access tokens, and
    supports a custom base URL for GitHub Enterprise Server (GHES).
    """
    if not github_token or not github_token.strip():
        raise RuntimeError("GitHub authentication requires a token.")
    # Disable HTTP caching to always see the latest releases
    return GitHub(auth=TokenAuthStrategy(github_token.strip()), base_url=github_api_url, http_cache=False)
