"""Retry decorator for GitHub API calls that hit rate limits.

Release bookkeeping issues only a handful of requests per run, so the defaults
here are small: a few attempts, honouring the rate limit headers GitHub sends
back and falling back to exponential backoff when it sends none.
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Awaitable, Callable, Mapping, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def wait_time_from_headers(headers: Mapping[str, str], fallback: float) -> float:
    """Derive how long to wait from `retry-after` or `x-ratelimit-reset` headers.

    Args:
        headers: Response headers of the failed request.
        fallback: Delay to use when neither header carries a usable value.

    Returns:
        Number of seconds to wait before the next attempt.
    """
    retry_after = headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)

    rate_limit_reset = headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        try:
            remaining = int(rate_limit_reset) - int(time.time())
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
        else:
            if remaining > 0:
                return float(remaining + 1)

    return fallback


def is_rate_limit_failure(error: RequestFailed) -> bool:
    """Return True when a failed request was rejected because of a rate limit."""
    status_code = error.response.status_code
    if status_code == 429:
        return True
    return status_code == 403 and "rate limit" in str(error).lower()


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator retrying an async GitHub call when it is rate limited.

    Any other failure is raised immediately.

    Args:
        max_retries: Maximum number of retries after the first attempt.
        initial_delay: Delay in seconds used when GitHub gives no hint.
        max_delay: Upper bound for any single wait.
        exponential_base: Growth factor of the fallback delay between attempts.

    Example:
        @retry_on_rate_limit()
        async def list_releases(self) -> list[ReleaseInfo]:
            ...
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"@retry_on_rate_limit only supports async functions, got {func.__name__}")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded) as e:
                    if attempt >= max_retries:
                        logger.error("Max retries reached for GitHub rate limit", function=func.__name__, attempts=attempt + 1)
                        raise
                    retry_after = getattr(e, "retry_after", None)
                    wait_time = retry_after.total_seconds() if retry_after else delay
                    rate_limit_type = "primary" if isinstance(e, PrimaryRateLimitExceeded) else "secondary"
                except RequestFailed as e:
                    if not is_rate_limit_failure(e):
                        raise
                    if attempt >= max_retries:
                        logger.error(
                            "Max retries reached for GitHub rate limit",
                            function=func.__name__,
                            attempts=attempt + 1,
                            status_code=e.response.status_code,
                        )
                        raise
                    wait_time = wait_time_from_headers(e.response.headers, delay)
                    rate_limit_type = "status"

                wait_time = min(wait_time, max_delay)
                logger.warning(
                    "GitHub rate limit exceeded, waiting before retrying",
                    function=func.__name__,
                    rate_limit_type=rate_limit_type,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    wait_time=wait_time,
                )
                await asyncio.sleep(wait_time)
                delay = min(delay * exponential_base, max_delay)
                attempt += 1

        return wrapper  # type: ignore

    return decorator
