"""GitHub REST API client implementation with connection retry logic."""
import asyncio
import logging
from typing import Any, Dict, List, Optional, Union
import aiohttp
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type
)
from repo_metadata.domain.github_interface import IGitHubClient


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Exception raised when the API answers with a non-success status."""

    def __init__(self, status: int, payload: Any):
        self.status = status
        self.payload = payload
        message = payload.get("message") if isinstance(payload, dict) else payload
        super().__init__(f"GitHub API returned {status}: {message}")


class RateLimitException(GitHubAPIError):
    """Exception raised when the rate limit is exhausted.

    Not retried: the limit only resets at reset_at, usually minutes away.
    """

    def __init__(self, status: int, payload: Any, reset_at: Optional[str] = None):
        super().__init__(status, payload)
        self.reset_at = reset_at


class GitHubRestClient(IGitHubClient):
    """GitHub REST API client retrying only connection-level failures.

    Implements the IGitHubClient port. The HTTP session is created on first
    use and shared by every call until close().
    """

    API_URL = "https://api.github.com"

    def __init__(
        self,
        access_token: str,
        base_url: str = API_URL,
        timeout_seconds: float = 30
    ):
        """Initialize GitHub client.

        Args:
            access_token: GitHub personal access token
            base_url: REST API root, overridable for GitHub Enterprise
            timeout_seconds: Total timeout per request
        """
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _init_session(self) -> None:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None:
            headers = {
                "Authorization": f"Bearer {self._access_token}",
                "Accept": "application/vnd.github+json",
            }
            self._session = aiohttp.ClientSession(
                headers=headers,
                timeout=self._timeout
            )

    @retry(
        retry=retry_if_exception_type((asyncio.TimeoutError, aiohttp.ClientConnectionError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True
    )
    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """Execute a GET request, retrying timeouts and dropped connections.

        Args:
            path: API path starting with a slash
            params: Query string parameters

        Returns:
            Decoded JSON body

        Raises:
            RateLimitException: When rate limit is exhausted
            GitHubAPIError: When the response status is not a success
        """
        await self._init_session()

        async with self._session.get(f"{self._base_url}{path}", params=params) as response:
            try:
                payload = await response.json(content_type=None)
            except ValueError:
                payload = await response.text()

            remaining = response.headers.get("X-RateLimit-Remaining")
            if remaining is not None:
                logger.debug(f"Rate limit remaining: {remaining}")

            if response.status in (403, 429) and remaining == "0":
                reset_at = response.headers.get("X-RateLimit-Reset")
                logger.warning(f"Rate limit exhausted on {path}, resets at {reset_at}")
                raise RateLimitException(response.status, payload, reset_at)

            if response.status >= 400:
                raise GitHubAPIError(response.status, payload)

            return payload

    async def get_repo(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch the repository payload."""
        return await self._get(f"/repos/{owner}/{repo}")

    async def get_license(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch the repository license payload."""
        return await self._get(f"/repos/{owner}/{repo}/license")

    async def get_content(
        self,
        owner: str,
        repo: str,
        path: str,
        ref: str
    ) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """Fetch the contents entry at a path on the given ref."""
        return await self._get(
            f"/repos/{owner}/{repo}/contents/{path.lstrip('/')}",
            params={"ref": ref}
        )

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
