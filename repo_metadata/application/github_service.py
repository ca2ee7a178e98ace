"""Access service reading repository metadata and contents from GitHub."""
import base64
import binascii
import json
import logging
from typing import Any, Dict, List
from repo_metadata.domain.github_interface import IGitHubClient
from repo_metadata.domain.models import LicenseInfo, RepositoryMetadata


logger = logging.getLogger(__name__)


class GitHubAccessError(Exception):
    """Raised when a GitHub read fails or returns an unexpected shape."""
    pass


def _describe(error: Exception) -> str:
    """Render an underlying error with its API payload when it carries one."""
    payload = getattr(error, "payload", None)
    if payload is None:
        return str(error)
    return f"{error} {json.dumps(payload, default=str)}"


def _decode_content(entry: Dict[str, Any]) -> str:
    """Decode a contents payload according to its declared encoding."""
    content = entry.get("content") or ""
    encoding = entry.get("encoding") or "base64"

    # Undecodable bytes become U+FFFD rather than failing the read.
    if encoding == "base64":
        try:
            return base64.b64decode(content).decode("utf-8", errors="replace")
        except binascii.Error as e:
            raise GitHubAccessError(f"Unable to decode base64 content: {e}") from e

    try:
        return content.encode(encoding, errors="replace").decode("utf-8", errors="replace")
    except (LookupError, UnicodeError) as e:
        raise GitHubAccessError(f"Unsupported content encoding {encoding!r}") from e


class GitHubAccessService:
    """Application service mediating every read against the GitHub API.

    The client is injected and shared by all calls; the service itself
    holds no other state. Every failure is wrapped in GitHubAccessError
    with the repository coordinates, except license lookups, which are
    best-effort.
    """

    def __init__(self, github_client: IGitHubClient):
        """Initialize access service.

        Args:
            github_client: GitHub API client implementation
        """
        self._github_client = github_client

    async def get_repo(self, owner: str, repo: str) -> RepositoryMetadata:
        """Fetch full repository metadata.

        Raises:
            GitHubAccessError: If the API call fails
        """
        try:
            payload = await self._github_client.get_repo(owner, repo)
            return RepositoryMetadata.from_api(payload)
        except Exception as e:
            raise GitHubAccessError(f"Unable to get repo {owner}/{repo}: {_describe(e)}") from e

    async def get_repo_license(self, owner: str, repo: str) -> LicenseInfo:
        """Fetch the license key and text.

        Never raises: a missing license or failed call yields an empty result.
        """
        try:
            payload = await self._github_client.get_license(owner, repo)
            key = (payload.get("license") or {}).get("key")
        except Exception as e:
            logger.warning(f"Failed to get license for {owner}/{repo}: {_describe(e)}")
            return LicenseInfo(key=None, content="")

        try:
            content = _decode_content(payload)
        except GitHubAccessError as e:
            logger.warning(f"Failed to decode license text for {owner}/{repo}: {e}")
            content = ""

        return LicenseInfo(key=key, content=content)

    async def get_default_branch(self, owner: str, repo: str) -> str:
        """Fetch the name of the repository's default branch.

        Raises:
            GitHubAccessError: If the API call fails
        """
        try:
            payload = await self._github_client.get_repo(owner, repo)
            return payload["default_branch"]
        except Exception as e:
            raise GitHubAccessError(
                f"Unable to get default branch of {owner}/{repo}: {_describe(e)}"
            ) from e

    async def get_file_content(self, owner: str, repo: str, branch: str, path: str) -> str:
        """Fetch the decoded text of a single file.

        Raises:
            GitHubAccessError: If the call fails or the path is not a file
        """
        try:
            entry = await self._github_client.get_content(owner, repo, path, branch)
        except Exception as e:
            raise GitHubAccessError(
                f'Unable to fetch file "{path}@{branch}" from "{owner}/{repo}": {_describe(e)}'
            ) from e

        if isinstance(entry, list):
            names = [child.get("path") for child in entry]
            raise GitHubAccessError(f"Can't get content of a directory: {json.dumps(names)}")

        if entry.get("type") != "file":
            raise GitHubAccessError(
                f"Invalid type {entry.get('type')}: {json.dumps(entry, default=str)}"
            )

        return _decode_content(entry)

    async def get_directory_content(
        self,
        owner: str,
        repo: str,
        branch: str,
        path: str
    ) -> List[str]:
        """List the child paths of a directory, in API order.

        Raises:
            GitHubAccessError: If the call fails or the path is not a directory
        """
        try:
            listing = await self._github_client.get_content(owner, repo, path, branch)
        except Exception as e:
            raise GitHubAccessError(
                f'Unable to list directory "{path}@{branch}" from "{owner}/{repo}": {_describe(e)}'
            ) from e

        if not isinstance(listing, list):
            raise GitHubAccessError(f"Not a directory: {json.dumps(listing, default=str)}")

        paths = []
        for child in listing:
            child_path = child.get("path") if isinstance(child, dict) else None
            if not child_path:
                raise GitHubAccessError(
                    f"Listing entry without a path in {owner}/{repo}: {json.dumps(child, default=str)}"
                )
            paths.append(child_path)
        return paths
