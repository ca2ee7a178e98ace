"""GitHub API interface (port) for reading repository data.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union


class IGitHubClient(ABC):
    """Abstract interface for GitHub REST API operations.

    Implementations return decoded JSON payloads and raise on non-success
    responses.
    """

    @abstractmethod
    async def get_repo(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch the repository payload."""
        pass

    @abstractmethod
    async def get_license(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch the repository license payload."""
        pass

    @abstractmethod
    async def get_content(
        self,
        owner: str,
        repo: str,
        path: str,
        ref: str
    ) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """Fetch the contents entry at a path.

        Args:
            owner: Repository owner login
            repo: Repository name
            path: Path inside the repository
            ref: Branch, tag or commit to read from

        Returns:
            A single entry for a file, a list of entries for a directory
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
