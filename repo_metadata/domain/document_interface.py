"""Document store interface (port) for repository metadata persistence.

Documents are addressed the way the hosted store lays them out:
``products/{product}/repos/{id}``.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from repo_metadata.domain.models import RepositoryMetadata, StoredRepository


class IMetadataDocumentStore(ABC):
    """Abstract interface for repository metadata documents."""

    @abstractmethod
    def get_repo(self, product: str, repo_id: str) -> Optional[RepositoryMetadata]:
        """Read one document, or None when it does not exist."""
        pass

    @abstractmethod
    def list_repos(self) -> List[StoredRepository]:
        """Read every repository document across all products."""
        pass

    @abstractmethod
    def save_repos(self, product: str, repos: List[RepositoryMetadata]) -> None:
        """Save or update repository documents under a product.

        Args:
            product: Grouping label the documents live under
            repos: Records to persist, keyed by their id
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close any open connections."""
        pass
