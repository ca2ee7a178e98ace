"""In-memory cache of repository metadata backed by the document store."""
import asyncio
import logging
from collections import defaultdict
from typing import Dict, List, Optional
from repo_metadata.domain.document_interface import IMetadataDocumentStore
from repo_metadata.domain.models import RepositoryMetadata


logger = logging.getLogger(__name__)


class RepositoryNotFoundError(Exception):
    """Raised when a repository document does not exist."""

    def __init__(self, product: str, repo_id: str):
        self.product = product
        self.repo_id = repo_id
        super().__init__(f"No repository document at products/{product}/repos/{repo_id}")


class MetadataCacheStore:
    """Keyed cache of repository metadata for the UI layer.

    Holds two views: ``repos`` maps product -> repository id -> record, and
    ``github_projects`` is the flat list from the last broad fetch. Entries
    never expire. Concurrent fetches for the same key are not de-duplicated;
    the last one to complete wins.
    """

    def __init__(self, document_store: IMetadataDocumentStore):
        """Initialize an empty cache.

        Args:
            document_store: Store the fetch operations read from
        """
        self._document_store = document_store
        self.repos: Dict[str, Dict[str, RepositoryMetadata]] = {}
        self.github_projects: List[RepositoryMetadata] = []

    async def fetch_repo(self, product: str, repo_id: str) -> RepositoryMetadata:
        """Read one document and cache it under (product, repo_id).

        Raises:
            RepositoryNotFoundError: If the document does not exist; the cache
                is left unchanged
        """
        logger.info(f"Fetching repo products/{product}/repos/{repo_id}")

        repo = await asyncio.to_thread(self._document_store.get_repo, product, repo_id)
        if repo is None:
            raise RepositoryNotFoundError(product, repo_id)

        self.add_repos(product, [repo])
        return repo

    async def fetch_projects(self) -> List[RepositoryMetadata]:
        """Read every repository document across products.

        Replaces the flat list wholesale and merges each document into the
        per-product map so both views agree.
        """
        stored = await asyncio.to_thread(self._document_store.list_repos)

        by_product: Dict[str, List[RepositoryMetadata]] = defaultdict(list)
        for document in stored:
            by_product[document.product].append(document.repo)

        for product, repos in by_product.items():
            self.add_repos(product, repos)

        projects = [document.repo for document in stored]
        self.set_github_projects(projects)
        logger.info(f"Fetched {len(projects)} repositories across {len(by_product)} products")
        return projects

    def add_repos(self, product: str, repos: List[RepositoryMetadata]) -> None:
        """Merge records into the per-product map, keyed by repository id."""
        product_repos = self.repos.setdefault(product, {})
        for repo in repos:
            product_repos[repo.id] = repo

    def set_github_projects(self, projects: List[RepositoryMetadata]) -> None:
        """Replace the flat list wholesale."""
        self.github_projects = list(projects)

    def repo_by_product_and_id(self, product: str, repo_id: str) -> Optional[RepositoryMetadata]:
        """Return the cached record, or None if the product or id is unknown."""
        product_repos = self.repos.get(product)
        if product_repos is None:
            return None
        return product_repos.get(repo_id)
