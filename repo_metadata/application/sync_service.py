"""Sync service populating the document store from GitHub."""
import asyncio
import logging
import time
from typing import Iterable
from repo_metadata.application.github_service import GitHubAccessService
from repo_metadata.domain.document_interface import IMetadataDocumentStore
from repo_metadata.domain.models import RepositoryMetadata, SyncMetrics


logger = logging.getLogger(__name__)


class RepositorySyncService:
    """Application service copying repository metadata into the document store.

    Orchestrates the interaction between the GitHub access service and the
    document store. Repositories are synced one after another.
    """

    def __init__(
        self,
        github: GitHubAccessService,
        document_store: IMetadataDocumentStore
    ):
        """Initialize sync service.

        Args:
            github: GitHub access service
            document_store: Store the documents are written to
        """
        self._github = github
        self._document_store = document_store

    async def sync_repository(self, product: str, owner: str, repo: str) -> RepositoryMetadata:
        """Fetch one repository with its license and store it under a product.

        Returns:
            The record that was written
        """
        metadata = await self._github.get_repo(owner, repo)
        license_info = await self._github.get_repo_license(owner, repo)
        if license_info.key is not None:
            metadata = metadata.with_license(license_info.key)

        await asyncio.to_thread(self._document_store.save_repos, product, [metadata])
        logger.info(f"Synced {metadata.full_name} (id {metadata.id}) into {product}")
        return metadata

    async def sync_repositories(self, product: str, full_names: Iterable[str]) -> SyncMetrics:
        """Sync a list of ``owner/name`` repositories into a product.

        A failing repository is logged and counted; the rest still sync.

        Returns:
            SyncMetrics with operation statistics
        """
        start_time = time.time()
        synced = 0
        errors = 0

        for full_name in full_names:
            owner, _, name = full_name.strip().partition("/")
            if not owner or not name:
                logger.error(f"Invalid repository name {full_name!r}, expected owner/name")
                errors += 1
                continue

            try:
                await self.sync_repository(product, owner, name)
                synced += 1
            except Exception as e:
                logger.error(f"Error syncing {full_name}: {e}")
                errors += 1

        duration = time.time() - start_time

        logger.info(
            f"Sync completed: {synced} repositories into {product} in "
            f"{duration:.2f} seconds ({errors} errors)"
        )

        return SyncMetrics(
            repositories_synced=synced,
            duration_seconds=duration,
            errors_encountered=errors
        )
