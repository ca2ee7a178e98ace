"""Application context wiring the adapters together once at startup."""
from dataclasses import dataclass
from repo_metadata.application.github_service import GitHubAccessService
from repo_metadata.application.metadata_cache import MetadataCacheStore
from repo_metadata.application.sync_service import RepositorySyncService
from repo_metadata.domain.document_interface import IMetadataDocumentStore
from repo_metadata.domain.github_interface import IGitHubClient
from repo_metadata.infrastructure.config import Settings
from repo_metadata.infrastructure.github_client import GitHubRestClient
from repo_metadata.infrastructure.postgres_store import PostgresDocumentStore


@dataclass
class AppContext:
    """Process-lifetime handles shared by every operation."""
    github_client: IGitHubClient
    document_store: IMetadataDocumentStore
    github: GitHubAccessService
    cache: MetadataCacheStore
    sync: RepositorySyncService

    @classmethod
    def from_components(
        cls,
        github_client: IGitHubClient,
        document_store: IMetadataDocumentStore
    ) -> 'AppContext':
        """Build the services around an already constructed client and store."""
        github = GitHubAccessService(github_client)
        return cls(
            github_client=github_client,
            document_store=document_store,
            github=github,
            cache=MetadataCacheStore(document_store),
            sync=RepositorySyncService(github, document_store)
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> 'AppContext':
        """Construct the GitHub client and PostgreSQL store from settings."""
        github_client = GitHubRestClient(
            settings.github_token,
            base_url=settings.github_api_url,
            timeout_seconds=settings.github_timeout_seconds
        )
        return cls.from_components(github_client, PostgresDocumentStore(settings.postgres_dsn))

    async def close(self) -> None:
        """Close connections."""
        await self.github_client.close()
        self.document_store.close()
