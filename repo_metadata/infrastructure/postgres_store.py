"""PostgreSQL document store implementation for repository metadata."""
import logging
from typing import List, Optional
import psycopg2
from psycopg2.extras import Json, execute_values
from repo_metadata.domain.document_interface import IMetadataDocumentStore
from repo_metadata.domain.models import RepositoryMetadata, StoredRepository


logger = logging.getLogger(__name__)


class PostgresDocumentStore(IMetadataDocumentStore):
    """PostgreSQL implementation of the metadata document store.

    Each row holds one JSONB document keyed by (product, repo_id), which
    mirrors the products/{product}/repos/{id} path of the hosted store.
    """

    def __init__(self, connection_string: str):
        """Initialize PostgreSQL connection.

        Args:
            connection_string: PostgreSQL connection string
        """
        self._connection_string = connection_string
        self._conn = psycopg2.connect(connection_string)
        self._conn.autocommit = False
        logger.info("Connected to PostgreSQL database")

    def get_repo(self, product: str, repo_id: str) -> Optional[RepositoryMetadata]:
        """Read one repository document.

        Args:
            product: Product the document lives under
            repo_id: GitHub repository id

        Returns:
            The stored record, or None if no such document exists
        """
        cursor = self._conn.cursor()
        try:
            cursor.execute(
                "SELECT data FROM repo_documents WHERE product = %s AND repo_id = %s",
                (product, repo_id)
            )
            row = cursor.fetchone()
            self._conn.commit()
        finally:
            cursor.close()

        if row is None:
            return None
        return RepositoryMetadata.from_document(row[0])

    def list_repos(self) -> List[StoredRepository]:
        """Read every repository document across all products."""
        cursor = self._conn.cursor()
        try:
            cursor.execute(
                "SELECT product, data FROM repo_documents ORDER BY product, repo_id"
            )
            rows = cursor.fetchall()
            self._conn.commit()
        finally:
            cursor.close()

        return [
            StoredRepository(product=product, repo=RepositoryMetadata.from_document(data))
            for product, data in rows
        ]

    def save_repos(self, product: str, repos: List[RepositoryMetadata]) -> None:
        """Save or update repository documents using efficient UPSERT.

        Rows whose document is unchanged are left untouched.

        Args:
            product: Product the documents live under
            repos: Records to persist
        """
        if not repos:
            return

        cursor = self._conn.cursor()

        try:
            values = [
                (product, repo.id, Json(repo.to_document()))
                for repo in repos
            ]

            query = """
                INSERT INTO repo_documents (product, repo_id, data, updated_at)
                VALUES %s
                ON CONFLICT (product, repo_id)
                DO UPDATE SET
                    data = EXCLUDED.data,
                    updated_at = CURRENT_TIMESTAMP
                WHERE repo_documents.data IS DISTINCT FROM EXCLUDED.data
            """

            execute_values(
                cursor,
                query,
                values,
                template="(%s, %s, %s, CURRENT_TIMESTAMP)"
            )

            self._conn.commit()
            logger.info(f"Saved {len(repos)} repository documents under {product}")

        except Exception as e:
            self._conn.rollback()
            logger.error(f"Error saving repository documents: {e}")
            raise
        finally:
            cursor.close()

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            logger.info("Closed PostgreSQL connection")
