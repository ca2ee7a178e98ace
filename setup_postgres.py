"""Database initialization script.

Creates the document table holding repository metadata.
"""
import sys
import psycopg2
import logging
from repo_metadata.infrastructure.config import get_connection_string, load_env

load_env()


logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def create_schema(conn) -> None:
    """Create database schema.

    One row per products/{product}/repos/{id} document:
    - (product, repo_id) is the primary key, so a refetch overwrites in place
    - data holds the whole record as JSONB and is replaced wholesale
    - the repo_id index serves lookups that ignore the product
    """
    cursor = conn.cursor()

    try:
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS repo_documents (
                product VARCHAR(255) NOT NULL,
                repo_id VARCHAR(64) NOT NULL,
                data JSONB NOT NULL,
                created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (product, repo_id)
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_repo_documents_repo_id
            ON repo_documents(repo_id)
        """)

        conn.commit()
        logger.info("Database schema created successfully")

    except Exception as e:
        conn.rollback()
        logger.error(f"Error creating schema: {e}")
        raise
    finally:
        cursor.close()


def main():
    """Initialize the database."""
    try:
        logger.info("Connecting to database...")

        conn = psycopg2.connect(get_connection_string())
        conn.autocommit = False

        create_schema(conn)

        conn.close()
        logger.info("Database initialization completed successfully")

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
