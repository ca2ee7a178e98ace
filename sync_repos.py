"""Main entry point for syncing repository metadata.

Reads repositories from GitHub and writes them into the document store
under a product.

Usage:
    python sync_repos.py <product> <owner/name> [<owner/name> ...]

Repositories may also be given as a comma separated SYNC_REPOS variable.
"""
import asyncio
import os
import sys
import logging
from typing import List, Optional, Tuple
from repo_metadata.application.context import AppContext
from repo_metadata.infrastructure.config import ConfigurationError, Settings, load_env

load_env()


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_targets(argv: List[str]) -> Tuple[Optional[str], List[str]]:
    """Return (product, repository names) from the command line or environment."""
    product = argv[1] if len(argv) > 1 else os.getenv("SYNC_PRODUCT")
    names = argv[2:] if len(argv) > 2 else [
        name for name in os.getenv("SYNC_REPOS", "").split(",") if name.strip()
    ]
    return product, names


async def main():
    """Execute the sync operation."""
    product, names = parse_targets(sys.argv)
    if not product or not names:
        logger.error("Usage: sync_repos.py <product> <owner/name> [<owner/name> ...]")
        sys.exit(1)

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"Starting sync of {len(names)} repositories into {product}")

    context = AppContext.from_settings(settings)

    try:
        metrics = await context.sync.sync_repositories(product, names)

        logger.info("=" * 50)
        logger.info("Sync Metrics:")
        logger.info(f"  Repositories synced: {metrics.repositories_synced}")
        logger.info(f"  Duration: {metrics.duration_seconds:.2f} seconds")
        logger.info(f"  Errors: {metrics.errors_encountered}")
        logger.info("=" * 50)

        if metrics.errors_encountered:
            sys.exit(1)

    except Exception as e:
        logger.error(f"Sync failed: {e}", exc_info=True)
        sys.exit(1)
    finally:
        await context.close()


if __name__ == "__main__":
    asyncio.run(main())
