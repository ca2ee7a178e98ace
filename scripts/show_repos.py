"""Load every stored repository through the metadata cache and print it by product."""
import asyncio
import sys
from repo_metadata.application.metadata_cache import MetadataCacheStore
from repo_metadata.infrastructure.config import get_connection_string, load_env
from repo_metadata.infrastructure.postgres_store import PostgresDocumentStore

load_env()


def print_section(title: str):
    """Print a section header."""
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


async def display_repositories():
    """Fetch all documents into the cache and display them grouped by product."""
    store = PostgresDocumentStore(get_connection_string())
    cache = MetadataCacheStore(store)

    try:
        projects = await cache.fetch_projects()
    finally:
        store.close()

    print_section("Overall Statistics")
    print(f"Total repositories: {len(projects):,}")
    print(f"Products: {len(cache.repos):,}")

    for product in sorted(cache.repos):
        print_section(f"Product: {product}")
        print(f"{'Repository':<40} {'Branch':<12} {'License':<12} {'Stars':>10}")
        print("-" * 78)
        repos = sorted(cache.repos[product].values(), key=lambda r: r.stars, reverse=True)
        for repo in repos:
            print(
                f"{repo.full_name:<40} {repo.default_branch:<12} "
                f"{repo.license_key or '-':<12} {repo.stars:>10,}"
            )


if __name__ == "__main__":
    try:
        asyncio.run(display_repositories())
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)
