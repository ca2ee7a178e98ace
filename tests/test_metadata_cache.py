"""Tests for the metadata cache store."""
import pytest
from repo_metadata.application.metadata_cache import MetadataCacheStore, RepositoryNotFoundError
from repo_metadata.domain.models import RepositoryMetadata
from tests.fakes import InMemoryDocumentStore


def make_repo(repo_id: str, name: str = "widget", stars: int = 0) -> RepositoryMetadata:
    return RepositoryMetadata(
        id=repo_id,
        owner="acme",
        name=name,
        default_branch="main",
        stars=stars
    )


@pytest.mark.asyncio
async def test_fetch_repo_then_lookup():
    """Test the core/42 scenario: fetched id is served, unknown id is None."""
    store = InMemoryDocumentStore()
    store.save_repos("core", [make_repo("42")])
    cache = MetadataCacheStore(store)

    fetched = await cache.fetch_repo("core", "42")

    assert fetched.id == "42"
    assert cache.repo_by_product_and_id("core", "42") == fetched
    assert cache.repo_by_product_and_id("core", "43") is None


@pytest.mark.asyncio
async def test_refetch_overwrites_entry():
    """Test that the last fetch for a key wins."""
    store = InMemoryDocumentStore()
    store.save_repos("core", [make_repo("42", stars=1)])
    cache = MetadataCacheStore(store)
    await cache.fetch_repo("core", "42")

    store.save_repos("core", [make_repo("42", stars=99)])
    await cache.fetch_repo("core", "42")

    assert cache.repo_by_product_and_id("core", "42").stars == 99
    assert store.reads == 2


@pytest.mark.asyncio
async def test_fetch_missing_repo_raises_and_leaves_cache():
    """Test that a missing document is reported and not cached."""
    cache = MetadataCacheStore(InMemoryDocumentStore())

    with pytest.raises(RepositoryNotFoundError) as excinfo:
        await cache.fetch_repo("core", "404")

    assert excinfo.value.product == "core"
    assert excinfo.value.repo_id == "404"
    assert cache.repos == {}
    assert cache.repo_by_product_and_id("core", "404") is None


def test_lookup_unknown_product_returns_none():
    """Test that lookups never raise for unknown keys."""
    cache = MetadataCacheStore(InMemoryDocumentStore())

    assert cache.repo_by_product_and_id("missing", "1") is None


def test_lookup_does_not_fetch():
    """Test that the accessor never reads the document store."""
    store = InMemoryDocumentStore()
    store.save_repos("core", [make_repo("42")])
    cache = MetadataCacheStore(store)

    assert cache.repo_by_product_and_id("core", "42") is None
    assert store.reads == 0


def test_add_repos_is_idempotent():
    """Test applying the same list twice equals applying it once."""
    repos = [make_repo("1"), make_repo("2", name="gadget")]
    once = MetadataCacheStore(InMemoryDocumentStore())
    twice = MetadataCacheStore(InMemoryDocumentStore())

    once.add_repos("core", repos)
    twice.add_repos("core", repos)
    twice.add_repos("core", repos)

    assert once.repos == twice.repos
    assert len(twice.repos["core"]) == 2


def test_add_repos_keeps_products_separate():
    """Test that the same id under two products is two entries."""
    cache = MetadataCacheStore(InMemoryDocumentStore())

    cache.add_repos("core", [make_repo("1", name="a")])
    cache.add_repos("labs", [make_repo("1", name="b")])

    assert cache.repo_by_product_and_id("core", "1").name == "a"
    assert cache.repo_by_product_and_id("labs", "1").name == "b"


@pytest.mark.asyncio
async def test_fetch_projects_fills_both_views():
    """Test that a broad fetch replaces the list and indexes by product."""
    store = InMemoryDocumentStore()
    store.save_repos("core", [make_repo("1"), make_repo("2")])
    store.save_repos("labs", [make_repo("3")])
    cache = MetadataCacheStore(store)
    cache.set_github_projects([make_repo("stale")])

    projects = await cache.fetch_projects()

    assert [repo.id for repo in projects] == ["1", "2", "3"]
    assert cache.github_projects == projects
    assert cache.repo_by_product_and_id("labs", "3").id == "3"
    assert cache.repo_by_product_and_id("core", "2").id == "2"


def test_set_github_projects_replaces_list():
    """Test that the flat list is replaced, not appended to."""
    cache = MetadataCacheStore(InMemoryDocumentStore())

    cache.set_github_projects([make_repo("1"), make_repo("2")])
    cache.set_github_projects([make_repo("3")])

    assert [repo.id for repo in cache.github_projects] == ["3"]
