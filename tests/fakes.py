"""In-memory stand-ins for the GitHub client and document store ports."""
from typing import Any, Dict, List, Optional, Tuple, Union
from repo_metadata.domain.document_interface import IMetadataDocumentStore
from repo_metadata.domain.github_interface import IGitHubClient
from repo_metadata.domain.models import RepositoryMetadata, StoredRepository
from repo_metadata.infrastructure.github_client import GitHubAPIError


NOT_FOUND = GitHubAPIError(404, {"message": "Not Found"})


class FakeGitHubClient(IGitHubClient):
    """Client answering from canned payloads; an Exception value is raised."""

    def __init__(self, repo=None, license=None, contents=None):
        self.repo = repo
        self.license = license
        self.contents = contents or {}
        self.calls: List[tuple] = []
        self.closed = False

    @staticmethod
    def _answer(value):
        if isinstance(value, Exception):
            raise value
        return value

    async def get_repo(self, owner: str, repo: str) -> Dict[str, Any]:
        self.calls.append(("repo", owner, repo))
        return self._answer(self.repo)

    async def get_license(self, owner: str, repo: str) -> Dict[str, Any]:
        self.calls.append(("license", owner, repo))
        return self._answer(self.license)

    async def get_content(
        self, owner: str, repo: str, path: str, ref: str
    ) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        self.calls.append(("content", owner, repo, path, ref))
        return self._answer(self.contents.get(path, NOT_FOUND))

    async def close(self) -> None:
        self.closed = True


class InMemoryDocumentStore(IMetadataDocumentStore):
    """Document store keeping documents in a dict, counting reads."""

    def __init__(self):
        self.documents: Dict[Tuple[str, str], RepositoryMetadata] = {}
        self.reads = 0
        self.closed = False

    def get_repo(self, product: str, repo_id: str) -> Optional[RepositoryMetadata]:
        self.reads += 1
        return self.documents.get((product, repo_id))

    def list_repos(self) -> List[StoredRepository]:
        return [
            StoredRepository(product=product, repo=repo)
            for (product, _), repo in sorted(self.documents.items())
        ]

    def save_repos(self, product: str, repos: List[RepositoryMetadata]) -> None:
        for repo in repos:
            self.documents[(product, repo.id)] = repo

    def close(self) -> None:
        self.closed = True
