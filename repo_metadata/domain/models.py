"""Domain models representing repository metadata records."""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RepositoryMetadata:
    """Immutable record of one GitHub repository's tracked attributes.

    Replaced wholesale on refetch, never partially mutated.
    """
    id: str
    owner: str
    name: str
    default_branch: str
    license_key: Optional[str] = None
    description: Optional[str] = None
    stars: int = 0
    forks: int = 0
    open_issues: int = 0
    html_url: str = ""
    pushed_at: Optional[str] = None

    @property
    def full_name(self) -> str:
        """Returns the full repository name (owner/name)."""
        return f"{self.owner}/{self.name}"

    def with_license(self, license_key: Optional[str]) -> 'RepositoryMetadata':
        """Returns a new RepositoryMetadata instance with the provided license key."""
        return RepositoryMetadata(
            id=self.id,
            owner=self.owner,
            name=self.name,
            default_branch=self.default_branch,
            license_key=license_key,
            description=self.description,
            stars=self.stars,
            forks=self.forks,
            open_issues=self.open_issues,
            html_url=self.html_url,
            pushed_at=self.pushed_at
        )

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> 'RepositoryMetadata':
        """Build a record from a GitHub REST repository payload."""
        license_info = payload.get("license") or {}
        return cls(
            id=str(payload["id"]),
            owner=payload["owner"]["login"],
            name=payload["name"],
            default_branch=payload.get("default_branch", ""),
            license_key=license_info.get("key"),
            description=payload.get("description"),
            stars=payload.get("stargazers_count", 0),
            forks=payload.get("forks_count", 0),
            open_issues=payload.get("open_issues_count", 0),
            html_url=payload.get("html_url", ""),
            pushed_at=payload.get("pushed_at")
        )

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> 'RepositoryMetadata':
        """Build a record from a stored document, ignoring unknown keys."""
        known = {name: data[name] for name in cls.__dataclass_fields__ if name in data}
        known["id"] = str(known["id"])
        return cls(**known)

    def to_document(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible document."""
        return asdict(self)


@dataclass(frozen=True)
class LicenseInfo:
    """License key and decoded license text of a repository."""
    key: Optional[str]
    content: str


@dataclass(frozen=True)
class StoredRepository:
    """One document of the cross-product repository query."""
    product: str
    repo: RepositoryMetadata


@dataclass(frozen=True)
class SyncMetrics:
    """Metrics for a sync operation."""
    repositories_synced: int
    duration_seconds: float
    errors_encountered: int
