"""Domain models representing core business entities."""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class RepositoryIdentity:
    """Owner/name pair addressing a hosted repository.

    Produced by the URL parser and consumed immediately by the metrics fetcher.
    """
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        """Returns the full repository name (owner/name)."""
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class RawMetricsSnapshot:
    """Point-in-time metrics reported by the provider for one repository."""
    name: str
    owner: str
    full_name: str
    stars: int
    forks: int
    issues: int
    language: str = "Unknown"
    pushed_at: Optional[datetime] = None


@dataclass(frozen=True)
class DerivedMetrics:
    """Composite indicators computed from a snapshot."""
    health_score: int
    activity_level: str
    trending_factor: int


@dataclass(frozen=True)
class RepositoryRecord:
    """Immutable persisted entity: snapshot fields plus derived metrics.

    ``repo_id`` is assigned by the store on insert; records are never
    updated in place.
    """
    name: str
    owner: str
    full_name: str
    stars: int
    forks: int
    issues: int
    main_language: str
    health_score: int
    activity_level: str
    trending_factor: int
    created_at: datetime
    repo_id: Optional[int] = None

    @classmethod
    def from_snapshot(
        cls,
        snapshot: RawMetricsSnapshot,
        metrics: DerivedMetrics,
        created_at: datetime
    ) -> 'RepositoryRecord':
        """Builds an unsaved record from a snapshot and its derived metrics."""
        return cls(
            name=snapshot.name,
            owner=snapshot.owner,
            full_name=snapshot.full_name,
            stars=snapshot.stars,
            forks=snapshot.forks,
            issues=snapshot.issues,
            main_language=snapshot.language,
            health_score=metrics.health_score,
            activity_level=metrics.activity_level,
            trending_factor=metrics.trending_factor,
            created_at=created_at
        )

    def with_id(self, repo_id: int) -> 'RepositoryRecord':
        """Returns a new RepositoryRecord instance with the provided ID."""
        return replace(self, repo_id=repo_id)
