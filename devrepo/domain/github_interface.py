"""GitHub API interface (port) for fetching repository metrics.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from devrepo.domain.models import RepositoryIdentity, RawMetricsSnapshot


class IGitHubClient(ABC):
    """Abstract interface for the remote metrics provider."""

    @abstractmethod
    async def fetch_repository(self, identity: RepositoryIdentity) -> RawMetricsSnapshot:
        """Fetch a metrics snapshot for one repository.

        Args:
            identity: Repository to look up

        Returns:
            Normalized metrics snapshot

        Raises:
            ProviderError: When the provider fails or cannot be reached
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
