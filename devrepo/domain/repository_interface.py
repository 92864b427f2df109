"""Repository interface (port) for data persistence.

This is the port in hexagonal architecture that the infrastructure layer implements.
"""
from abc import ABC, abstractmethod
from typing import List
from devrepo.domain.models import RepositoryRecord


class IRepositoryStorage(ABC):
    """Abstract interface for repository record storage."""

    @abstractmethod
    def insert_repository(self, record: RepositoryRecord) -> int:
        """Insert a new record.

        No deduplication is applied: inserting the same repository twice
        creates two records.

        Args:
            record: Unsaved RepositoryRecord to persist

        Returns:
            Identifier assigned by the store
        """
        pass

    @abstractmethod
    def list_repositories(self) -> List[RepositoryRecord]:
        """Return all records, newest first."""
        pass

    @abstractmethod
    def delete_repository(self, repo_id: int) -> None:
        """Delete the record with the given identifier, if any."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close any open connections."""
        pass
