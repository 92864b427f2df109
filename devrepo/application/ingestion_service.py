"""Ingestion service orchestrating repository add, list and remove."""
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional
from devrepo.domain.errors import DevRepoError, OperationFailed, StoreError
from devrepo.domain.github_interface import IGitHubClient
from devrepo.domain.metrics import derive_metrics
from devrepo.domain.models import RepositoryRecord
from devrepo.domain.repository_interface import IRepositoryStorage
from devrepo.domain.url_parser import DEFAULT_HOST, parse_repository_url


logger = logging.getLogger(__name__)

ADD_FAILED = "Failed to add repository"
LIST_FAILED = "Failed to fetch repos"
REMOVE_FAILED = "Failed to delete repository"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IngestionService:
    """Application service for registering and managing tracked repositories.

    Sequences URL parsing, metric fetching, derivation and persistence. Each
    call is independent: nothing is shared between calls except the store,
    and a failed call writes nothing.
    """

    def __init__(
        self,
        github_client: IGitHubClient,
        storage: IRepositoryStorage,
        host: str = DEFAULT_HOST,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """Initialize ingestion service.

        Args:
            github_client: Metrics provider implementation
            storage: Repository storage implementation
            host: Hosting domain accepted in repository URLs
            clock: Returns the current time; defaults to UTC wall clock.
                Naive values are taken as UTC
        """
        self._github_client = github_client
        self._storage = storage
        self._host = host
        self._clock = clock or _utcnow

    async def add_repository(self, url: str) -> RepositoryRecord:
        """Parse, fetch, derive and store one repository.

        Args:
            url: Repository URL submitted by the user

        Returns:
            The stored RepositoryRecord, carrying its assigned id

        Raises:
            OperationFailed: When any stage fails; ``cause`` holds the classified error
        """
        logger.info(f"Adding repository {url}")
        try:
            identity = parse_repository_url(url, self._host)
            snapshot = await self._github_client.fetch_repository(identity)

            now = self._now()
            metrics = derive_metrics(snapshot, now)
            record = RepositoryRecord.from_snapshot(snapshot, metrics, created_at=now)

            repo_id = self._call_store(self._storage.insert_repository, record)
        except DevRepoError as e:
            logger.error(f"{ADD_FAILED}: {e}")
            raise OperationFailed(ADD_FAILED, e) from e

        logger.info(
            f"Added {record.full_name} as {repo_id} "
            f"(health {metrics.health_score}, activity {metrics.activity_level}, "
            f"trending {metrics.trending_factor})"
        )
        return record.with_id(repo_id)

    async def list_repositories(self) -> List[RepositoryRecord]:
        """Return all stored records, newest first.

        Raises:
            OperationFailed: When the store fails
        """
        try:
            records = self._call_store(self._storage.list_repositories)
        except DevRepoError as e:
            logger.error(f"{LIST_FAILED}: {e}")
            raise OperationFailed(LIST_FAILED, e) from e

        logger.info(f"Listed {len(records)} repositories")
        return list(records)

    async def remove_repository(self, repo_id: int) -> None:
        """Delete a stored record by id.

        Raises:
            OperationFailed: When the store fails
        """
        try:
            self._call_store(self._storage.delete_repository, repo_id)
        except DevRepoError as e:
            logger.error(f"{REMOVE_FAILED}: {e}")
            raise OperationFailed(REMOVE_FAILED, e) from e

        logger.info(f"Removed repository {repo_id}")

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now

    @staticmethod
    def _call_store(operation: Callable, *args):
        """Invoke a store operation, classifying unexpected failures as StoreError."""
        try:
            return operation(*args)
        except DevRepoError:
            raise
        except Exception as e:
            raise StoreError(e) from e

    async def close(self) -> None:
        """Close connections."""
        await self._github_client.close()
        self._storage.close()
