"""Tests for the ingestion service."""
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, Mock
import pytest
from devrepo.application.ingestion_service import IngestionService
from devrepo.domain.errors import (
    OperationFailed,
    InvalidUrlFormat,
    UnsupportedHost,
    IncompleteRepositoryPath,
    ProviderHttpError,
    ProviderUnreachable,
    StoreError
)
from devrepo.domain.github_interface import IGitHubClient
from devrepo.domain.models import RawMetricsSnapshot, RepositoryIdentity, RepositoryRecord
from devrepo.domain.repository_interface import IRepositoryStorage


NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def _snapshot(pushed_at=NOW - timedelta(days=3)):
    return RawMetricsSnapshot(
        name="react",
        owner="facebook",
        full_name="facebook/react",
        stars=100,
        forks=9,
        issues=10,
        language="JavaScript",
        pushed_at=pushed_at
    )


def _record(repo_id, created_at):
    return RepositoryRecord(
        name="react",
        owner="facebook",
        full_name="facebook/react",
        stars=100,
        forks=9,
        issues=10,
        main_language="JavaScript",
        health_score=90,
        activity_level="3 days",
        trending_factor=100,
        created_at=created_at,
        repo_id=repo_id
    )


@pytest.fixture
def github_client():
    client = Mock(spec=IGitHubClient)
    client.fetch_repository = AsyncMock(return_value=_snapshot())
    client.close = AsyncMock()
    return client


@pytest.fixture
def storage():
    store = Mock(spec=IRepositoryStorage)
    store.insert_repository.return_value = 7
    store.list_repositories.return_value = []
    return store


@pytest.fixture
def service(github_client, storage):
    return IngestionService(github_client, storage, clock=lambda: NOW)


class TestAddRepository:
    """Test IngestionService.add_repository."""

    async def test_runs_full_pipeline(self, service, github_client, storage):
        record = await service.add_repository("https://github.com/facebook/react")

        github_client.fetch_repository.assert_awaited_once_with(
            RepositoryIdentity(owner="facebook", name="react")
        )
        storage.insert_repository.assert_called_once()
        stored = storage.insert_repository.call_args[0][0]
        assert stored.repo_id is None
        assert stored.created_at == NOW

        assert record.repo_id == 7
        assert record.full_name == "facebook/react"
        assert record.main_language == "JavaScript"
        assert record.health_score == 90
        assert record.trending_factor == 100
        assert record.activity_level == "3 days"
        assert record.created_at == NOW

    async def test_unknown_activity_without_push(self, service, github_client):
        github_client.fetch_repository.return_value = _snapshot(pushed_at=None)

        record = await service.add_repository("https://github.com/facebook/react")

        assert record.activity_level == "Unknown"

    async def test_same_url_twice_creates_two_records(self, service, storage):
        storage.insert_repository.side_effect = [1, 2]

        first = await service.add_repository("https://github.com/facebook/react")
        second = await service.add_repository("https://github.com/facebook/react")

        assert (first.repo_id, second.repo_id) == (1, 2)
        assert storage.insert_repository.call_count == 2

    @pytest.mark.parametrize("url, error_class", [
        ("github.com/facebook/react", InvalidUrlFormat),
        ("https://example.com/a/b", UnsupportedHost),
        ("https://github.com/onlyowner", IncompleteRepositoryPath),
    ])
    async def test_invalid_url_stops_before_fetch(
        self, service, github_client, storage, url, error_class
    ):
        with pytest.raises(OperationFailed) as excinfo:
            await service.add_repository(url)

        assert excinfo.value.message == "Failed to add repository"
        assert isinstance(excinfo.value.cause, error_class)
        github_client.fetch_repository.assert_not_awaited()
        storage.insert_repository.assert_not_called()

    @pytest.mark.parametrize("error", [
        ProviderHttpError(404),
        ProviderUnreachable(ConnectionResetError("reset by peer")),
    ])
    async def test_fetch_failure_never_inserts(self, service, github_client, storage, error):
        github_client.fetch_repository.side_effect = error

        with pytest.raises(OperationFailed) as excinfo:
            await service.add_repository("https://github.com/facebook/react")

        assert excinfo.value.cause is error
        assert excinfo.value.detail == str(error)
        assert storage.insert_repository.call_count == 0

    async def test_store_failure_is_classified(self, service, storage):
        storage.insert_repository.side_effect = RuntimeError("disk full")

        with pytest.raises(OperationFailed) as excinfo:
            await service.add_repository("https://github.com/facebook/react")

        assert isinstance(excinfo.value.cause, StoreError)
        assert "disk full" in excinfo.value.detail

    async def test_custom_host(self, github_client, storage):
        service = IngestionService(github_client, storage, host="git.example.org", clock=lambda: NOW)

        with pytest.raises(OperationFailed):
            await service.add_repository("https://github.com/facebook/react")

        record = await service.add_repository("https://git.example.org/facebook/react")
        assert record.repo_id == 7

    async def test_naive_clock_is_treated_as_utc(self, github_client, storage):
        naive_now = NOW.replace(tzinfo=None)
        service = IngestionService(github_client, storage, clock=lambda: naive_now)

        record = await service.add_repository("https://github.com/facebook/react")

        assert record.activity_level == "3 days"
        assert record.created_at == NOW
        assert record.created_at.tzinfo is not None


class TestListRepositories:
    """Test IngestionService.list_repositories."""

    async def test_empty_store_returns_empty_list(self, service):
        assert await service.list_repositories() == []

    async def test_returns_store_order(self, service, storage):
        newest = _record(2, NOW)
        oldest = _record(1, NOW - timedelta(days=1))
        storage.list_repositories.return_value = [newest, oldest]

        records = await service.list_repositories()

        assert [r.repo_id for r in records] == [2, 1]

    async def test_store_failure(self, service, storage):
        storage.list_repositories.side_effect = StoreError(RuntimeError("connection lost"))

        with pytest.raises(OperationFailed) as excinfo:
            await service.list_repositories()

        assert excinfo.value.message == "Failed to fetch repos"
        assert "connection lost" in excinfo.value.detail


class TestRemoveRepository:
    """Test IngestionService.remove_repository."""

    async def test_delegates_to_store(self, service, storage):
        await service.remove_repository(7)

        storage.delete_repository.assert_called_once_with(7)

    async def test_store_failure(self, service, storage):
        storage.delete_repository.side_effect = OSError("gone")

        with pytest.raises(OperationFailed) as excinfo:
            await service.remove_repository(7)

        assert excinfo.value.message == "Failed to delete repository"
        assert isinstance(excinfo.value.cause, StoreError)


async def test_close_closes_collaborators(service, github_client, storage):
    await service.close()

    github_client.close.assert_awaited_once()
    storage.close.assert_called_once()
