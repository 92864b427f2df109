"""GitHub REST API client fetching repository metrics snapshots."""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional
import aiohttp
from devrepo.domain.errors import (
    ProviderHttpError,
    ProviderUnreachable,
    MalformedProviderResponse
)
from devrepo.domain.github_interface import IGitHubClient
from devrepo.domain.models import RepositoryIdentity, RawMetricsSnapshot


logger = logging.getLogger(__name__)


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 instant as returned by GitHub (``Z`` suffix allowed)."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _count(payload: Any, key: str) -> int:
    """Read a non-negative integer counter from the payload."""
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{key} is not a non-negative integer: {value!r}")
    return value


class GitHubRestClient(IGitHubClient):
    """GitHub REST API client for single-repository lookups.

    Implements the IGitHubClient port, providing an anti-corruption layer
    between the domain and GitHub's API. One request per lookup, no retries
    and no caching.
    """

    def __init__(
        self,
        api_url: str = "https://api.github.com",
        access_token: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """Initialize GitHub client.

        Args:
            api_url: Base URL of the GitHub REST API
            access_token: Optional personal access token
            timeout: Total request timeout in seconds (0 disables it)
            session: Externally owned aiohttp session; created lazily if omitted
        """
        self._api_url = api_url.rstrip("/")
        self._access_token = access_token
        self._timeout = aiohttp.ClientTimeout(total=timeout if timeout > 0 else None)
        self._session = session
        self._owns_session = session is None

    @property
    def _headers(self) -> dict:
        headers = {"Accept": "application/vnd.github+json"}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    async def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def fetch_repository(self, identity: RepositoryIdentity) -> RawMetricsSnapshot:
        """Fetch the repository-detail resource and normalize it.

        Args:
            identity: Repository to look up

        Returns:
            RawMetricsSnapshot built from the response

        Raises:
            ProviderHttpError: On a non-success status
            ProviderUnreachable: On connection failures and timeouts
            MalformedProviderResponse: When the body is not a usable repository object
        """
        session = await self._init_session()
        url = f"{self._api_url}/repos/{identity.full_name}"
        logger.info(f"Fetching metrics for {identity.full_name}")

        try:
            async with session.get(url, headers=self._headers, timeout=self._timeout) as response:
                if not 200 <= response.status < 300:
                    logger.error(f"GitHub API returned {response.status} for {identity.full_name}")
                    raise ProviderHttpError(response.status)
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error reaching GitHub API: {e!r}")
            raise ProviderUnreachable(e) from e
        except ValueError as e:
            logger.error(f"GitHub API returned invalid JSON for {identity.full_name}: {e}")
            raise MalformedProviderResponse(f"GitHub API returned invalid JSON: {e}") from e

        return self._to_snapshot(payload)

    @staticmethod
    def _to_snapshot(payload: Any) -> RawMetricsSnapshot:
        """Transform a GitHub API response into a domain snapshot."""
        try:
            return RawMetricsSnapshot(
                name=payload["name"],
                owner=payload["owner"]["login"],
                full_name=payload["full_name"],
                stars=_count(payload, "stargazers_count"),
                forks=_count(payload, "forks_count"),
                issues=_count(payload, "open_issues_count"),
                language=payload.get("language") or "Unknown",
                pushed_at=_parse_timestamp(payload.get("pushed_at"))
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Unexpected GitHub API response: {e!r}")
            raise MalformedProviderResponse(f"Unexpected GitHub API response: {e!r}") from e

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None
