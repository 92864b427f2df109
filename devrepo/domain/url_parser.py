"""Parsing of repository URLs into owner/name identities."""
from urllib.parse import urlsplit
from devrepo.domain.errors import (
    InvalidUrlFormat,
    UnsupportedHost,
    IncompleteRepositoryPath
)
from devrepo.domain.models import RepositoryIdentity


DEFAULT_HOST = "github.com"


def parse_repository_url(url: str, host: str = DEFAULT_HOST) -> RepositoryIdentity:
    """Parse a repository URL such as ``https://github.com/facebook/react``.

    Only the first two path segments are used; deeper paths, query strings
    and fragments are ignored.

    Args:
        url: Repository URL submitted by the user
        host: Hosting domain the URL must point at

    Returns:
        RepositoryIdentity for the owner/name pair

    Raises:
        InvalidUrlFormat: When the input is not an absolute URL
        UnsupportedHost: When the URL host is not ``host``
        IncompleteRepositoryPath: When the path lacks owner or name
    """
    candidate = (url or "").strip()
    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
        # raises on a non-numeric or out-of-range port
        parts.port
    except ValueError:
        raise InvalidUrlFormat(url)

    if not parts.scheme or not parts.netloc or not hostname:
        raise InvalidUrlFormat(url)

    if hostname != host.lower():
        raise UnsupportedHost(hostname, host)

    segments = [segment for segment in parts.path.split("/") if segment]
    if len(segments) < 2:
        raise IncompleteRepositoryPath(parts.path)

    return RepositoryIdentity(owner=segments[0], name=segments[1])
