"""Exception hierarchy for the repository dashboard.

All exceptions inherit from DevRepoError so callers have a single catch point.
"""


class DevRepoError(Exception):
    """Base exception for all dashboard errors."""


class RepositoryUrlError(DevRepoError):
    """The submitted repository URL could not be parsed."""


class InvalidUrlFormat(RepositoryUrlError):
    """The input is not an absolute URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid GitHub URL format: {url!r}")


class UnsupportedHost(RepositoryUrlError):
    """The URL points at a host other than the expected hosting domain."""

    def __init__(self, host: str, expected: str):
        self.host = host
        self.expected = expected
        super().__init__(f"Not a valid GitHub URL: host {host!r} is not {expected!r}")


class IncompleteRepositoryPath(RepositoryUrlError):
    """The URL path does not name both an owner and a repository."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not a valid repository URL: path {path!r} needs owner and name")


class ProviderError(DevRepoError):
    """Error communicating with the remote metrics provider."""


class ProviderHttpError(ProviderError):
    """The provider answered with a non-success status."""

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"GitHub API error: {status}")


class ProviderUnreachable(ProviderError):
    """The provider could not be reached (DNS, connection, timeout)."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"GitHub API unreachable: {str(cause) or type(cause).__name__}")


class MalformedProviderResponse(ProviderError):
    """The provider answered successfully but the body is unusable."""


class StoreError(DevRepoError):
    """The persistence store failed to complete an operation."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Storage error: {str(cause) or type(cause).__name__}")


class OperationFailed(DevRepoError):
    """A user-initiated action failed.

    Carries a short user-facing ``message`` plus ``detail``, the message of
    the classified error in ``cause``.
    """

    def __init__(self, message: str, cause: DevRepoError):
        self.message = message
        self.cause = cause
        self.detail = str(cause) or "No additional error details available"
        super().__init__(message)
