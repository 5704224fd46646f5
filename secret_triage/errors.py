"""Exceptions raised by repository acquisition and API fetching."""


class TriageError(Exception):
    """Base class for all secret-triage errors."""


class CloneError(TriageError):
    """A version-control client failed to clone a repository."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class CloneTimeoutError(CloneError):
    """The clone did not finish before its deadline and was killed."""


class CloneCancelledError(CloneError):
    """The clone was cancelled by the caller and was killed."""


class RepositoryTooLargeError(TriageError):
    def __init__(self, url: str, size: int, limit: int):
        super().__init__(f"{url} is {size} bytes, limit is {limit} bytes")
        self.url = url
        self.size = size
        self.limit = limit


class FetchError(TriageError):
    """Base class for classified HTTP outcomes."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class RateLimitedError(FetchError):
    """HTTP 429. Back off and/or rotate credentials."""

    def __init__(self, url: str, retry_after: float | None = None):
        super().__init__("rate limited", url)
        self.retry_after = retry_after


class ServerError(FetchError):
    """HTTP 500. Retry later."""

    def __init__(self, url: str):
        super().__init__("internal server error", url)


class UnexpectedStatusError(FetchError):
    def __init__(self, url: str, status: str):
        super().__init__(f"got {status}, wanted 200 OK", url)
        self.status = status


class DecodeError(FetchError):
    """A 200 response whose body could not be decoded into the target."""


class EmptyTokenPoolError(TriageError):
    """Selecting a token from an empty credential pool."""
