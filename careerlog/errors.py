"""
Error types shared across the scraping pipelines.

Fetch errors are split by whether repeating the request can help:
permanent failures move on to the next candidate locator, transient
failures are retried (see retry.py).
"""


class CareerlogError(Exception):
    """Base class for careerlog errors."""
    pass


class FetchError(CareerlogError):
    """A document could not be fetched."""

    def __init__(self, message: str, url: str = "", status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class PermanentFetchError(FetchError):
    """Request failed in a way retrying will not fix (4xx other than 408/429)."""
    pass


class PageNotFound(PermanentFetchError):
    """The locator does not exist on the source (404/410)."""
    pass


class TransientFetchError(FetchError):
    """Upstream is rate limiting, timing out or temporarily unavailable."""
    pass


class RosterSchemaError(CareerlogError):
    """The ranked player list does not have the expected shape."""

    def __init__(self, errors: list[str]):
        super().__init__("Roster payload invalid: " + "; ".join(errors))
        self.errors = errors
