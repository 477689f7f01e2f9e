"""
Custom exceptions for the scrapeyourcity pipeline.

Transport and extraction errors abort one project. Integrity and storage
errors indicate a broken store and abort the run.
"""


class ScrapeError(Exception):
    """Base exception for scraping and snapshot storage errors."""


class TransportError(ScrapeError):
    """Fetch failure or malformed response."""


class FetchError(TransportError):
    """Error during page fetching."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {message}")


class ExtractionError(ScrapeError):
    """Expected page structure is absent."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to extract {url}: {message}")


class IntegrityViolation(ScrapeError):
    """A store invariant was broken (fingerprint collision, dangling reference)."""


class StorageError(ScrapeError):
    """Database I/O failure; the enclosing transaction was rolled back."""
