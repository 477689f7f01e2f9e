"""
HTTP fetching for the project scraper.

Single attempt per request: failures propagate as FetchError and the caller
decides whether to skip the project or stop the run.
"""

import logging
from dataclasses import dataclass

import httpx

from scrapeyourcity.exceptions import FetchError

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Result of a page fetch operation."""

    url: str
    status_code: int
    content: str
    content_type: str
    is_html: bool


class HttpFetcher:
    """HTTP fetcher with a fixed timeout and no retries."""

    USER_AGENT = "scrapeyourcity/0.1 (+https://github.com/danp/scrapeyourcity)"

    def __init__(self, timeout: float = 30.0, headers: dict[str, str] | None = None):
        """
        Initialize HTTP fetcher.

        Args:
            timeout: Request timeout in seconds
            headers: Optional custom headers
        """
        self.timeout = timeout
        self.headers = headers or {}

    def fetch(self, url: str) -> FetchResult:
        """
        Fetch an HTML page.

        Args:
            url: URL to fetch

        Returns:
            FetchResult with the decoded body

        Raises:
            FetchError: On transport failure, error status or non-HTML response
        """
        request_headers = {
            "User-Agent": self.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
            **self.headers,
        }

        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                response = client.get(url, headers=request_headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise FetchError(url, f"HTTP {status}: {e.response.reason_phrase}", status) from e
        except httpx.TimeoutException as e:
            raise FetchError(url, f"Timeout: {e}") from e
        except httpx.RequestError as e:
            raise FetchError(url, f"Request error: {e}") from e

        content_type = response.headers.get("content-type", "")
        is_html = "text/html" in content_type or "application/xhtml" in content_type
        if not is_html:
            raise FetchError(
                url, f"Not HTML content: {content_type or 'unknown'}", response.status_code
            )

        logger.debug(f"Fetched {url} ({response.status_code}, {len(response.text)} chars)")
        return FetchResult(
            url=str(response.url),
            status_code=response.status_code,
            content=response.text,
            content_type=content_type,
            is_html=is_html,
        )
