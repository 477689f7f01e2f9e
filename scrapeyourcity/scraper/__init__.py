"""
Web scraping module for scrapeyourcity.

This module provides project discovery, page fetching and canonical
extraction for recording project snapshots.

Architecture:
- Discovery: Listing page tiles, allow-list and denylist filtering
- Fetcher: Single-attempt HTTP fetching via httpx
- Extractor: Rule-driven sanitization, canonical formatting, Markdown derivation
"""

from scrapeyourcity.scraper.models import (
    DEFAULT_DENYLIST,
    LISTING_URL,
    DiscoveredProject,
    ExtractionRules,
    ProjectSnapshot,
    ScrapeConfig,
)

__all__ = [
    "DEFAULT_DENYLIST",
    "LISTING_URL",
    "DiscoveredProject",
    "ExtractionRules",
    "ProjectSnapshot",
    "ScrapeConfig",
]
