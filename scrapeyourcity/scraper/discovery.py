"""
Project discovery from the listing page.

Parses project tiles into DiscoveredProject entries and narrows them to the
projects a run should process.
"""

import logging
from collections.abc import Collection, Iterable

from bs4 import BeautifulSoup

from scrapeyourcity.exceptions import ExtractionError
from scrapeyourcity.scraper.extractor import DEFAULT_RULES, absolutize
from scrapeyourcity.scraper.models import DEFAULT_DENYLIST, DiscoveredProject, ExtractionRules

logger = logging.getLogger(__name__)


def discover_projects(
    html: str,
    listing_url: str,
    rules: ExtractionRules = DEFAULT_RULES,
) -> list[DiscoveredProject]:
    """
    Extract all project tiles from the listing page, in page order.

    Args:
        html: Listing page HTML
        listing_url: URL of the listing page (for resolving relative links)
        rules: Extraction rules

    Returns:
        Discovered projects with absolute URLs and their listed state

    Raises:
        ExtractionError: If the page contains no project tiles
    """
    soup = BeautifulSoup(html, "lxml")
    tiles = soup.select(rules.tile_selector)
    if not tiles:
        raise ExtractionError(listing_url, f"no {rules.tile_selector!r} tiles found")

    projects = []
    for tile in tiles:
        link = tile.select_one(rules.tile_link_selector)
        href = link.get("href", "") if link else ""
        url = absolutize(href, listing_url) if href else ""
        if not url:
            logger.warning(f"Skipping project tile without link on {listing_url}")
            continue

        projects.append(
            DiscoveredProject(url=url, state=tile.get(rules.tile_state_attribute, ""))
        )

    return projects


def select_projects(
    discovered: Iterable[DiscoveredProject],
    only_urls: Collection[str] | None = None,
    denylist: Collection[str] = DEFAULT_DENYLIST,
) -> list[DiscoveredProject]:
    """
    Narrow discovered projects to those a run should process.

    Denylisted URLs are always dropped. An empty or missing allow-list keeps
    everything else; otherwise only allow-listed URLs are kept. Discovery
    order and repeated entries are preserved.

    Args:
        discovered: Projects in discovery order
        only_urls: Optional allow-list of project URLs
        denylist: URLs that are never processed

    Returns:
        Projects to process
    """
    allowed = set(only_urls) if only_urls else None
    selected = []

    for project in discovered:
        if project.url in denylist:
            continue
        if allowed is not None and project.url not in allowed:
            continue
        selected.append(project)

    return selected
