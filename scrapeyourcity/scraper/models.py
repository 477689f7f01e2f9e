"""
Data models for the scraping pipeline.

These models describe a run as it flows through the pipeline:
listing -> discovery -> fetch -> extraction -> snapshot store
"""

from dataclasses import dataclass, field
from typing import Any

SITE_URL = "https://www.shapeyourcityhalifax.ca"
LISTING_URL = f"{SITE_URL}/projects"

# Self-referential landing page listed among the projects
DEFAULT_DENYLIST = frozenset({f"{SITE_URL}/shape-your-city-halifax"})


@dataclass(frozen=True)
class ExtractionRules:
    """
    Named selector rules driving discovery and page extraction.

    Attributes:
        tile_selector: Listing element describing one project
        tile_link_selector: Link to the project page inside a tile
        tile_state_attribute: Tile attribute holding the project state
        content_selector: Container of the project page content
        title_selector: Element holding the project title inside the container
        remove_selectors: Noise elements removed from the container
        strip_attributes: (selector, attribute) pairs whose attribute is removed
        absolutize_attributes: (selector, attribute) pairs rewritten to absolute URLs
    """

    tile_selector: str = ".project-tile"
    tile_link_selector: str = "a.project-tile__link"
    tile_state_attribute: str = "data-state"
    content_selector: str = "#yield"
    title_selector: str = "h1"
    remove_selectors: tuple[str, ...] = (
        "#map-layers",
        "div[data-markers]",
        "input[name=authenticity_token]",
        "div.widget_follow_project",
        "div.widget_related_projects",
        "#qanda_description_text",
        "script",
        ".SocialSharing",
        "[name=a_comment_body]",
    )
    strip_attributes: tuple[tuple[str, str], ...] = (
        ("input", "id"),
        ("label", "for"),
    )
    absolutize_attributes: tuple[tuple[str, str], ...] = (
        ("a", "href"),
        ("img", "src"),
    )


@dataclass(frozen=True)
class DiscoveredProject:
    """A project tile found on the listing page."""

    url: str
    state: str


@dataclass(frozen=True)
class ProjectSnapshot:
    """
    One extracted project page, ready to be recorded.

    Attributes:
        url: Canonical project URL (stable identifier)
        title: Display title
        state: Project state from the listing (e.g. "active", "archived")
        html: Canonical markup of the page content
    """

    url: str
    title: str
    state: str
    html: str


@dataclass
class ScrapeConfig:
    """
    Configuration for a scrape run.

    Attributes:
        db_path: SQLite database file
        listing_url: Project listing page
        only_urls: Allow-list of project URLs; empty means all
        request_delay_ms: Politeness delay between projects in milliseconds
        timeout: Request timeout in seconds
        continue_on_error: Skip projects that fail to fetch or extract
        headers: Optional custom request headers
    """

    db_path: str = "data.db"
    listing_url: str = LISTING_URL
    only_urls: list[str] = field(default_factory=list)
    request_delay_ms: int = 1000
    timeout: float = 30.0
    continue_on_error: bool = False
    headers: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "db_path": self.db_path,
            "listing_url": self.listing_url,
            "only_urls": self.only_urls,
            "request_delay_ms": self.request_delay_ms,
            "timeout": self.timeout,
            "continue_on_error": self.continue_on_error,
            "headers": self.headers,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScrapeConfig":
        """Create ScrapeConfig from dictionary."""
        return cls(
            db_path=data.get("db_path", "data.db"),
            listing_url=data.get("listing_url", LISTING_URL),
            only_urls=data.get("only_urls", []),
            request_delay_ms=data.get("request_delay_ms", 1000),
            timeout=data.get("timeout", 30.0),
            continue_on_error=data.get("continue_on_error", False),
            headers=data.get("headers", {}),
        )
