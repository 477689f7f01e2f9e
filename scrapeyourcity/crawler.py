"""
Crawl driver.

Fetches the listing page, then processes each selected project one at a time
in discovery order, pausing between projects. Each project is recorded as one
atomic unit; a stop request is only honored between projects.
"""

import logging
import threading
import time
from dataclasses import dataclass, field

from scrapeyourcity.exceptions import ExtractionError, TransportError
from scrapeyourcity.logging_utils import log_summary
from scrapeyourcity.scraper.discovery import discover_projects, select_projects
from scrapeyourcity.scraper.extractor import DEFAULT_RULES, extract_project
from scrapeyourcity.scraper.fetcher import HttpFetcher
from scrapeyourcity.scraper.models import DiscoveredProject, ExtractionRules, ScrapeConfig
from scrapeyourcity.snapshots.models import Observation
from scrapeyourcity.snapshots.recorder import SnapshotRecorder

logger = logging.getLogger(__name__)


@dataclass
class CrawlResult:
    """Outcome of one crawl run."""

    selected: int = 0
    observations: list[Observation] = field(default_factory=list)
    failed_urls: list[dict[str, str]] = field(default_factory=list)
    stopped: bool = False

    @property
    def processed_count(self) -> int:
        return len(self.observations)

    @property
    def failed_count(self) -> int:
        return len(self.failed_urls)


class Crawler:
    """Sequential project crawler feeding the snapshot recorder."""

    def __init__(
        self,
        config: ScrapeConfig,
        recorder: SnapshotRecorder,
        fetcher: HttpFetcher | None = None,
        rules: ExtractionRules = DEFAULT_RULES,
        stop_event: threading.Event | None = None,
    ):
        self.config = config
        self.recorder = recorder
        self.fetcher = fetcher or HttpFetcher(timeout=config.timeout, headers=config.headers)
        self.rules = rules
        self.stop_event = stop_event or threading.Event()

    def discover(self) -> list[DiscoveredProject]:
        """Fetch the listing page and return the projects this run should process."""
        listing = self.fetcher.fetch(self.config.listing_url)
        discovered = discover_projects(listing.content, self.config.listing_url, self.rules)
        selected = select_projects(discovered, self.config.only_urls)
        logger.info(f"Discovered {len(discovered)} projects, {len(selected)} selected")
        return selected

    def process(self, project: DiscoveredProject) -> Observation:
        """Fetch, extract and record one project."""
        page = self.fetcher.fetch(project.url)
        snapshot = extract_project(page.content, project.url, project.state, self.rules)
        return self.recorder.record(snapshot)

    def run(self) -> CrawlResult:
        """
        Crawl all selected projects.

        Transport and extraction errors abort the run unless
        continue_on_error is set, in which case the project is skipped.
        Integrity and storage errors always abort the run.

        Returns:
            CrawlResult with the recorded observations and skipped projects
        """
        start = time.monotonic()
        projects = self.discover()
        result = CrawlResult(selected=len(projects))
        delay = self.config.request_delay_ms / 1000.0

        for i, project in enumerate(projects):
            if i > 0 and delay > 0:
                time.sleep(delay)

            if self.stop_event.is_set():
                logger.info(f"Stop requested, ending run before {project.url}")
                result.stopped = True
                break

            logger.info(f"Fetching {i + 1}/{len(projects)} {project.url}")
            try:
                result.observations.append(self.process(project))
            except (TransportError, ExtractionError) as e:
                if not self.config.continue_on_error:
                    raise
                logger.error(f"Skipping {project.url}: {e}")
                result.failed_urls.append({"url": project.url, "error": str(e)})

        logger.info(
            log_summary(
                "crawl",
                success=not result.failed_urls,
                duration_ms=(time.monotonic() - start) * 1000,
                item_count=result.processed_count,
                selected=result.selected,
                failed=result.failed_count,
                stopped=result.stopped,
            )
        )
        return result
