"""
Command line entry point.

Usage:
    scrapeyourcity --db data.db
    scrapeyourcity --db data.db --urls https://www.shapeyourcityhalifax.ca/a,https://www.shapeyourcityhalifax.ca/b
"""

import argparse
import logging
import signal
import sys
import threading

from scrapeyourcity.config import get_log_level, load_config, parse_url_list
from scrapeyourcity.crawler import Crawler
from scrapeyourcity.exceptions import ScrapeError
from scrapeyourcity.snapshots.recorder import SnapshotRecorder

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scrapeyourcity",
        description="Snapshot Shape Your City Halifax project pages into a SQLite history",
    )
    parser.add_argument("--db", default="data.db", help="database file path (default: data.db)")
    parser.add_argument(
        "--urls",
        default="",
        help="comma-separated list of project URLs to scrape, otherwise all",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        logging.basicConfig(
            level=get_log_level(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        config = load_config(db_path=args.db, only_urls=parse_url_list(args.urls))
    except ValueError as e:
        parser.error(str(e))

    stop_event = threading.Event()

    def request_stop(signum, frame):
        logger.warning("Interrupt received, stopping after the current project")
        stop_event.set()

    signal.signal(signal.SIGINT, request_stop)

    try:
        with SnapshotRecorder.open(config.db_path) as recorder:
            result = Crawler(config, recorder, stop_event=stop_event).run()
    except ScrapeError as e:
        logger.error(f"Run failed: {e}")
        return 1

    return 1 if result.failed_urls else 0


if __name__ == "__main__":
    sys.exit(main())
