"""Runtime configuration for scrapeyourcity

Settings that are not CLI flags come from environment variables:
- LISTING_URL: Project listing page
- REQUEST_DELAY_MS: Politeness delay between projects (default 1000)
- REQUEST_TIMEOUT: Request timeout in seconds (default 30)
- CONTINUE_ON_ERROR: Skip projects that fail to fetch or extract (default false)
- LOG_LEVEL: Logging level (default INFO)

Invalid values fail fast with ValueError.
"""

import logging
import os
from collections.abc import Mapping

from scrapeyourcity.scraper.models import LISTING_URL, ScrapeConfig

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _parse_number(name: str, value: str, cast):
    try:
        number = cast(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None
    if number < 0:
        raise ValueError(f"{name} must not be negative, got {value!r}")
    return number


def parse_url_list(raw: str | None) -> list[str]:
    """Split a comma-separated URL list, dropping blanks."""
    if not raw:
        return []
    return [url.strip() for url in raw.split(",") if url.strip()]


def load_config(
    db_path: str = "data.db",
    only_urls: list[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ScrapeConfig:
    """
    Build the run configuration from CLI values and the environment.

    Args:
        db_path: Database file path from the CLI
        only_urls: Allow-list from the CLI
        environ: Environment mapping (defaults to os.environ)

    Returns:
        ScrapeConfig for the run

    Raises:
        ValueError: If an environment value is invalid
    """
    env = os.environ if environ is None else environ

    if not db_path:
        raise ValueError("Database path must not be empty")

    config = ScrapeConfig(
        db_path=db_path,
        listing_url=env.get("LISTING_URL", LISTING_URL),
        only_urls=list(only_urls or []),
        request_delay_ms=_parse_number("REQUEST_DELAY_MS", env.get("REQUEST_DELAY_MS", "1000"), int),
        timeout=_parse_number("REQUEST_TIMEOUT", env.get("REQUEST_TIMEOUT", "30"), float),
        continue_on_error=_parse_bool("CONTINUE_ON_ERROR", env.get("CONTINUE_ON_ERROR", "false")),
    )

    logger.debug(f"Loaded configuration: {config.to_dict()}")
    return config


def get_log_level(environ: Mapping[str, str] | None = None) -> int:
    """Resolve LOG_LEVEL to a logging level number."""
    env = os.environ if environ is None else environ
    name = env.get("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"LOG_LEVEL must be a logging level name, got {name!r}")
    return level
