"""
Content-addressed storage of snapshot bodies.

Byte-identical markup is stored exactly once, no matter how many projects or
crawls reference it.
"""

import logging
import sqlite3
from collections.abc import Callable

from scrapeyourcity.exceptions import IntegrityViolation
from scrapeyourcity.snapshots.fingerprint import compute_fingerprint
from scrapeyourcity.snapshots.models import Content

logger = logging.getLogger(__name__)


class ContentStore:
    """Maps fingerprints to stored HTML and its derived Markdown."""

    def __init__(self, conn: sqlite3.Connection, derive: Callable[[str], str]):
        """
        Initialize content store.

        Args:
            conn: Open snapshot database connection
            derive: Pure function producing the derived form from markup
        """
        self.conn = conn
        self.derive = derive

    def put(self, html: str) -> str:
        """
        Store markup if its fingerprint is new.

        Args:
            html: Canonical markup

        Returns:
            Fingerprint of the markup

        Raises:
            IntegrityViolation: If the fingerprint is already stored for different markup
        """
        fingerprint = compute_fingerprint(html)

        row = self.conn.execute(
            "SELECT html FROM contents WHERE hash = ?", (fingerprint,)
        ).fetchone()
        if row is not None:
            if row["html"] != html:
                raise IntegrityViolation(
                    f"Fingerprint collision for {fingerprint}: stored content differs"
                )
            logger.debug(f"Content already stored: {fingerprint}")
            return fingerprint

        self.conn.execute(
            "INSERT INTO contents (hash, html, markdown) VALUES (?, ?, ?)",
            (fingerprint, html, self.derive(html)),
        )
        logger.info(f"Stored new content: {fingerprint}")
        return fingerprint

    def get(self, fingerprint: str) -> Content | None:
        row = self.conn.execute(
            "SELECT hash, html, markdown FROM contents WHERE hash = ?", (fingerprint,)
        ).fetchone()
        return Content.from_row(row) if row else None

    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM contents").fetchone()[0]
