"""Current-state registry of tracked projects, keyed by URL."""

import logging
import sqlite3

from scrapeyourcity.snapshots.models import Project

logger = logging.getLogger(__name__)


class ProjectRegistry:
    """One row per project URL, overwritten on every observation."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def upsert(self, url: str, title: str, state: str, content_hash: str) -> int:
        """
        Create or overwrite the project row for a URL.

        Last write wins on title, state and content_hash. The row id is kept,
        so it stays stable across upserts.

        Args:
            url: Canonical project URL
            title: Display title
            state: Project state
            content_hash: Fingerprint of the observed content

        Returns:
            Stable project id
        """
        self.conn.execute(
            """
            INSERT INTO projects (url, title, state, content_hash) VALUES (?, ?, ?, ?)
            ON CONFLICT (url) DO UPDATE SET
                title = excluded.title,
                state = excluded.state,
                content_hash = excluded.content_hash
            """,
            (url, title, state, content_hash),
        )
        project_id = self.conn.execute(
            "SELECT id FROM projects WHERE url = ?", (url,)
        ).fetchone()["id"]
        logger.debug(f"Upserted project {project_id}: {url}")
        return project_id

    def get(self, url: str) -> Project | None:
        row = self.conn.execute(
            "SELECT id, url, title, state, content_hash FROM projects WHERE url = ?", (url,)
        ).fetchone()
        return Project.from_row(row) if row else None

    def list_all(self) -> list[Project]:
        rows = self.conn.execute(
            "SELECT id, url, title, state, content_hash FROM projects ORDER BY id"
        ).fetchall()
        return [Project.from_row(row) for row in rows]

    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM projects").fetchone()[0]
