"""Append-only log of project observations."""

import sqlite3
from datetime import datetime

from scrapeyourcity.snapshots.models import Observation


class ObservationLog:
    """
    Records which content each project exhibited at each crawl.

    Rows are only ever inserted. Recording an unchanged fingerprint again is
    how "still current as of time T" is expressed, so there is no dedup here.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def append(self, project_id: int, content_hash: str, observed_at: datetime) -> int:
        """
        Insert one observation row.

        Both references must already exist; the database enforces this with
        foreign keys.

        Returns:
            Id of the new observation row
        """
        cursor = self.conn.execute(
            "INSERT INTO project_observations (project_id, observed_at, content_hash) "
            "VALUES (?, ?, ?)",
            (project_id, observed_at.isoformat(), content_hash),
        )
        return cursor.lastrowid

    def history(self, project_id: int) -> list[Observation]:
        """Observations of one project, oldest first."""
        rows = self.conn.execute(
            "SELECT id, project_id, observed_at, content_hash FROM project_observations "
            "WHERE project_id = ? ORDER BY id",
            (project_id,),
        ).fetchall()
        return [Observation.from_row(row) for row in rows]

    def count(self, project_id: int | None = None) -> int:
        if project_id is None:
            return self.conn.execute("SELECT COUNT(*) FROM project_observations").fetchone()[0]
        return self.conn.execute(
            "SELECT COUNT(*) FROM project_observations WHERE project_id = ?", (project_id,)
        ).fetchone()[0]
