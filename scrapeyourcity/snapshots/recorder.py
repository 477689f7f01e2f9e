"""
Atomic recording of project snapshots.

One recording unit stores the content, upserts the project and appends an
observation inside a single transaction. Either all three writes become
visible or none do.
"""

import logging
import sqlite3
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from scrapeyourcity.scraper.extractor import html_to_markdown
from scrapeyourcity.scraper.models import ProjectSnapshot
from scrapeyourcity.snapshots.content_store import ContentStore
from scrapeyourcity.snapshots.database import open_database, transaction
from scrapeyourcity.snapshots.models import Observation
from scrapeyourcity.snapshots.observations import ObservationLog
from scrapeyourcity.snapshots.registry import ProjectRegistry

logger = logging.getLogger(__name__)


class SnapshotRecorder:
    """Snapshot store handle: the three tables plus the recording unit."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        derive: Callable[[str], str] = html_to_markdown,
    ):
        """
        Initialize recorder.

        Args:
            conn: Connection returned by open_database()
            derive: Function deriving Markdown from stored markup
        """
        self.conn = conn
        self.contents = ContentStore(conn, derive)
        self.projects = ProjectRegistry(conn)
        self.observations = ObservationLog(conn)

    @classmethod
    def open(cls, path: str | Path, **kwargs) -> "SnapshotRecorder":
        """Open the database at `path` and return a recorder bound to it."""
        return cls(open_database(path), **kwargs)

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "SnapshotRecorder":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def record(self, snapshot: ProjectSnapshot, observed_at: datetime | None = None) -> Observation:
        """
        Record one observation of a project.

        Content is stored before the project points at it, and the project
        exists before the observation references it.

        Args:
            snapshot: Extracted project page
            observed_at: Observation time (defaults to now, UTC)

        Returns:
            The appended Observation

        Raises:
            IntegrityViolation: A store invariant would be broken; nothing was written
            StorageError: The database failed; nothing was written
        """
        observed_at = observed_at or datetime.now(UTC)

        with transaction(self.conn):
            content_hash = self.contents.put(snapshot.html)
            project_id = self.projects.upsert(
                snapshot.url, snapshot.title, snapshot.state, content_hash
            )
            observation_id = self.observations.append(project_id, content_hash, observed_at)

        logger.info(f"Recorded observation {observation_id}: {snapshot.url} -> {content_hash}")
        return Observation(
            id=observation_id,
            project_id=project_id,
            observed_at=observed_at,
            content_hash=content_hash,
        )
