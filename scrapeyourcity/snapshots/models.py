"""
Data models for the snapshot store.

A ProjectSnapshot from the extractor flows through the store as:
Content (deduplicated) -> Project (current state) -> Observation (history)
"""

import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Content:
    """A content-addressed snapshot body."""

    fingerprint: str
    html: str
    markdown: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Content":
        return cls(fingerprint=row["hash"], html=row["html"], markdown=row["markdown"])


@dataclass(frozen=True)
class Project:
    """
    Current state of a tracked project.

    Attributes:
        id: Stable row id, kept across upserts
        url: Canonical project URL
        title: Most recently observed title
        state: Most recently observed state
        content_hash: Fingerprint of the most recently observed content
    """

    id: int
    url: str
    title: str
    state: str
    content_hash: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Project":
        return cls(
            id=row["id"],
            url=row["url"],
            title=row["title"],
            state=row["state"],
            content_hash=row["content_hash"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            "state": self.state,
            "content_hash": self.content_hash,
        }


@dataclass(frozen=True)
class Observation:
    """At `observed_at`, project `project_id` exhibited content `content_hash`."""

    id: int
    project_id: int
    observed_at: datetime
    content_hash: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Observation":
        return cls(
            id=row["id"],
            project_id=row["project_id"],
            observed_at=datetime.fromisoformat(row["observed_at"]),
            content_hash=row["content_hash"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "observed_at": self.observed_at.isoformat(),
            "content_hash": self.content_hash,
        }
