"""
Content-addressed snapshot store with change tracking.

Architecture:
- ContentStore: fingerprint -> HTML + Markdown, one row per distinct body
- ProjectRegistry: project URL -> current title, state and content fingerprint
- ObservationLog: append-only (project, time, fingerprint) history
- SnapshotRecorder: runs all three writes as one transaction
"""

from scrapeyourcity.snapshots.content_store import ContentStore
from scrapeyourcity.snapshots.database import open_database, transaction
from scrapeyourcity.snapshots.fingerprint import FINGERPRINT_VERSION, compute_fingerprint
from scrapeyourcity.snapshots.models import Content, Observation, Project
from scrapeyourcity.snapshots.observations import ObservationLog
from scrapeyourcity.snapshots.recorder import SnapshotRecorder
from scrapeyourcity.snapshots.registry import ProjectRegistry

__all__ = [
    "FINGERPRINT_VERSION",
    "Content",
    "ContentStore",
    "Observation",
    "ObservationLog",
    "Project",
    "ProjectRegistry",
    "SnapshotRecorder",
    "compute_fingerprint",
    "open_database",
    "transaction",
]
