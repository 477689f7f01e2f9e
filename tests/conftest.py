"""Global pytest configuration and shared fixtures."""

import pytest

from scrapeyourcity.snapshots.database import open_database
from scrapeyourcity.snapshots.recorder import SnapshotRecorder


@pytest.fixture
def conn():
    """In-memory snapshot database."""
    connection = open_database(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def recorder(conn):
    return SnapshotRecorder(conn)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data.db"
