"""Unit tests for the content store, project registry and observation log."""

import sqlite3
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from scrapeyourcity.exceptions import IntegrityViolation, StorageError
from scrapeyourcity.snapshots.content_store import ContentStore
from scrapeyourcity.snapshots.database import open_database, transaction
from scrapeyourcity.snapshots.fingerprint import FINGERPRINT_VERSION, compute_fingerprint
from scrapeyourcity.snapshots.observations import ObservationLog
from scrapeyourcity.snapshots.registry import ProjectRegistry

T1 = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
T2 = datetime(2025, 3, 2, 12, 0, tzinfo=UTC)


def upper(html: str) -> str:
    return html.upper()


class TestOpenDatabase:
    """Tests for open_database function."""

    def test_creates_tables(self, conn):
        tables = {
            row["name"]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
        assert {"contents", "projects", "project_observations", "store_metadata"} <= tables

    def test_enables_foreign_keys(self, conn):
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_records_fingerprint_version(self, conn):
        row = conn.execute(
            "SELECT value FROM store_metadata WHERE key = 'fingerprint_version'"
        ).fetchone()
        assert row["value"] == FINGERPRINT_VERSION

    def test_reopen_keeps_data(self, db_path):
        conn = open_database(db_path)
        ContentStore(conn, upper).put("<p>kept</p>")
        conn.close()

        conn = open_database(db_path)
        assert ContentStore(conn, upper).count() == 1
        conn.close()

    def test_rejects_other_fingerprint_version(self, db_path):
        conn = open_database(db_path)
        conn.execute(
            "UPDATE store_metadata SET value = 'md5-v0' WHERE key = 'fingerprint_version'"
        )
        conn.close()

        with pytest.raises(StorageError, match="md5-v0"):
            open_database(db_path)

    def test_unopenable_path(self, tmp_path):
        with pytest.raises(StorageError):
            open_database(tmp_path / "missing" / "data.db")


class TestTransaction:
    """Tests for the transaction context manager."""

    def test_commits_on_success(self, conn):
        with transaction(conn):
            conn.execute("INSERT INTO contents (hash, html, markdown) VALUES ('h', 'a', 'a')")
        assert not conn.in_transaction
        assert conn.execute("SELECT COUNT(*) FROM contents").fetchone()[0] == 1

    def test_rolls_back_on_error(self, conn):
        with pytest.raises(RuntimeError):
            with transaction(conn):
                conn.execute(
                    "INSERT INTO contents (hash, html, markdown) VALUES ('h', 'a', 'a')"
                )
                raise RuntimeError("boom")
        assert not conn.in_transaction
        assert conn.execute("SELECT COUNT(*) FROM contents").fetchone()[0] == 0

    def test_integrity_error_becomes_integrity_violation(self, conn):
        with pytest.raises(IntegrityViolation):
            with transaction(conn):
                conn.execute(
                    "INSERT INTO project_observations (project_id, observed_at, content_hash) "
                    "VALUES (99, '2025-01-01', 'missing')"
                )
        assert not conn.in_transaction

    def test_sqlite_error_becomes_storage_error(self, conn):
        with pytest.raises(StorageError):
            with transaction(conn):
                conn.execute("SELECT * FROM no_such_table")
        assert not conn.in_transaction


class TestContentStore:
    """Tests for ContentStore class."""

    def test_put_returns_fingerprint(self, conn):
        store = ContentStore(conn, upper)
        assert store.put("<p>a</p>") == compute_fingerprint("<p>a</p>")

    def test_put_stores_derived_form(self, conn):
        store = ContentStore(conn, upper)
        fingerprint = store.put("<p>a</p>")

        content = store.get(fingerprint)
        assert content.html == "<p>a</p>"
        assert content.markdown == "<P>A</P>"

    def test_put_is_idempotent(self, conn):
        derive = MagicMock(return_value="a")
        store = ContentStore(conn, derive)

        fingerprints = {store.put("<p>a</p>") for _ in range(5)}

        assert len(fingerprints) == 1
        assert store.count() == 1
        derive.assert_called_once_with("<p>a</p>")

    def test_distinct_content_stored_separately(self, conn):
        store = ContentStore(conn, upper)
        store.put("<p>a</p>")
        store.put("<p>b</p>")
        assert store.count() == 2

    def test_collision_with_different_bytes_is_fatal(self, conn):
        store = ContentStore(conn, upper)
        fingerprint = compute_fingerprint("<p>a</p>")
        conn.execute(
            "INSERT INTO contents (hash, html, markdown) VALUES (?, ?, ?)",
            (fingerprint, "<p>tampered</p>", ""),
        )

        with pytest.raises(IntegrityViolation, match=fingerprint):
            store.put("<p>a</p>")

        # Stored row is never overwritten
        assert store.get(fingerprint).html == "<p>tampered</p>"

    def test_get_unknown_fingerprint(self, conn):
        assert ContentStore(conn, upper).get("0" * 56) is None


class TestProjectRegistry:
    """Tests for ProjectRegistry class."""

    @pytest.fixture
    def fingerprints(self, conn):
        store = ContentStore(conn, upper)
        return store.put("<p>a</p>"), store.put("<p>b</p>")

    def test_upsert_creates_project(self, conn, fingerprints):
        registry = ProjectRegistry(conn)
        project_id = registry.upsert("https://example.com/p1", "P1", "published", fingerprints[0])

        project = registry.get("https://example.com/p1")
        assert project.id == project_id
        assert project.title == "P1"
        assert project.state == "published"
        assert project.content_hash == fingerprints[0]

    def test_upsert_is_idempotent(self, conn, fingerprints):
        registry = ProjectRegistry(conn)
        ids = {
            registry.upsert("https://example.com/p1", "P1", "published", fingerprints[0])
            for _ in range(3)
        }
        assert len(ids) == 1
        assert registry.count() == 1

    def test_last_write_wins(self, conn, fingerprints):
        registry = ProjectRegistry(conn)
        first_id = registry.upsert("https://example.com/p1", "P1", "published", fingerprints[0])
        second_id = registry.upsert("https://example.com/p1", "P1 v2", "archived", fingerprints[1])

        project = registry.get("https://example.com/p1")
        assert second_id == first_id
        assert project.title == "P1 v2"
        assert project.state == "archived"
        assert project.content_hash == fingerprints[1]

    def test_distinct_urls(self, conn, fingerprints):
        registry = ProjectRegistry(conn)
        a = registry.upsert("https://example.com/a", "A", "", fingerprints[0])
        b = registry.upsert("https://example.com/b", "B", "", fingerprints[0])

        assert a != b
        assert [p.url for p in registry.list_all()] == [
            "https://example.com/a",
            "https://example.com/b",
        ]

    def test_unknown_content_rejected(self, conn):
        with pytest.raises(sqlite3.IntegrityError):
            ProjectRegistry(conn).upsert("https://example.com/p1", "P1", "", "missing")

    def test_get_unknown_url(self, conn):
        assert ProjectRegistry(conn).get("https://example.com/nope") is None


class TestObservationLog:
    """Tests for ObservationLog class."""

    @pytest.fixture
    def project(self, conn):
        fingerprint = ContentStore(conn, upper).put("<p>a</p>")
        project_id = ProjectRegistry(conn).upsert("https://example.com/p1", "P1", "", fingerprint)
        return project_id, fingerprint

    def test_append_records_row(self, conn, project):
        project_id, fingerprint = project
        log = ObservationLog(conn)
        log.append(project_id, fingerprint, T1)

        [observation] = log.history(project_id)
        assert observation.project_id == project_id
        assert observation.content_hash == fingerprint
        assert observation.observed_at == T1

    def test_repeated_pair_is_not_deduplicated(self, conn, project):
        project_id, fingerprint = project
        log = ObservationLog(conn)
        log.append(project_id, fingerprint, T1)
        log.append(project_id, fingerprint, T2)

        assert log.count(project_id) == 2
        assert [o.observed_at for o in log.history(project_id)] == [T1, T2]

    def test_unknown_project_rejected(self, conn, project):
        _, fingerprint = project
        with pytest.raises(sqlite3.IntegrityError):
            ObservationLog(conn).append(999, fingerprint, T1)

    def test_unknown_content_rejected(self, conn, project):
        project_id, _ = project
        with pytest.raises(sqlite3.IntegrityError):
            ObservationLog(conn).append(project_id, "missing", T1)

    def test_count_all(self, conn, project):
        project_id, fingerprint = project
        log = ObservationLog(conn)
        assert log.count() == 0
        log.append(project_id, fingerprint, T1)
        assert log.count() == 1
