import sqlite3

import pytest

from app.core.errors import MetadataError
from app.services.metadata import MetadataStore


def _rows(db_path):
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()
    cursor.execute("SELECT id, filename, path, created_at FROM files ORDER BY id")
    rows = cursor.fetchall()
    conn.close()
    return rows


def test_record(metadata):
    first = metadata.record("a.txt", "/data/uploads/a.txt")
    second = metadata.record("b.txt", "/data/uploads/b.txt")

    assert first != second
    rows = _rows(metadata.db_path)
    assert [r[:3] for r in rows] == [
        (first, "a.txt", "/data/uploads/a.txt"),
        (second, "b.txt", "/data/uploads/b.txt"),
    ]
    assert all(r[3] for r in rows)


def test_open_creates_table(tmp_path):
    db = tmp_path / "nested" / "meta.db"
    with MetadataStore(db):
        pass

    conn = sqlite3.connect(db)
    cursor = conn.cursor()
    cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name='files'")
    assert cursor.fetchone() is not None
    conn.close()


def test_records_survive_reopen(tmp_path):
    db = tmp_path / "meta.db"
    with MetadataStore(db) as m:
        m.record("a.txt", "p")
    with MetadataStore(db) as m:
        m.record("b.txt", "q")

    assert [r[1] for r in _rows(db)] == ["a.txt", "b.txt"]


def test_lifecycle(tmp_path):
    m = MetadataStore(tmp_path / "meta.db")
    assert not m.is_open
    m.open()
    assert m.is_open
    m.close()
    assert not m.is_open
    m.close()  # idempotent


def test_closed_store_raises(tmp_path):
    m = MetadataStore(tmp_path / "meta.db")
    with pytest.raises(MetadataError):
        m.record("a.txt", "p")


def test_record_after_close_raises_metadata_error(tmp_path):
    m = MetadataStore(tmp_path / "meta.db").open()
    m.close()
    with pytest.raises(MetadataError):
        m.record("a.txt", "p")


def test_sqlite_failure_is_metadata_error(metadata):
    metadata._conn.execute("DROP TABLE files")
    with pytest.raises(MetadataError):
        metadata.record("a.txt", "p")
