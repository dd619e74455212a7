# app/services/metadata.py
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Optional, Union

from app.core.errors import MetadataError

logger = logging.getLogger(__name__)

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS files (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        filename VARCHAR(255) NOT NULL,
        path VARCHAR(500) NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""


class MetadataStore:
    """
    Write-once (filename, path) audit records for uploads, kept in sqlite.

    Nothing reads these back to serve files. Call ``open()`` before use and
    ``close()`` on shutdown; the application lifespan does both.
    """

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = str(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> "MetadataStore":
        if self._conn is not None:
            return self
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.execute(_SCHEMA)
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Could not open metadata db {self.db_path}: {e}")
            raise MetadataError(str(e)) from e
        self._conn = conn
        logger.info(f"Metadata store opened at {self.db_path}")
        return self

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
        logger.info("Metadata store closed")

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.close()

    def record(self, filename: str, path: str) -> int:
        try:
            with self._lock:
                # checked under the lock so a concurrent close() cannot slip in
                if self._conn is None:
                    raise MetadataError("Metadata store is not open")
                cursor = self._conn.execute(
                    "INSERT INTO files (filename, path) VALUES (?, ?)", (filename, path)
                )
                self._conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to record metadata for {filename}: {e}")
            raise MetadataError(str(e)) from e
        return cursor.lastrowid
