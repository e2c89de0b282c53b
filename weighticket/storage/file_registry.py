"""SQLite registry of generated output files.

Used as an audit log of what was produced; generation never reads it.
"""

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

from weighticket.config.constants import FILE_KINDS

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS files (
        id          INTEGER PRIMARY KEY AUTOINCREMENT,
        name        TEXT NOT NULL,
        kind        TEXT NOT NULL,
        path        TEXT NOT NULL,
        created_at  TEXT NOT NULL
    )
"""


@dataclass(frozen=True)
class GeneratedFile:
    id: int
    name: str
    kind: str
    path: str
    created_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "GeneratedFile":
        return cls(
            id=row["id"],
            name=row["name"],
            kind=row["kind"],
            path=row["path"],
            created_at=row["created_at"],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind,
            "path": self.path,
            "created_at": self.created_at,
        }


class FileRegistry:
    """CRUD over the ``files`` table."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as con:
            con.execute(SCHEMA_SQL)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        con = sqlite3.connect(self.db_path)
        con.row_factory = sqlite3.Row
        try:
            with con:
                yield con
        finally:
            con.close()

    def save(self, name: str, kind: str, path: Path) -> int:
        """Register a file and return its id."""
        if kind not in FILE_KINDS:
            raise ValueError(f"Unknown file kind {kind!r}, expected one of {FILE_KINDS}")
        created_at = datetime.now().isoformat(timespec="microseconds")
        with self._connect() as con:
            cur = con.execute(
                "INSERT INTO files (name, kind, path, created_at) VALUES (?, ?, ?, ?)",
                (name, kind, str(path), created_at),
            )
            file_id = int(cur.lastrowid)
        logger.info(f"Registered {kind} file {name} (id={file_id})")
        return file_id

    def list_all(self) -> List[GeneratedFile]:
        """All files, newest first."""
        with self._connect() as con:
            rows = con.execute(
                "SELECT * FROM files ORDER BY created_at DESC, id DESC"
            ).fetchall()
        return [GeneratedFile.from_row(r) for r in rows]

    def list_by_kind(self, kind: str) -> List[GeneratedFile]:
        """Files of one kind, newest first."""
        with self._connect() as con:
            rows = con.execute(
                "SELECT * FROM files WHERE kind = ? ORDER BY created_at DESC, id DESC",
                (kind,),
            ).fetchall()
        return [GeneratedFile.from_row(r) for r in rows]

    def get_by_id(self, file_id: int) -> Optional[GeneratedFile]:
        with self._connect() as con:
            row = con.execute("SELECT * FROM files WHERE id = ?", (file_id,)).fetchone()
        return GeneratedFile.from_row(row) if row else None

    def delete_by_id(self, file_id: int, remove_file: bool = False) -> Optional[GeneratedFile]:
        """Delete a registry row; return it, or None if it did not exist.

        With ``remove_file`` the file on disk is deleted too (if present).
        """
        entry = self.get_by_id(file_id)
        if entry is None:
            return None

        with self._connect() as con:
            con.execute("DELETE FROM files WHERE id = ?", (file_id,))

        if remove_file:
            Path(entry.path).unlink(missing_ok=True)

        logger.info(f"Deleted file record {file_id} ({entry.name})")
        return entry
