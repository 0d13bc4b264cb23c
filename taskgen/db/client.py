"""SQLite key/value slots used to persist the task list."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def get_connection(path: Path) -> sqlite3.Connection:
    """Get a database connection with WAL mode enabled."""
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


@contextmanager
def get_db(path: Path) -> Iterator[sqlite3.Connection]:
    """Context manager for database connections."""
    conn = get_connection(path)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(path: Path) -> None:
    """Initialize the database schema."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with get_db(path) as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS slots (
                name TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)


def read_slot(path: Path, name: str) -> str | None:
    """Get the value stored under a slot name."""
    with get_db(path) as conn:
        cursor = conn.execute("SELECT value FROM slots WHERE name = ?", (name,))
        row = cursor.fetchone()
        return row["value"] if row else None


def write_slot(path: Path, name: str, value: str) -> None:
    """Overwrite a slot."""
    with get_db(path) as conn:
        conn.execute(
            """
            INSERT INTO slots (name, value) VALUES (?, ?)
            ON CONFLICT(name) DO UPDATE SET value = excluded.value
            """,
            (name, value),
        )


def delete_slot(path: Path, name: str) -> bool:
    """Delete a slot by name."""
    with get_db(path) as conn:
        cursor = conn.execute("DELETE FROM slots WHERE name = ?", (name,))
        return cursor.rowcount > 0


class SqliteSlotStorage:
    """Slot storage backed by a SQLite file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        init_db(self.path)

    def read(self, name: str) -> str | None:
        return read_slot(self.path, name)

    def write(self, name: str, value: str) -> None:
        write_slot(self.path, name, value)

    def delete(self, name: str) -> None:
        delete_slot(self.path, name)
