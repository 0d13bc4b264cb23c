"""Database package."""

from .client import (
    SqliteSlotStorage,
    delete_slot,
    init_db,
    read_slot,
    write_slot,
)
from .memory import MemorySlotStorage

__all__ = [
    "init_db",
    "read_slot",
    "write_slot",
    "delete_slot",
    "SqliteSlotStorage",
    "MemorySlotStorage",
]
