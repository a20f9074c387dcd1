"""SQLite storage provider implementations."""

from .file_store import SQLiteFileStore

__all__ = ["SQLiteFileStore"]
