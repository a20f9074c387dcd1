"""Storage container: explicit construction of the workspace store and mirror."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from .contracts import FileStore, RemoteMirror

StorageStrategy = Literal["sqlite", "supabase"]


def default_db_path() -> Path:
    return Path.home() / ".codepad" / "workspace.db"


class StorageContainer:
    """Composition root for storage.

    The local file store is always SQLite. ``strategy="supabase"`` adds the
    remote project mirror on top; it never replaces the local store.
    """

    _SUPPORTED_STRATEGIES = {"sqlite", "supabase"}

    def __init__(
        self,
        db_path: str | Path | None = None,
        strategy: StorageStrategy = "sqlite",
        supabase_client: Any | None = None,
    ) -> None:
        if strategy not in self._SUPPORTED_STRATEGIES:
            raise ValueError(
                f"Unsupported storage strategy: {strategy}. "
                f"Supported strategies: {', '.join(sorted(self._SUPPORTED_STRATEGIES))}"
            )
        self._db_path = Path(db_path) if db_path else default_db_path()
        self._strategy: StorageStrategy = strategy
        self._supabase_client = supabase_client
        self._file_store: FileStore | None = None

    @property
    def strategy(self) -> StorageStrategy:
        return self._strategy

    @property
    def db_path(self) -> Path:
        return self._db_path

    def file_store(self) -> FileStore:
        """Return the single store instance for this workspace (not yet initialized)."""
        if self._file_store is None:
            from storage.providers.sqlite.file_store import SQLiteFileStore

            self._file_store = SQLiteFileStore(db_path=self._db_path)
        return self._file_store

    def remote_mirror(self) -> RemoteMirror | None:
        if self._strategy != "supabase":
            return None
        if self._supabase_client is None:
            raise RuntimeError(
                "Supabase strategy requires supabase_client. "
                "Pass supabase_client=... into StorageContainer."
            )
        from storage.providers.supabase.project_mirror import SupabaseProjectMirror

        return SupabaseProjectMirror(client=self._supabase_client)
