"""Storage repository interfaces."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from storage.models import FileOperation, MirrorResult, ProjectExport, VFile


class FileStore(Protocol):
    """Persistence contract for the local path-keyed workspace."""

    async def initialize(self) -> None:
        """Open the backing store and ensure its schema exists."""

    async def close(self) -> None:
        """Release the backing store."""

    async def list(self) -> list[VFile]:
        """Return every stored file."""

    async def get(self, path: str) -> VFile | None:
        """Return the file at path, or None when missing."""

    async def put(self, path: str, content: str) -> None:
        """Insert or fully replace the file at path."""

    async def delete(self, path: str) -> None:
        """Remove the file at path; missing paths are ignored."""


class RemoteMirror(Protocol):
    """Server-side project persistence mirroring local batches."""

    async def apply(self, project_id: str, operations: Sequence[FileOperation]) -> list[MirrorResult]:
        """Persist a batch into the project record."""

    async def list_files(self, project_id: str, include_content: bool = False) -> list[dict[str, Any]]:
        """List project files ordered by path."""

    async def export(self, project_id: str) -> ProjectExport:
        """Return the project with all of its files."""
