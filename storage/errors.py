"""Storage-level error types shared by the local store, the mirror and the engine."""

from __future__ import annotations


class CodepadStorageError(Exception):
    """Base class for codepad storage errors."""


class StorageConfigError(CodepadStorageError):
    """Storage wiring is missing or invalid."""


class InvalidOperationError(CodepadStorageError):
    """A file operation record is malformed (not an unknown op kind)."""


class ProjectNotFoundError(CodepadStorageError):
    """The remote project record does not exist."""

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id
