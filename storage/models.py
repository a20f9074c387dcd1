"""Provider-neutral domain types for the workspace store, change sets and mirror."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class VFile:
    path: str
    content: str
    updated_at: int  # epoch milliseconds


@dataclass(frozen=True)
class WriteFile:
    """Upsert ``content`` at ``path``.

    ``content=None`` means the producer sent no payload; applying it is a
    no-op, which is different from writing an empty string.
    """

    path: str
    content: str | None = None

    @property
    def op(self) -> str:
        return "writeFile"

    def to_record(self) -> dict[str, str]:
        record = {"op": self.op, "path": self.path}
        if self.content is not None:
            record["content"] = self.content
        return record


@dataclass(frozen=True)
class DeleteFile:
    path: str

    @property
    def op(self) -> str:
        return "deleteFile"

    def to_record(self) -> dict[str, str]:
        return {"op": self.op, "path": self.path}


FileOperation = Union[WriteFile, DeleteFile]


@dataclass(frozen=True)
class Present:
    content: str


class _AbsentType:
    """Marker for a path that did not exist before the batch."""

    _instance: _AbsentType | None = None

    def __new__(cls) -> _AbsentType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Absent"


Absent = _AbsentType()

Snapshot = Union[Present, _AbsentType]


@dataclass(frozen=True)
class ChangeSet:
    operations: tuple[FileOperation, ...]
    before: Mapping[str, Snapshot] = field(default_factory=dict)

    @property
    def paths(self) -> list[str]:
        return list(self.before.keys())


@dataclass
class MirrorResult:
    path: str
    success: bool
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"path": self.path, "success": self.success}
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class ProjectExport:
    project_id: str
    name: str
    files: list[dict[str, str]]

    def to_dict(self) -> dict[str, object]:
        return {
            "project": {"id": self.project_id, "name": self.name},
            "files": self.files,
        }
