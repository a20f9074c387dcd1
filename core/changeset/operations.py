"""Operation records produced by the assistant → typed file operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from storage.errors import InvalidOperationError
from storage.models import DeleteFile, FileOperation, WriteFile

logger = logging.getLogger(__name__)

WRITE_FILE = "writeFile"
DELETE_FILE = "deleteFile"


def parse_operation(record: Mapping[str, Any]) -> FileOperation | None:
    """Parse one record; returns None for op kinds this version does not know."""
    if not isinstance(record, Mapping):
        raise InvalidOperationError(f"Operation must be an object, got {type(record).__name__}.")

    kind = record.get("op")
    if kind not in (WRITE_FILE, DELETE_FILE):
        logger.debug("Ignoring unknown file operation %r", kind)
        return None

    path = record.get("path")
    if not isinstance(path, str) or not path:
        raise InvalidOperationError(f"{kind} operation requires a non-empty string path, got {path!r}.")

    if kind == DELETE_FILE:
        return DeleteFile(path=path)

    content = record.get("content")
    if content is not None and not isinstance(content, str):
        raise InvalidOperationError(
            f"writeFile content for {path} must be a string, got {type(content).__name__}."
        )
    return WriteFile(path=path, content=content)


def parse_operations(records: Any) -> list[FileOperation]:
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        raise InvalidOperationError("Operations must be an array")
    operations: list[FileOperation] = []
    for record in records:
        op = parse_operation(record)
        if op is not None:
            operations.append(op)
    return operations


def parse_assistant_result(payload: Mapping[str, Any]) -> tuple[str, list[FileOperation]]:
    """Split the assistant's final result object into (message, operations).

    The result looks like ``{"message": "...", "ops": [...]}``; a missing or
    null ``ops`` is an empty batch.
    """
    if not isinstance(payload, Mapping):
        raise InvalidOperationError(f"Assistant result must be an object, got {type(payload).__name__}.")
    message = payload.get("message") or ""
    if not isinstance(message, str):
        message = str(message)
    raw_ops = payload.get("ops")
    if raw_ops is None:
        return message, []
    return message, parse_operations(raw_ops)
