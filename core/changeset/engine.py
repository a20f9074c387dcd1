"""Change-set engine: apply an operation batch with a pre-batch snapshot, revert it.

Apply is best-effort sequential, not atomic: if a store call fails mid-batch
the error propagates and operations applied before it stay applied.

Revert restores every touched path to its state before the *whole* batch,
never to an intermediate state inside it. It does not detect paths changed
by someone else after apply; those changes are overwritten.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from storage.contracts import FileStore
from storage.models import Absent, ChangeSet, DeleteFile, FileOperation, Present, Snapshot, WriteFile

logger = logging.getLogger(__name__)


async def snapshot_paths(store: FileStore, operations: Sequence[FileOperation]) -> dict[str, Snapshot]:
    before: dict[str, Snapshot] = {}
    for op in operations:
        # first lookup per path wins
        if op.path in before:
            continue
        existing = await store.get(op.path)
        before[op.path] = Present(existing.content) if existing is not None else Absent
    return before


async def apply_operations(store: FileStore, operations: Sequence[FileOperation]) -> ChangeSet:
    ops = tuple(operations)
    before = await snapshot_paths(store, ops)

    for op in ops:
        if isinstance(op, WriteFile):
            if op.content is not None:
                await store.put(op.path, op.content)
        elif isinstance(op, DeleteFile):
            await store.delete(op.path)

    return ChangeSet(operations=ops, before=before)


async def revert_change_set(store: FileStore, change_set: ChangeSet) -> None:
    for op in reversed(change_set.operations):
        snapshot = change_set.before.get(op.path)
        if snapshot is Absent:
            await store.delete(op.path)
        elif isinstance(snapshot, Present):
            await store.put(op.path, snapshot.content)


class ChangeSetEngine:
    """Binds the apply/revert functions to one workspace store."""

    def __init__(self, store: FileStore) -> None:
        self.store = store

    async def apply(self, operations: Sequence[FileOperation]) -> ChangeSet:
        change_set = await apply_operations(self.store, operations)
        logger.debug("Applied %d operations over %d paths", len(change_set.operations), len(change_set.before))
        return change_set

    async def revert(self, change_set: ChangeSet) -> None:
        await revert_change_set(self.store, change_set)
        logger.debug("Reverted change set over %d paths", len(change_set.before))
