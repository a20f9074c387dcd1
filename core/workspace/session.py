"""Workspace session: one local store, an optional remote mirror, one level of undo."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from core.changeset.engine import ChangeSetEngine
from storage.contracts import FileStore, RemoteMirror
from storage.models import ChangeSet, FileOperation, MirrorResult, VFile

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    change_set: ChangeSet | None
    mirror_results: list[MirrorResult] = field(default_factory=list)
    mirror_error: str | None = None

    @property
    def mirrored(self) -> bool:
        return self.mirror_error is None and bool(self.mirror_results)


class WorkspaceSession:
    """Applies assistant turns to the workspace and keeps the last one for revert.

    The local store and the mirror are applied independently; a mirror
    failure is reported on the result and leaves local state applied.
    """

    def __init__(
        self,
        store: FileStore,
        mirror: RemoteMirror | None = None,
        project_id: str | None = None,
    ) -> None:
        self.store = store
        self.mirror = mirror
        self.project_id = project_id
        self.engine = ChangeSetEngine(store)
        self.last_change_set: ChangeSet | None = None

    @property
    def can_revert(self) -> bool:
        return self.last_change_set is not None

    async def list_files(self) -> list[VFile]:
        return await self.store.list()

    async def apply_turn(self, operations: Sequence[FileOperation]) -> TurnResult:
        if not operations:
            return TurnResult(change_set=None)

        change_set = await self.engine.apply(operations)
        self.last_change_set = change_set
        result = TurnResult(change_set=change_set)

        if self.mirror is not None and self.project_id:
            try:
                result.mirror_results = await self.mirror.apply(self.project_id, change_set.operations)
            except Exception as exc:
                logger.warning("Mirroring %d operations to project %s failed: %s", len(operations), self.project_id, exc)
                result.mirror_error = str(exc)
        return result

    async def revert_last(self) -> bool:
        """Revert the last applied turn locally. Returns False when there is none."""
        if self.last_change_set is None:
            return False
        await self.engine.revert(self.last_change_set)
        self.last_change_set = None
        return True
