"""Supabase-backed remote mirror for project files."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from storage.errors import ProjectNotFoundError
from storage.models import DeleteFile, FileOperation, MirrorResult, ProjectExport, WriteFile
from storage.providers.supabase import _query as q

logger = logging.getLogger(__name__)

_REPO = "project mirror"
_PROJECTS = "projects"
_FILES = "project_files"
_CHANGESETS = "project_changesets"


class SupabaseProjectMirror:
    """Mirrors local operation batches into the ``project_files`` table.

    The supabase-py client is synchronous; every public coroutine runs the
    blocking work in a worker thread. Local and remote application are
    independent: nothing here rolls back the local store.
    """

    def __init__(self, client: Any) -> None:
        self._client = q.validate_client(client, _REPO)

    async def apply(self, project_id: str, operations: Sequence[FileOperation]) -> list[MirrorResult]:
        return await asyncio.to_thread(self.apply_sync, project_id, list(operations))

    async def list_files(self, project_id: str, include_content: bool = False) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self.list_files_sync, project_id, include_content)

    async def export(self, project_id: str) -> ProjectExport:
        return await asyncio.to_thread(self.export_sync, project_id)

    def apply_sync(self, project_id: str, operations: Sequence[FileOperation]) -> list[MirrorResult]:
        self._require_project(project_id, "id", "apply")

        try:
            self._client.table(_CHANGESETS).insert(
                {
                    "project_id": project_id,
                    "ops": [op.to_record() for op in operations],
                    "status": "applied",
                }
            ).execute()
        except Exception as exc:
            # changeset rows are history only
            logger.warning("Failed to store changeset for project %s: %s", project_id, exc)

        results: list[MirrorResult] = []
        for op in operations:
            if isinstance(op, WriteFile):
                results.append(self._mirror_write(project_id, op))
            elif isinstance(op, DeleteFile):
                results.append(self._mirror_delete(project_id, op))

        try:
            self._client.table(_PROJECTS).update(
                {"updated_at": datetime.now(timezone.utc).isoformat()}
            ).eq("id", project_id).execute()
        except Exception as exc:
            # files are already mirrored; the timestamp is informational
            logger.warning("Failed to touch updated_at for project %s: %s", project_id, exc)
        return results

    def list_files_sync(self, project_id: str, include_content: bool = False) -> list[dict[str, Any]]:
        columns = "id, path, content, updated_at" if include_content else "id, path, updated_at"
        query = q.order(
            self._client.table(_FILES).select(columns).eq("project_id", project_id),
            "path", desc=False, repo=_REPO, operation="list_files",
        )
        return q.rows(query.execute(), _REPO, "list_files")

    def export_sync(self, project_id: str) -> ProjectExport:
        project = self._require_project(project_id, "id, name", "export")
        query = q.order(
            self._client.table(_FILES).select("path, content").eq("project_id", project_id),
            "path", desc=False, repo=_REPO, operation="export",
        )
        files = [
            {"path": str(row.get("path")), "content": str(row.get("content") or "")}
            for row in q.rows(query.execute(), _REPO, "export")
        ]
        return ProjectExport(project_id=str(project["id"]), name=str(project.get("name") or ""), files=files)

    def _require_project(self, project_id: str, columns: str, operation: str) -> dict[str, Any]:
        query = q.limit(
            self._client.table(_PROJECTS).select(columns).eq("id", project_id),
            1, _REPO, operation,
        )
        try:
            found = q.rows(query.execute(), _REPO, operation)
        except Exception as exc:
            logger.warning("Project lookup failed for %s during %s: %s", project_id, operation, exc)
            raise ProjectNotFoundError(project_id) from exc
        if not found:
            raise ProjectNotFoundError(project_id)
        return found[0]

    def _mirror_write(self, project_id: str, op: WriteFile) -> MirrorResult:
        try:
            q.upsert(
                self._client.table(_FILES),
                {"project_id": project_id, "path": op.path, "content": op.content or ""},
                "project_id,path", _REPO, "apply write",
            ).execute()
        except Exception as exc:
            logger.error("Error writing file %s in project %s: %s", op.path, project_id, exc)
            return MirrorResult(path=op.path, success=False, error=str(exc))
        return MirrorResult(path=op.path, success=True)

    def _mirror_delete(self, project_id: str, op: DeleteFile) -> MirrorResult:
        try:
            self._client.table(_FILES).delete().eq("project_id", project_id).eq("path", op.path).execute()
        except Exception as exc:
            logger.error("Error deleting file %s in project %s: %s", op.path, project_id, exc)
            return MirrorResult(path=op.path, success=False, error=str(exc))
        return MirrorResult(path=op.path, success=True)
