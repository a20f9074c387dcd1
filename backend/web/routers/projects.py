"""Remote project mirror endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from backend.web.core.dependencies import get_remote_mirror
from core.changeset.operations import parse_operations
from storage.contracts import RemoteMirror
from storage.errors import InvalidOperationError, ProjectNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects/{project_id}", tags=["projects"])


@router.post("/apply")
async def apply_project_operations(
    project_id: str,
    body: Annotated[dict[str, Any], Body()],
    mirror: Annotated[RemoteMirror, Depends(get_remote_mirror)],
) -> dict[str, Any]:
    """Apply a file operation batch to the project's stored files."""
    raw_ops = body.get("operations")
    if not isinstance(raw_ops, list):
        raise HTTPException(400, "Operations must be an array")
    try:
        operations = parse_operations(raw_ops)
    except InvalidOperationError as e:
        raise HTTPException(400, str(e)) from e

    try:
        results = await mirror.apply(project_id, operations)
    except ProjectNotFoundError as e:
        raise HTTPException(404, "Project not found") from e
    except Exception as e:
        logger.exception("Unexpected error applying operations to project %s", project_id)
        raise HTTPException(500, "Internal server error") from e
    return {"results": [r.to_dict() for r in results]}


@router.get("/files")
async def list_project_files(
    project_id: str,
    mirror: Annotated[RemoteMirror, Depends(get_remote_mirror)],
    include_content: bool = Query(default=False, alias="includeContent"),
) -> dict[str, Any]:
    """List project files ordered by path."""
    try:
        files = await mirror.list_files(project_id, include_content=include_content)
    except Exception as e:
        logger.exception("Error fetching files for project %s", project_id)
        raise HTTPException(500, str(e)) from e
    return {"files": files}


@router.get("/export")
async def export_project(
    project_id: str,
    mirror: Annotated[RemoteMirror, Depends(get_remote_mirror)],
) -> dict[str, Any]:
    """Export the project and all of its files as one bundle."""
    try:
        bundle = await mirror.export(project_id)
    except ProjectNotFoundError as e:
        raise HTTPException(404, "Project not found") from e
    except Exception as e:
        logger.exception("Error exporting project %s", project_id)
        raise HTTPException(500, str(e)) from e
    return bundle.to_dict()
