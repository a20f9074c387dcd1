"""Local workspace endpoints: list files, apply an assistant turn, revert it."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException

from backend.web.core.dependencies import get_workspace_session
from core.changeset.operations import parse_assistant_result
from core.workspace.session import WorkspaceSession
from storage.errors import InvalidOperationError

router = APIRouter(prefix="/api/workspace", tags=["workspace"])


@router.get("/files")
async def list_workspace_files(
    session: Annotated[WorkspaceSession, Depends(get_workspace_session)],
) -> dict[str, Any]:
    files = await session.list_files()
    return {
        "files": [{"path": f.path, "content": f.content, "updatedAt": f.updated_at} for f in files],
        "canRevert": session.can_revert,
    }


@router.post("/apply")
async def apply_assistant_turn(
    body: Annotated[dict[str, Any], Body()],
    session: Annotated[WorkspaceSession, Depends(get_workspace_session)],
) -> dict[str, Any]:
    """Apply the ops of an assistant result ({"message", "ops"}) to the workspace."""
    try:
        message, operations = parse_assistant_result(body)
    except InvalidOperationError as e:
        raise HTTPException(400, str(e)) from e

    result = await session.apply_turn(operations)
    payload: dict[str, Any] = {
        "message": message,
        "applied": len(result.change_set.operations) if result.change_set else 0,
        "canRevert": session.can_revert,
    }
    if result.mirror_results:
        payload["mirror"] = [r.to_dict() for r in result.mirror_results]
    if result.mirror_error:
        payload["mirrorError"] = result.mirror_error
    return payload


@router.post("/revert")
async def revert_last_turn(
    session: Annotated[WorkspaceSession, Depends(get_workspace_session)],
) -> dict[str, Any]:
    """Revert the last applied assistant turn."""
    if not await session.revert_last():
        raise HTTPException(409, "Nothing to revert")
    return {"reverted": True, "canRevert": session.can_revert}
