"""FastAPI dependencies for the workspace and mirror routers."""

from fastapi import HTTPException, Request

from core.workspace.session import WorkspaceSession
from storage.contracts import RemoteMirror


def get_workspace_session(request: Request) -> WorkspaceSession:
    session = getattr(request.app.state, "workspace_session", None)
    if session is None:
        raise HTTPException(503, "Workspace store is not initialized")
    return session


def get_remote_mirror(request: Request) -> RemoteMirror:
    mirror = getattr(request.app.state, "remote_mirror", None)
    if mirror is None:
        raise HTTPException(503, "Remote mirror is not configured (storage strategy is sqlite)")
    return mirror
