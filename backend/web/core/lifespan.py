"""Application lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config.loader import load_settings
from core.workspace.session import WorkspaceSession
from storage.runtime import build_storage_container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the workspace store once at startup and close it at shutdown."""
    container = getattr(app.state, "storage_container", None)
    project_id = getattr(app.state, "project_id", None)
    if container is None:
        settings = load_settings(workspace_root=getattr(app.state, "workspace_root", None))
        container = build_storage_container(
            db_path=settings.storage.db_path,
            strategy=settings.storage.strategy,
            supabase_client_factory=settings.mirror.client_factory,
        )
        project_id = project_id or settings.mirror.project_id

    # mirror wiring errors must surface before the connection is opened
    mirror = container.remote_mirror()
    store = container.file_store()
    await store.initialize()
    logger.info("Workspace store ready at %s (strategy=%s)", container.db_path, container.strategy)

    try:
        app.state.storage_container = container
        app.state.file_store = store
        app.state.remote_mirror = mirror
        app.state.workspace_session = WorkspaceSession(store, mirror=mirror, project_id=project_id)
        yield
    finally:
        await store.close()
