"""codepad web backend - FastAPI application."""

import os
from pathlib import Path
from typing import Any

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.web.core.lifespan import lifespan
from backend.web.routers import projects, workspace


def create_app(
    storage_container: Any | None = None,
    project_id: str | None = None,
    workspace_root: str | Path | None = None,
) -> FastAPI:
    """Build the app. A pre-built storage container skips settings loading."""
    app = FastAPI(title="codepad backend", lifespan=lifespan)
    app.state.storage_container = storage_container
    app.state.project_id = project_id
    app.state.workspace_root = workspace_root

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(workspace.router)
    app.include_router(projects.router)
    return app


app = create_app(workspace_root=Path.cwd())


if __name__ == "__main__":
    port = int(os.environ.get("CODEPAD_BACKEND_PORT") or os.environ.get("PORT") or 8001)
    uvicorn.run("backend.web.main:app", host="0.0.0.0", port=port, reload=True)
