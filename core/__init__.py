"""Workspace core: change-set engine and workspace session."""

from core.changeset import ChangeSetEngine
from core.workspace import WorkspaceSession

__all__ = ["ChangeSetEngine", "WorkspaceSession"]
