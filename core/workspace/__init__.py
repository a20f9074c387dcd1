from .session import TurnResult, WorkspaceSession

__all__ = ["TurnResult", "WorkspaceSession"]
