from .container import StorageContainer
from .contracts import FileStore, RemoteMirror
from .errors import (
    CodepadStorageError,
    InvalidOperationError,
    ProjectNotFoundError,
    StorageConfigError,
)

__all__ = [
    "StorageContainer",
    "FileStore",
    "RemoteMirror",
    "CodepadStorageError",
    "InvalidOperationError",
    "ProjectNotFoundError",
    "StorageConfigError",
]
