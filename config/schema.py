"""Configuration schema for codepad using Pydantic.

Groups:
- storage: local SQLite store location and storage strategy
- mirror: remote project mirror (Supabase) wiring

Unset storage fields stay None so the storage runtime can fall back to
CODEPAD_DB_PATH / CODEPAD_STORAGE_STRATEGY and then to its own defaults.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator


class StorageConfig(BaseModel):
    """Local workspace store configuration."""

    db_path: str | None = Field(None, description="SQLite file holding the workspace file table")
    strategy: str | None = Field(None, description="sqlite (local only) or supabase (local + remote mirror)")

    @field_validator("strategy")
    @classmethod
    def normalize_strategy(cls, v: str | None) -> str | None:
        if v is None:
            return None
        value = v.strip().lower()
        if value not in {"sqlite", "supabase"}:
            raise ValueError(f"Unsupported storage strategy: {v!r}. Supported: sqlite, supabase")
        return value

    @field_validator("db_path")
    @classmethod
    def expand_db_path(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return str(Path(v).expanduser())


class MirrorConfig(BaseModel):
    """Remote project mirror configuration."""

    project_id: str | None = Field(None, description="Remote project the workspace mirrors into")
    client_factory: str | None = Field(
        None, description="'<module>:<callable>' returning a supabase-py client"
    )


class CodepadSettings(BaseModel):
    """Main codepad configuration.

    Configuration priority (highest to lowest):
    1. Explicit overrides
    2. Project config (.codepad/runtime.json)
    3. User config (~/.codepad/runtime.json)
    4. Environment (CODEPAD_*), read by storage.runtime
    5. Built-in defaults
    """

    storage: StorageConfig = Field(default_factory=StorageConfig, description="Local store")
    mirror: MirrorConfig = Field(default_factory=MirrorConfig, description="Remote mirror")

    @model_validator(mode="after")
    def validate_mirror(self) -> CodepadSettings:
        if self.storage.strategy == "supabase" and not self.mirror.client_factory:
            raise ValueError(
                "storage.strategy=supabase requires mirror.client_factory "
                "(e.g. 'backend.web.core.supabase_factory:create_supabase_client')."
            )
        return self
