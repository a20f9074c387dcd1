"""Tiered runtime configuration loader.

Configuration priority (highest to lowest):
1. Explicit overrides
2. Project config (.codepad/runtime.json in workspace)
3. User config (~/.codepad/runtime.json)
4. Environment (CODEPAD_*), then built-in defaults
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from config.schema import CodepadSettings

logger = logging.getLogger(__name__)


class SettingsLoader:
    """Loads CodepadSettings from user/project runtime.json files."""

    def __init__(self, workspace_root: str | Path | None = None, user_dir: str | Path | None = None):
        self.workspace_root = Path(workspace_root).resolve() if workspace_root else None
        self.user_dir = Path(user_dir) if user_dir else Path.home() / ".codepad"

    def load(self, overrides: dict[str, Any] | None = None) -> CodepadSettings:
        user_config = self._load_user_config()
        project_config = self._load_project_config()

        merged = self._deep_merge(user_config, project_config)
        if overrides:
            merged = self._deep_merge(merged, overrides)

        merged = self._expand_env_vars(merged)
        merged = self._remove_none_values(merged)
        return CodepadSettings(**merged)

    def _load_user_config(self) -> dict[str, Any]:
        return self._load_json(self.user_dir / "runtime.json")

    def _load_project_config(self) -> dict[str, Any]:
        if not self.workspace_root:
            return {}
        return self._load_json(self.workspace_root / ".codepad" / "runtime.json")

    @staticmethod
    def _load_json(path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: expected a JSON object", path)
            return {}
        return data

    def _deep_merge(self, *dicts: dict[str, Any]) -> dict[str, Any]:
        """Deep merge multiple dictionaries. Later dicts override earlier ones."""
        result: dict[str, Any] = {}
        for d in dicts:
            for key, value in d.items():
                if key not in result:
                    result[key] = value
                elif value is None:
                    continue
                elif isinstance(value, dict) and isinstance(result[key], dict):
                    result[key] = self._deep_merge(result[key], value)
                else:
                    result[key] = value
        return result

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively expand ${VAR} and ~ in string values."""
        if isinstance(obj, dict):
            return {k: self._expand_env_vars(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [self._expand_env_vars(v) for v in obj]
        if isinstance(obj, str):
            return os.path.expandvars(os.path.expanduser(obj))
        return obj

    def _remove_none_values(self, obj: Any) -> Any:
        """Recursively remove None values to allow Pydantic defaults."""
        if isinstance(obj, dict):
            return {k: self._remove_none_values(v) for k, v in obj.items() if v is not None}
        if isinstance(obj, list):
            return [self._remove_none_values(v) for v in obj if v is not None]
        return obj


def load_settings(workspace_root: str | Path | None = None, overrides: dict[str, Any] | None = None) -> CodepadSettings:
    return SettingsLoader(workspace_root=workspace_root).load(overrides)
