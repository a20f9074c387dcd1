"""Configuration management for codepad."""

from .loader import SettingsLoader, load_settings
from .schema import CodepadSettings, MirrorConfig, StorageConfig

__all__ = ["CodepadSettings", "MirrorConfig", "SettingsLoader", "StorageConfig", "load_settings"]
