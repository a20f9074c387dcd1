"""Supabase storage provider implementations."""

from .project_mirror import SupabaseProjectMirror

__all__ = ["SupabaseProjectMirror"]
