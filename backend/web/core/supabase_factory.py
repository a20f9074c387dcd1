"""Runtime Supabase client factory for storage wiring."""

from __future__ import annotations

import os

from supabase import create_client


def create_supabase_client():
    """Build a supabase-py client from runtime environment."""
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    if not url:
        raise RuntimeError("SUPABASE_URL is required for the remote project mirror.")
    if not key:
        raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY is required for the remote project mirror.")
    return create_client(url, key)
