"""
Supabase Client Configuration
Provides the client used to resolve bearer tokens to Supabase users.
"""

from functools import lru_cache

from supabase import Client, create_client

from app.config import settings


@lru_cache()
def get_supabase_client() -> Client:
    """
    Get the cached public Supabase client (anon key).

    Created on first use so importing the app does not require
    Supabase settings to be present.
    """
    return create_client(settings.supabase_url, settings.supabase_anon_key)
