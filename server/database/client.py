"""Supabase client holding the users, pois, tours and conversations tables."""
from typing import Optional
from urllib.parse import urlparse
from supabase import create_client, Client
from config.settings import settings
import logging

logger = logging.getLogger(__name__)

_supabase_client: Optional[Client] = None


def init_supabase(url: Optional[str] = None, key: Optional[str] = None) -> Client:
    """Create the shared client once; later calls return the existing one."""
    global _supabase_client

    if _supabase_client is None:
        url = url or settings.SUPABASE_URL
        logger.info(f"Connecting to Supabase project at {urlparse(url).netloc}")
        _supabase_client = create_client(url, key or settings.SUPABASE_KEY)

    return _supabase_client


def get_supabase() -> Client:
    """Shared client, created lazily on first use."""
    return _supabase_client or init_supabase()


def reset_supabase() -> None:
    """Drop the shared client so the next call reconnects."""
    global _supabase_client
    _supabase_client = None
