"""
Supabase client factory
"""

from typing import Optional

from . import config
from .errors import UpstreamError

_client = None


def get_supabase(url: Optional[str] = None, key: Optional[str] = None):
    """
    Get a Supabase client, created on first use

    Args:
        url: Project URL (defaults to SUPABASE_URL)
        key: Service key (defaults to SUPABASE_KEY)

    Returns:
        supabase.Client

    Raises:
        UpstreamError: credentials are not configured
    """
    global _client

    if _client is not None and url is None and key is None:
        return _client

    from supabase import create_client

    supabase_url = url or config.SUPABASE_URL
    supabase_key = key or config.SUPABASE_KEY

    if not supabase_url or not supabase_key:
        raise UpstreamError('Supabase credentials not configured')

    client = create_client(supabase_url, supabase_key)
    if url is None and key is None:
        _client = client
    return client
