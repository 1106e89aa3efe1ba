# core/supabase_client.py
# Supabase client used as the analytics sink

import logging

from django.conf import settings

logger = logging.getLogger("dbplay")

_supabase_client = None


def get_supabase_client():
    """
    Get the Supabase client instance (singleton pattern).
    Uses service_role key for admin access. Returns None when analytics
    is not configured.
    """
    global _supabase_client

    if _supabase_client is None:
        url = settings.SUPABASE_URL
        key = settings.SUPABASE_SERVICE_ROLE_KEY

        if not url or not key:
            logger.debug("Supabase credentials not configured")
            return None

        # Imported lazily so that workers without analytics never pay for it
        from supabase import create_client

        try:
            _supabase_client = create_client(url, key)
            logger.info("Supabase client initialized")
        except Exception as e:
            logger.error(f"Failed to create Supabase client: {e}")
            return None

    return _supabase_client


def reset_supabase_client():
    global _supabase_client
    _supabase_client = None
