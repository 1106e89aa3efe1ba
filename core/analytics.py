# core/analytics.py
# Best-effort analytics delivery for activity events and granted points

import logging
from typing import Any

from . import datetime_utils
from .constants import EVENT_TYPE_GRANT_POINT

logger = logging.getLogger("dbplay.analytics")

ANALYTICS_TABLE = "event_analytics"


def _get_client():
    """Get Supabase client lazily."""
    from core.supabase_client import get_supabase_client
    return get_supabase_client()


def track_event(
    action: str,
    user_id: int | None = None,
    properties: dict[str, Any] | None = None,
) -> bool:
    """
    Send an analytics event to Supabase.

    Delivery never raises: failures are logged and reported as False so the
    caller's business outcome is unaffected.

    Args:
        action: The event type (e.g., "login", "submit_answer", "grant_point")
        user_id: The distinct user id the event belongs to
        properties: Optional additional properties

    Returns:
        True if tracking succeeded, False otherwise
    """
    client = _get_client()
    if not client:
        logger.debug("Supabase client not available, skipping analytics")
        return False

    try:
        data = {
            "action": action,
            "distinct_id": str(user_id) if user_id is not None else None,
            "metadata": dict(properties or {}),
            "created_at": datetime_utils.now().isoformat(),
        }
        client.table(ANALYTICS_TABLE).insert(data).execute()
        logger.debug(f"Tracked analytics event: {action}")
        return True
    except Exception as e:
        logger.error(f"Failed to track analytics: {e}")
        return False


def track_point_granted(user_id: int, description: str, points: int, question_id: int | None = None) -> bool:
    """Track a granted reward."""
    properties: dict[str, Any] = {"description": description, "points": points}
    if question_id is not None:
        properties["questionID"] = str(question_id)
    return track_event(EVENT_TYPE_GRANT_POINT, user_id=user_id, properties=properties)


def track_exception(user_id: int, title: str, message: str) -> bool:
    """Track a failure that the user would otherwise never see."""
    return track_event(
        "exception",
        user_id=user_id,
        properties={"title": title, "message": message},
    )
