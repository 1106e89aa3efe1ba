# gamification/tasks.py

import logging

from celery import shared_task

from core import datetime_utils
from core.constants import EVENT_TYPE_LOGIN
from core.exceptions import MalformedPayloadError, NotFoundError
from core.models import ActivityEvent
from core.services import ActivityService
from .engine import PointsGranter

logger = logging.getLogger("dbplay.gamification")


@shared_task(bind=True, max_retries=3, default_retry_delay=30)
def process_activity_event(self, event_id: int):
    """
    Re-deliver a stored activity event to the points granter.

    Grants are idempotent, so delivering the same event more than once
    never produces a duplicate ledger row. Events that reference missing
    rows or carry a malformed payload fail the same way every time and are
    dropped instead of retried.
    """
    try:
        ActivityService().reprocess_event(event_id)
    except ActivityEvent.DoesNotExist:
        return "event_not_found"
    except (NotFoundError, MalformedPayloadError) as exc:
        logger.warning(f"Dropping activity event {event_id}: {exc}")
        return "dropped"
    except Exception as exc:
        logger.exception(f"Failed to process activity event {event_id}")
        raise self.retry(exc=exc)
    return "processed"


@shared_task
def grant_weekly_login_points(user_id: int):
    """Check the trailing 7 days of logins and grant the weekly award if earned."""
    granted = PointsGranter().grant_weekly_login_points(user_id)
    if granted:
        logger.info(f"granted weekly login points user_id={user_id}")
    return granted


@shared_task
def grant_weekly_login_points_for_active_users():
    """
    Periodic sweep (see CELERY_BEAT_SCHEDULE) over everyone who logged in today.

    Seven distinct login days in the trailing window always include today,
    so today's logins are the only candidates.
    """
    since = datetime_utils.start_of_today()
    user_ids = (
        ActivityEvent.objects.filter(type=EVENT_TYPE_LOGIN, triggered_at__gte=since)
        .order_by()
        .values_list("user_id", flat=True)
        .distinct()
    )

    granter = PointsGranter()
    granted = 0
    for user_id in user_ids:
        if granter.grant_weekly_login_points(user_id):
            logger.info(f"granted weekly login points user_id={user_id}")
            granted += 1
    return granted
