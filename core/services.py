import logging

from django.db import transaction
from kombu.exceptions import OperationalError as BrokerError

from .models import ActivityEvent
from . import analytics
from gamification.engine import PointsGranter

logger = logging.getLogger("dbplay.events")


class ActivityService:
    """
    Entry point for recording user activity.

    Every recorded event is handed to the registered handlers (the points
    granter by default) synchronously, inside the caller's transaction.
    """

    def __init__(self, handlers=None):
        if handlers is None:
            handlers = [PointsGranter()]
        self.handlers = list(handlers)

    def record_event(self, event_type, user_id, payload=None, triggered_at=None):
        """
        Create the immutable event row and run every handler on it.

        Errors from the store or a handler propagate; handlers that already
        ran are not rolled back.
        """
        event = self._create_event(event_type, user_id, payload, triggered_at)
        self._run_handlers(event)
        return event

    def trigger_event(self, event_type, user_id, payload=None):
        """
        Fire-and-forget variant used by request handlers (login, submission).

        A failure while recording or handling the event is logged but never
        breaks the caller's flow. An event that was stored but whose handlers
        failed is queued for re-delivery once the transaction commits. The
        event is also delivered to analytics.
        Returns the event, or None when recording or handling failed.
        """
        event = None
        try:
            event = self._create_event(event_type, user_id, payload)
        except Exception:
            logger.exception(f"Failed to record {event_type} event for user {user_id}")
        else:
            try:
                self._run_handlers(event)
            except Exception:
                logger.exception(f"Failed to trigger {event_type} event for user {user_id}")
                self._schedule_redelivery(event.id)
                event = None

        analytics.track_event(event_type, user_id=user_id, properties=payload)
        return event

    def reprocess_event(self, event_id):
        """Run the handlers again on an existing event (at-least-once redelivery)."""
        event = ActivityEvent.objects.get(pk=event_id)
        self._run_handlers(event)
        return event

    def _create_event(self, event_type, user_id, payload=None, triggered_at=None):
        fields = {
            "type": event_type,
            "user_id": user_id,
            "payload": payload or {},
        }
        if triggered_at is not None:
            fields["triggered_at"] = triggered_at

        event = ActivityEvent.objects.create(**fields)
        logger.debug(f"Recorded {event.type} event {event.id} for user {user_id}")
        return event

    def _run_handlers(self, event):
        for handler in self.handlers:
            handler.handle_event(event)

    def _schedule_redelivery(self, event_id):
        # Imported here: gamification.tasks depends on this module
        from gamification.tasks import process_activity_event

        def enqueue():
            try:
                process_activity_event.delay(event_id)
            except BrokerError as e:
                logger.error(f"Could not queue re-delivery of event {event_id}: {e}")

        transaction.on_commit(enqueue)
