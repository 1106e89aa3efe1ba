from datetime import timedelta
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase

from core import datetime_utils
from core.constants import EVENT_TYPE_LOGIN, EVENT_TYPE_SUBMIT_ANSWER
from core.models import ActivityEvent
from gamification.awards import AwardKind
from gamification.models import Point
from gamification.tasks import (
    grant_weekly_login_points,
    grant_weekly_login_points_for_active_users,
    process_activity_event,
)

User = get_user_model()


class GamificationTaskTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="carol", email="carol@example.com", password="pass1234")

    def log_in_on_days(self, user, days):
        now = datetime_utils.now()
        for days_ago in range(days):
            ActivityEvent.objects.create(
                user=user,
                type=EVENT_TYPE_LOGIN,
                triggered_at=now - timedelta(days=days_ago),
            )

    def test_process_activity_event_is_idempotent(self):
        event = ActivityEvent.objects.create(user=self.user, type=EVENT_TYPE_LOGIN)

        self.assertEqual(process_activity_event(event.id), "processed")
        self.assertEqual(process_activity_event(event.id), "processed")

        self.assertEqual(Point.objects.filter(user=self.user, kind=AwardKind.DAILY_LOGIN).count(), 1)

    def test_process_missing_event(self):
        self.assertEqual(process_activity_event(424242), "event_not_found")

    def test_unknown_submission_is_dropped_without_retry(self):
        event = ActivityEvent.objects.create(
            user=self.user,
            type=EVENT_TYPE_SUBMIT_ANSWER,
            payload={"submission_id": 999, "question_id": 1},
        )

        with patch.object(process_activity_event, "retry") as retry, \
                self.assertLogs("dbplay.gamification", level="WARNING") as logs:
            self.assertEqual(process_activity_event(event.id), "dropped")

        retry.assert_not_called()
        self.assertIn(f"Dropping activity event {event.id}", logs.output[0])
        self.assertFalse(Point.objects.exists())

    def test_malformed_payload_is_dropped_without_retry(self):
        event = ActivityEvent.objects.create(
            user=self.user,
            type=EVENT_TYPE_SUBMIT_ANSWER,
            payload={"question_id": "one"},
        )

        with patch.object(process_activity_event, "retry") as retry, \
                self.assertLogs("dbplay.gamification", level="WARNING"):
            self.assertEqual(process_activity_event(event.id), "dropped")

        retry.assert_not_called()

    def test_unexpected_failure_is_retried(self):
        event = ActivityEvent.objects.create(user=self.user, type=EVENT_TYPE_LOGIN)

        with patch("gamification.tasks.ActivityService.reprocess_event", side_effect=RuntimeError("db gone")), \
                patch.object(process_activity_event, "retry", side_effect=RuntimeError("retrying")) as retry, \
                self.assertLogs("dbplay.gamification", level="ERROR"):
            with self.assertRaises(RuntimeError):
                process_activity_event(event.id)

        retry.assert_called_once()

    def test_weekly_login_task(self):
        self.log_in_on_days(self.user, 7)

        self.assertTrue(grant_weekly_login_points(self.user.id))
        self.assertFalse(grant_weekly_login_points(self.user.id))
        self.assertEqual(Point.objects.get(user=self.user, kind=AwardKind.WEEKLY_LOGIN).points, 50)

    def test_weekly_sweep_grants_users_who_logged_in_today(self):
        regular = User.objects.create_user(username="erin", email="erin@example.com", password="pass1234")
        self.log_in_on_days(self.user, 7)
        self.log_in_on_days(regular, 6)

        self.assertEqual(grant_weekly_login_points_for_active_users(), 1)
        self.assertEqual(grant_weekly_login_points_for_active_users(), 0)

        self.assertTrue(Point.objects.filter(user=self.user, kind=AwardKind.WEEKLY_LOGIN).exists())
        self.assertFalse(Point.objects.filter(user=regular, kind=AwardKind.WEEKLY_LOGIN).exists())
