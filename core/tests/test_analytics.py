from unittest.mock import MagicMock, patch

from django.test import SimpleTestCase, override_settings

from core import analytics
from core.supabase_client import get_supabase_client, reset_supabase_client


class AnalyticsTests(SimpleTestCase):
    def test_skipped_without_client(self):
        with patch("core.analytics._get_client", return_value=None):
            self.assertFalse(analytics.track_event("login", user_id=1))

    def test_inserts_into_analytics_table(self):
        client = MagicMock()
        with patch("core.analytics._get_client", return_value=client):
            self.assertTrue(analytics.track_point_granted(1, "first place on question 42", 80, question_id=42))

        client.table.assert_called_once_with("event_analytics")
        row = client.table.return_value.insert.call_args[0][0]
        self.assertEqual(row["action"], "grant_point")
        self.assertEqual(row["distinct_id"], "1")
        self.assertEqual(row["metadata"], {
            "description": "first place on question 42",
            "points": 80,
            "questionID": "42",
        })

    def test_delivery_failure_is_swallowed(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = RuntimeError("down")

        with patch("core.analytics._get_client", return_value=client), \
                self.assertLogs("dbplay.analytics", level="ERROR"):
            self.assertFalse(analytics.track_exception(1, "failed to grant point", "boom"))

    @override_settings(SUPABASE_URL="", SUPABASE_SERVICE_ROLE_KEY="")
    def test_client_not_configured(self):
        reset_supabase_client()
        self.assertIsNone(get_supabase_client())
