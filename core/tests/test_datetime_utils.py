from datetime import datetime

from django.test import SimpleTestCase

from core import datetime_utils


class DatetimeUtilsTests(SimpleTestCase):
    def test_start_of_day(self):
        self.assertEqual(datetime_utils.start_of_day(datetime(2026, 10, 19, 23, 59, 59)), datetime(2026, 10, 19))

    def test_start_of_week_is_monday(self):
        # Sunday
        self.assertEqual(datetime_utils.start_of_week(datetime(2026, 10, 25, 10, 0)), datetime(2026, 10, 19))
        self.assertEqual(datetime_utils.start_of_week(datetime(2026, 10, 19, 0, 0)), datetime(2026, 10, 19))

    def test_trailing_days(self):
        current = datetime(2026, 10, 19, 0, 0, 1)
        self.assertEqual(datetime_utils.start_of_trailing_days(7, current), datetime(2026, 10, 13))
        self.assertEqual(datetime_utils.start_of_trailing_days(1, current), datetime(2026, 10, 19))

    def test_keys(self):
        self.assertEqual(datetime_utils.day_key(datetime(2026, 1, 1, 23, 0)), "2026-01-01")
        # 2027-01-01 belongs to the last ISO week of 2026
        self.assertEqual(datetime_utils.iso_week_key(datetime(2027, 1, 1)), "2026-W53")

