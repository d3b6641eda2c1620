"""
Query-string filter for the broker application list.
"""
import unittest
from datetime import datetime, timedelta, timezone

from constants import (
    INVALID_FILTER_ERROR,
    INVALID_MAXIMUM_DATE_ERROR,
    INVALID_MINIMUM_DATE_ERROR,
    MINIMUM_DATE_EXCEEDS_MAXIMUM_DATE_ERROR,
)
from exceptions import DateRangeError, InvalidDateError, InvalidFilterError
from models import ApplicationStatus, TaskStatus
from schemas.list_filter import BrokerApplicationsFilter, normalize_date, parse_list_filter


class TestNormalizeDate(unittest.TestCase):
    def test_date_only_is_midnight_utc(self):
        self.assertEqual(normalize_date("2024-01-01"), datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_zulu_suffix(self):
        self.assertEqual(
            normalize_date("2024-01-01T10:30:00Z"),
            datetime(2024, 1, 1, 10, 30, tzinfo=timezone.utc),
        )

    def test_offsets_are_converted_to_utc(self):
        parsed = normalize_date("2024-01-01T10:00:00+10:00")
        self.assertEqual(parsed, datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc))
        self.assertEqual(parsed.utcoffset(), timedelta(0))

    def test_unparseable_becomes_none(self):
        for value in ("not-a-date", "2024-13-45", "yesterday", "   "):
            self.assertIsNone(normalize_date(value), value)

    def test_missing_becomes_none(self):
        self.assertIsNone(normalize_date(None))
        self.assertIsNone(normalize_date(""))

    def test_filter_model_tolerates_unparseable_dates(self):
        filters = BrokerApplicationsFilter(minimum_date="not-a-date", maximum_date="2024-02-01")
        self.assertIsNone(filters.minimum_date)
        self.assertEqual(filters.maximum_date, datetime(2024, 2, 1, tzinfo=timezone.utc))


class TestParseListFilter(unittest.TestCase):
    def test_no_parameters_means_no_filter(self):
        filters = parse_list_filter()
        self.assertEqual(filters.status, [])
        self.assertIsNone(filters.completed)
        self.assertIsNone(filters.minimum_date)
        self.assertIsNone(filters.maximum_date)

    def test_multiple_statuses_accepted(self):
        filters = parse_list_filter(status=["Pending", "OnHold"])
        self.assertEqual(filters.status, [ApplicationStatus.PENDING, ApplicationStatus.ON_HOLD])

    def test_unknown_status_rejected(self):
        with self.assertRaises(InvalidFilterError) as ctx:
            parse_list_filter(status=["Pending", "NotARealStatus"])
        self.assertEqual(ctx.exception.message, INVALID_FILTER_ERROR)
        self.assertEqual(ctx.exception.details["parameter"], "status")
        self.assertEqual(ctx.exception.details["value"], "NotARealStatus")

    def test_completed_accepts_two_task_statuses(self):
        self.assertEqual(parse_list_filter(completed="Completed").completed, TaskStatus.COMPLETED)
        self.assertEqual(parse_list_filter(completed="Pending").completed, TaskStatus.PENDING)

    def test_completed_rejects_other_task_statuses(self):
        for value in ("InProgress", "completed", "Done"):
            with self.assertRaises(InvalidFilterError, msg=value):
                parse_list_filter(completed=value)

    def test_empty_completed_is_absent(self):
        self.assertIsNone(parse_list_filter(completed="").completed)

    def test_inverted_range_rejected(self):
        with self.assertRaises(DateRangeError) as ctx:
            parse_list_filter(minimum_date="2024-01-01", maximum_date="2023-01-01")
        self.assertEqual(ctx.exception.message, MINIMUM_DATE_EXCEEDS_MAXIMUM_DATE_ERROR)

    def test_equal_bounds_allowed(self):
        filters = parse_list_filter(minimum_date="2024-01-01", maximum_date="2024-01-01")
        self.assertEqual(filters.minimum_date, filters.maximum_date)

    def test_unparseable_minimum_date_rejected(self):
        with self.assertRaises(InvalidDateError) as ctx:
            parse_list_filter(minimum_date="not-a-date")
        self.assertEqual(ctx.exception.message, INVALID_MINIMUM_DATE_ERROR)

    def test_unparseable_maximum_date_rejected(self):
        with self.assertRaises(InvalidDateError) as ctx:
            parse_list_filter(maximum_date="31/01/2024")
        self.assertEqual(ctx.exception.message, INVALID_MAXIMUM_DATE_ERROR)

    def test_empty_dates_are_absent(self):
        filters = parse_list_filter(minimum_date="", maximum_date="")
        self.assertIsNone(filters.minimum_date)
        self.assertIsNone(filters.maximum_date)

    def test_one_sided_range(self):
        filters = parse_list_filter(minimum_date="2024-03-01T09:00:00")
        self.assertEqual(filters.minimum_date, datetime(2024, 3, 1, 9, tzinfo=timezone.utc))
        self.assertIsNone(filters.maximum_date)


if __name__ == "__main__":
    unittest.main()
