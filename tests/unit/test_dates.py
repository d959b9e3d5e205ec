from datetime import date, datetime

import pytest

from deadline_reminder.notification.dates import (
    DateWindowFilter,
    days_between,
    format_date,
    pad,
)


class TestFormatting:
    def test_pad(self) -> None:
        assert pad(5) == "05"
        assert pad(12) == "12"
        assert pad(7, width=3) == "007"

    def test_format_date(self) -> None:
        assert format_date(date(2024, 3, 5)) == "2024-03-05"


class TestDaysBetween:
    def test_future_is_positive(self) -> None:
        assert days_between(date(2025, 1, 10), date(2025, 1, 1)) == 9

    def test_past_is_negative(self) -> None:
        assert days_between(date(2024, 12, 31), date(2025, 1, 1)) == -1

    def test_time_of_day_is_ignored(self) -> None:
        assert days_between(date(2025, 1, 2), datetime(2025, 1, 1, 23, 59)) == 1


class TestDateWindowFilter:
    def test_same_day_only_by_default(self, make_record) -> None:
        date_filter = DateWindowFilter()
        today = date(2025, 1, 1)

        assert date_filter.is_notifiable(make_record(deadline=date(2025, 1, 1)), today)
        assert not date_filter.is_notifiable(make_record(deadline=date(2025, 1, 2)), today)
        assert not date_filter.is_notifiable(make_record(deadline=date(2024, 12, 31)), today)

    def test_window_includes_upper_bound(self, make_record) -> None:
        date_filter = DateWindowFilter(notify_window_days=3)
        today = date(2025, 1, 1)

        assert date_filter.is_notifiable(make_record(deadline=date(2025, 1, 4)), today)
        assert not date_filter.is_notifiable(make_record(deadline=date(2025, 1, 5)), today)

    def test_past_deadlines_when_enabled(self, make_record) -> None:
        date_filter = DateWindowFilter(notify_past_deadlines=True)
        record = make_record(deadline=date(2024, 12, 2))

        assert date_filter.is_notifiable(record, date(2025, 1, 1))

    def test_filter_keeps_order(self, make_record) -> None:
        records = [
            make_record(deadline=date(2025, 1, 2), element_name="b"),
            make_record(deadline=date(2025, 3, 1), element_name="skip"),
            make_record(deadline=date(2025, 1, 1), element_name="a"),
        ]
        kept = DateWindowFilter(notify_window_days=1).filter(records, date(2025, 1, 1))

        assert [r.element_name for r in kept] == ["b", "a"]

    def test_negative_window_rejected(self) -> None:
        with pytest.raises(ValueError):
            DateWindowFilter(notify_window_days=-1)
