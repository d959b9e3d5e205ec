"""Calendar arithmetic for deadline notifications."""

from collections.abc import Iterable
from datetime import date, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from deadline_reminder.scanner.models import AnnotationRecord


def pad(value: int | str, width: int = 2, fill: str = "0") -> str:
    """Left-pad ``value`` to ``width`` characters."""
    return str(value).rjust(width, fill)


def format_date(value: date) -> str:
    """Format as ``YYYY-MM-DD``."""
    return f"{value.year}-{pad(value.month)}-{pad(value.day)}"


def _calendar_day(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def days_between(deadline: date | datetime, reference: date | datetime) -> int:
    """Whole days from ``reference`` to ``deadline``; negative once overdue.

    Only the calendar fields are compared, so times of day are ignored.
    """
    return (_calendar_day(deadline) - _calendar_day(reference)).days


class DateWindowFilter:
    """Decides which deadlines fall inside the notification window.

    A deadline is notifiable from ``notify_window_days`` days before it through
    the day itself, and afterwards only when ``notify_past_deadlines`` is set.
    """

    def __init__(self, notify_window_days: int = 0, notify_past_deadlines: bool = False) -> None:
        if notify_window_days < 0:
            raise ValueError("notify_window_days must not be negative")
        self._window = notify_window_days
        self._past = notify_past_deadlines

    def is_notifiable(self, record: "AnnotationRecord", reference: date | datetime) -> bool:
        diff = days_between(record.deadline.calendar_date, reference)
        if 0 <= diff <= self._window:
            return True
        return diff < 0 and self._past

    def filter(
        self,
        records: Iterable["AnnotationRecord"],
        reference: date | datetime,
    ) -> list["AnnotationRecord"]:
        return [record for record in records if self.is_notifiable(record, reference)]
