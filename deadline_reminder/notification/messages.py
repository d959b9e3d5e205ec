"""Localized notification strings."""

from dataclasses import dataclass
from enum import Enum

APPROACHING_DAYS = 3


class DeadlineStatus(str, Enum):
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    APPROACHING = "approaching"
    FUTURE = "future"

    @classmethod
    def from_days(cls, days_diff: int) -> "DeadlineStatus":
        if days_diff < 0:
            return cls.OVERDUE
        if days_diff == 0:
            return cls.DUE_TODAY
        if days_diff <= APPROACHING_DAYS:
            return cls.APPROACHING
        return cls.FUTURE


STATUS_EMOJI = {
    DeadlineStatus.OVERDUE: ":rotating_light:",
    DeadlineStatus.DUE_TODAY: ":alarm_clock:",
    DeadlineStatus.APPROACHING: ":warning:",
    DeadlineStatus.FUTURE: ":calendar:",
}


@dataclass(frozen=True)
class Messages:
    title: str
    deadline_reached: str
    deadline_approaching: str
    deadline_passed: str
    days_remaining: str
    days_overdue: str
    file: str
    line: str
    element: str
    deadline: str
    author: str
    description: str
    no_deadlines: str
    summary: str
    more: str

    def status_text(self, days_diff: int) -> str:
        status = DeadlineStatus.from_days(days_diff)
        if status is DeadlineStatus.OVERDUE:
            overdue = self.days_overdue.format(days=abs(days_diff))
            return f"{self.deadline_passed} ({overdue})"
        if status is DeadlineStatus.DUE_TODAY:
            return self.deadline_reached
        remaining = self.days_remaining.format(days=days_diff)
        return f"{self.deadline_approaching} ({remaining})"


MESSAGES = {
    "ja": Messages(
        title=":warning: デッドライン通知",
        deadline_reached="デッドラインに達しました",
        deadline_approaching="デッドラインが近づいています",
        deadline_passed="デッドラインを過ぎています",
        days_remaining="残り {days} 日",
        days_overdue="{days} 日超過",
        file="ファイル",
        line="行",
        element="対象",
        deadline="デッドライン",
        author="作成者",
        description="説明",
        no_deadlines="本日対応が必要なデッドラインはありません",
        summary="{count} 件のデッドラインが見つかりました",
        more="ほか {count} 件のデッドラインは省略されました",
    ),
    "en": Messages(
        title=":warning: Deadline Reminder",
        deadline_reached="Deadline reached",
        deadline_approaching="Deadline approaching",
        deadline_passed="Deadline passed",
        days_remaining="{days} day(s) remaining",
        days_overdue="{days} day(s) overdue",
        file="File",
        line="Line",
        element="Element",
        deadline="Deadline",
        author="Author",
        description="Description",
        no_deadlines="No deadlines require attention today",
        summary="{count} deadline(s) found",
        more="...and {count} more deadline(s)",
    ),
}
