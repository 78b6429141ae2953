"""
Attendance reconciliation.

Given a user's start date, the dates they marked attendance on, their approved
leave windows and the company holiday windows, work out which calendar days
were working days, classify each one, and tally the totals shown on the
history page and in the admin analytics.

This is the only place these rules live. The user history endpoint, the admin
single-user view and the admin summary all call `reconcile`.
"""

import enum
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, List, Optional, Protocol, Set

from attendance_tracker.core.clock import is_weekend

FAILED_TO_MARK_REASON = "Failed to Mark Attendance"


class DateWindow(Protocol):
    """Anything with an inclusive [start_date, end_date] range (holidays, leave)."""

    start_date: date
    end_date: date


def window_contains(window: DateWindow, day: date) -> bool:
    return window.start_date <= day <= window.end_date


def find_window(windows: Iterable[DateWindow], day: date) -> Optional[DateWindow]:
    """Return the first window covering `day`, or None."""
    for window in windows:
        if window_contains(window, day):
            return window
    return None


class DayStatus(str, enum.Enum):
    PRESENT = "present"
    ON_LEAVE = "on_leave"
    FAILED_TO_MARK = "failed_to_mark"
    PENDING = "pending"  # today, before the cutoff, nothing recorded yet


class WorkingDays:
    """
    Working days from `start` to `end`, both inclusive, in ascending order.

    Saturdays, Sundays and any date inside a holiday window are skipped. The
    sequence is lazy and can be iterated any number of times.
    """

    def __init__(self, start: date, end: date, holidays: Iterable[DateWindow] = ()):
        self.start = start
        self.end = end
        self.holidays = list(holidays)

    def __iter__(self) -> Iterator[date]:
        day = self.start
        while day <= self.end:
            if not is_weekend(day) and find_window(self.holidays, day) is None:
                yield day
            day += timedelta(days=1)


def classify_day(
    day: date,
    now: datetime,
    attended: Set[date],
    leaves: Iterable[DateWindow],
    cutoff_hour: int = 17,
) -> DayStatus:
    """Classify one working day. Attendance always wins over a leave window."""
    if day in attended:
        return DayStatus.PRESENT
    if find_window(leaves, day) is not None:
        return DayStatus.ON_LEAVE

    today = now.date()
    if day < today or (day == today and now.hour >= cutoff_hour):
        return DayStatus.FAILED_TO_MARK
    return DayStatus.PENDING


def attendance_percentage(present_days: int, total_working_days: int) -> int:
    """Whole percentage, rounded half up; 0 when there are no working days."""
    if total_working_days <= 0:
        return 0
    return (present_days * 200 + total_working_days) // (total_working_days * 2)


@dataclass
class AttendanceStats:
    total_working_days: int = 0
    present_days: int = 0
    on_leave_days: int = 0
    failed_to_mark: int = 0

    @property
    def leave_days(self) -> int:
        # Failed-to-mark days are reported inside the leave bucket as well
        return self.on_leave_days + self.failed_to_mark

    @property
    def attendance_percentage(self) -> int:
        return attendance_percentage(self.present_days, self.total_working_days)

    def add(self, status: DayStatus) -> None:
        if status == DayStatus.PENDING:
            return
        self.total_working_days += 1
        if status == DayStatus.PRESENT:
            self.present_days += 1
        elif status == DayStatus.ON_LEAVE:
            self.on_leave_days += 1
        else:
            self.failed_to_mark += 1


@dataclass(frozen=True)
class DayClassification:
    day: date
    status: DayStatus


@dataclass
class Reconciliation:
    days: List[DayClassification] = field(default_factory=list)
    stats: AttendanceStats = field(default_factory=AttendanceStats)

    @property
    def failed_days(self) -> List[date]:
        return [d.day for d in self.days if d.status == DayStatus.FAILED_TO_MARK]


def reconcile(
    start_date: date,
    now: datetime,
    attendance_dates: Iterable[date],
    leaves: Iterable[DateWindow],
    holidays: Iterable[DateWindow],
    cutoff_hour: int = 17,
) -> Reconciliation:
    """
    Classify every working day from `start_date` up to today and tally them.

    `leaves` must already be restricted to approved applications. A day that
    is still unresolved (today, before `cutoff_hour`, nothing recorded) is kept
    in `days` as PENDING but does not count toward any total.
    """
    attended = set(attendance_dates)
    leaves = list(leaves)
    result = Reconciliation()

    for day in WorkingDays(start_date, now.date(), holidays):
        status = classify_day(day, now, attended, leaves, cutoff_hour)
        result.days.append(DayClassification(day=day, status=status))
        result.stats.add(status)

    return result


def auto_generated_leaves(user_id: str, failed_days: Iterable[date]) -> List[dict]:
    """Synthetic leave-shaped entries for failed-to-mark days. Never persisted."""
    return [
        {
            "id": f"failed-{day.isoformat()}",
            "user_id": user_id,
            "start_date": day,
            "end_date": day,
            "reason": FAILED_TO_MARK_REASON,
            "status": "auto-generated",
            "created_at": datetime.combine(day, datetime.min.time()),
            "updated_at": datetime.combine(day, datetime.min.time()),
        }
        for day in failed_days
    ]


def merge_leave_entries(leaves: Iterable[dict], generated: Iterable[dict]) -> List[dict]:
    """Real and auto-generated leave entries, newest start date first."""
    return sorted(
        list(leaves) + list(generated),
        key=lambda entry: entry["start_date"],
        reverse=True,
    )
