"""
Validation rules for the state-changing attendance operations.

The endpoints look up the facts (existing records, covering leave, covering
holiday) and pass them in; these functions only decide. Each raises the
matching `AttendanceRuleError` subclass on the first rule that fails.
"""

from datetime import date, datetime
from typing import Optional

from attendance_tracker.core import exceptions
from attendance_tracker.core.clock import is_weekend, weekday_name
from attendance_tracker.core.reconciliation import DateWindow


def check_mark_attendance(
    now: datetime,
    start_date: date,
    already_marked: bool,
    on_leave: bool,
    holiday: Optional[DateWindow],
    open_hour: int = 9,
    close_hour: int = 17,
) -> None:
    """Decide whether a user may mark attendance at `now`."""
    today = now.date()

    if now.hour < open_hour:
        raise exceptions.OutsideWindow(
            f"Attendance cannot be marked before {_hour_label(open_hour)}"
        )
    if now.hour >= close_hour:
        raise exceptions.OutsideWindow(
            f"Attendance marking time for today is over (after {_hour_label(close_hour)})"
        )
    if start_date > today:
        raise exceptions.BeforeStart("Cannot mark attendance before start date")
    if already_marked:
        raise exceptions.AlreadyMarked("Attendance already marked for today")
    if on_leave:
        raise exceptions.OnApprovedLeave("Cannot mark attendance on leave days")
    if is_weekend(today):
        raise exceptions.Weekend(
            f"Attendance cannot be marked as today is a weekend ({weekday_name(today)})"
        )
    if holiday is not None:
        raise exceptions.Holiday(
            f"Attendance cannot be marked as today is a local holiday due to: {holiday.reason}"
        )


def check_leave_request(
    today: date,
    start_date: Optional[date],
    end_date: Optional[date],
    reason: Optional[str],
) -> None:
    """Field-level rules for a leave application."""
    if not start_date or not end_date or not reason or not reason.strip():
        raise exceptions.MissingFields()
    if start_date < today:
        raise exceptions.PastStart("Cannot apply leave for dates before today")
    if start_date > end_date:
        raise exceptions.InvertedRange()


def check_leave_conflicts(
    start_date: date,
    end_date: date,
    conflicting_attendance: bool,
    conflicting_leave: bool,
    holiday: Optional[DateWindow],
) -> None:
    """
    Rules that need the user's records.

    A range that merely spans a weekend or holiday is fine; those days are
    simply not working days. Only a single-day request on one is refused.
    """
    if conflicting_attendance:
        raise exceptions.ConflictingAttendance(
            "Attendance already marked for some dates in this range"
        )
    if conflicting_leave:
        raise exceptions.ConflictingLeave("Leave already applied for some dates in this range")
    if start_date == end_date:
        if is_weekend(start_date):
            raise exceptions.SingleDayWeekend(
                f"Cannot apply leave on a weekend ({weekday_name(start_date)})"
            )
        if holiday is not None:
            raise exceptions.SingleDayHoliday(
                f"Cannot apply leave on a local holiday: {holiday.reason}"
            )


def _check_holiday_fields(
    today: date,
    name: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
    reason: Optional[str],
    past_message: str,
) -> None:
    if not name or not name.strip() or not start_date or not end_date or not reason or not reason.strip():
        raise exceptions.MissingFields()
    if start_date < today:
        raise exceptions.PastStart(past_message)
    if start_date > end_date:
        raise exceptions.InvertedRange()


def check_holiday_create(
    today: date,
    name: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
    reason: Optional[str],
) -> None:
    _check_holiday_fields(
        today, name, start_date, end_date, reason,
        past_message="Cannot add holiday for dates before today",
    )
    if is_weekend(start_date) or is_weekend(end_date):
        raise exceptions.WeekendBoundary()


def check_holiday_update(
    today: date,
    current_end_date: date,
    name: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
    reason: Optional[str],
) -> None:
    if current_end_date < today:
        raise exceptions.PastHoliday()
    _check_holiday_fields(
        today, name, start_date, end_date, reason,
        past_message="Cannot set holiday to past dates",
    )


def _hour_label(hour: int) -> str:
    suffix = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    return f"{display} {suffix}"
