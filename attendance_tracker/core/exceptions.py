"""
Attendance rule violations.

Each guard failure is its own exception type carrying a stable machine code
and the message shown to the user. They are raised by the pure guard
functions in `attendance_tracker.core.guards` and turned into JSON responses
by the handler registered in `attendance_tracker.main`.
"""

from fastapi import status


class AttendanceRuleError(Exception):
    """Base class for user-facing, non-retryable rule violations."""

    code = "rule_violation"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFields(AttendanceRuleError):
    code = "missing_fields"

    def __init__(self, message: str = "All fields are required"):
        super().__init__(message)


class OutsideWindow(AttendanceRuleError):
    code = "outside_window"


class BeforeStart(AttendanceRuleError):
    code = "before_start"


class AlreadyMarked(AttendanceRuleError):
    code = "already_marked"


class AttendanceConflict(AlreadyMarked):
    """Raised when the attendance insert loses a race on (user_id, date)."""

    status_code = status.HTTP_409_CONFLICT


class OnApprovedLeave(AttendanceRuleError):
    code = "on_approved_leave"


class Weekend(AttendanceRuleError):
    code = "weekend"


class Holiday(AttendanceRuleError):
    code = "holiday"


class PastStart(AttendanceRuleError):
    code = "past_start"


class InvertedRange(AttendanceRuleError):
    code = "inverted_range"

    def __init__(self, message: str = "End date must be after start date"):
        super().__init__(message)


class ConflictingAttendance(AttendanceRuleError):
    code = "conflicting_attendance"


class ConflictingLeave(AttendanceRuleError):
    code = "conflicting_leave"


class SingleDayWeekend(AttendanceRuleError):
    code = "single_day_weekend"


class SingleDayHoliday(AttendanceRuleError):
    code = "single_day_holiday"


class WeekendBoundary(AttendanceRuleError):
    code = "weekend_boundary"

    def __init__(self, message: str = "Weekends are already holidays"):
        super().__init__(message)


class PastHoliday(AttendanceRuleError):
    code = "past_holiday"

    def __init__(self, message: str = "Cannot edit past holidays"):
        super().__init__(message)
