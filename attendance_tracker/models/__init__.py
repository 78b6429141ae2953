# Import all models here for Alembic to detect them
from attendance_tracker.models.user import User, UserRole
from attendance_tracker.models.attendance import AttendanceRecord
from attendance_tracker.models.leave_application import LeaveApplication, LeaveStatus
from attendance_tracker.models.holiday import LocalHoliday

__all__ = [
    "User",
    "UserRole",
    "AttendanceRecord",
    "LeaveApplication",
    "LeaveStatus",
    "LocalHoliday",
]
