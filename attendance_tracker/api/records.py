"""
Database lookups shared by the attendance, leave, holiday and analytics
endpoints, and the glue that feeds stored rows into `reconcile`.
"""

from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import and_
from sqlalchemy.orm import Session

from attendance_tracker.core.config import settings
from attendance_tracker.core.reconciliation import (
    Reconciliation,
    auto_generated_leaves,
    merge_leave_entries,
    reconcile,
)
from attendance_tracker.models.attendance import AttendanceRecord
from attendance_tracker.models.holiday import LocalHoliday
from attendance_tracker.models.leave_application import LeaveApplication, LeaveStatus
from attendance_tracker.models.user import User
from attendance_tracker.schemas import LeaveApplicationResponse


def find_holiday_on(db: Session, day: date) -> Optional[LocalHoliday]:
    """The holiday covering `day`, or None. Query errors propagate."""
    return db.query(LocalHoliday).filter(
        LocalHoliday.start_date <= day,
        LocalHoliday.end_date >= day
    ).order_by(LocalHoliday.start_date.asc()).first()


def holidays_between(db: Session, start: date, end: date) -> List[LocalHoliday]:
    """Holidays overlapping [start, end]."""
    return db.query(LocalHoliday).filter(
        LocalHoliday.start_date <= end,
        LocalHoliday.end_date >= start
    ).all()


def approved_leave_overlapping(
    db: Session, user_id: str, start: date, end: date
) -> Optional[LeaveApplication]:
    return db.query(LeaveApplication).filter(
        LeaveApplication.user_id == user_id,
        LeaveApplication.status == LeaveStatus.APPROVED,
        and_(
            LeaveApplication.start_date <= end,
            LeaveApplication.end_date >= start
        )
    ).first()


def attendance_between(
    db: Session, user_id: str, start: date, end: date
) -> Optional[AttendanceRecord]:
    return db.query(AttendanceRecord).filter(
        AttendanceRecord.user_id == user_id,
        AttendanceRecord.date >= start,
        AttendanceRecord.date <= end
    ).first()


def reconcile_user(
    db: Session,
    user: User,
    now: datetime,
    holidays: Optional[Sequence[LocalHoliday]] = None,
) -> Tuple[List[AttendanceRecord], List[LeaveApplication], Reconciliation]:
    """
    Load a user's records and reconcile them.

    Returns (attendance rows newest first, all leave rows newest first,
    Reconciliation). Pass `holidays` when reconciling many users at once.
    """
    attendance = db.query(AttendanceRecord).filter(
        AttendanceRecord.user_id == user.id
    ).order_by(AttendanceRecord.date.desc()).all()

    leaves = db.query(LeaveApplication).filter(
        LeaveApplication.user_id == user.id
    ).order_by(LeaveApplication.start_date.desc()).all()

    if holidays is None:
        holidays = holidays_between(db, user.start_date, now.date())

    result = reconcile(
        start_date=user.start_date,
        now=now,
        attendance_dates=[record.date for record in attendance],
        leaves=[leave for leave in leaves if leave.status == LeaveStatus.APPROVED],
        holidays=holidays,
        cutoff_hour=settings.ATTENDANCE_CLOSE_HOUR,
    )
    return attendance, leaves, result


def merged_leave_list(
    user_id: str, leaves: Sequence[LeaveApplication], result: Reconciliation
) -> List[dict]:
    """Stored leave plus auto-generated failed-to-mark entries, newest first."""
    stored = [
        LeaveApplicationResponse.model_validate(leave).model_dump() for leave in leaves
    ]
    generated = auto_generated_leaves(user_id, result.failed_days)
    return merge_leave_entries(stored, generated)


def delete_history_before(db: Session, user_id: str, new_start_date: date) -> Tuple[int, int]:
    """
    Remove attendance dated before `new_start_date` and leave starting before it.

    Both deletes go into the caller's transaction. Returns the number of
    (attendance, leave) rows removed.
    """
    attendance_deleted = db.query(AttendanceRecord).filter(
        AttendanceRecord.user_id == user_id,
        AttendanceRecord.date < new_start_date
    ).delete(synchronize_session=False)

    leave_deleted = db.query(LeaveApplication).filter(
        LeaveApplication.user_id == user_id,
        LeaveApplication.start_date < new_start_date
    ).delete(synchronize_session=False)

    return attendance_deleted, leave_deleted
