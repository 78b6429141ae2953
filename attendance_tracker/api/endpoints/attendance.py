import logging
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from attendance_tracker.db.session import get_db
from attendance_tracker.models.user import User
from attendance_tracker.models.attendance import AttendanceRecord, PRESENT
from attendance_tracker.schemas import (
    MarkAttendanceResponse,
    AttendanceHistoryResponse,
    AttendanceStatsResponse,
)
from attendance_tracker.api.dependencies import get_current_user
from attendance_tracker.api.records import (
    approved_leave_overlapping,
    attendance_between,
    find_holiday_on,
    merged_leave_list,
    reconcile_user,
)
from attendance_tracker.core import exceptions
from attendance_tracker.core.clock import get_now, time_period
from attendance_tracker.core.config import settings
from attendance_tracker.core.guards import check_mark_attendance

router = APIRouter(prefix="/attendance", tags=["Attendance"])
logger = logging.getLogger(__name__)


@router.post("/mark", response_model=MarkAttendanceResponse)
def mark_attendance(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(get_now)
):
    """Mark the current user present for today. Cannot be undone."""
    today = now.date()

    check_mark_attendance(
        now=now,
        start_date=current_user.start_date,
        already_marked=attendance_between(db, current_user.id, today, today) is not None,
        on_leave=approved_leave_overlapping(db, current_user.id, today, today) is not None,
        holiday=find_holiday_on(db, today),
        open_hour=settings.ATTENDANCE_OPEN_HOUR,
        close_hour=settings.ATTENDANCE_CLOSE_HOUR,
    )

    record = AttendanceRecord(
        user_id=current_user.id,
        date=today,
        status=PRESENT,
        marked_at=now,
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        # Another request marked the same day between the check and the insert
        db.rollback()
        raise exceptions.AttendanceConflict("Attendance already marked for today")
    db.refresh(record)

    logger.info(f"User {current_user.id} marked attendance for {today}")
    return {
        "message": "Attendance marked successfully",
        "time_period": time_period(now),
        "attendance": record,
    }


@router.get("/history", response_model=AttendanceHistoryResponse)
def get_attendance_history(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(get_now)
):
    """
    The current user's attendance, leave and stats.

    `leaves` interleaves stored leave applications with auto-generated
    entries for every working day the user failed to mark.
    """
    attendance, leaves, result = reconcile_user(db, current_user, now)

    return {
        "attendance": attendance,
        "leaves": merged_leave_list(current_user.id, leaves, result),
        "stats": AttendanceStatsResponse.from_stats(result.stats),
    }
