import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from attendance_tracker.db.session import get_db
from attendance_tracker.models.user import User
from attendance_tracker.schemas import (
    AttendanceStatsResponse,
    AttendanceSummaryResponse,
    MessageResponse,
    ResetAttendanceRequest,
    UserAttendanceResponse,
    UserResponse,
    UserWithStats,
)
from attendance_tracker.api.dependencies import require_admin
from attendance_tracker.api.endpoints.users import get_user_or_404
from attendance_tracker.api.records import (
    delete_history_before,
    holidays_between,
    merged_leave_list,
    reconcile_user,
)
from attendance_tracker.core.clock import get_now

router = APIRouter(prefix="/admin/attendance", tags=["Admin - Attendance"])
logger = logging.getLogger(__name__)


def pick_performers(users: List[UserWithStats]):
    """
    Best and worst attendance percentage, scanning left to right.

    The current pick is only kept on a strict win, so ties go to the user
    that comes later in the list.
    """
    if not users:
        return None, None

    best = worst = users[0]
    for user in users[1:]:
        pct = user.stats.attendance_percentage
        if not best.stats.attendance_percentage > pct:
            best = user
        if not worst.stats.attendance_percentage < pct:
            worst = user
    return best, worst


@router.get("/users/{user_id}", response_model=UserAttendanceResponse)
def get_user_attendance(
    user_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
    now: datetime = Depends(get_now)
):
    """A single user's attendance, leave (with failed-to-mark days) and stats."""
    user = get_user_or_404(db, user_id)
    attendance, leaves, result = reconcile_user(db, user, now)

    return {
        "user": user,
        "attendance": attendance,
        "leaves": merged_leave_list(user.id, leaves, result),
        "stats": AttendanceStatsResponse.from_stats(result.stats),
    }


@router.get("/summary", response_model=AttendanceSummaryResponse)
def get_attendance_summary(
    position: Optional[str] = Query(None, description="Only users with this position"),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
    now: datetime = Depends(get_now)
):
    """
    Stats for every user, with the best and worst performer.

    One reconciliation pass per user; holidays are loaded once for all of them.
    """
    query = db.query(User)
    if position:
        query = query.filter(User.position == position)
    users = query.order_by(User.created_at.desc()).all()

    summary = []
    if users:
        earliest_start = min(user.start_date for user in users)
        holidays = holidays_between(db, earliest_start, now.date())

        for user in users:
            _, _, result = reconcile_user(db, user, now, holidays=holidays)
            summary.append(UserWithStats(
                **UserResponse.model_validate(user).model_dump(),
                stats=AttendanceStatsResponse.from_stats(result.stats),
            ))

    best, worst = pick_performers(summary)
    return AttendanceSummaryResponse(users=summary, best_performer=best, worst_performer=worst)


@router.post("/reset", response_model=MessageResponse)
def reset_attendance(
    reset_request: ResetAttendanceRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Drop a user's history from before a new start date.

    Deletes attendance dated before `new_start_date` and leave applications
    starting before it, in one transaction.
    """
    user = get_user_or_404(db, reset_request.user_id)

    attendance_deleted, leave_deleted = delete_history_before(
        db, user.id, reset_request.new_start_date
    )
    db.commit()

    logger.info(
        f"Admin {current_user.id} reset history of user {user.id} before "
        f"{reset_request.new_start_date}: {attendance_deleted} attendance, {leave_deleted} leave"
    )
    return {"message": "Attendance history reset successfully"}
