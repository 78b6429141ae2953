import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from attendance_tracker.db.session import get_db
from attendance_tracker.models.user import User
from attendance_tracker.models.leave_application import LeaveApplication, LeaveStatus
from attendance_tracker.schemas import LeaveApplicationCreate, LeaveApplicationResponse
from attendance_tracker.api.dependencies import get_current_user
from attendance_tracker.api.records import (
    approved_leave_overlapping,
    attendance_between,
    find_holiday_on,
)
from attendance_tracker.core.clock import get_now
from attendance_tracker.core.guards import check_leave_conflicts, check_leave_request

router = APIRouter(prefix="/leave-applications", tags=["Leave Applications"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[LeaveApplicationResponse])
def list_leave_applications(
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List leave applications for the current user."""
    query = db.query(LeaveApplication).filter(LeaveApplication.user_id == current_user.id)

    if from_date:
        query = query.filter(LeaveApplication.end_date >= from_date)
    if to_date:
        query = query.filter(LeaveApplication.start_date <= to_date)
    if status_filter:
        query = query.filter(LeaveApplication.status == status_filter)

    return query.order_by(LeaveApplication.start_date.desc()).offset(skip).limit(limit).all()


@router.post("", response_model=LeaveApplicationResponse, status_code=status.HTTP_201_CREATED)
def apply_leave(
    leave_create: LeaveApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(get_now)
):
    """
    Apply for leave over an inclusive date range.

    Applications are approved on creation; there is no review step.
    """
    start_date, end_date = leave_create.start_date, leave_create.end_date
    check_leave_request(now.date(), start_date, end_date, leave_create.reason)

    check_leave_conflicts(
        start_date,
        end_date,
        conflicting_attendance=attendance_between(db, current_user.id, start_date, end_date) is not None,
        conflicting_leave=approved_leave_overlapping(db, current_user.id, start_date, end_date) is not None,
        holiday=find_holiday_on(db, start_date) if start_date == end_date else None,
    )

    leave = LeaveApplication(
        user_id=current_user.id,
        start_date=start_date,
        end_date=end_date,
        reason=leave_create.reason.strip(),
        status=LeaveStatus.APPROVED,
    )

    db.add(leave)
    db.commit()
    db.refresh(leave)
    logger.info(f"User {current_user.id} applied leave {start_date}..{end_date}")
    return leave
