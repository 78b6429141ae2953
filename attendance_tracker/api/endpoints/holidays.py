"""
Holiday Management Endpoints

Admin-only endpoints for managing company-wide local holidays, plus a lookup
any signed-in user can call.
"""

import enum
import logging
from datetime import date, datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from attendance_tracker.db.session import get_db
from attendance_tracker.models.holiday import LocalHoliday
from attendance_tracker.models.user import User
from attendance_tracker.schemas import HolidayCreate, HolidayUpdate, HolidayResponse
from attendance_tracker.api.dependencies import get_current_user, require_admin
from attendance_tracker.api.records import find_holiday_on
from attendance_tracker.core.clock import get_now
from attendance_tracker.core.guards import check_holiday_create, check_holiday_update

router = APIRouter(prefix="/admin/holidays", tags=["admin", "holidays"])
lookup_router = APIRouter(prefix="/holidays", tags=["holidays"])
logger = logging.getLogger(__name__)


class HolidayListType(str, enum.Enum):
    UPCOMING = "upcoming"
    PAST = "past"
    ALL = "all"


def get_holiday_or_404(db: Session, holiday_id: str) -> LocalHoliday:
    holiday = db.query(LocalHoliday).filter(LocalHoliday.id == holiday_id).first()
    if not holiday:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Holiday not found"
        )
    return holiday


@router.get("", response_model=List[HolidayResponse])
def list_holidays(
    type: HolidayListType = Query(HolidayListType.UPCOMING, description="upcoming, past or all"),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
    now: datetime = Depends(get_now)
):
    """
    List holidays ordered by start date.

    - **upcoming**: holidays that have not finished yet (end date today or later)
    - **past**: holidays that ended before today
    - **all**: every holiday
    """
    today = now.date()
    query = db.query(LocalHoliday)

    if type == HolidayListType.UPCOMING:
        query = query.filter(LocalHoliday.end_date >= today)
    elif type == HolidayListType.PAST:
        query = query.filter(LocalHoliday.end_date < today)

    return query.order_by(LocalHoliday.start_date.asc()).all()


@router.post("", response_model=HolidayResponse, status_code=status.HTTP_201_CREATED)
def create_holiday(
    holiday_data: HolidayCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    now: datetime = Depends(get_now)
):
    """
    Create a new holiday.

    - **name**: Name of the holiday (e.g., "Diwali")
    - **start_date** / **end_date**: inclusive range, starting today or later;
      neither end may fall on a weekend
    - **reason**: shown to users who try to mark attendance on the holiday
    """
    check_holiday_create(
        now.date(),
        holiday_data.name,
        holiday_data.start_date,
        holiday_data.end_date,
        holiday_data.reason,
    )

    holiday = LocalHoliday(
        name=holiday_data.name.strip(),
        start_date=holiday_data.start_date,
        end_date=holiday_data.end_date,
        reason=holiday_data.reason.strip(),
    )

    db.add(holiday)
    db.commit()
    db.refresh(holiday)
    logger.info(
        f"Admin {current_user.id} created holiday {holiday.name} "
        f"({holiday.start_date}..{holiday.end_date})"
    )
    return holiday


@router.get("/{holiday_id}", response_model=HolidayResponse)
def get_holiday(
    holiday_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin)
):
    """Get a specific holiday by ID"""
    return get_holiday_or_404(db, holiday_id)


@router.put("/{holiday_id}", response_model=HolidayResponse)
def update_holiday(
    holiday_id: str,
    holiday_data: HolidayUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    now: datetime = Depends(get_now)
):
    """
    Replace a holiday's fields.

    Holidays that have already ended cannot be edited.
    """
    holiday = get_holiday_or_404(db, holiday_id)

    check_holiday_update(
        now.date(),
        holiday.end_date,
        holiday_data.name,
        holiday_data.start_date,
        holiday_data.end_date,
        holiday_data.reason,
    )

    holiday.name = holiday_data.name.strip()
    holiday.start_date = holiday_data.start_date
    holiday.end_date = holiday_data.end_date
    holiday.reason = holiday_data.reason.strip()

    db.commit()
    db.refresh(holiday)
    logger.info(f"Admin {current_user.id} updated holiday {holiday.id}")
    return holiday


@router.delete("/{holiday_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_holiday(
    holiday_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Delete a holiday"""
    holiday = get_holiday_or_404(db, holiday_id)

    db.delete(holiday)
    db.commit()
    logger.info(f"Admin {current_user.id} deleted holiday {holiday_id}")
    return None


@lookup_router.get("/check/{check_date}", response_model=dict)
def check_holiday(
    check_date: date,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user)
):
    """
    Check if a specific date is a local holiday.

    Returns holiday information if found, or indicates it's not a holiday.
    """
    holiday = find_holiday_on(db, check_date)

    if holiday:
        return {
            "is_holiday": True,
            "holiday_name": holiday.name,
            "reason": holiday.reason,
            "start_date": holiday.start_date.isoformat(),
            "end_date": holiday.end_date.isoformat(),
            "message": f"{check_date} is a holiday: {holiday.name}"
        }

    return {
        "is_holiday": False,
        "holiday_name": None,
        "reason": None,
        "start_date": None,
        "end_date": None,
        "message": f"{check_date} is not a holiday"
    }
