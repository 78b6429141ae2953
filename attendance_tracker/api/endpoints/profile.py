import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from attendance_tracker.db.session import get_db
from attendance_tracker.models.user import User
from attendance_tracker.schemas import ChangePasswordRequest, MessageResponse
from attendance_tracker.api.dependencies import get_current_user
from attendance_tracker.core.security import (
    get_password_hash,
    is_strong_password,
    verify_password,
)

router = APIRouter(prefix="/profile", tags=["Profile"])
logger = logging.getLogger(__name__)


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    password_change: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change current user's password"""
    if not verify_password(password_change.current_password, current_user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect"
        )

    if password_change.new_password != password_change.confirm_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Passwords do not match"
        )

    if not is_strong_password(password_change.new_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password must be at least 6 characters with at least 1 letter and 1 number"
        )

    current_user.password_hash = get_password_hash(password_change.new_password)
    db.commit()
    logger.info(f"User {current_user.id} changed their password")

    return {"message": "Password changed successfully"}
