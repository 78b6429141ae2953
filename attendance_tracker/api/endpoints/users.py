import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from attendance_tracker.db.session import get_db
from attendance_tracker.models.user import User
from attendance_tracker.schemas import (
    UserCreate,
    UserUpdate,
    UserResponse,
    PasswordResetRequest,
    MessageResponse,
)
from attendance_tracker.core.security import get_password_hash, is_strong_password
from attendance_tracker.api.dependencies import require_admin
from attendance_tracker.api.records import delete_history_before

router = APIRouter(prefix="/admin/users", tags=["Admin - Users"])
logger = logging.getLogger(__name__)


def get_user_or_404(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


@router.get("", response_model=List[UserResponse])
def list_users(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin)
):
    """List all users, newest first (admin only)."""
    users = db.query(User).order_by(User.created_at.desc()).offset(skip).limit(limit).all()
    return users


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_create: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Create a new user (admin only)."""
    if db.query(User).filter(User.email == user_create.email).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists"
        )

    user = User(
        name=user_create.name,
        email=user_create.email,
        phone=user_create.phone,
        password_hash=get_password_hash(user_create.password),
        role=user_create.role,
        position=user_create.position,
        start_date=user_create.start_date,
    )

    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Admin {current_user.id} created user {user.id} ({user.email})")
    return user


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin)
):
    """Get a specific user (admin only)."""
    return get_user_or_404(db, user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Update a user (admin only).

    Moving the start date drops the user's attendance and leave history from
    before the new start date, in the same transaction as the edit.
    """
    user = get_user_or_404(db, user_id)

    if user_update.email != user.email:
        if db.query(User).filter(User.email == user_update.email).first():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered"
            )

    if user_update.start_date != user.start_date:
        attendance_deleted, leave_deleted = delete_history_before(
            db, user.id, user_update.start_date
        )
        logger.info(
            f"Start date of user {user.id} moved to {user_update.start_date}; "
            f"removed {attendance_deleted} attendance and {leave_deleted} leave rows"
        )

    for field, value in user_update.model_dump().items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    logger.info(f"Admin {current_user.id} updated user {user.id}")
    return user


@router.post("/{user_id}/reset-password", response_model=MessageResponse)
def reset_password(
    user_id: str,
    password_data: PasswordResetRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Set a new password for a user (admin only)."""
    user = get_user_or_404(db, user_id)

    if not is_strong_password(password_data.new_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password must be at least 6 characters with at least 1 letter and 1 number"
        )

    user.password_hash = get_password_hash(password_data.new_password)

    db.commit()
    logger.info(f"Admin {current_user.id} reset the password of user {user.id}")
    return {"message": "Password reset successfully"}


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Delete a user together with their attendance and leave (admin only)."""
    user = get_user_or_404(db, user_id)

    # Prevent admin from deleting themselves
    if user.id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete yourself"
        )

    db.delete(user)
    db.commit()
    logger.info(f"Admin {current_user.id} deleted user {user_id}")
    return None
