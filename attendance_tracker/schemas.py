from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import date, datetime
from attendance_tracker.core.reconciliation import AttendanceStats
from attendance_tracker.models.user import UserRole
from attendance_tracker.models.leave_application import LeaveStatus


# ============= User Schemas =============
class UserBase(BaseModel):
    name: str
    email: EmailStr
    phone: str
    role: UserRole
    position: str
    start_date: date

    @field_validator('name', 'position')
    @classmethod
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('Field cannot be empty')
        return v.strip()

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        if len(v) != 10 or not v.isdigit():
            raise ValueError('Phone number must be 10 digits')
        return v


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)


class UserUpdate(UserBase):
    pass


class UserResponse(UserBase):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str
    role: UserRole


class PasswordResetRequest(BaseModel):
    new_password: str = Field(..., min_length=6)


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str
    confirm_password: str


class MessageResponse(BaseModel):
    message: str


# ============= Attendance Schemas =============
class AttendanceResponse(BaseModel):
    id: str
    user_id: str
    date: date
    status: str
    marked_at: datetime

    class Config:
        from_attributes = True


class MarkAttendanceResponse(BaseModel):
    message: str
    time_period: str
    attendance: AttendanceResponse


class AttendanceStatsResponse(BaseModel):
    total_working_days: int = Field(..., alias="totalWorkingDays")
    present_days: int = Field(..., alias="presentDays")
    leave_days: int = Field(..., alias="leaveDays")
    failed_to_mark: int = Field(..., alias="failedToMark")
    attendance_percentage: int = Field(..., alias="attendancePercentage")

    class Config:
        populate_by_name = True

    @classmethod
    def from_stats(cls, stats: AttendanceStats) -> "AttendanceStatsResponse":
        return cls(
            total_working_days=stats.total_working_days,
            present_days=stats.present_days,
            leave_days=stats.leave_days,
            failed_to_mark=stats.failed_to_mark,
            attendance_percentage=stats.attendance_percentage,
        )


class ResetAttendanceRequest(BaseModel):
    user_id: str
    new_start_date: date


# ============= Leave Application Schemas =============
class LeaveApplicationCreate(BaseModel):
    # Optional so a missing field is reported by the leave rules, not as a 422
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None


class LeaveApplicationResponse(BaseModel):
    id: str
    user_id: str
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AttendanceHistoryResponse(BaseModel):
    attendance: List[AttendanceResponse]
    leaves: List[LeaveApplicationResponse]
    stats: AttendanceStatsResponse


class UserAttendanceResponse(AttendanceHistoryResponse):
    user: UserResponse


class UserWithStats(UserResponse):
    stats: AttendanceStatsResponse


class AttendanceSummaryResponse(BaseModel):
    users: List[UserWithStats]
    best_performer: Optional[UserWithStats] = Field(None, alias="bestPerformer")
    worst_performer: Optional[UserWithStats] = Field(None, alias="worstPerformer")

    class Config:
        populate_by_name = True


# ============= Holiday Schemas =============
class HolidayCreate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None


class HolidayUpdate(HolidayCreate):
    pass


class HolidayResponse(BaseModel):
    id: str
    name: str
    start_date: date
    end_date: date
    reason: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
