from sqlalchemy import Column, String, Date, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum
from attendance_tracker.db.session import Base


class UserRole(str, enum.Enum):
    ADMIN = "Admin"
    EMPLOYEE = "Employee"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    email = Column(String(100), unique=True, nullable=False, index=True)
    phone = Column(String(10), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.EMPLOYEE)
    position = Column(String(100), nullable=False, index=True)
    start_date = Column(Date, nullable=False)  # first working day, inclusive

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    attendance = relationship(
        "AttendanceRecord", back_populates="user", cascade="all, delete-orphan"
    )
    leave_applications = relationship(
        "LeaveApplication", back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
