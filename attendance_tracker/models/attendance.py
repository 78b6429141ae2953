"""
Attendance Model

One row per user per calendar day on which the user marked themselves
present. Rows are never updated or removed by the user; only an admin
history reset deletes them.

`date` and `marked_at` are local wall-clock values in settings.TIMEZONE, taken
from `get_now()`. The `created_at`/`updated_at` audit columns on the other
tables are UTC.
"""

from sqlalchemy import Column, String, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from attendance_tracker.db.session import Base

PRESENT = "present"


class AttendanceRecord(Base):
    __tablename__ = "attendance"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=PRESENT)
    marked_at = Column(DateTime, nullable=False)

    # The pre-insert check is not enough under concurrent requests
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_attendance_user_date"),
    )

    user = relationship("User", back_populates="attendance")

    def __repr__(self):
        return f"<AttendanceRecord(user_id={self.user_id}, date={self.date})>"
