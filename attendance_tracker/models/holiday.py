"""
Holiday Model

Company-wide local holidays. Every date inside [start_date, end_date] is a
non-working day for all users; attendance cannot be marked on it and it does
not count toward anyone's working days.
"""

from sqlalchemy import Column, String, Date, DateTime, Index
from datetime import datetime
import uuid

from attendance_tracker.db.session import Base


class LocalHoliday(Base):
    """Holiday window, both ends inclusive"""

    __tablename__ = "local_holidays"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    reason = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Indexes for range lookups
    __table_args__ = (
        Index("ix_local_holidays_range", "start_date", "end_date"),
    )

    def __repr__(self):
        return f"<LocalHoliday(name={self.name}, {self.start_date}..{self.end_date})>"
