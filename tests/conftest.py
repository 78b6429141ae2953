import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from datetime import date, datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from attendance_tracker.main import app
from attendance_tracker.db.session import Base, get_db
from attendance_tracker.core.clock import get_now
from attendance_tracker.core.security import get_password_hash
from attendance_tracker.models.user import User, UserRole
from attendance_tracker.models.attendance import AttendanceRecord
from attendance_tracker.models.leave_application import LeaveApplication, LeaveStatus
from attendance_tracker.models.holiday import LocalHoliday

# Monday, 10:00 local time
DEFAULT_NOW = datetime(2024, 1, 8, 10, 0)


class FrozenClock:
    """Stands in for `get_now`; tests move time by assigning `now`."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def db_session():
    """Fresh in-memory database for each test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def clock():
    return FrozenClock(DEFAULT_NOW)


@pytest.fixture
def client(db_session, clock):
    """Create test client with database and clock overrides"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db_session, email, password, role, start_date, position="Engineer", name="Test User"):
    user = User(
        name=name,
        email=email,
        phone="9876543210",
        password_hash=get_password_hash(password),
        role=role,
        position=position,
        start_date=start_date,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def admin_user(db_session):
    """Create admin user for testing"""
    return make_user(
        db_session, "admin_test@test.com", "admin123", UserRole.ADMIN,
        start_date=date(2023, 1, 2), position="Administrator", name="Admin Test",
    )


@pytest.fixture
def employee_user(db_session):
    """Create employee user for testing; first working day Monday 2024-01-01"""
    return make_user(
        db_session, "employee_test@test.com", "employee123", UserRole.EMPLOYEE,
        start_date=date(2024, 1, 1), name="Employee Test",
    )


@pytest.fixture
def admin_token(client, admin_user):
    """Get admin auth token"""
    response = client.post(
        "/auth/login",
        json={"email": "admin_test@test.com", "password": "admin123"}
    )
    return response.json()["access_token"]


@pytest.fixture
def employee_token(client, employee_user):
    """Get employee auth token"""
    response = client.post(
        "/auth/login",
        json={"email": "employee_test@test.com", "password": "employee123"}
    )
    return response.json()["access_token"]


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def employee_headers(employee_token):
    return {"Authorization": f"Bearer {employee_token}"}


@pytest.fixture
def add_attendance(db_session):
    """Insert attendance rows directly, bypassing the marking window"""
    def _add(user, *days):
        for day in days:
            db_session.add(AttendanceRecord(
                user_id=user.id,
                date=day,
                marked_at=datetime.combine(day, datetime.min.time()).replace(hour=10),
            ))
        db_session.commit()
    return _add


@pytest.fixture
def add_leave(db_session):
    def _add(user, start_date, end_date, status=LeaveStatus.APPROVED, reason="Vacation"):
        leave = LeaveApplication(
            user_id=user.id,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=status,
        )
        db_session.add(leave)
        db_session.commit()
        db_session.refresh(leave)
        return leave
    return _add


@pytest.fixture
def add_holiday(db_session):
    def _add(start_date, end_date, name="Local Festival", reason="Town festival"):
        holiday = LocalHoliday(
            name=name,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
        db_session.add(holiday)
        db_session.commit()
        db_session.refresh(holiday)
        return holiday
    return _add
