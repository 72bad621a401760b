import os

# Must be set before bookati.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, time
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bookati.core.database import Base, get_db
from bookati.main import app
from bookati.models.employee_service import EmployeeService
from bookati.models.service import Service
from bookati.models.shift import Shift
from bookati.models.slot import Slot  # noqa: F401
from bookati.models.tenant import Tenant
from bookati.models.user import User, UserRole
from bookati.scheduling.memory import InMemorySlotRepository

# 2026-01-05 is a Monday
MONDAY = date(2026, 1, 5)
FRIDAY = date(2026, 1, 9)
SATURDAY = date(2026, 1, 10)
SUNDAY = date(2026, 1, 11)

WEEKDAYS = (1, 2, 3, 4, 5)


@pytest.fixture
def memory_repo():
    return InMemorySlotRepository()


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


class Seeder:
    """Commits rows one by one so the repository under test sees them."""

    def __init__(self, db):
        self.db = db

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def tenant(self, name: str = "Clinic") -> Tenant:
        return self._save(Tenant(name=name))

    def service(self, tenant: Tenant, duration_minutes: int = 60, capacity_per_slot: int = 3) -> Service:
        return self._save(
            Service(
                tenant_id=tenant.tenant_id,
                name=f"service-{uuid4().hex[:8]}",
                duration_minutes=duration_minutes,
                capacity_per_slot=capacity_per_slot,
            )
        )

    def shift(
        self,
        service: Service,
        start: time = time(9, 0),
        end: time = time(17, 0),
        days=WEEKDAYS,
        is_active: bool = True,
    ) -> Shift:
        return self._save(
            Shift(
                tenant_id=service.tenant_id,
                service_id=service.service_id,
                days_of_week=list(days),
                start_time_utc=start,
                end_time_utc=end,
                is_active=is_active,
            )
        )

    def employee(self, tenant: Tenant, is_active: bool = True, role: UserRole = UserRole.employee) -> User:
        return self._save(
            User(
                tenant_id=tenant.tenant_id,
                full_name=f"user-{uuid4().hex[:8]}",
                role=role,
                is_active=is_active,
            )
        )

    def assign(
        self,
        employee: User,
        service: Service,
        shift: Shift = None,
        duration_minutes: int = None,
        capacity_per_slot: int = None,
    ) -> EmployeeService:
        return self._save(
            EmployeeService(
                tenant_id=service.tenant_id,
                employee_id=employee.user_id,
                service_id=service.service_id,
                shift_id=shift.shift_id if shift is not None else None,
                duration_minutes=duration_minutes,
                capacity_per_slot=capacity_per_slot,
            )
        )


@pytest.fixture
def seed(db_session):
    return Seeder(db_session)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
