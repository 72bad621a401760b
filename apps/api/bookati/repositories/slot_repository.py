"""Slot repository - database operations for slot generation"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, select, text
from sqlalchemy.orm import Session

from bookati.models.employee_service import EmployeeService
from bookati.models.service import Service
from bookati.models.shift import Shift
from bookati.models.slot import Slot
from bookati.models.user import User, UserRole
from bookati.scheduling.types import Assignment, ShiftDefinition, SlotRecord

logger = logging.getLogger(__name__)


def _to_assignment(row: EmployeeService) -> Assignment:
    return Assignment(
        employee_id=row.employee_id,
        service_id=row.service_id,
        shift_id=row.shift_id,
        duration_minutes=row.duration_minutes,
        capacity_per_slot=row.capacity_per_slot,
    )


def _to_record(row: Slot) -> SlotRecord:
    return SlotRecord(
        tenant_id=row.tenant_id,
        service_id=row.service_id,
        shift_id=row.shift_id,
        employee_id=row.employee_id,
        slot_date=row.slot_date,
        start_time=row.start_time,
        end_time=row.end_time,
        start_time_utc=row.start_time_utc,
        end_time_utc=row.end_time_utc,
        total_capacity=row.total_capacity,
        available_capacity=row.available_capacity,
        booked_count=row.booked_count,
        is_available=row.is_available,
    )


class SqlAlchemySlotRepository:
    """SlotRepository over a SQLAlchemy session. replace_slots commits."""

    def __init__(self, db: Session):
        self.db = db

    def get_shift_definition(self, shift_id: UUID) -> Optional[ShiftDefinition]:
        row = self.db.execute(
            select(
                Shift.shift_id,
                Shift.tenant_id,
                Shift.service_id,
                Shift.start_time_utc,
                Shift.end_time_utc,
                Shift.days_of_week,
                Service.duration_minutes,
                Service.capacity_per_slot,
            )
            .join(Service, Service.service_id == Shift.service_id)
            .where(Shift.shift_id == shift_id)
        ).first()

        if not row:
            return None

        return ShiftDefinition(
            shift_id=row.shift_id,
            tenant_id=row.tenant_id,
            service_id=row.service_id,
            start_time_utc=row.start_time_utc,
            end_time_utc=row.end_time_utc,
            days_of_week=frozenset(int(d) for d in (row.days_of_week or [])),
            duration_minutes=int(row.duration_minutes),
            capacity_per_slot=int(row.capacity_per_slot or 1),
        )

    def list_shift_assignments(self, shift_id: UUID) -> List[Assignment]:
        """
        Oldest first. Rows committed in the same transaction share created_at,
        so among those the order is by assignment_id, which is arbitrary.
        """
        rows = (
            self.db.execute(
                select(EmployeeService)
                .where(EmployeeService.shift_id == shift_id)
                .order_by(EmployeeService.created_at, EmployeeService.assignment_id)
            )
            .scalars()
            .all()
        )
        return [_to_assignment(r) for r in rows]

    def list_service_assignments(self, service_id: UUID) -> List[Assignment]:
        rows = (
            self.db.execute(
                select(EmployeeService)
                .where(EmployeeService.service_id == service_id)
                .order_by(EmployeeService.created_at, EmployeeService.assignment_id)
            )
            .scalars()
            .all()
        )
        return [_to_assignment(r) for r in rows]

    def list_active_employee_ids(self, tenant_id: UUID) -> List[UUID]:
        return list(
            self.db.execute(
                select(User.user_id)
                .where(
                    and_(
                        User.tenant_id == tenant_id,
                        User.role == UserRole.employee,
                        User.is_active == True,  # noqa: E712
                    )
                )
                .order_by(User.created_at, User.user_id)
            )
            .scalars()
            .all()
        )

    def list_active_shift_ids(self) -> List[UUID]:
        return list(
            self.db.execute(
                select(Shift.shift_id)
                .where(Shift.is_active == True)  # noqa: E712
                .order_by(Shift.created_at, Shift.shift_id)
            )
            .scalars()
            .all()
        )

    def replace_slots(
        self,
        shift_id: UUID,
        start_date: date,
        end_date: date,
        slots: Sequence[SlotRecord],
    ) -> int:
        try:
            # Serialize regenerations of the same shift (released at commit/rollback)
            if self.db.get_bind().dialect.name == "postgresql":
                self.db.execute(
                    text("SELECT pg_advisory_xact_lock(hashtext(:key))"),
                    {"key": str(shift_id)},
                )

            self.db.execute(
                delete(Slot).where(
                    and_(
                        Slot.shift_id == shift_id,
                        Slot.slot_date >= start_date,
                        Slot.slot_date <= end_date,
                    )
                )
            )

            self.db.add_all(
                Slot(
                    tenant_id=s.tenant_id,
                    service_id=s.service_id,
                    shift_id=s.shift_id,
                    employee_id=s.employee_id,
                    slot_date=s.slot_date,
                    start_time=s.start_time,
                    end_time=s.end_time,
                    start_time_utc=s.start_time_utc,
                    end_time_utc=s.end_time_utc,
                    total_capacity=s.total_capacity,
                    available_capacity=s.available_capacity,
                    booked_count=s.booked_count,
                    is_available=s.is_available,
                )
                for s in slots
            )
            self.db.commit()
        except Exception:
            logger.error(f"Replacing slots for shift {shift_id} failed, rolling back")
            self.db.rollback()
            raise

        return len(slots)

    def list_slots(self, shift_id: UUID, start_date: date, end_date: date) -> List[SlotRecord]:
        rows = (
            self.db.execute(
                select(Slot)
                .where(
                    and_(
                        Slot.shift_id == shift_id,
                        Slot.slot_date >= start_date,
                        Slot.slot_date <= end_date,
                    )
                )
                .order_by(Slot.slot_date, Slot.start_time, Slot.employee_id)
            )
            .scalars()
            .all()
        )
        return [_to_record(r) for r in rows]
