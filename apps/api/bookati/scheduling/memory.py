from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Dict, FrozenSet, List, Optional, Sequence
from uuid import UUID, uuid4

from bookati.scheduling.types import Assignment, ShiftDefinition, SlotRecord


@dataclass(frozen=True)
class _Employee:
    employee_id: UUID
    tenant_id: UUID
    is_active: bool = True
    is_employee: bool = True


@dataclass(frozen=True)
class _Shift:
    shift_id: UUID
    tenant_id: UUID
    service_id: UUID
    start_time_utc: time
    end_time_utc: time
    days_of_week: FrozenSet[int]
    is_active: bool = True


@dataclass(frozen=True)
class _Service:
    service_id: UUID
    tenant_id: UUID
    duration_minutes: int
    capacity_per_slot: int


class InMemorySlotRepository:
    """
    Dict-backed SlotRepository.

    replace_slots builds the complete new slot list before swapping it in,
    so a failure while preparing the new state leaves the old slots intact.
    """

    def __init__(self):
        self.services: Dict[UUID, _Service] = {}
        self.shifts: Dict[UUID, _Shift] = {}
        self.employees: List[_Employee] = []
        self.assignments: List[Assignment] = []
        self.slots: List[SlotRecord] = []
        self.replace_calls = 0

    # ---------- fixture helpers ----------
    def add_service(self, tenant_id: UUID, duration_minutes: int, capacity_per_slot: int = 1) -> UUID:
        service_id = uuid4()
        self.services[service_id] = _Service(service_id, tenant_id, duration_minutes, capacity_per_slot)
        return service_id

    def add_shift(
        self,
        service_id: UUID,
        start_time_utc: time,
        end_time_utc: time,
        days_of_week,
        is_active: bool = True,
    ) -> UUID:
        service = self.services[service_id]
        shift_id = uuid4()
        self.shifts[shift_id] = _Shift(
            shift_id=shift_id,
            tenant_id=service.tenant_id,
            service_id=service_id,
            start_time_utc=start_time_utc,
            end_time_utc=end_time_utc,
            days_of_week=frozenset(days_of_week),
            is_active=is_active,
        )
        return shift_id

    def add_employee(self, tenant_id: UUID, is_active: bool = True, is_employee: bool = True) -> UUID:
        employee_id = uuid4()
        self.employees.append(_Employee(employee_id, tenant_id, is_active, is_employee))
        return employee_id

    def assign(
        self,
        employee_id: UUID,
        service_id: UUID,
        shift_id: Optional[UUID] = None,
        duration_minutes: Optional[int] = None,
        capacity_per_slot: Optional[int] = None,
    ) -> Assignment:
        # same rule as ck_employee_services_*_positive
        for name, value in (("duration_minutes", duration_minutes), ("capacity_per_slot", capacity_per_slot)):
            if value is not None and value <= 0:
                raise ValueError(f"{name} override must be positive, got {value}")
        a = Assignment(
            employee_id=employee_id,
            service_id=service_id,
            shift_id=shift_id,
            duration_minutes=duration_minutes,
            capacity_per_slot=capacity_per_slot,
        )
        self.assignments.append(a)
        return a

    # ---------- SlotRepository ----------
    def get_shift_definition(self, shift_id: UUID) -> Optional[ShiftDefinition]:
        sh = self.shifts.get(shift_id)
        if sh is None:
            return None
        srv = self.services[sh.service_id]
        return ShiftDefinition(
            shift_id=sh.shift_id,
            tenant_id=sh.tenant_id,
            service_id=sh.service_id,
            start_time_utc=sh.start_time_utc,
            end_time_utc=sh.end_time_utc,
            days_of_week=sh.days_of_week,
            duration_minutes=srv.duration_minutes,
            capacity_per_slot=srv.capacity_per_slot,
        )

    def list_shift_assignments(self, shift_id: UUID) -> List[Assignment]:
        return [a for a in self.assignments if a.shift_id == shift_id]

    def list_service_assignments(self, service_id: UUID) -> List[Assignment]:
        return [a for a in self.assignments if a.service_id == service_id]

    def list_active_employee_ids(self, tenant_id: UUID) -> List[UUID]:
        return [
            e.employee_id
            for e in self.employees
            if e.tenant_id == tenant_id and e.is_active and e.is_employee
        ]

    def list_active_shift_ids(self) -> List[UUID]:
        return [s.shift_id for s in self.shifts.values() if s.is_active]

    def replace_slots(
        self,
        shift_id: UUID,
        start_date: date,
        end_date: date,
        slots: Sequence[SlotRecord],
    ) -> int:
        kept = [
            s
            for s in self.slots
            if not (s.shift_id == shift_id and start_date <= s.slot_date <= end_date)
        ]
        new_slots = list(slots)
        self.slots = kept + new_slots
        self.replace_calls += 1
        return len(new_slots)

    def list_slots(self, shift_id: UUID, start_date: date, end_date: date) -> List[SlotRecord]:
        rows = [
            s
            for s in self.slots
            if s.shift_id == shift_id and start_date <= s.slot_date <= end_date
        ]
        return sorted(rows, key=lambda s: (s.slot_date, s.start_time, str(s.employee_id)))
