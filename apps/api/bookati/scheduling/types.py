"""
Value types passed between the slot generator and its repository.

Everything here is immutable: the generator reads a snapshot of the shift,
its assignments and the tenant roster, then hands a finished list of
SlotRecord values back to the repository in one replace call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import FrozenSet, List, Optional
from uuid import UUID


@dataclass(frozen=True)
class ShiftDefinition:
    """A shift joined with its service."""

    shift_id: UUID
    tenant_id: UUID
    service_id: UUID
    start_time_utc: time
    end_time_utc: time
    days_of_week: FrozenSet[int]  # 0=Sun ... 6=Sat
    duration_minutes: int
    capacity_per_slot: int


@dataclass(frozen=True)
class Assignment:
    employee_id: UUID
    service_id: UUID
    shift_id: Optional[UUID] = None
    duration_minutes: Optional[int] = None
    capacity_per_slot: Optional[int] = None


@dataclass(frozen=True)
class RosterEntry:
    """One employee and the slot size/capacity they are generated with."""

    employee_id: UUID
    duration_minutes: int
    capacity_per_slot: int


@dataclass(frozen=True)
class RosterFlags:
    """Tier guards, computed once per generation call."""

    has_shift_assignments: bool
    has_service_assignments: bool


@dataclass(frozen=True)
class SlotRecord:
    tenant_id: UUID
    service_id: UUID
    shift_id: UUID
    employee_id: UUID
    slot_date: date
    start_time: time
    end_time: time
    start_time_utc: datetime
    end_time_utc: datetime
    total_capacity: int
    available_capacity: int
    booked_count: int = 0
    is_available: bool = True


@dataclass(frozen=True)
class ShiftGenerationOutcome:
    shift_id: UUID
    slots_generated: int = 0
    error: Optional[str] = None


@dataclass
class BulkGenerationResult:
    start_date: date
    end_date: date
    outcomes: List[ShiftGenerationOutcome] = field(default_factory=list)

    @property
    def total_slots(self) -> int:
        return sum(o.slots_generated for o in self.outcomes)

    @property
    def failed(self) -> List[ShiftGenerationOutcome]:
        return [o for o in self.outcomes if o.error is not None]
