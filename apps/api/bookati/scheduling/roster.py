"""
Employee roster resolution for a shift.

Three candidate sets, highest priority first:

  1. employees assigned to this exact shift
  2. employees assigned to the shift's service with no specific shift
     (only when tier 1 is empty)
  3. every active employee of the tenant
     (only when the service has no assignment rows at all)

The guards are evaluated once into RosterFlags and every candidate function
filters on them, so the three sets can always be computed and unioned.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence
from uuid import UUID

from bookati.scheduling.repository import SlotRepository
from bookati.scheduling.types import Assignment, RosterEntry, RosterFlags, ShiftDefinition


def compute_flags(shift_rows: Sequence[Assignment], service_rows: Sequence[Assignment]) -> RosterFlags:
    return RosterFlags(
        has_shift_assignments=len(shift_rows) > 0,
        has_service_assignments=len(service_rows) > 0,
    )


def _entry(a: Assignment, shift: ShiftDefinition) -> RosterEntry:
    duration = a.duration_minutes if a.duration_minutes is not None else shift.duration_minutes
    capacity = a.capacity_per_slot if a.capacity_per_slot is not None else shift.capacity_per_slot
    return RosterEntry(employee_id=a.employee_id, duration_minutes=duration, capacity_per_slot=capacity)


def shift_candidates(shift_rows: Iterable[Assignment], shift: ShiftDefinition) -> List[RosterEntry]:
    """Tier 1: rows bound to this shift."""
    return [_entry(a, shift) for a in shift_rows if a.shift_id == shift.shift_id]


def service_candidates(
    service_rows: Iterable[Assignment], shift: ShiftDefinition, flags: RosterFlags
) -> List[RosterEntry]:
    """Tier 2: service-wide rows (shift_id is None), gated on tier 1 being empty."""
    return [
        _entry(a, shift)
        for a in service_rows
        if a.shift_id is None
        and a.service_id == shift.service_id
        and not flags.has_shift_assignments
    ]


def tenant_candidates(
    employee_ids: Iterable[UUID], shift: ShiftDefinition, flags: RosterFlags
) -> List[RosterEntry]:
    """Tier 3: all active tenant employees, gated on the service having no rows at all."""
    return [
        RosterEntry(
            employee_id=eid,
            duration_minutes=shift.duration_minutes,
            capacity_per_slot=shift.capacity_per_slot,
        )
        for eid in employee_ids
        if not flags.has_shift_assignments and not flags.has_service_assignments
    ]


def union_roster(*candidate_sets: Iterable[RosterEntry]) -> List[RosterEntry]:
    """Set union keyed on employee_id; the first entry seen for an employee wins."""
    seen: set[UUID] = set()
    roster: List[RosterEntry] = []
    for candidates in candidate_sets:
        for entry in candidates:
            if entry.employee_id in seen:
                continue
            seen.add(entry.employee_id)
            roster.append(entry)
    return roster


def resolve_roster(repo: SlotRepository, shift: ShiftDefinition) -> List[RosterEntry]:
    shift_rows = repo.list_shift_assignments(shift.shift_id)
    service_rows = repo.list_service_assignments(shift.service_id)
    flags = compute_flags(shift_rows, service_rows)

    return union_roster(
        shift_candidates(shift_rows, shift),
        service_candidates(service_rows, shift, flags),
        tenant_candidates(repo.list_active_employee_ids(shift.tenant_id), shift, flags),
    )
