from datetime import time
from uuid import uuid4

from bookati.scheduling.roster import (
    compute_flags,
    resolve_roster,
    service_candidates,
    shift_candidates,
    tenant_candidates,
    union_roster,
)
from bookati.scheduling.types import Assignment, RosterEntry, RosterFlags

from conftest import WEEKDAYS


def _setup(repo, duration=60, capacity=3):
    tenant_id = uuid4()
    service_id = repo.add_service(tenant_id, duration_minutes=duration, capacity_per_slot=capacity)
    shift_id = repo.add_shift(service_id, time(9, 0), time(17, 0), WEEKDAYS)
    return tenant_id, service_id, shift_id


def _ids(roster):
    return [e.employee_id for e in roster]


def test_tier_one_wins_over_service_and_tenant(memory_repo):
    tenant_id, service_id, shift_id = _setup(memory_repo)
    pinned = memory_repo.add_employee(tenant_id)
    service_wide = memory_repo.add_employee(tenant_id)
    memory_repo.add_employee(tenant_id)
    memory_repo.assign(pinned, service_id, shift_id=shift_id)
    memory_repo.assign(service_wide, service_id)

    shift = memory_repo.get_shift_definition(shift_id)
    assert _ids(resolve_roster(memory_repo, shift)) == [pinned]


def test_tier_two_when_no_shift_assignments(memory_repo):
    tenant_id, service_id, shift_id = _setup(memory_repo)
    a = memory_repo.add_employee(tenant_id)
    b = memory_repo.add_employee(tenant_id)
    memory_repo.add_employee(tenant_id)
    memory_repo.assign(a, service_id)
    memory_repo.assign(b, service_id)

    shift = memory_repo.get_shift_definition(shift_id)
    assert _ids(resolve_roster(memory_repo, shift)) == [a, b]


def test_tier_three_when_service_has_no_assignments(memory_repo):
    tenant_id, service_id, shift_id = _setup(memory_repo)
    a = memory_repo.add_employee(tenant_id)
    b = memory_repo.add_employee(tenant_id)
    memory_repo.add_employee(tenant_id, is_active=False)
    memory_repo.add_employee(tenant_id, is_employee=False)
    memory_repo.add_employee(uuid4())

    shift = memory_repo.get_shift_definition(shift_id)
    roster = resolve_roster(memory_repo, shift)

    assert _ids(roster) == [a, b]
    assert all(e.duration_minutes == 60 and e.capacity_per_slot == 3 for e in roster)


def test_assignments_to_another_shift_block_tenant_fallback(memory_repo):
    tenant_id, service_id, shift_id = _setup(memory_repo)
    other_shift = memory_repo.add_shift(service_id, time(18, 0), time(20, 0), WEEKDAYS)
    elsewhere = memory_repo.add_employee(tenant_id)
    memory_repo.add_employee(tenant_id)
    memory_repo.assign(elsewhere, service_id, shift_id=other_shift)

    shift = memory_repo.get_shift_definition(shift_id)
    assert resolve_roster(memory_repo, shift) == []


def test_empty_tenant_gives_empty_roster(memory_repo):
    _, _, shift_id = _setup(memory_repo)
    shift = memory_repo.get_shift_definition(shift_id)
    assert resolve_roster(memory_repo, shift) == []


def test_candidate_functions_apply_their_guards(memory_repo):
    tenant_id, service_id, shift_id = _setup(memory_repo)
    shift = memory_repo.get_shift_definition(shift_id)
    emp = uuid4()
    pinned = Assignment(employee_id=emp, service_id=service_id, shift_id=shift_id)
    service_wide = Assignment(employee_id=emp, service_id=service_id)

    assert _ids(shift_candidates([pinned, service_wide], shift)) == [emp]

    blocked = RosterFlags(has_shift_assignments=True, has_service_assignments=True)
    open_ = RosterFlags(has_shift_assignments=False, has_service_assignments=False)
    service_only = RosterFlags(has_shift_assignments=False, has_service_assignments=True)

    assert service_candidates([service_wide], shift, blocked) == []
    assert _ids(service_candidates([service_wide, pinned], shift, service_only)) == [emp]

    assert tenant_candidates([emp], shift, blocked) == []
    assert tenant_candidates([emp], shift, service_only) == []
    assert _ids(tenant_candidates([emp], shift, open_)) == [emp]


def test_compute_flags():
    row = Assignment(employee_id=uuid4(), service_id=uuid4())
    assert compute_flags([], []) == RosterFlags(False, False)
    assert compute_flags([row], [row]) == RosterFlags(True, True)
    assert compute_flags([], [row]) == RosterFlags(False, True)


def test_union_roster_keeps_first_entry_per_employee():
    emp = uuid4()
    other = uuid4()
    first = RosterEntry(employee_id=emp, duration_minutes=30, capacity_per_slot=1)
    dup = RosterEntry(employee_id=emp, duration_minutes=60, capacity_per_slot=5)
    second = RosterEntry(employee_id=other, duration_minutes=60, capacity_per_slot=5)

    assert union_roster([first], [dup, second], []) == [first, second]
    assert union_roster() == []


def test_assignment_overrides_fall_back_to_service_values(memory_repo):
    tenant_id, service_id, shift_id = _setup(memory_repo, duration=60, capacity=3)
    custom = memory_repo.add_employee(tenant_id)
    plain = memory_repo.add_employee(tenant_id)
    partial = memory_repo.add_employee(tenant_id)
    memory_repo.assign(custom, service_id, shift_id=shift_id, duration_minutes=30, capacity_per_slot=1)
    memory_repo.assign(plain, service_id, shift_id=shift_id)
    memory_repo.assign(partial, service_id, shift_id=shift_id, capacity_per_slot=5)

    shift = memory_repo.get_shift_definition(shift_id)
    roster = {e.employee_id: e for e in resolve_roster(memory_repo, shift)}

    assert (roster[custom].duration_minutes, roster[custom].capacity_per_slot) == (30, 1)
    assert (roster[plain].duration_minutes, roster[plain].capacity_per_slot) == (60, 3)
    assert (roster[partial].duration_minutes, roster[partial].capacity_per_slot) == (60, 5)
