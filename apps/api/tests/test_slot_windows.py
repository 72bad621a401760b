from datetime import date, datetime, time, timezone
from uuid import uuid4

from bookati.scheduling.slots import (
    build_slots,
    carve_windows,
    day_of_week,
    matching_dates,
    minutes_to_time,
    to_minutes,
)
from bookati.scheduling.types import RosterEntry, ShiftDefinition

from conftest import FRIDAY, MONDAY, SATURDAY, SUNDAY, WEEKDAYS


def _shift(start=time(9, 0), end=time(17, 0), days=WEEKDAYS, duration=60, capacity=3):
    return ShiftDefinition(
        shift_id=uuid4(),
        tenant_id=uuid4(),
        service_id=uuid4(),
        start_time_utc=start,
        end_time_utc=end,
        days_of_week=frozenset(days),
        duration_minutes=duration,
        capacity_per_slot=capacity,
    )


def test_minute_of_day_conversions():
    assert to_minutes(time(9, 30)) == 570
    assert to_minutes("09:30:00") == 570
    assert to_minutes(time(0, 0)) == 0
    assert minutes_to_time(570) == time(9, 30)
    assert minutes_to_time(1439) == time(23, 59)


def test_day_of_week_uses_sunday_zero():
    assert day_of_week(MONDAY) == 1
    assert day_of_week(FRIDAY) == 5
    assert day_of_week(SATURDAY) == 6
    assert day_of_week(SUNDAY) == 0


def test_matching_dates_filters_on_weekday_set():
    assert matching_dates(MONDAY, SUNDAY, WEEKDAYS) == [
        date(2026, 1, 5),
        date(2026, 1, 6),
        date(2026, 1, 7),
        date(2026, 1, 8),
        date(2026, 1, 9),
    ]
    assert matching_dates(MONDAY, SUNDAY, {0, 6}) == [SATURDAY, SUNDAY]
    assert matching_dates(SATURDAY, SUNDAY, WEEKDAYS) == []
    assert matching_dates(MONDAY, MONDAY, {1}) == [MONDAY]


def test_carve_windows_back_to_back():
    windows = carve_windows(540, 1020, 60)
    assert len(windows) == 8
    assert windows[0] == (540, 600)
    assert windows[-1] == (960, 1020)
    assert all(a[1] == b[0] for a, b in zip(windows, windows[1:]))


def test_carve_windows_drops_partial_remainder():
    # 90 minute slots in a 100 minute window
    assert carve_windows(540, 640, 90) == [(540, 630)]


def test_carve_windows_degenerate_inputs():
    assert carve_windows(540, 600, 90) == []
    assert carve_windows(600, 540, 30) == []
    assert carve_windows(0, 100, 0) == []
    assert carve_windows(0, 100, -15) == []


def test_build_slots_fills_times_and_capacity():
    shift = _shift(start=time(9, 0), end=time(11, 0))
    employee_id = uuid4()
    roster = [RosterEntry(employee_id=employee_id, duration_minutes=60, capacity_per_slot=3)]

    slots = build_slots(shift, roster, [MONDAY])

    assert [(s.start_time, s.end_time) for s in slots] == [
        (time(9, 0), time(10, 0)),
        (time(10, 0), time(11, 0)),
    ]
    first = slots[0]
    assert first.employee_id == employee_id
    assert first.shift_id == shift.shift_id
    assert first.tenant_id == shift.tenant_id
    assert first.service_id == shift.service_id
    assert first.slot_date == MONDAY
    assert first.start_time_utc == datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)
    assert first.end_time_utc == datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc)
    assert first.available_capacity == 3
    assert first.total_capacity == 3
    assert first.booked_count == 0
    assert first.is_available is True


def test_build_slots_uses_each_entry_duration():
    shift = _shift(start=time(9, 0), end=time(10, 0))
    roster = [
        RosterEntry(employee_id=uuid4(), duration_minutes=60, capacity_per_slot=1),
        RosterEntry(employee_id=uuid4(), duration_minutes=20, capacity_per_slot=2),
    ]

    slots = build_slots(shift, roster, [MONDAY, FRIDAY])

    by_employee = {}
    for s in slots:
        by_employee.setdefault(s.employee_id, []).append(s)
    counts = sorted(len(v) for v in by_employee.values())
    assert counts == [2, 6]
