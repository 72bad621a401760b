from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Iterator, List, Tuple

from bookati.scheduling.types import RosterEntry, ShiftDefinition, SlotRecord


def to_minutes(t) -> int:
    if hasattr(t, "hour"):
        return int(t.hour) * 60 + int(t.minute)
    s = str(t)
    hh, mm = s[:5].split(":")
    return int(hh) * 60 + int(mm)


def minutes_to_time(m: int) -> time:
    hh, mm = divmod(m, 60)
    return time(hh, mm)


def day_of_week(d: date) -> int:
    """0=Sun ... 6=Sat, same numbering as Postgres EXTRACT(DOW)."""
    return (d.weekday() + 1) % 7


def daterange(start: date, end: date) -> Iterator[date]:
    cur = start
    while cur <= end:
        yield cur
        cur += timedelta(days=1)


def matching_dates(start: date, end: date, days_of_week: Iterable[int]) -> List[date]:
    days = set(days_of_week)
    return [d for d in daterange(start, end) if day_of_week(d) in days]


def carve_windows(start_m: int, end_m: int, duration: int) -> List[Tuple[int, int]]:
    """
    Back-to-back [start, end) windows of `duration` minutes inside the shift.
    A trailing remainder shorter than `duration` is dropped.
    """
    if duration <= 0:
        return []
    windows: List[Tuple[int, int]] = []
    cur = start_m
    while cur + duration <= end_m:
        windows.append((cur, cur + duration))
        cur += duration
    return windows


def build_slots(
    shift: ShiftDefinition,
    roster: Iterable[RosterEntry],
    dates: Iterable[date],
) -> List[SlotRecord]:
    shift_start_m = to_minutes(shift.start_time_utc)
    shift_end_m = to_minutes(shift.end_time_utc)

    roster = list(roster)
    windows_by_duration: dict[int, List[Tuple[int, int]]] = {}

    slots: List[SlotRecord] = []
    for d in dates:
        for entry in roster:
            windows = windows_by_duration.get(entry.duration_minutes)
            if windows is None:
                windows = carve_windows(shift_start_m, shift_end_m, entry.duration_minutes)
                windows_by_duration[entry.duration_minutes] = windows

            for s_m, e_m in windows:
                start_t = minutes_to_time(s_m)
                end_t = minutes_to_time(e_m)
                slots.append(
                    SlotRecord(
                        tenant_id=shift.tenant_id,
                        service_id=shift.service_id,
                        shift_id=shift.shift_id,
                        employee_id=entry.employee_id,
                        slot_date=d,
                        start_time=start_t,
                        end_time=end_t,
                        start_time_utc=datetime.combine(d, start_t, tzinfo=timezone.utc),
                        end_time_utc=datetime.combine(d, end_t, tzinfo=timezone.utc),
                        total_capacity=entry.capacity_per_slot,
                        available_capacity=entry.capacity_per_slot,
                    )
                )
    return slots
