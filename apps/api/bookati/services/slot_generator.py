"""
Slot generator.

Expands a recurring weekly shift into concrete bookable slots:

  - roster is resolved once per call (shift assignments -> service
    assignments -> all active tenant employees)
  - every date in range whose weekday is in the shift's days_of_week gets
    back-to-back windows of the slot duration for each rostered employee
  - existing slots for the shift in the same date range are replaced in a
    single repository call
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional
from uuid import UUID

from bookati.scheduling.errors import InvalidDateRangeError, ShiftNotFoundError
from bookati.scheduling.repository import SlotRepository
from bookati.scheduling.roster import resolve_roster
from bookati.scheduling.slots import build_slots, matching_dates
from bookati.scheduling.types import BulkGenerationResult, ShiftGenerationOutcome, SlotRecord

logger = logging.getLogger(__name__)


def resolve_date_range(
    start_date: Optional[date],
    end_date: Optional[date],
    horizon_days: int,
) -> tuple[date, date]:
    """Fill in missing bounds: start defaults to today (UTC), end to start + horizon."""
    if start_date is None:
        start_date = datetime.now(timezone.utc).date()
    if end_date is None:
        end_date = start_date + timedelta(days=horizon_days)
    return start_date, end_date


class SlotGenerator:
    def __init__(self, repo: SlotRepository):
        self.repo = repo

    def generate(self, shift_id: UUID, start_date: date, end_date: date) -> int:
        """
        Regenerate slots for one shift over [start_date, end_date].
        Returns the number of slots inserted. Raises ShiftNotFoundError
        before touching any existing slot.
        """
        if end_date < start_date:
            raise InvalidDateRangeError(start_date, end_date)

        shift = self.repo.get_shift_definition(shift_id)
        if shift is None:
            raise ShiftNotFoundError(shift_id)

        roster = resolve_roster(self.repo, shift)
        if not roster:
            logger.warning(f"No employees available for shift {shift_id} (service {shift.service_id})")

        dates = matching_dates(start_date, end_date, shift.days_of_week)
        slots = build_slots(shift, roster, dates)

        count = self.repo.replace_slots(shift_id, start_date, end_date, slots)

        logger.info(
            f"Generated {count} slots for shift {shift_id} "
            f"({start_date}..{end_date}, {len(dates)} dates, {len(roster)} employees)"
        )
        if count == 0 and roster:
            logger.warning(f"Shift {shift_id} produced 0 slots for {start_date}..{end_date}")
        return count

    def generate_for_active_shifts(self, start_date: date, end_date: date) -> BulkGenerationResult:
        """Regenerate every active shift; a failing shift is recorded and skipped."""
        if end_date < start_date:
            raise InvalidDateRangeError(start_date, end_date)

        result = BulkGenerationResult(start_date=start_date, end_date=end_date)
        shift_ids = self.repo.list_active_shift_ids()
        logger.info(f"Regenerating slots for {len(shift_ids)} active shifts ({start_date}..{end_date})")

        for shift_id in shift_ids:
            try:
                count = self.generate(shift_id, start_date, end_date)
            except Exception as e:
                logger.exception(f"Slot generation failed for shift {shift_id}")
                result.outcomes.append(ShiftGenerationOutcome(shift_id=shift_id, error=str(e)))
                continue
            result.outcomes.append(ShiftGenerationOutcome(shift_id=shift_id, slots_generated=count))

        logger.info(
            f"Bulk regeneration done: {result.total_slots} slots, "
            f"{len(result.failed)} of {len(shift_ids)} shifts failed"
        )
        return result

    def list_slots(self, shift_id: UUID, start_date: date, end_date: date) -> List[SlotRecord]:
        if end_date < start_date:
            raise InvalidDateRangeError(start_date, end_date)
        if self.repo.get_shift_definition(shift_id) is None:
            raise ShiftNotFoundError(shift_id)
        return self.repo.list_slots(shift_id, start_date, end_date)
