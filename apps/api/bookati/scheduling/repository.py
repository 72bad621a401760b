from __future__ import annotations

from datetime import date
from typing import List, Optional, Protocol, Sequence
from uuid import UUID

from bookati.scheduling.types import Assignment, ShiftDefinition, SlotRecord


class SlotRepository(Protocol):
    """Storage the slot generator reads from and writes to."""

    def get_shift_definition(self, shift_id: UUID) -> Optional[ShiftDefinition]:
        """Shift joined with its service, or None."""
        ...

    def list_shift_assignments(self, shift_id: UUID) -> List[Assignment]:
        ...

    def list_service_assignments(self, service_id: UUID) -> List[Assignment]:
        """Every assignment row for the service, shift-bound or not."""
        ...

    def list_active_employee_ids(self, tenant_id: UUID) -> List[UUID]:
        ...

    def list_active_shift_ids(self) -> List[UUID]:
        ...

    def replace_slots(
        self,
        shift_id: UUID,
        start_date: date,
        end_date: date,
        slots: Sequence[SlotRecord],
    ) -> int:
        """
        Atomically delete the shift's slots dated within [start_date, end_date]
        and insert `slots`. Either both happen or neither does.
        Returns the number of slots inserted.
        """
        ...

    def list_slots(self, shift_id: UUID, start_date: date, end_date: date) -> List[SlotRecord]:
        ...
