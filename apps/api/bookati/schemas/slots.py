from datetime import date, datetime, time
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class SlotGenerateRequest(BaseModel):
    shift_id: UUID
    start_date: Optional[date] = None  # defaults to today (UTC)
    end_date: Optional[date] = None  # defaults to start_date + SLOT_HORIZON_DAYS


class SlotGenerateResponse(BaseModel):
    shift_id: UUID
    start_date: date
    end_date: date
    slots_generated: int


class BulkGenerateRequest(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ShiftGenerateOutcomeOut(BaseModel):
    shift_id: UUID
    slots_generated: int
    error: Optional[str] = None


class BulkGenerateResponse(BaseModel):
    start_date: date
    end_date: date
    total_slots: int
    shifts: list[ShiftGenerateOutcomeOut]


class SlotOut(BaseModel):
    shift_id: UUID
    service_id: UUID
    employee_id: Optional[UUID] = None
    slot_date: date
    start_time: time
    end_time: time
    start_time_utc: datetime
    end_time_utc: datetime
    total_capacity: int
    available_capacity: int
    booked_count: int
    is_available: bool
