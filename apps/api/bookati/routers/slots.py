from dataclasses import asdict
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bookati.core.config import settings
from bookati.core.database import get_db
from bookati.repositories.slot_repository import SqlAlchemySlotRepository
from bookati.scheduling.errors import InvalidDateRangeError, ShiftNotFoundError
from bookati.schemas.slots import (
    BulkGenerateRequest,
    BulkGenerateResponse,
    ShiftGenerateOutcomeOut,
    SlotGenerateRequest,
    SlotGenerateResponse,
    SlotOut,
)
from bookati.services.slot_generator import SlotGenerator, resolve_date_range

router = APIRouter()


def get_slot_generator(db: Session = Depends(get_db)) -> SlotGenerator:
    return SlotGenerator(SqlAlchemySlotRepository(db))


@router.post("/generate", response_model=SlotGenerateResponse)
def generate_slots(req: SlotGenerateRequest, generator: SlotGenerator = Depends(get_slot_generator)):
    """
    Regenerate slots for one shift. Existing slots of the shift inside the
    range are replaced. slots_generated == 0 is a valid result, not an error.
    """
    start_date, end_date = resolve_date_range(req.start_date, req.end_date, settings.slot_horizon_days)

    try:
        count = generator.generate(req.shift_id, start_date, end_date)
    except InvalidDateRangeError:
        raise HTTPException(status_code=400, detail="end_date must be >= start_date")
    except ShiftNotFoundError:
        raise HTTPException(status_code=404, detail="Shift not found")

    return SlotGenerateResponse(
        shift_id=req.shift_id,
        start_date=start_date,
        end_date=end_date,
        slots_generated=count,
    )


@router.post("/generate/active", response_model=BulkGenerateResponse)
def generate_slots_for_active_shifts(
    req: BulkGenerateRequest,
    generator: SlotGenerator = Depends(get_slot_generator),
):
    """Regenerate every active shift. Per-shift failures are reported, not raised."""
    start_date, end_date = resolve_date_range(req.start_date, req.end_date, settings.slot_horizon_days)

    try:
        result = generator.generate_for_active_shifts(start_date, end_date)
    except InvalidDateRangeError:
        raise HTTPException(status_code=400, detail="end_date must be >= start_date")

    return BulkGenerateResponse(
        start_date=result.start_date,
        end_date=result.end_date,
        total_slots=result.total_slots,
        shifts=[
            ShiftGenerateOutcomeOut(shift_id=o.shift_id, slots_generated=o.slots_generated, error=o.error)
            for o in result.outcomes
        ],
    )


@router.get("/shift/{shift_id}", response_model=list[SlotOut])
def list_shift_slots(
    shift_id: UUID,
    start_date: date = Query(...),
    end_date: date = Query(...),
    generator: SlotGenerator = Depends(get_slot_generator),
):
    try:
        slots = generator.list_slots(shift_id, start_date, end_date)
    except InvalidDateRangeError:
        raise HTTPException(status_code=400, detail="end_date must be >= start_date")
    except ShiftNotFoundError:
        raise HTTPException(status_code=404, detail="Shift not found")

    return [SlotOut(**asdict(s)) for s in slots]
