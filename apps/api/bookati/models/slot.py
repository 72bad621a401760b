import uuid
from sqlalchemy import Column, Date, Integer, Time, Boolean, DateTime, ForeignKey, Index, UniqueConstraint, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from bookati.core.database import Base

from bookati.models.tenant import Tenant  # noqa: F401
from bookati.models.service import Service  # noqa: F401
from bookati.models.shift import Shift  # noqa: F401
from bookati.models.user import User  # noqa: F401


class Slot(Base):
    __tablename__ = "slots"

    slot_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    tenant_id = Column(UUID(as_uuid=True), ForeignKey("tenants.tenant_id", ondelete="CASCADE"), nullable=False)
    service_id = Column(UUID(as_uuid=True), ForeignKey("services.service_id", ondelete="CASCADE"), nullable=False)
    shift_id = Column(UUID(as_uuid=True), ForeignKey("shifts.shift_id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(UUID(as_uuid=True), ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)

    slot_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    start_time_utc = Column(DateTime(timezone=True), nullable=False)
    end_time_utc = Column(DateTime(timezone=True), nullable=False)

    total_capacity = Column(Integer, nullable=False)
    available_capacity = Column(Integer, nullable=False)
    booked_count = Column(Integer, nullable=False, default=0)
    is_available = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("shift_id", "employee_id", "slot_date", "start_time", name="uq_slots_shift_employee_date_start"),
        Index("ix_slots_shift_date", "shift_id", "slot_date"),
        CheckConstraint("total_capacity > 0", name="ck_slots_total_capacity_positive"),
        CheckConstraint("available_capacity >= 0", name="ck_slots_available_capacity_nonneg"),
        CheckConstraint("booked_count >= 0", name="ck_slots_booked_count_nonneg"),
    )
