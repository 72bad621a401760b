import uuid
from sqlalchemy import Column, Integer, Time, Boolean, DateTime, ForeignKey, JSON, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID, ARRAY
from sqlalchemy.sql import func

from bookati.core.database import Base

class Shift(Base):
    __tablename__ = "shifts"

    shift_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(UUID(as_uuid=True), ForeignKey("tenants.tenant_id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(UUID(as_uuid=True), ForeignKey("services.service_id", ondelete="CASCADE"), nullable=False, index=True)

    # 0=Sun ... 6=Sat (matches Postgres EXTRACT(DOW))
    days_of_week = Column(ARRAY(Integer).with_variant(JSON(), "sqlite"), nullable=False)

    # stored already normalized to UTC
    start_time_utc = Column(Time, nullable=False)
    end_time_utc = Column(Time, nullable=False)

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        # array_length only exists on Postgres
        CheckConstraint(
            "array_length(days_of_week, 1) > 0",
            name="ck_shifts_days_not_empty",
        ).ddl_if(dialect="postgresql"),
    )
