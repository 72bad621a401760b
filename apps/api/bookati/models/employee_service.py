import uuid
from sqlalchemy import Column, Integer, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from bookati.core.database import Base

class EmployeeService(Base):
    """Assignment of an employee to a service, optionally pinned to one shift."""

    __tablename__ = "employee_services"

    assignment_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    tenant_id = Column(UUID(as_uuid=True), ForeignKey("tenants.tenant_id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(UUID(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(UUID(as_uuid=True), ForeignKey("services.service_id", ondelete="CASCADE"), nullable=False, index=True)

    # NULL = works every shift of the service
    shift_id = Column(UUID(as_uuid=True), ForeignKey("shifts.shift_id", ondelete="CASCADE"), nullable=True, index=True)

    # Per-employee overrides; NULL falls back to the service values
    duration_minutes = Column(Integer, nullable=True)
    capacity_per_slot = Column(Integer, nullable=True)

    # Rows inserted in one transaction share created_at
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "duration_minutes IS NULL OR duration_minutes > 0",
            name="ck_employee_services_duration_positive",
        ),
        CheckConstraint(
            "capacity_per_slot IS NULL OR capacity_per_slot > 0",
            name="ck_employee_services_capacity_positive",
        ),
    )
