"""SQLAlchemy ORM models for the landlord/tenant tables the engine reads"""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Platform user; only rows with role TENANT are scored"""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    role = Column(String(16), nullable=False, default="TENANT", index=True)
    first_name = Column(Text, nullable=True)
    last_name = Column(Text, nullable=True)
    email = Column(Text, nullable=False, unique=True)
    phone_number = Column(Text, nullable=True)
    is_disabled = Column(Boolean, nullable=False, default=False)
    monthly_income = Column(Numeric(12, 2), nullable=True)
    employment_status = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    leases = relationship("Lease", back_populates="tenant")

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class Unit(Base):
    """Rentable unit inside a landlord's property"""

    __tablename__ = "unit"

    id = Column(String(36), primary_key=True, default=_uuid)
    owner_id = Column(String(36), nullable=False, index=True)
    property_title = Column(Text, nullable=False, default="")
    label = Column(Text, nullable=False, default="")
    status = Column(String(16), nullable=False, default="AVAILABLE")

    leases = relationship("Lease", back_populates="unit")


class Lease(Base):
    __tablename__ = "lease"

    id = Column(String(36), primary_key=True, default=_uuid)
    tenant_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    unit_id = Column(String(36), ForeignKey("unit.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(16), nullable=False, default="DRAFT")
    rent_amount = Column(Numeric(12, 2), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    tenant = relationship("User", back_populates="leases")
    unit = relationship("Unit", back_populates="leases")
    payments = relationship(
        "Payment",
        back_populates="lease",
        cascade="all, delete-orphan",
        order_by="Payment.due_date.desc()",
    )
    behavior_analyses = relationship(
        "TenantBehaviorAnalysis",
        back_populates="lease",
        cascade="all, delete-orphan",
        order_by="TenantBehaviorAnalysis.updated_at.desc()",
    )


class Payment(Base):
    """Rent payment; timing_status stays NULL until the payment is classified"""

    __tablename__ = "payment"

    id = Column(String(36), primary_key=True, default=_uuid)
    lease_id = Column(String(36), ForeignKey("lease.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(16), nullable=False, default="PENDING")
    timing_status = Column(String(16), nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, server_default=func.now(), onupdate=func.now())

    lease = relationship("Lease", back_populates="payments")


class MaintenanceRequest(Base):
    __tablename__ = "maintenance_request"

    id = Column(String(36), primary_key=True, default=_uuid)
    tenant_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    unit_id = Column(String(36), ForeignKey("unit.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    status = Column(String(16), nullable=False, default="OPEN")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    unit = relationship("Unit")


class TenantBehaviorAnalysis(Base):
    """Stored analysis for a lease; non-empty values override computed ones"""

    __tablename__ = "tenant_behavior_analysis"

    id = Column(String(36), primary_key=True, default=_uuid)
    lease_id = Column(String(36), ForeignKey("lease.id", ondelete="CASCADE"), nullable=False, index=True)
    ai_risk_score = Column(Integer, nullable=True)
    ai_summary = Column(Text, nullable=True)
    ai_category = Column(String(16), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    lease = relationship("Lease", back_populates="behavior_analyses")


class TenantScreening(Base):
    """Latest screening outcome for a (tenant, unit) pair"""

    __tablename__ = "tenant_screening"
    __table_args__ = (UniqueConstraint("tenant_id", "unit_id", name="uq_screening_tenant_unit"),)

    id = Column(String(36), primary_key=True, default=_uuid)
    tenant_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    unit_id = Column(String(36), ForeignKey("unit.id", ondelete="CASCADE"), nullable=False, index=True)
    full_name = Column(Text, nullable=False, default="")
    screening_risk_level = Column(String(16), nullable=True)
    risk_score = Column(Integer, nullable=True)
    ai_screening_summary = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default="PENDING")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    unit = relationship("Unit")
