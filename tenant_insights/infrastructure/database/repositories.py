"""Data access layer - landlord-scoped queries mapped to domain records"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from tenant_insights.domain.exceptions import InvalidRecordError
from tenant_insights.domain.models import (
    LeaseRecord,
    LeaseStatus,
    MaintenanceRecord,
    MaintenanceStatus,
    PaymentRecord,
    PaymentStatus,
    ScreeningResult,
    TenantHistory,
    TenantProfile,
    TimingStatus,
    UnitInfo,
)
from tenant_insights.infrastructure.database.models import (
    Lease,
    MaintenanceRequest,
    Payment,
    TenantBehaviorAnalysis,
    TenantScreening,
    Unit,
    User,
)

TENANT_ROLE = "TENANT"


def _enum(enum_cls, value, field_name: str):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError as e:
        raise InvalidRecordError(f"Unknown {field_name}: {value!r}") from e


def to_tenant_profile(user: User) -> TenantProfile:
    return TenantProfile(
        id=user.id,
        full_name=user.full_name,
        email=user.email,
        phone_number=user.phone_number,
        joined_at=user.created_at,
        monthly_income=user.monthly_income,
        employment_status=user.employment_status,
    )


def to_unit_info(unit: Unit) -> UnitInfo:
    return UnitInfo(id=unit.id, label=unit.label, property_title=unit.property_title)


def to_payment_record(payment: Payment) -> PaymentRecord:
    return PaymentRecord(
        amount=payment.amount or 0,
        status=_enum(PaymentStatus, payment.status, "payment status"),
        timing_status=_enum(TimingStatus, payment.timing_status, "timing status"),
        due_date=payment.due_date,
        paid_at=payment.paid_at,
        updated_at=payment.updated_at,
    )


def to_maintenance_record(request: MaintenanceRequest) -> MaintenanceRecord:
    return MaintenanceRecord(
        created_at=request.created_at,
        updated_at=request.updated_at,
        status=_enum(MaintenanceStatus, request.status, "maintenance status"),
        description=request.description or "",
    )


def to_lease_record(lease: Lease) -> LeaseRecord:
    return LeaseRecord(
        start_date=lease.start_date,
        end_date=lease.end_date,
        status=_enum(LeaseStatus, lease.status, "lease status"),
        unit_id=lease.unit_id,
    )


@dataclass
class TenantRecords:
    """One tenant's rows on a single landlord's units, plus their domain views"""

    user: User
    leases: List[Lease]
    maintenance_requests: List[MaintenanceRequest]
    screenings: List[TenantScreening]

    @property
    def active_lease(self) -> Optional[Lease]:
        return next((lease for lease in self.leases if lease.status == LeaseStatus.ACTIVE.value), None)

    @property
    def stored_analysis(self) -> Optional[TenantBehaviorAnalysis]:
        lease = self.active_lease
        if lease is None or not lease.behavior_analyses:
            return None
        return lease.behavior_analyses[0]

    @property
    def latest_screening(self) -> Optional[TenantScreening]:
        return self.screenings[0] if self.screenings else None

    def profile(self) -> TenantProfile:
        return to_tenant_profile(self.user)

    def lease_records(self) -> List[LeaseRecord]:
        return [to_lease_record(lease) for lease in self.leases]

    def payment_records(self) -> List[PaymentRecord]:
        return [to_payment_record(p) for lease in self.leases for p in lease.payments]

    def maintenance_records(self) -> List[MaintenanceRecord]:
        return [to_maintenance_record(r) for r in self.maintenance_requests]

    def history(self) -> TenantHistory:
        return TenantHistory(
            tenant=self.profile(),
            leases=self.lease_records(),
            payments=self.payment_records(),
            maintenance_requests=self.maintenance_records(),
            screening_count=len(self.screenings),
        )


class TenantRepository:
    """Repository for tenants as seen by one landlord"""

    def __init__(self, db: Session):
        self.db = db

    def _owner_tenants_query(self, owner_id: str):
        return (
            self.db.query(User)
            .join(Lease, Lease.tenant_id == User.id)
            .join(Unit, Unit.id == Lease.unit_id)
            .filter(User.role == TENANT_ROLE, Unit.owner_id == owner_id)
            .distinct()
        )

    def _load_records(self, owner_id: str, user: User) -> TenantRecords:
        leases = (
            self.db.query(Lease)
            .join(Unit, Unit.id == Lease.unit_id)
            .filter(Lease.tenant_id == user.id, Unit.owner_id == owner_id)
            .order_by(Lease.created_at.desc())
            .all()
        )
        maintenance = (
            self.db.query(MaintenanceRequest)
            .join(Unit, Unit.id == MaintenanceRequest.unit_id)
            .filter(MaintenanceRequest.tenant_id == user.id, Unit.owner_id == owner_id)
            .order_by(MaintenanceRequest.created_at.desc())
            .all()
        )
        screenings = ScreeningRepository(self.db).get_screenings(owner_id, user.id)
        return TenantRecords(
            user=user,
            leases=leases,
            maintenance_requests=maintenance,
            screenings=screenings,
        )

    def list_for_owner(self, owner_id: str) -> List[TenantRecords]:
        """Enabled tenants holding at least one lease on the owner's units, newest first"""
        users = (
            self._owner_tenants_query(owner_id)
            .filter(User.is_disabled.is_(False))
            .order_by(User.created_at.desc())
            .all()
        )
        return [self._load_records(owner_id, user) for user in users]

    def get_for_owner(self, owner_id: str, tenant_id: str) -> Optional[TenantRecords]:
        user = self._owner_tenants_query(owner_id).filter(User.id == tenant_id).first()
        if user is None:
            return None
        return self._load_records(owner_id, user)


class UnitRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_for_owner(self, owner_id: str, unit_id: str) -> Optional[Unit]:
        return (
            self.db.query(Unit)
            .filter(Unit.id == unit_id, Unit.owner_id == owner_id)
            .first()
        )


class ScreeningRepository:
    """Repository for tenant screenings"""

    def __init__(self, db: Session):
        self.db = db

    def get_screenings(self, owner_id: str, tenant_id: str) -> List[TenantScreening]:
        """Screenings for the tenant on the owner's units, newest first"""
        return (
            self.db.query(TenantScreening)
            .join(Unit, Unit.id == TenantScreening.unit_id)
            .filter(TenantScreening.tenant_id == tenant_id, Unit.owner_id == owner_id)
            .order_by(TenantScreening.created_at.desc())
            .all()
        )

    def upsert_screening(
        self,
        user: User,
        unit: Unit,
        result: ScreeningResult,
        now: datetime,
    ) -> TenantScreening:
        """Create the (tenant, unit) screening row or overwrite its outcome"""
        screening = (
            self.db.query(TenantScreening)
            .filter(TenantScreening.tenant_id == user.id, TenantScreening.unit_id == unit.id)
            .first()
        )
        if screening is None:
            screening = TenantScreening(
                tenant_id=user.id,
                unit_id=unit.id,
                full_name=user.full_name,
                created_at=now,
            )
            self.db.add(screening)

        screening.screening_risk_level = result.risk_level.value
        screening.risk_score = result.risk_score
        screening.ai_screening_summary = result.summary
        screening.status = result.status
        screening.updated_at = now

        self.db.flush()
        return screening
