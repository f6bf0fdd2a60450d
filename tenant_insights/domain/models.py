"""Domain models - pure Python dataclasses representing records and engine results"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional


class PaymentStatus(str, Enum):
    PAID = "PAID"
    PENDING = "PENDING"


class TimingStatus(str, Enum):
    ONTIME = "ONTIME"
    ADVANCE = "ADVANCE"
    LATE = "LATE"


class MaintenanceStatus(str, Enum):
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"


class LeaseStatus(str, Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    TERMINATED = "TERMINATED"


class RiskLevel(str, Enum):
    """Primary triage tier shown as a badge in landlord views"""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TenantCategory(str, Enum):
    """Descriptive label with its own thresholds, independent of RiskLevel"""

    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    AVERAGE = "AVERAGE"
    HIGH_RISK = "HIGH_RISK"


class PaymentTrend(str, Enum):
    IMPROVING = "IMPROVING"
    DECLINING = "DECLINING"
    STABLE = "STABLE"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"


# --- Input records (read-only snapshots loaded by the caller) ---


@dataclass
class PaymentRecord:
    """Single rent payment; timing_status is None until the payment is classified"""

    amount: Decimal
    status: PaymentStatus
    timing_status: Optional[TimingStatus]
    due_date: Optional[datetime]
    paid_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class MaintenanceRecord:
    """Maintenance request filed by a tenant"""

    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    status: MaintenanceStatus
    description: str = ""


@dataclass
class LeaseRecord:
    start_date: Optional[datetime]
    end_date: Optional[datetime]
    status: LeaseStatus
    unit_id: str


@dataclass
class TenantProfile:
    """Tenant identity plus the declared financials used for screening"""

    id: str
    full_name: str = ""
    email: Optional[str] = None
    phone_number: Optional[str] = None
    joined_at: Optional[datetime] = None
    monthly_income: Optional[Decimal] = None
    employment_status: Optional[str] = None


@dataclass
class UnitInfo:
    id: str
    label: str = ""
    property_title: str = ""


# --- Engine outputs ---


@dataclass
class PaymentReliability:
    """On-time share of all payments (reliability kept unrounded)"""

    reliability: float
    on_time: int
    late: int
    advance: int
    total: int


@dataclass
class MaintenanceSignal:
    total: int
    recent_30d: int
    frequent_complaints: bool


@dataclass
class RiskAssessment:
    """Behavior analysis for one tenant"""

    risk_level: RiskLevel
    payment_risk_level: RiskLevel
    maintenance_risk_level: RiskLevel
    payment_reliability: int  # rounded for presentation
    payments: PaymentReliability
    maintenance: MaintenanceSignal
    average_payment_delay: int
    ai_risk_score: int
    ai_summary: str
    ai_detailed_summary: str
    ai_category: TenantCategory


@dataclass
class ScreeningData:
    """Raw factors returned by a screening provider (True means clean/verified)"""

    credit_score: int
    criminal_background: bool
    eviction_history: bool
    employment_verification: bool
    income_verification: bool


@dataclass
class ScreeningResult:
    risk_level: RiskLevel
    risk_score: int
    summary: str
    status: str
    recommendations: List[str]
    screening_data: ScreeningData


@dataclass
class PaymentBehavior:
    total_payments: int
    on_time_payments: int
    late_payments: int
    advance_payments: int
    reliability: int
    trend: PaymentTrend


@dataclass
class MaintenanceBehavior:
    total_requests: int
    recent_requests: int
    average_response_time: int
    request_types: Dict[str, int]


@dataclass
class LeaseHistory:
    total_leases: int
    active_leases: int
    average_lease_duration: int
    renewal_rate: float


@dataclass
class ReportSummary:
    overall_risk_level: RiskLevel
    payment_reliability: int
    maintenance_requests_count: int
    recent_maintenance_count: int
    average_payment_delay: int


@dataclass
class BehaviorReport:
    tenant: TenantProfile
    report_type: str
    generated_at: datetime
    summary: ReportSummary
    payment_behavior: PaymentBehavior
    maintenance_behavior: MaintenanceBehavior
    lease_history: LeaseHistory
    recommendations: List[str] = field(default_factory=list)
    risk_factors: List[str] = field(default_factory=list)


@dataclass
class TenantHistory:
    """Everything the portfolio statistics need about one tenant"""

    tenant: TenantProfile
    leases: List[LeaseRecord]
    payments: List[PaymentRecord]
    maintenance_requests: List[MaintenanceRecord]
    screening_count: int = 0


@dataclass
class PortfolioStats:
    total_tenants: int
    active_tenants: int
    overall_payment_reliability: int
    total_maintenance_requests: int
    average_maintenance_per_tenant: float
    risk_distribution: Dict[str, int]
    average_payment_delay: int
    tenant_retention_rate: float
    screening_completion_rate: float
