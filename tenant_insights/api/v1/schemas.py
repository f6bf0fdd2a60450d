"""Pydantic schemas for API request/response validation (camelCase on the wire)"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, serializes as camelCase"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UnitSchema(CamelModel):
    id: str
    label: str
    property_title: str


class LeaseSchema(CamelModel):
    id: str
    status: str
    rent_amount: Optional[Decimal] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    unit: UnitSchema


class BehaviorAnalysisSummary(CamelModel):
    """Behavior block shown on the landlord's tenant list"""

    risk_level: str
    payment_reliability: int
    total_payments: int
    on_time_payments: int
    maintenance_requests_count: int
    recent_maintenance_count: int
    has_frequent_complaints: bool
    ai_risk_score: int
    ai_summary: str
    last_analysis_date: Optional[datetime] = None


class BehaviorAnalysisDetail(CamelModel):
    """Behavior block shown on the tenant detail page"""

    overall_risk_level: str
    payment_risk_level: str
    maintenance_risk_level: str
    payment_reliability: int
    total_payments: int
    on_time_payments: int
    late_payments: int
    advance_payments: int
    average_payment_delay: int
    maintenance_requests_count: int
    recent_maintenance_count: int
    has_frequent_complaints: bool
    ai_risk_score: int
    ai_summary: str
    ai_category: str
    last_analysis_date: Optional[datetime] = None


class ScreeningInfo(CamelModel):
    id: str
    screening_risk_level: Optional[str] = None
    ai_screening_summary: Optional[str] = None
    status: str
    created_at: datetime


class TenantListItem(CamelModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str
    email: str
    phone_number: Optional[str] = None
    created_at: datetime
    current_lease: Optional[LeaseSchema] = None
    behavior_analysis: BehaviorAnalysisSummary


class TenantDetailResponse(CamelModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str
    email: str
    phone_number: Optional[str] = None
    created_at: datetime
    current_lease: Optional[LeaseSchema] = None
    leases: List[LeaseSchema]
    behavior_analysis: BehaviorAnalysisDetail
    screening_info: Optional[ScreeningInfo] = None


class StatsOverview(CamelModel):
    total_tenants: int
    active_tenants: int
    overall_payment_reliability: int
    total_maintenance_requests: int
    average_maintenance_per_tenant: float


class RiskDistribution(CamelModel):
    high: int
    medium: int
    low: int


class StatsPerformance(CamelModel):
    average_payment_delay: int
    tenant_retention_rate: float
    screening_completion_rate: float


class TenantStatsResponse(CamelModel):
    overview: StatsOverview
    risk_distribution: RiskDistribution
    performance: StatsPerformance


class ScreeningRequest(CamelModel):
    """Request body for POST /v1/landlord/tenants/screening"""

    tenant_id: str = Field(..., min_length=1, description="Tenant identifier")
    unit_id: str = Field(..., min_length=1, description="Unit the tenant is screened for")


class ScreeningRecord(CamelModel):
    id: str
    tenant_id: str
    unit_id: str
    risk_level: Optional[str] = None
    risk_score: Optional[int] = None
    summary: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class ScreeningResponse(CamelModel):
    message: str
    screening: ScreeningRecord
    recommendations: List[str]


class ScreeningHistoryItem(CamelModel):
    id: str
    tenant_id: str
    unit_id: str
    screening_risk_level: Optional[str] = None
    risk_score: Optional[int] = None
    ai_screening_summary: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime
    unit: UnitSchema


class ReportTenant(CamelModel):
    id: str
    full_name: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
    joined_date: Optional[datetime] = None


class ReportSummarySchema(CamelModel):
    overall_risk_level: str
    payment_reliability: int
    maintenance_requests_count: int
    recent_maintenance_count: int
    average_payment_delay: int


class PaymentBehaviorSchema(CamelModel):
    total_payments: int
    on_time_payments: int
    late_payments: int
    advance_payments: int
    reliability: int
    trend: str


class MaintenanceBehaviorSchema(CamelModel):
    total_requests: int
    recent_requests: int
    average_response_time: int
    request_types: Dict[str, int]


class LeaseHistorySchema(CamelModel):
    total_leases: int
    active_leases: int
    average_lease_duration: int
    renewal_rate: float


class DetailedAnalysis(CamelModel):
    payment_behavior: PaymentBehaviorSchema
    maintenance_behavior: MaintenanceBehaviorSchema
    lease_history: LeaseHistorySchema


class BehaviorReportResponse(CamelModel):
    """Response for GET /v1/landlord/tenants/{tenant_id}/behavior-report"""

    tenant: ReportTenant
    report_type: str
    generated_at: datetime
    summary: ReportSummarySchema
    detailed_analysis: DetailedAnalysis
    recommendations: List[str]
    risk_factors: List[str]
