"""GET /v1/landlord/tenants[...] - tenant list, statistics and details with behavior analysis"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from tenant_insights.api.dependencies import get_owner_id, get_request_id, get_scoring_engine
from tenant_insights.api.v1.schemas import (
    BehaviorAnalysisDetail,
    BehaviorAnalysisSummary,
    LeaseSchema,
    RiskDistribution,
    ScreeningInfo,
    StatsOverview,
    StatsPerformance,
    TenantDetailResponse,
    TenantListItem,
    TenantStatsResponse,
    UnitSchema,
)
from tenant_insights.domain.engine import RiskScoringEngine
from tenant_insights.domain.exceptions import InvalidRecordError
from tenant_insights.domain.models import RiskAssessment
from tenant_insights.infrastructure.database.models import Lease
from tenant_insights.infrastructure.database.repositories import TenantRecords, TenantRepository
from tenant_insights.infrastructure.database.session import get_db
from tenant_insights.infrastructure.observability.logging import log_assessment
from tenant_insights.infrastructure.observability.metrics import record_assessment

router = APIRouter()


def lease_schema(lease: Optional[Lease]) -> Optional[LeaseSchema]:
    if lease is None:
        return None
    return LeaseSchema(
        id=lease.id,
        status=lease.status,
        rent_amount=lease.rent_amount,
        start_date=lease.start_date,
        end_date=lease.end_date,
        unit=UnitSchema(
            id=lease.unit.id,
            label=lease.unit.label,
            property_title=lease.unit.property_title,
        ),
    )


def _assess(records: TenantRecords, engine: RiskScoringEngine) -> RiskAssessment:
    assessment = engine.assess(records.payment_records(), records.maintenance_records())
    record_assessment(assessment.risk_level.value)
    return assessment


def _stored_overrides(records: TenantRecords, assessment: RiskAssessment, detailed: bool) -> dict:
    """Stored analysis values win when they are set (0 and "" count as unset)"""
    stored = records.stored_analysis
    summary = assessment.ai_detailed_summary if detailed else assessment.ai_summary
    return {
        "ai_risk_score": (stored and stored.ai_risk_score) or assessment.ai_risk_score,
        "ai_summary": (stored and stored.ai_summary) or summary,
        "ai_category": (stored and stored.ai_category) or assessment.ai_category.value,
        "last_analysis_date": stored.updated_at if stored else records.user.updated_at,
    }


@router.get("/landlord/tenants", response_model=List[TenantListItem])
def list_tenants(
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    engine: RiskScoringEngine = Depends(get_scoring_engine),
):
    """
    List every tenant with a lease on the landlord's units.

    Each item carries the short behavior summary and risk badge.
    """
    tenants = TenantRepository(db).list_for_owner(owner_id)

    try:
        items = []
        for records in tenants:
            assessment = _assess(records, engine)
            overrides = _stored_overrides(records, assessment, detailed=False)
            overrides.pop("ai_category")
            user = records.user

            items.append(
                TenantListItem(
                    id=user.id,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    full_name=user.full_name,
                    email=user.email,
                    phone_number=user.phone_number,
                    created_at=user.created_at,
                    current_lease=lease_schema(records.active_lease),
                    behavior_analysis=BehaviorAnalysisSummary(
                        risk_level=assessment.risk_level.value,
                        payment_reliability=assessment.payment_reliability,
                        total_payments=assessment.payments.total,
                        on_time_payments=assessment.payments.on_time,
                        maintenance_requests_count=assessment.maintenance.total,
                        recent_maintenance_count=assessment.maintenance.recent_30d,
                        has_frequent_complaints=assessment.maintenance.frequent_complaints,
                        **overrides,
                    ),
                )
            )
    except InvalidRecordError as e:
        logging.warning(f"Invalid tenant records: {e}", extra={"owner_id": owner_id})
        raise HTTPException(status_code=422, detail=str(e))

    return items


@router.get("/landlord/tenants/stats", response_model=TenantStatsResponse)
def get_tenant_stats(
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    engine: RiskScoringEngine = Depends(get_scoring_engine),
):
    """Portfolio-wide payment, maintenance and risk statistics"""
    tenants = TenantRepository(db).list_for_owner(owner_id)

    try:
        stats = engine.portfolio([records.history() for records in tenants])
    except InvalidRecordError as e:
        logging.warning(f"Invalid tenant records: {e}", extra={"owner_id": owner_id})
        raise HTTPException(status_code=422, detail=str(e))

    return TenantStatsResponse(
        overview=StatsOverview(
            total_tenants=stats.total_tenants,
            active_tenants=stats.active_tenants,
            overall_payment_reliability=stats.overall_payment_reliability,
            total_maintenance_requests=stats.total_maintenance_requests,
            average_maintenance_per_tenant=stats.average_maintenance_per_tenant,
        ),
        risk_distribution=RiskDistribution(**stats.risk_distribution),
        performance=StatsPerformance(
            average_payment_delay=stats.average_payment_delay,
            tenant_retention_rate=stats.tenant_retention_rate,
            screening_completion_rate=stats.screening_completion_rate,
        ),
    )


@router.get("/landlord/tenants/{tenant_id}", response_model=TenantDetailResponse)
def get_tenant_details(
    tenant_id: str,
    request: Request,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    engine: RiskScoringEngine = Depends(get_scoring_engine),
):
    """Full behavior analysis for one tenant plus the latest screening"""
    records = TenantRepository(db).get_for_owner(owner_id, tenant_id)
    if records is None:
        raise HTTPException(status_code=404, detail="Tenant not found or not accessible")

    try:
        assessment = _assess(records, engine)
    except InvalidRecordError as e:
        logging.warning(f"Invalid tenant records: {e}", extra={"tenant_id": tenant_id})
        raise HTTPException(status_code=422, detail=str(e))

    log_assessment(
        get_request_id(request),
        owner_id,
        tenant_id,
        assessment.risk_level.value,
        assessment.payment_reliability,
    )

    user = records.user
    screening = records.latest_screening

    return TenantDetailResponse(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=user.full_name,
        email=user.email,
        phone_number=user.phone_number,
        created_at=user.created_at,
        current_lease=lease_schema(records.active_lease),
        leases=[lease_schema(lease) for lease in records.leases],
        behavior_analysis=BehaviorAnalysisDetail(
            overall_risk_level=assessment.risk_level.value,
            payment_risk_level=assessment.payment_risk_level.value,
            maintenance_risk_level=assessment.maintenance_risk_level.value,
            payment_reliability=assessment.payment_reliability,
            total_payments=assessment.payments.total,
            on_time_payments=assessment.payments.on_time,
            late_payments=assessment.payments.late,
            advance_payments=assessment.payments.advance,
            average_payment_delay=assessment.average_payment_delay,
            maintenance_requests_count=assessment.maintenance.total,
            recent_maintenance_count=assessment.maintenance.recent_30d,
            has_frequent_complaints=assessment.maintenance.frequent_complaints,
            **_stored_overrides(records, assessment, detailed=True),
        ),
        screening_info=(
            ScreeningInfo(
                id=screening.id,
                screening_risk_level=screening.screening_risk_level,
                ai_screening_summary=screening.ai_screening_summary,
                status=screening.status,
                created_at=screening.created_at,
            )
            if screening
            else None
        ),
    )
