"""GET /v1/landlord/tenants/{tenant_id}/behavior-report - comprehensive behavior report"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from tenant_insights.api.dependencies import get_owner_id, get_scoring_engine
from tenant_insights.api.v1.schemas import (
    BehaviorReportResponse,
    DetailedAnalysis,
    LeaseHistorySchema,
    MaintenanceBehaviorSchema,
    PaymentBehaviorSchema,
    ReportSummarySchema,
    ReportTenant,
)
from tenant_insights.domain.engine import RiskScoringEngine
from tenant_insights.domain.exceptions import InvalidRecordError
from tenant_insights.domain.models import BehaviorReport
from tenant_insights.domain.reports import DEFAULT_REPORT_TYPE
from tenant_insights.infrastructure.database.repositories import TenantRepository
from tenant_insights.infrastructure.database.session import get_db
from tenant_insights.infrastructure.observability.metrics import report_counter

router = APIRouter()


def report_response(report: BehaviorReport) -> BehaviorReportResponse:
    """Reshape the domain report into the nested JSON layout the frontend reads"""
    payments = report.payment_behavior
    maintenance = report.maintenance_behavior
    leases = report.lease_history

    return BehaviorReportResponse(
        tenant=ReportTenant(
            id=report.tenant.id,
            full_name=report.tenant.full_name,
            email=report.tenant.email,
            phone_number=report.tenant.phone_number,
            joined_date=report.tenant.joined_at,
        ),
        report_type=report.report_type,
        generated_at=report.generated_at,
        summary=ReportSummarySchema(
            overall_risk_level=report.summary.overall_risk_level.value,
            payment_reliability=report.summary.payment_reliability,
            maintenance_requests_count=report.summary.maintenance_requests_count,
            recent_maintenance_count=report.summary.recent_maintenance_count,
            average_payment_delay=report.summary.average_payment_delay,
        ),
        detailed_analysis=DetailedAnalysis(
            payment_behavior=PaymentBehaviorSchema(
                total_payments=payments.total_payments,
                on_time_payments=payments.on_time_payments,
                late_payments=payments.late_payments,
                advance_payments=payments.advance_payments,
                reliability=payments.reliability,
                trend=payments.trend.value,
            ),
            maintenance_behavior=MaintenanceBehaviorSchema(
                total_requests=maintenance.total_requests,
                recent_requests=maintenance.recent_requests,
                average_response_time=maintenance.average_response_time,
                request_types=maintenance.request_types,
            ),
            lease_history=LeaseHistorySchema(
                total_leases=leases.total_leases,
                active_leases=leases.active_leases,
                average_lease_duration=leases.average_lease_duration,
                renewal_rate=leases.renewal_rate,
            ),
        ),
        recommendations=report.recommendations,
        risk_factors=report.risk_factors,
    )


@router.get("/landlord/tenants/{tenant_id}/behavior-report", response_model=BehaviorReportResponse)
def generate_behavior_report(
    tenant_id: str,
    report_type: str = Query(DEFAULT_REPORT_TYPE, alias="reportType"),
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    engine: RiskScoringEngine = Depends(get_scoring_engine),
):
    """Payment, maintenance and lease history rolled into one report"""
    records = TenantRepository(db).get_for_owner(owner_id, tenant_id)
    if records is None:
        raise HTTPException(status_code=404, detail="Tenant not found or not accessible")

    try:
        report = engine.report(
            records.profile(),
            records.lease_records(),
            records.payment_records(),
            records.maintenance_records(),
            report_type,
        )
    except InvalidRecordError as e:
        logging.warning(f"Invalid tenant records: {e}", extra={"tenant_id": tenant_id})
        raise HTTPException(status_code=422, detail=str(e))

    report_counter.labels(report_type=report.report_type).inc()
    return report_response(report)
