"""POST /v1/landlord/tenants/screening and GET .../{tenant_id}/screenings"""

import logging
import time
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from tenant_insights.api.dependencies import get_owner_id, get_request_id, get_scoring_engine
from tenant_insights.api.v1.schemas import (
    ScreeningHistoryItem,
    ScreeningRecord,
    ScreeningRequest,
    ScreeningResponse,
    UnitSchema,
)
from tenant_insights.domain.engine import RiskScoringEngine
from tenant_insights.domain.exceptions import ScreeningProviderError
from tenant_insights.infrastructure.database.repositories import (
    ScreeningRepository,
    TenantRepository,
    UnitRepository,
    to_unit_info,
)
from tenant_insights.infrastructure.database.session import get_db
from tenant_insights.infrastructure.observability.logging import log_screening
from tenant_insights.infrastructure.observability.metrics import record_screening

router = APIRouter()


@router.post("/landlord/tenants/screening", response_model=ScreeningResponse)
def run_tenant_screening(
    request_body: ScreeningRequest,
    request: Request,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    engine: RiskScoringEngine = Depends(get_scoring_engine),
):
    """
    Screen a tenant for one of the landlord's units.

    Flow:
    1. Verify the tenant and unit are visible to the landlord
    2. Fetch checks from the screening provider and score them
    3. Upsert the (tenant, unit) screening row
    4. Return the outcome with tier-specific recommendations
    """
    start_time = time.time()
    request_id = get_request_id(request)

    records = TenantRepository(db).get_for_owner(owner_id, request_body.tenant_id)
    unit = UnitRepository(db).get_for_owner(owner_id, request_body.unit_id)
    if records is None or unit is None:
        raise HTTPException(status_code=404, detail="Tenant or unit not found or not accessible")

    try:
        result = engine.screen(records.profile(), to_unit_info(unit))

        screening = ScreeningRepository(db).upsert_screening(
            user=records.user,
            unit=unit,
            result=result,
            now=engine.clock.now(),
        )
        db.commit()

    except ScreeningProviderError as e:
        db.rollback()
        logging.error(f"Screening provider error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Screening service unavailable")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to run tenant screening")

    duration_ms = (time.time() - start_time) * 1000
    record_screening(result.risk_level.value)
    log_screening(
        request_id,
        owner_id,
        request_body.tenant_id,
        request_body.unit_id,
        result.risk_level.value,
        result.risk_score,
        duration_ms,
    )

    return ScreeningResponse(
        message="Tenant screening completed successfully",
        screening=ScreeningRecord(
            id=screening.id,
            tenant_id=screening.tenant_id,
            unit_id=screening.unit_id,
            risk_level=screening.screening_risk_level,
            risk_score=screening.risk_score,
            summary=screening.ai_screening_summary,
            status=screening.status,
            created_at=screening.created_at,
            updated_at=screening.updated_at,
        ),
        recommendations=result.recommendations,
    )


@router.get("/landlord/tenants/{tenant_id}/screenings", response_model=List[ScreeningHistoryItem])
def get_screening_results(
    tenant_id: str,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
):
    """All screenings of a tenant on the landlord's units, newest first"""
    screenings = ScreeningRepository(db).get_screenings(owner_id, tenant_id)
    if not screenings:
        raise HTTPException(status_code=404, detail="No screening results found for this tenant")

    return [
        ScreeningHistoryItem(
            id=s.id,
            tenant_id=s.tenant_id,
            unit_id=s.unit_id,
            screening_risk_level=s.screening_risk_level,
            risk_score=s.risk_score,
            ai_screening_summary=s.ai_screening_summary,
            status=s.status,
            created_at=s.created_at,
            updated_at=s.updated_at,
            unit=UnitSchema(id=s.unit.id, label=s.unit.label, property_title=s.unit.property_title),
        )
        for s in screenings
    ]
