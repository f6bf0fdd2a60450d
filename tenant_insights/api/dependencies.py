"""Dependency injection for FastAPI endpoints"""

import random
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from tenant_insights.config import settings
from tenant_insights.domain.clock import Clock, SystemClock
from tenant_insights.domain.engine import RiskScoringEngine
from tenant_insights.domain.screening import MockScreeningProvider, ScreeningProvider
from tenant_insights.infrastructure.clients.screening import HttpScreeningProvider


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_owner_id(x_owner_id: Optional[str] = Header(None, alias="X-Owner-ID")) -> str:
    """Landlord id forwarded by the authenticating proxy"""
    if not x_owner_id:
        raise HTTPException(status_code=401, detail="Unauthorized: owner not found")
    return x_owner_id


def get_clock() -> Clock:
    return SystemClock()


@lru_cache(maxsize=1)
def get_mock_screening_provider() -> MockScreeningProvider:
    """One mock per process; a configured seed makes the draw sequence reproducible"""
    return MockScreeningProvider(random.Random(settings.screening_seed))


def get_screening_provider() -> ScreeningProvider:
    """Provide the configured screening provider (random mock unless "http")"""
    if settings.screening_provider == "http":
        return HttpScreeningProvider()
    return get_mock_screening_provider()


def get_scoring_engine(
    clock: Clock = Depends(get_clock),
    screening_provider: ScreeningProvider = Depends(get_screening_provider),
) -> RiskScoringEngine:
    return RiskScoringEngine(clock=clock, screening_provider=screening_provider)
