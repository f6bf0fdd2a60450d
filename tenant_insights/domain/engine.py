"""RiskScoringEngine - binds the pure scoring functions to a clock and a screening provider"""

from typing import List, Optional

from tenant_insights.domain.clock import Clock, SystemClock
from tenant_insights.domain.models import (
    BehaviorReport,
    LeaseRecord,
    MaintenanceRecord,
    PaymentRecord,
    PortfolioStats,
    RiskAssessment,
    ScreeningResult,
    TenantHistory,
    TenantProfile,
    UnitInfo,
)
from tenant_insights.domain.portfolio import compute_portfolio_stats
from tenant_insights.domain.reports import DEFAULT_REPORT_TYPE, generate_comprehensive_report
from tenant_insights.domain.scoring import assess_tenant
from tenant_insights.domain.screening import (
    MockScreeningProvider,
    ScreeningProvider,
    simulate_external_screening,
)


class RiskScoringEngine:
    """Single entry point for tenant risk signals used by the API layer"""

    def __init__(
        self,
        clock: Optional[Clock] = None,
        screening_provider: Optional[ScreeningProvider] = None,
    ):
        self.clock = clock or SystemClock()
        self.screening_provider = screening_provider or MockScreeningProvider()

    def assess(
        self,
        payments: List[PaymentRecord],
        maintenance_requests: List[MaintenanceRecord],
    ) -> RiskAssessment:
        return assess_tenant(payments, maintenance_requests, self.clock.now())

    def screen(self, tenant: TenantProfile, unit: UnitInfo) -> ScreeningResult:
        return simulate_external_screening(tenant, unit, self.screening_provider)

    def report(
        self,
        tenant: TenantProfile,
        leases: List[LeaseRecord],
        payments: List[PaymentRecord],
        maintenance_requests: List[MaintenanceRecord],
        report_type: str = DEFAULT_REPORT_TYPE,
    ) -> BehaviorReport:
        return generate_comprehensive_report(
            tenant,
            leases,
            payments,
            maintenance_requests,
            report_type,
            self.clock.now(),
        )

    def portfolio(self, tenants: List[TenantHistory]) -> PortfolioStats:
        return compute_portfolio_stats(tenants, self.clock.now())
