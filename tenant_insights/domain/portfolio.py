"""Landlord-wide tenant statistics"""

from datetime import datetime
from typing import List

from tenant_insights.domain.models import LeaseStatus, PortfolioStats, RiskLevel, TenantHistory
from tenant_insights.domain.scoring import (
    classify_risk,
    compute_average_payment_delay,
    compute_maintenance_signal,
    compute_payment_reliability,
)
from tenant_insights.utils.math_utils import round_half_up


def _percentage(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


def compute_portfolio_stats(tenants: List[TenantHistory], now: datetime) -> PortfolioStats:
    """
    Summarize every tenant of one landlord.

    Each tenant's tier comes from classify_risk, the same rule used for the
    per-tenant badges.
    """
    total_tenants = len(tenants)
    active_tenants = sum(
        1 for t in tenants if any(lease.status == LeaseStatus.ACTIVE for lease in t.leases)
    )

    all_payments = [p for t in tenants for p in t.payments]
    overall = compute_payment_reliability(all_payments)

    distribution = {level.value.lower(): 0 for level in (RiskLevel.HIGH, RiskLevel.MEDIUM, RiskLevel.LOW)}
    for t in tenants:
        reliability = compute_payment_reliability(t.payments).reliability
        maintenance = compute_maintenance_signal(t.maintenance_requests, now)
        level = classify_risk(reliability, maintenance.total, maintenance.recent_30d)
        distribution[level.value.lower()] += 1

    total_maintenance = sum(len(t.maintenance_requests) for t in tenants)
    average_maintenance = total_maintenance / total_tenants if total_tenants > 0 else 0.0

    return PortfolioStats(
        total_tenants=total_tenants,
        active_tenants=active_tenants,
        overall_payment_reliability=round_half_up(overall.reliability),
        total_maintenance_requests=total_maintenance,
        average_maintenance_per_tenant=round_half_up(average_maintenance * 10) / 10,
        risk_distribution=distribution,
        average_payment_delay=compute_average_payment_delay(all_payments),
        tenant_retention_rate=_percentage(sum(1 for t in tenants if len(t.leases) > 1), total_tenants),
        screening_completion_rate=_percentage(sum(1 for t in tenants if t.screening_count > 0), total_tenants),
    )
