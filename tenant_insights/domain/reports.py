"""Comprehensive tenant behavior report"""

from collections import Counter
from datetime import datetime, timezone
from typing import Dict, List

from tenant_insights.domain.models import (
    BehaviorReport,
    LeaseHistory,
    LeaseRecord,
    LeaseStatus,
    MaintenanceBehavior,
    MaintenanceRecord,
    MaintenanceStatus,
    PaymentBehavior,
    PaymentRecord,
    PaymentTrend,
    ReportSummary,
    TenantProfile,
)
from tenant_insights.domain.scoring import (
    classify_risk,
    compute_average_payment_delay,
    compute_maintenance_signal,
    compute_payment_reliability,
    is_on_time,
)
from tenant_insights.utils.date_utils import days_between_ceil, to_utc
from tenant_insights.utils.math_utils import mean_rounded, round_half_up

DEFAULT_REPORT_TYPE = "comprehensive"
TREND_WINDOW = 3

# Checked in this order; the first category with a matching keyword wins
MAINTENANCE_KEYWORDS = (
    ("plumbing", ("plumb", "water", "toilet")),
    ("electrical", ("electrical", "power", "outlet")),
    ("hvac", ("hvac", "air", "heat")),
    ("emergency", ("emergency", "urgent")),
)
GENERAL_CATEGORY = "general"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _newest_first(payments: List[PaymentRecord]) -> List[PaymentRecord]:
    return sorted(payments, key=lambda p: to_utc(p.due_date) or _EPOCH, reverse=True)


def calculate_payment_trend(payments: List[PaymentRecord]) -> PaymentTrend:
    """Compare on-time count of the 3 newest payments with the 3 before them"""
    if len(payments) < TREND_WINDOW:
        return PaymentTrend.INSUFFICIENT_DATA

    ordered = _newest_first(payments)
    recent_on_time = sum(1 for p in ordered[:TREND_WINDOW] if is_on_time(p))
    older_on_time = sum(1 for p in ordered[TREND_WINDOW:TREND_WINDOW * 2] if is_on_time(p))

    if recent_on_time > older_on_time:
        return PaymentTrend.IMPROVING
    if recent_on_time < older_on_time:
        return PaymentTrend.DECLINING
    return PaymentTrend.STABLE


def categorize_maintenance_request(description: str | None) -> str:
    text = (description or "").lower()
    for category, keywords in MAINTENANCE_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return GENERAL_CATEGORY


def categorize_maintenance_requests(requests: List[MaintenanceRecord]) -> Dict[str, int]:
    """Keyword-based request counts; every category is present, even at 0"""
    counts = Counter(categorize_maintenance_request(r.description) for r in requests)
    categories = [name for name, _ in MAINTENANCE_KEYWORDS] + [GENERAL_CATEGORY]
    return {name: counts.get(name, 0) for name in categories}


def calculate_average_maintenance_response_time(requests: List[MaintenanceRecord]) -> int:
    """Mean days from creation to last update across RESOLVED requests"""
    durations = [
        days_between_ceil(r.created_at, r.updated_at) or 0
        for r in requests
        if r.status == MaintenanceStatus.RESOLVED
    ]
    return mean_rounded(durations)


def calculate_average_lease_duration(leases: List[LeaseRecord], now: datetime) -> int:
    """Mean lease length in days; open-ended leases run until now"""
    durations = [
        days_between_ceil(lease.start_date, lease.end_date or now) or 0
        for lease in leases
    ]
    return mean_rounded(durations)


def calculate_renewal_rate(leases: List[LeaseRecord]) -> float:
    """
    Percentage of leases that share their unit with another lease.

    Two rows on the same unit are read as a renewal; this is a heuristic.
    """
    if len(leases) <= 1:
        return 0.0

    per_unit = Counter(lease.unit_id for lease in leases)
    renewed = sum(1 for lease in leases if per_unit[lease.unit_id] > 1)
    return (renewed / len(leases)) * 100


def generate_report_recommendations(
    reliability: float, maintenance_total: int, recent_30d: int
) -> List[str]:
    recommendations = []

    if reliability < 70:
        recommendations.append("Implement stricter payment monitoring and reminders")
        recommendations.append("Consider requiring automatic payment setup")

    if maintenance_total > 5:
        recommendations.append("Schedule regular property inspections")
        recommendations.append("Consider implementing maintenance request limits")

    if recent_30d > 2:
        recommendations.append("Investigate recent increase in maintenance requests")
        recommendations.append("Consider tenant education on proper maintenance reporting")

    if reliability >= 90 and maintenance_total <= 1:
        recommendations.append("Consider offering lease renewal incentives")
        recommendations.append("Nominate for tenant of the month program")

    return recommendations


def identify_risk_factors(reliability: float, maintenance_total: int, recent_30d: int) -> List[str]:
    factors = []

    if reliability < 70:
        factors.append("Poor payment history")
    if maintenance_total > 5:
        factors.append("Excessive maintenance requests")
    if recent_30d > 2:
        factors.append("Recent increase in maintenance requests")
    if reliability < 50:
        factors.append("Very poor payment reliability")

    return factors


def generate_comprehensive_report(
    tenant: TenantProfile,
    leases: List[LeaseRecord],
    payments: List[PaymentRecord],
    maintenance_requests: List[MaintenanceRecord],
    report_type: str,
    now: datetime,
) -> BehaviorReport:
    """
    Aggregate every behavior signal into one report.

    Pure function of its inputs: the same records and the same `now` always
    produce the same report.
    """
    now = to_utc(now)
    payment_stats = compute_payment_reliability(payments)
    maintenance = compute_maintenance_signal(maintenance_requests, now)
    average_delay = compute_average_payment_delay(payments)
    reliability = payment_stats.reliability
    rounded_reliability = round_half_up(reliability)

    return BehaviorReport(
        tenant=tenant,
        report_type=report_type or DEFAULT_REPORT_TYPE,
        generated_at=now,
        summary=ReportSummary(
            overall_risk_level=classify_risk(reliability, maintenance.total, maintenance.recent_30d),
            payment_reliability=rounded_reliability,
            maintenance_requests_count=maintenance.total,
            recent_maintenance_count=maintenance.recent_30d,
            average_payment_delay=average_delay,
        ),
        payment_behavior=PaymentBehavior(
            total_payments=payment_stats.total,
            on_time_payments=payment_stats.on_time,
            late_payments=payment_stats.late,
            advance_payments=payment_stats.advance,
            reliability=rounded_reliability,
            trend=calculate_payment_trend(payments),
        ),
        maintenance_behavior=MaintenanceBehavior(
            total_requests=maintenance.total,
            recent_requests=maintenance.recent_30d,
            average_response_time=calculate_average_maintenance_response_time(maintenance_requests),
            request_types=categorize_maintenance_requests(maintenance_requests),
        ),
        lease_history=LeaseHistory(
            total_leases=len(leases),
            active_leases=sum(1 for lease in leases if lease.status == LeaseStatus.ACTIVE),
            average_lease_duration=calculate_average_lease_duration(leases, now),
            renewal_rate=calculate_renewal_rate(leases),
        ),
        recommendations=generate_report_recommendations(
            reliability, maintenance.total, maintenance.recent_30d
        ),
        risk_factors=identify_risk_factors(reliability, maintenance.total, maintenance.recent_30d),
    )
