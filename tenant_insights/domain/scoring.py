"""Risk scoring engine - payment reliability, maintenance signal and risk tiers"""

from datetime import datetime, timedelta
from typing import List

from tenant_insights.domain.models import (
    MaintenanceRecord,
    MaintenanceSignal,
    PaymentRecord,
    PaymentReliability,
    RiskAssessment,
    RiskLevel,
    TimingStatus,
)
from tenant_insights.domain.narrative import (
    categorize_tenant,
    generate_behavior_summary,
    generate_detailed_behavior_summary,
)
from tenant_insights.utils.date_utils import days_between_ceil, to_utc
from tenant_insights.utils.math_utils import mean_rounded, round_half_up

RECENT_WINDOW_DAYS = 30
FREQUENT_COMPLAINT_THRESHOLD = 2

ON_TIME_STATUSES = (TimingStatus.ONTIME, TimingStatus.ADVANCE)


def is_on_time(payment: PaymentRecord) -> bool:
    return payment.timing_status in ON_TIME_STATUSES


def compute_payment_reliability(payments: List[PaymentRecord]) -> PaymentReliability:
    """
    Share of payments made on time or in advance.

    The denominator is every record passed in, PENDING and unclassified ones
    included. Callers that want resolved payments only must filter first.
    """
    total = len(payments)
    on_time = sum(1 for p in payments if is_on_time(p))
    late = sum(1 for p in payments if p.timing_status == TimingStatus.LATE)
    advance = sum(1 for p in payments if p.timing_status == TimingStatus.ADVANCE)

    reliability = (on_time / total) * 100 if total > 0 else 0.0

    return PaymentReliability(
        reliability=reliability,
        on_time=on_time,
        late=late,
        advance=advance,
        total=total,
    )


def compute_average_payment_delay(payments: List[PaymentRecord]) -> int:
    """
    Mean delay in whole days across LATE payments, 0 if there are none.

    paid_at falls back to updated_at when missing. That proxy is only an
    approximation of the real payment date.
    """
    delays = []
    for payment in payments:
        if payment.timing_status != TimingStatus.LATE:
            continue
        settled_at = payment.paid_at or payment.updated_at
        delay = days_between_ceil(payment.due_date, settled_at)
        delays.append(max(0, delay or 0))

    return mean_rounded(delays)


def compute_maintenance_signal(
    requests: List[MaintenanceRecord],
    now: datetime,
    window_days: int = RECENT_WINDOW_DAYS,
) -> MaintenanceSignal:
    """Total requests plus how many were filed within the recency window"""
    cutoff = to_utc(now) - timedelta(days=window_days)

    recent = 0
    for req in requests:
        created_at = to_utc(req.created_at)
        if created_at is not None and created_at > cutoff:
            recent += 1

    return MaintenanceSignal(
        total=len(requests),
        recent_30d=recent,
        frequent_complaints=recent > FREQUENT_COMPLAINT_THRESHOLD,
    )


def classify_risk(reliability: float, maintenance_total: int, recent_30d: int) -> RiskLevel:
    """
    Map behavior signals to a risk tier. First matching rule wins:

    - HIGH:   reliability < 70 or more than 5 requests or more than 2 in 30 days
    - MEDIUM: reliability < 85 or more than 2 requests or more than 1 in 30 days
    - LOW:    otherwise

    Any single condition forces the tier, however good the other signals are.
    A tenant with no payments at all has reliability 0 and is therefore HIGH.
    """
    if reliability < 70 or maintenance_total > 5 or recent_30d > 2:
        return RiskLevel.HIGH
    elif reliability < 85 or maintenance_total > 2 or recent_30d > 1:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.LOW


def classify_payment_risk(reliability: float) -> RiskLevel:
    if reliability < 70:
        return RiskLevel.HIGH
    elif reliability < 85:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def classify_maintenance_risk(maintenance_total: int) -> RiskLevel:
    if maintenance_total > 5:
        return RiskLevel.HIGH
    elif maintenance_total > 2:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def calculate_ai_risk_score(reliability: float) -> int:
    """0 (no risk) .. 100 (highest risk), the complement of reliability"""
    return round_half_up(100 - reliability)


def assess_tenant(
    payments: List[PaymentRecord],
    maintenance_requests: List[MaintenanceRecord],
    now: datetime,
) -> RiskAssessment:
    """
    Main entry point: compute every behavior signal for one tenant.

    Returns both the LOW/MEDIUM/HIGH tier and the EXCELLENT..HIGH_RISK
    category. They use different thresholds and are allowed to disagree.
    """
    payment_stats = compute_payment_reliability(payments)
    maintenance = compute_maintenance_signal(maintenance_requests, now)
    average_delay = compute_average_payment_delay(payments)
    reliability = payment_stats.reliability

    return RiskAssessment(
        risk_level=classify_risk(reliability, maintenance.total, maintenance.recent_30d),
        payment_risk_level=classify_payment_risk(reliability),
        maintenance_risk_level=classify_maintenance_risk(maintenance.total),
        payment_reliability=round_half_up(reliability),
        payments=payment_stats,
        maintenance=maintenance,
        average_payment_delay=average_delay,
        ai_risk_score=calculate_ai_risk_score(reliability),
        ai_summary=generate_behavior_summary(reliability, maintenance.total, maintenance.recent_30d),
        ai_detailed_summary=generate_detailed_behavior_summary(
            reliability,
            maintenance.total,
            maintenance.recent_30d,
            average_delay,
        ),
        ai_category=categorize_tenant(reliability, maintenance.total),
    )
