"""Human-readable behavior summaries and the descriptive tenant category"""

from typing import Optional

from tenant_insights.domain.models import TenantCategory

CATEGORY_SUMMARIES = {
    TenantCategory.EXCELLENT: "Excellent tenant with consistent on-time payments and minimal maintenance requests.",
    TenantCategory.GOOD: "Good tenant with mostly reliable payments and reasonable maintenance needs.",
    TenantCategory.AVERAGE: "Average tenant with some payment delays and moderate maintenance requests.",
    TenantCategory.HIGH_RISK: "High-risk tenant with frequent payment issues and excessive maintenance requests.",
}


def categorize_tenant(reliability: float, maintenance_total: int) -> TenantCategory:
    """
    Four-way bucket on (reliability, maintenance count).

    Thresholds differ from classify_risk; the two outputs are kept
    side by side and may disagree (reliability 82 with 3 requests is AVERAGE
    here and MEDIUM there).
    """
    if reliability >= 90 and maintenance_total <= 1:
        return TenantCategory.EXCELLENT
    elif reliability >= 80 and maintenance_total <= 2:
        return TenantCategory.GOOD
    elif reliability >= 70 and maintenance_total <= 3:
        return TenantCategory.AVERAGE
    else:
        return TenantCategory.HIGH_RISK


def generate_behavior_summary(reliability: float, maintenance_total: int, recent_30d: int) -> str:
    """Short form: one sentence chosen by the tenant category"""
    return CATEGORY_SUMMARIES[categorize_tenant(reliability, maintenance_total)]


def generate_detailed_behavior_summary(
    reliability: float,
    maintenance_total: int,
    recent_30d: int,
    average_delay: Optional[int] = None,
) -> str:
    """
    Detailed form built from independent clauses:

    payment history, average delay (only when > 0), maintenance volume and a
    note on a recent spike (more than 2 requests in the last 30 days).
    """
    clauses = []

    if reliability >= 90:
        clauses.append("Excellent payment history with 90%+ on-time payments")
    elif reliability >= 80:
        clauses.append("Good payment history with mostly reliable payments")
    elif reliability >= 70:
        clauses.append("Average payment history with some delays")
    else:
        clauses.append("Poor payment history with frequent delays")

    if average_delay and average_delay > 0:
        clauses.append(f"Average payment delay of {average_delay} days")

    if maintenance_total == 0:
        clauses.append("No maintenance requests submitted")
    elif maintenance_total <= 2:
        clauses.append("Minimal maintenance requests")
    elif maintenance_total <= 5:
        clauses.append("Moderate maintenance requests")
    else:
        clauses.append("Excessive maintenance requests")

    if recent_30d > 2:
        clauses.append("Recent increase in maintenance requests")

    return ". ".join(clauses) + "."
