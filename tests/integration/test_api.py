"""Integration tests for API endpoints"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from factories import NOW
from tenant_insights.api.dependencies import get_screening_provider
from tenant_insights.domain.exceptions import ScreeningProviderError
from tenant_insights.domain.screening import ScreeningProvider
from tenant_insights.infrastructure.database.models import TenantBehaviorAnalysis

OWNER = {"X-Owner-ID": "owner-1"}


class FailingScreeningProvider(ScreeningProvider):
    def fetch(self, tenant, unit):
        raise ScreeningProviderError("Screening API timeout after 5.0s")


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "tenant_risk_assessments_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_missing_owner_is_unauthorized(client: TestClient, landlord_data):
    response = client.get("/v1/landlord/tenants")
    assert response.status_code == 401


def test_list_tenants(client: TestClient, landlord_data):
    """Only owner-1's tenants, newest first, each with a behavior badge"""
    response = client.get("/v1/landlord/tenants", headers=OWNER)

    assert response.status_code == 200
    data = response.json()
    assert [t["id"] for t in data] == ["tenant-bob", "tenant-alice"]

    bob, alice = data
    assert bob["behaviorAnalysis"]["riskLevel"] == "LOW"
    assert bob["behaviorAnalysis"]["paymentReliability"] == 100
    assert bob["behaviorAnalysis"]["aiRiskScore"] == 0
    assert bob["behaviorAnalysis"]["aiSummary"].startswith("Excellent tenant")

    analysis = alice["behaviorAnalysis"]
    assert analysis["riskLevel"] == "MEDIUM"
    assert analysis["paymentReliability"] == 70
    assert analysis["totalPayments"] == 10
    assert analysis["onTimePayments"] == 7
    assert analysis["maintenanceRequestsCount"] == 1
    assert analysis["recentMaintenanceCount"] == 0
    assert analysis["hasFrequentComplaints"] is False
    assert analysis["aiRiskScore"] == 30
    assert analysis["aiSummary"] == (
        "Average tenant with some payment delays and moderate maintenance requests."
    )
    assert alice["fullName"] == "Alice Reyes"
    assert alice["currentLease"]["unit"]["label"] == "A1"
    assert alice["currentLease"]["unit"]["propertyTitle"] == "Sunset Apartments"


def test_list_tenants_other_owner_sees_only_own(client: TestClient, landlord_data):
    response = client.get("/v1/landlord/tenants", headers={"X-Owner-ID": "owner-2"})

    assert [t["id"] for t in response.json()] == ["tenant-carol"]


def test_stored_analysis_overrides_computed_values(client: TestClient, db, landlord_data):
    db.add(
        TenantBehaviorAnalysis(
            lease_id=landlord_data["bob_lease"].id,
            ai_risk_score=42,
            ai_summary="Manually reviewed by property manager",
        )
    )
    db.commit()

    response = client.get("/v1/landlord/tenants/tenant-bob", headers=OWNER)

    analysis = response.json()["behaviorAnalysis"]
    assert analysis["aiRiskScore"] == 42
    assert analysis["aiSummary"] == "Manually reviewed by property manager"
    # Not stored, so still computed
    assert analysis["aiCategory"] == "EXCELLENT"
    assert analysis["overallRiskLevel"] == "LOW"


def test_latest_stored_analysis_wins(client: TestClient, db, landlord_data):
    lease_id = landlord_data["bob_lease"].id
    db.add_all(
        [
            TenantBehaviorAnalysis(
                lease_id=lease_id,
                ai_risk_score=55,
                ai_summary="Latest review",
                updated_at=NOW - timedelta(days=1),
            ),
            TenantBehaviorAnalysis(
                lease_id=lease_id,
                ai_risk_score=10,
                ai_summary="Stale review",
                updated_at=NOW - timedelta(days=90),
            ),
        ]
    )
    db.commit()

    response = client.get("/v1/landlord/tenants/tenant-bob", headers=OWNER)

    analysis = response.json()["behaviorAnalysis"]
    assert analysis["aiRiskScore"] == 55
    assert analysis["aiSummary"] == "Latest review"


def test_tenant_details(client: TestClient, landlord_data):
    response = client.get("/v1/landlord/tenants/tenant-alice", headers=OWNER)

    assert response.status_code == 200
    data = response.json()
    analysis = data["behaviorAnalysis"]
    assert analysis["overallRiskLevel"] == "MEDIUM"
    assert analysis["paymentRiskLevel"] == "MEDIUM"
    assert analysis["maintenanceRiskLevel"] == "LOW"
    assert analysis["latePayments"] == 3
    assert analysis["advancePayments"] == 0
    assert analysis["averagePaymentDelay"] == 5
    assert analysis["aiCategory"] == "AVERAGE"
    assert analysis["aiSummary"] == (
        "Average payment history with some delays. "
        "Average payment delay of 5 days. "
        "Minimal maintenance requests."
    )
    assert len(data["leases"]) == 1
    assert data["screeningInfo"] is None


def test_tenant_details_not_visible_to_other_owner(client: TestClient, landlord_data):
    response = client.get("/v1/landlord/tenants/tenant-carol", headers=OWNER)
    assert response.status_code == 404


def test_tenant_stats(client: TestClient, landlord_data):
    response = client.get("/v1/landlord/tenants/stats", headers=OWNER)

    assert response.status_code == 200
    data = response.json()
    assert data["overview"] == {
        "totalTenants": 2,
        "activeTenants": 2,
        "overallPaymentReliability": 79,
        "totalMaintenanceRequests": 1,
        "averageMaintenancePerTenant": 0.5,
    }
    assert data["riskDistribution"] == {"high": 0, "medium": 1, "low": 1}
    assert data["performance"]["averagePaymentDelay"] == 5
    assert data["performance"]["tenantRetentionRate"] == 0
    assert data["performance"]["screeningCompletionRate"] == 0


def test_run_screening_and_upsert(client: TestClient, landlord_data, screening_provider):
    body = {"tenantId": "tenant-alice", "unitId": "unit-a"}

    first = client.post("/v1/landlord/tenants/screening", json=body, headers=OWNER)

    assert first.status_code == 200
    data = first.json()
    assert data["message"] == "Tenant screening completed successfully"
    assert data["screening"]["riskLevel"] == "MEDIUM"
    assert data["screening"]["riskScore"] == 30
    assert data["screening"]["status"] == "COMPLETED"
    assert data["screening"]["summary"] == (
        "Credit Score: 620. Criminal Background: Clean. Eviction History: Clean. "
        "Employment: Verified. Income: Not Verified. Overall Risk Level: MEDIUM"
    )
    assert len(data["recommendations"]) == 3
    assert "Monitor payment behavior closely" in data["recommendations"]

    second = client.post("/v1/landlord/tenants/screening", json=body, headers=OWNER)
    assert second.json()["screening"]["id"] == data["screening"]["id"]
    assert screening_provider.calls == 2

    history = client.get("/v1/landlord/tenants/tenant-alice/screenings", headers=OWNER)
    assert history.status_code == 200
    items = history.json()
    assert len(items) == 1
    assert items[0]["screeningRiskLevel"] == "MEDIUM"
    assert items[0]["unit"]["label"] == "A1"

    details = client.get("/v1/landlord/tenants/tenant-alice", headers=OWNER).json()
    assert details["screeningInfo"]["screeningRiskLevel"] == "MEDIUM"

    stats = client.get("/v1/landlord/tenants/stats", headers=OWNER).json()
    assert stats["performance"]["screeningCompletionRate"] == 50


def test_run_screening_foreign_unit(client: TestClient, landlord_data):
    response = client.post(
        "/v1/landlord/tenants/screening",
        json={"tenantId": "tenant-alice", "unitId": "unit-c"},
        headers=OWNER,
    )
    assert response.status_code == 404


def test_run_screening_provider_failure(client: TestClient, landlord_data):
    client.app.dependency_overrides[get_screening_provider] = lambda: FailingScreeningProvider()

    response = client.post(
        "/v1/landlord/tenants/screening",
        json={"tenantId": "tenant-alice", "unitId": "unit-a"},
        headers=OWNER,
    )

    assert response.status_code == 503
    assert client.get("/v1/landlord/tenants/tenant-alice/screenings", headers=OWNER).status_code == 404


def test_screening_results_not_found(client: TestClient, landlord_data):
    response = client.get("/v1/landlord/tenants/tenant-bob/screenings", headers=OWNER)
    assert response.status_code == 404


def test_behavior_report(client: TestClient, landlord_data):
    response = client.get("/v1/landlord/tenants/tenant-alice/behavior-report", headers=OWNER)

    assert response.status_code == 200
    data = response.json()
    assert data["reportType"] == "comprehensive"
    assert data["tenant"]["fullName"] == "Alice Reyes"
    assert data["summary"]["overallRiskLevel"] == "MEDIUM"
    assert data["summary"]["paymentReliability"] == 70
    assert data["summary"]["averagePaymentDelay"] == 5

    detailed = data["detailedAnalysis"]
    assert detailed["paymentBehavior"]["trend"] == "STABLE"
    assert detailed["maintenanceBehavior"]["averageResponseTime"] == 3
    assert detailed["maintenanceBehavior"]["requestTypes"]["plumbing"] == 1
    assert detailed["leaseHistory"]["averageLeaseDuration"] == 400
    assert detailed["leaseHistory"]["renewalRate"] == 0
    assert data["recommendations"] == []
    assert data["riskFactors"] == []


def test_behavior_report_is_byte_identical_for_fixed_clock(client: TestClient, landlord_data):
    url = "/v1/landlord/tenants/tenant-alice/behavior-report"

    first = client.get(url, headers=OWNER)
    second = client.get(url, headers=OWNER)

    assert first.content == second.content


@pytest.mark.parametrize("report_type", ["payments", "maintenance"])
def test_behavior_report_type(client: TestClient, landlord_data, report_type):
    response = client.get(
        f"/v1/landlord/tenants/tenant-alice/behavior-report?reportType={report_type}",
        headers=OWNER,
    )
    assert response.json()["reportType"] == report_type


def test_behavior_report_unknown_tenant(client: TestClient, landlord_data):
    response = client.get("/v1/landlord/tenants/nobody/behavior-report", headers=OWNER)
    assert response.status_code == 404
