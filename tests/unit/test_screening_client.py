"""Unit tests for the HTTP screening provider"""

import json

import httpx
import pytest

from tenant_insights.config import settings
from tenant_insights.domain.exceptions import ScreeningProviderError
from tenant_insights.domain.models import TenantProfile, UnitInfo
from tenant_insights.infrastructure.clients.screening import HttpScreeningProvider

TENANT = TenantProfile(id="tenant-1", full_name="Alice Reyes", email="alice@example.com")
UNIT = UnitInfo(id="unit-1")


def provider_for(handler) -> HttpScreeningProvider:
    return HttpScreeningProvider(
        base_url="http://screening.test",
        api_key="secret",
        transport=httpx.MockTransport(handler),
    )


def test_fetch_parses_provider_response():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "credit_score": 655,
                "criminal_background_clean": True,
                "eviction_history_clean": True,
                "employment_verified": False,
                "income_verified": True,
            },
        )

    data = provider_for(handler).fetch(TENANT, UNIT)

    assert data.credit_score == 655
    assert data.employment_verification is False
    assert seen["path"] == "/screenings"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"]["tenant_id"] == "tenant-1"
    assert seen["body"]["unit_id"] == "unit-1"


def test_fetch_raises_on_server_error():
    provider = provider_for(lambda request: httpx.Response(502))

    with pytest.raises(ScreeningProviderError, match="502"):
        provider.fetch(TENANT, UNIT)


def test_fetch_raises_on_malformed_payload():
    provider = provider_for(lambda request: httpx.Response(200, json={"credit_score": 700}))

    with pytest.raises(ScreeningProviderError, match="Invalid screening data"):
        provider.fetch(TENANT, UNIT)


def test_fetch_raises_on_timeout():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ScreeningProviderError, match="timeout"):
        provider_for(handler).fetch(TENANT, UNIT)


def test_explicit_zero_timeout_is_kept():
    assert HttpScreeningProvider(timeout=0.0).timeout == 0.0
    assert HttpScreeningProvider().timeout == settings.http_timeout_seconds
