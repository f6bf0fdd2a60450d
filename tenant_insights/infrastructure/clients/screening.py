"""Screening API HTTP client - ScreeningProvider backed by an external credit/background service"""

from typing import Optional

import httpx

from tenant_insights.config import settings
from tenant_insights.domain.exceptions import ScreeningProviderError
from tenant_insights.domain.models import ScreeningData, TenantProfile, UnitInfo
from tenant_insights.domain.screening import ScreeningProvider
from tenant_insights.infrastructure.observability.metrics import (
    screening_failure_counter,
    screening_latency_histogram,
)


class HttpScreeningProvider(ScreeningProvider):
    """Client for an external tenant screening API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url or settings.screening_api_base
        self.api_key = api_key or settings.screening_api_key
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.transport = transport

    def _headers(self) -> dict:
        if not self.api_key:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}

    def fetch(self, tenant: TenantProfile, unit: UnitInfo) -> ScreeningData:
        """
        Request credit and background checks for an applicant.

        Raises:
            ScreeningProviderError: On timeout, HTTP errors, or invalid response
        """
        payload = {
            "tenant_id": tenant.id,
            "full_name": tenant.full_name,
            "email": tenant.email,
            "monthly_income": str(tenant.monthly_income) if tenant.monthly_income is not None else None,
            "employment_status": tenant.employment_status,
            "unit_id": unit.id,
        }

        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            try:
                with screening_latency_histogram.time():
                    response = client.post(
                        f"{self.base_url}/screenings",
                        json=payload,
                        headers=self._headers(),
                    )
                    response.raise_for_status()
                data = response.json()

                return ScreeningData(
                    credit_score=int(data["credit_score"]),
                    criminal_background=bool(data["criminal_background_clean"]),
                    eviction_history=bool(data["eviction_history_clean"]),
                    employment_verification=bool(data["employment_verified"]),
                    income_verification=bool(data["income_verified"]),
                )

            except httpx.TimeoutException as e:
                screening_failure_counter.inc()
                raise ScreeningProviderError(f"Screening API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                screening_failure_counter.inc()
                raise ScreeningProviderError(f"Screening API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                screening_failure_counter.inc()
                raise ScreeningProviderError(f"Screening API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                screening_failure_counter.inc()
                raise ScreeningProviderError(f"Invalid screening data from provider: {e}") from e
