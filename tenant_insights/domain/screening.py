"""Formal tenant screening - provider interface, mock provider and risk evaluation"""

import random
from abc import ABC, abstractmethod
from typing import List, Optional

from tenant_insights.domain.models import (
    RiskLevel,
    ScreeningData,
    ScreeningResult,
    TenantProfile,
    UnitInfo,
)

SCREENING_COMPLETED = "COMPLETED"

# Probability that each check comes back clean/verified in the mock provider
CLEAN_PROBABILITIES = {
    "criminal_background": 0.90,
    "eviction_history": 0.95,
    "employment_verification": 0.85,
    "income_verification": 0.80,
}

# Points added when a check fails
FAILED_CHECK_PENALTIES = {
    "criminal_background": 40,
    "eviction_history": 35,
    "employment_verification": 20,
    "income_verification": 15,
}

SCREENING_RECOMMENDATIONS = {
    RiskLevel.HIGH: [
        "Consider requiring additional security deposit",
        "Request co-signer or guarantor",
        "Implement stricter payment monitoring",
    ],
    RiskLevel.MEDIUM: [
        "Monitor payment behavior closely",
        "Consider standard security deposit",
        "Verify employment and income documents before signing",
    ],
    RiskLevel.LOW: [
        "Standard lease terms acceptable",
        "Consider offering lease renewal incentives",
        "Proceed with standard move-in process",
    ],
}


class ScreeningProvider(ABC):
    """Source of credit and background check results for an applicant"""

    @abstractmethod
    def fetch(self, tenant: TenantProfile, unit: UnitInfo) -> ScreeningData:
        """
        Run the checks for a tenant applying to a unit.

        Raises:
            ScreeningProviderError: When the provider cannot produce a result
        """
        pass


class MockScreeningProvider(ScreeningProvider):
    """
    Placeholder for a real credit/background check integration.

    Draws a credit score in [500, 700) and four independent pass/fail flags.
    Pass a seeded random.Random for reproducible results.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def fetch(self, tenant: TenantProfile, unit: UnitInfo) -> ScreeningData:
        return ScreeningData(
            credit_score=self.rng.randrange(500, 700),
            criminal_background=self.rng.random() < CLEAN_PROBABILITIES["criminal_background"],
            eviction_history=self.rng.random() < CLEAN_PROBABILITIES["eviction_history"],
            employment_verification=self.rng.random() < CLEAN_PROBABILITIES["employment_verification"],
            income_verification=self.rng.random() < CLEAN_PROBABILITIES["income_verification"],
        )


def calculate_screening_risk_score(data: ScreeningData) -> int:
    """
    Accumulate fixed penalty points:

    - credit < 600: +30, credit < 650: +15
    - failed criminal +40, eviction +35, employment +20, income +15
    """
    score = 0

    if data.credit_score < 600:
        score += 30
    elif data.credit_score < 650:
        score += 15

    for check, penalty in FAILED_CHECK_PENALTIES.items():
        if not getattr(data, check):
            score += penalty

    return score


def determine_screening_risk_level(risk_score: int) -> RiskLevel:
    if risk_score >= 50:
        return RiskLevel.HIGH
    elif risk_score >= 25:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.LOW


def generate_screening_summary(data: ScreeningData, risk_level: RiskLevel) -> str:
    parts = [
        f"Credit Score: {data.credit_score}",
        f"Criminal Background: {'Clean' if data.criminal_background else 'Issues Found'}",
        f"Eviction History: {'Clean' if data.eviction_history else 'Previous Evictions'}",
        f"Employment: {'Verified' if data.employment_verification else 'Not Verified'}",
        f"Income: {'Verified' if data.income_verification else 'Not Verified'}",
        f"Overall Risk Level: {risk_level.value}",
    ]
    return ". ".join(parts)


def generate_screening_recommendations(risk_level: RiskLevel) -> List[str]:
    return list(SCREENING_RECOMMENDATIONS[risk_level])


def evaluate_screening(data: ScreeningData) -> ScreeningResult:
    """Turn raw provider output into a scored, summarized result"""
    risk_score = calculate_screening_risk_score(data)
    risk_level = determine_screening_risk_level(risk_score)

    return ScreeningResult(
        risk_level=risk_level,
        risk_score=risk_score,
        summary=generate_screening_summary(data, risk_level),
        status=SCREENING_COMPLETED,
        recommendations=generate_screening_recommendations(risk_level),
        screening_data=data,
    )


def simulate_external_screening(
    tenant: TenantProfile,
    unit: UnitInfo,
    provider: Optional[ScreeningProvider] = None,
) -> ScreeningResult:
    """Screen a tenant for a unit; uses the random mock unless a provider is injected"""
    provider = provider or MockScreeningProvider()
    return evaluate_screening(provider.fetch(tenant, unit))
