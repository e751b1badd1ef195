"""Use case for turning completed onboarding answers into a buyer profile."""
from __future__ import annotations

from typing import Mapping, Optional, Protocol

from buyer_engine.core.entities import BuyerProfile, Currency, OnboardingAnswers
from buyer_engine.infrastructure.profiling.persona import PersonaAssessment
from buyer_engine.infrastructure.profiling.urgency import UrgencyAssessment
from buyer_engine.utils.logger import logger


class PersonaModel(Protocol):
    def classify(self, answers: OnboardingAnswers) -> PersonaAssessment:
        ...


class UrgencyModel(Protocol):
    def assess(self, timeline: Optional[str]) -> UrgencyAssessment:
        ...


class CurrencyResolver(Protocol):
    def currency_for_country(self, country: Optional[str]) -> Currency:
        ...


class BuildBuyerProfileUseCase:
    """Classify the buyer and derive urgency and currency in one step."""

    def __init__(
        self,
        persona_model: PersonaModel,
        urgency_model: UrgencyModel,
        currency_resolver: CurrencyResolver,
    ) -> None:
        self._persona_model = persona_model
        self._urgency_model = urgency_model
        self._currency_resolver = currency_resolver

    def execute(self, answers: OnboardingAnswers | Mapping[str, object]) -> BuyerProfile:
        if not isinstance(answers, OnboardingAnswers):
            answers = OnboardingAnswers.from_mapping(answers)

        persona = self._persona_model.classify(answers)
        urgency = self._urgency_model.assess(answers.urgency_timeline)
        currency = self._currency_resolver.currency_for_country(answers.country)

        profile = BuyerProfile(
            persona=persona.persona,
            confidence=persona.confidence,
            urgency_score=urgency.score,
            lead_temperature=urgency.temperature,
            goal=answers.goal,
            budget_band=answers.budget_band,
            risk_tolerance=answers.risk_tolerance or "moderate",
            country=answers.country or "other",
            currency=currency,
            first_name=answers.first_name or "Friend",
            email=answers.email or "",
        )
        logger.info(
            "Built buyer profile: persona={} confidence={} urgency={} ({})",
            profile.persona.value,
            profile.confidence,
            profile.urgency_score,
            profile.lead_temperature.value,
        )
        return profile


__all__ = ["BuildBuyerProfileUseCase"]
