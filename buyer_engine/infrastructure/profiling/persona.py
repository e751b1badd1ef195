"""Ordered decision list mapping onboarding answers to a buyer persona."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from buyer_engine.core.entities import OnboardingAnswers, Persona
from buyer_engine.utils.logger import logger


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _goal_is(expected: str) -> Callable[[OnboardingAnswers], bool]:
    return lambda answers: _normalize(answers.goal) == expected


def _risk_is(expected: str) -> Callable[[OnboardingAnswers], bool]:
    return lambda answers: _normalize(answers.risk_tolerance) == expected


@dataclass(frozen=True)
class PersonaRule:
    """A single ``(predicate, persona, confidence)`` entry of the decision list."""

    name: str
    predicate: Callable[[OnboardingAnswers], bool]
    persona: Persona
    confidence: int


@dataclass(frozen=True)
class PersonaAssessment:
    persona: Persona
    confidence: int


# Evaluated top to bottom; the first matching rule wins.
DEFAULT_PERSONA_RULES: Sequence[PersonaRule] = (
    PersonaRule("visa-goal", _goal_is("visa"), Persona.VISA_DRIVEN, 90),
    PersonaRule("lifestyle-goal", _goal_is("lifestyle"), Persona.LIFESTYLE, 85),
    PersonaRule("exploring-goal", _goal_is("exploring"), Persona.EXPLORER, 70),
    PersonaRule("conservative-risk", _risk_is("conservative"), Persona.YIELD_INVESTOR, 80),
    PersonaRule("aggressive-risk", _risk_is("aggressive"), Persona.CAPITAL_INVESTOR, 75),
)

DEFAULT_PERSONA_FALLBACK = PersonaAssessment(persona=Persona.YIELD_INVESTOR, confidence=70)


class PersonaClassifier:
    """Classify buyers with a first-match decision list."""

    def __init__(
        self,
        rules: Sequence[PersonaRule] = DEFAULT_PERSONA_RULES,
        fallback: PersonaAssessment = DEFAULT_PERSONA_FALLBACK,
    ) -> None:
        for rule in rules:
            if not 0 <= rule.confidence <= 100:
                raise ValueError(
                    f"Rule '{rule.name}' has confidence {rule.confidence} outside [0, 100]."
                )
        self._rules: tuple[PersonaRule, ...] = tuple(rules)
        self._fallback = fallback

    def classify(self, answers: OnboardingAnswers) -> PersonaAssessment:
        for rule in self._rules:
            if rule.predicate(answers):
                logger.debug(
                    "Persona rule '{}' matched: {} ({}%)",
                    rule.name,
                    rule.persona.value,
                    rule.confidence,
                )
                return PersonaAssessment(persona=rule.persona, confidence=rule.confidence)

        logger.debug("No persona rule matched; using fallback {}", self._fallback.persona.value)
        return self._fallback


__all__ = [
    "DEFAULT_PERSONA_FALLBACK",
    "DEFAULT_PERSONA_RULES",
    "PersonaAssessment",
    "PersonaClassifier",
    "PersonaRule",
]
