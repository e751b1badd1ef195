"""Unit tests for the persona decision list."""
from __future__ import annotations

import pytest

from buyer_engine.core.entities import OnboardingAnswers, Persona
from buyer_engine.infrastructure.profiling.persona import (
    PersonaAssessment,
    PersonaClassifier,
    PersonaRule,
)


@pytest.mark.parametrize("risk", [None, "conservative", "moderate", "aggressive"])
@pytest.mark.parametrize("timeline", [None, "immediate", "just-exploring"])
def test_visa_goal_wins_regardless_of_other_answers(risk, timeline) -> None:
    answers = OnboardingAnswers(
        goal="visa", risk_tolerance=risk, urgency_timeline=timeline, country="UK"
    )

    assessment = PersonaClassifier().classify(answers)

    assert assessment == PersonaAssessment(Persona.VISA_DRIVEN, 90)


@pytest.mark.parametrize(
    ("goal", "risk", "expected"),
    [
        ("lifestyle", "aggressive", PersonaAssessment(Persona.LIFESTYLE, 85)),
        ("exploring", "conservative", PersonaAssessment(Persona.EXPLORER, 70)),
        ("investment", "conservative", PersonaAssessment(Persona.YIELD_INVESTOR, 80)),
        ("investment", "aggressive", PersonaAssessment(Persona.CAPITAL_INVESTOR, 75)),
        ("investment", "moderate", PersonaAssessment(Persona.YIELD_INVESTOR, 70)),
        (None, "aggressive", PersonaAssessment(Persona.CAPITAL_INVESTOR, 75)),
        ("something-else", "aggressive", PersonaAssessment(Persona.CAPITAL_INVESTOR, 75)),
        (None, None, PersonaAssessment(Persona.YIELD_INVESTOR, 70)),
    ],
)
def test_rules_are_evaluated_in_order(goal, risk, expected) -> None:
    answers = OnboardingAnswers(goal=goal, risk_tolerance=risk)

    assert PersonaClassifier().classify(answers) == expected


def test_answers_are_compared_case_insensitively() -> None:
    answers = OnboardingAnswers(goal="  Lifestyle ")

    assert PersonaClassifier().classify(answers).persona is Persona.LIFESTYLE


def test_empty_answers_fall_back_to_default() -> None:
    assessment = PersonaClassifier().classify(OnboardingAnswers.from_mapping({}))

    assert assessment.persona is Persona.YIELD_INVESTOR
    assert assessment.confidence == 70


def test_classifier_rejects_out_of_range_confidence() -> None:
    rule = PersonaRule("broken", lambda answers: True, Persona.EXPLORER, 120)

    with pytest.raises(ValueError):
        PersonaClassifier(rules=[rule])
