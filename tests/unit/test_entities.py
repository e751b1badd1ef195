"""Unit tests for domain entities."""
from __future__ import annotations

import pytest

from buyer_engine.core.entities import (
    BuyerProfile,
    ChatMessage,
    Currency,
    IntentSignal,
    LeadTemperature,
    MessageRole,
    OnboardingAnswers,
    Persona,
)


def test_onboarding_answers_accept_aliases_and_strip_blanks() -> None:
    answers = OnboardingAnswers.from_mapping(
        {
            "goal": " visa ",
            "budget_band": "2m-5m",
            "urgency": "immediate",
            "risk_tolerance": "   ",
            "first_name": "Sam",
            "unrelated": "ignored",
        }
    )

    assert answers.goal == "visa"
    assert answers.budget_band == "2m-5m"
    assert answers.urgency_timeline == "immediate"
    assert answers.risk_tolerance is None
    assert answers.first_name == "Sam"
    assert answers.country is None


@pytest.mark.parametrize(("confidence", "urgency"), [(101, 50), (50, -1)])
def test_buyer_profile_enforces_score_bounds(confidence, urgency) -> None:
    with pytest.raises(ValueError):
        BuyerProfile(
            persona=Persona.EXPLORER,
            confidence=confidence,
            urgency_score=urgency,
            lead_temperature=LeadTemperature.COLD,
            goal=None,
            budget_band=None,
            risk_tolerance="moderate",
            country="other",
            currency=Currency.USD,
        )


def test_annotate_returns_new_message() -> None:
    message = ChatMessage(role=MessageRole.BUYER, content="call me")

    annotated = message.annotate(frozenset({IntentSignal.CALL_REQUEST}), True)

    assert annotated is not message
    assert annotated.escalation is True
    assert annotated.timestamp == message.timestamp
    assert message.escalation is None


def test_chat_message_accepts_plain_string_role() -> None:
    message = ChatMessage(role="buyer", content="Hello")

    assert message.role is MessageRole.BUYER
    assert message.annotate(frozenset(), False).role is MessageRole.BUYER


def test_chat_message_rejects_unknown_role() -> None:
    with pytest.raises(ValueError):
        ChatMessage(role="system", content="Hello")
