"""Unit tests for keyword intent detection and escalation."""
from __future__ import annotations

import pytest

from buyer_engine.core.entities import ChatMessage, IntentSignal, MessageRole
from buyer_engine.infrastructure.conversation.escalation import EscalationPolicy
from buyer_engine.infrastructure.conversation.intent import KeywordIntentDetector
from buyer_engine.utils.logger import logger


def test_detect_returns_every_matching_signal() -> None:
    signals = KeywordIntentDetector().detect(
        "I'd like to book a viewing and also speak to an agent"
    )

    assert signals == {IntentSignal.BOOKING_INTENT, IntentSignal.CALL_REQUEST}


@pytest.mark.parametrize(
    ("text", "signal"),
    [
        ("I will VISIT next week", IntentSignal.PLANNING_VISIT),
        ("We are coming to Dubai in May", IntentSignal.PLANNING_VISIT),
        ("Ready to purchase", IntentSignal.PURCHASE_INTENT),
        ("Can I talk to someone?", IntentSignal.CALL_REQUEST),
        ("What options do you have?", IntentSignal.PROPERTY_INTEREST),
        ("Is this unit available", IntentSignal.PROPERTY_INTEREST),
        ("Please reserve it for me", IntentSignal.BOOKING_INTENT),
    ],
)
def test_detect_matches_phrase_families(text, signal) -> None:
    assert signal in KeywordIntentDetector().detect(text)


def test_negation_is_not_handled() -> None:
    signals = KeywordIntentDetector().detect("I don't want to buy anything")

    assert IntentSignal.PURCHASE_INTENT in signals


def test_plain_text_has_no_signals() -> None:
    assert KeywordIntentDetector().detect("Thanks for the information") == frozenset()


def test_detect_does_not_log_message_text() -> None:
    records: list[str] = []
    handler_id = logger.add(records.append, level="DEBUG", format="{message}")
    try:
        KeywordIntentDetector().detect("My email is jane@example.com, I want to buy")
    finally:
        logger.remove(handler_id)

    assert records
    assert not any("jane@example.com" in record for record in records)
    assert any("43-character message" in record for record in records)


def test_from_config_rejects_unknown_signal() -> None:
    with pytest.raises(ValueError):
        KeywordIntentDetector.from_config([{"signal": "teleport", "phrases": ["beam"]}])


def test_escalation_requires_high_intent_signal() -> None:
    policy = EscalationPolicy()

    assert policy.should_escalate({IntentSignal.PROPERTY_INTEREST}) is False
    assert policy.should_escalate({IntentSignal.PURCHASE_INTENT}) is False
    assert policy.should_escalate(set()) is False
    assert policy.should_escalate({IntentSignal.PLANNING_VISIT}) is True
    assert policy.should_escalate(
        {IntentSignal.PURCHASE_INTENT, IntentSignal.BOOKING_INTENT}
    ) is True


def test_conversation_escalated_looks_at_history() -> None:
    quiet = ChatMessage(role=MessageRole.BUYER, content="hello")
    flagged = ChatMessage(role=MessageRole.ADVISOR, content="calling", escalation=True)

    assert EscalationPolicy.conversation_escalated([quiet]) is False
    assert EscalationPolicy.conversation_escalated([quiet, flagged]) is True
