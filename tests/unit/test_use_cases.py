"""Unit tests for the orchestration use cases."""
from __future__ import annotations

import pytest

from buyer_engine.core.entities import (
    ChatMessage,
    Currency,
    IntentSignal,
    LeadActivity,
    LeadTemperature,
    MessageRole,
    Persona,
)
from buyer_engine.core.errors import InvalidSimulationInput
from buyer_engine.infrastructure.conversation.escalation import EscalationPolicy
from buyer_engine.infrastructure.conversation.intent import KeywordIntentDetector
from buyer_engine.infrastructure.conversation.replies import AdvisorReplyComposer
from buyer_engine.infrastructure.currency.exchange import ExchangeTable
from buyer_engine.infrastructure.leads.handoff import HandoffPackageBuilder
from buyer_engine.infrastructure.leads.scoring import EngagementLeadScorer
from buyer_engine.infrastructure.profiling.persona import PersonaClassifier
from buyer_engine.infrastructure.profiling.urgency import TimelineUrgencyScorer
from buyer_engine.infrastructure.simulation.roi import ROISimulator
from buyer_engine.use_cases.build_profile import BuildBuyerProfileUseCase
from buyer_engine.use_cases.handle_chat_message import HandleChatMessageUseCase
from buyer_engine.use_cases.prepare_handoff import PrepareHandoffUseCase
from buyer_engine.use_cases.simulate_investment import SimulateInvestmentUseCase


def build_profile_use_case() -> BuildBuyerProfileUseCase:
    return BuildBuyerProfileUseCase(
        PersonaClassifier(), TimelineUrgencyScorer(), ExchangeTable.default()
    )


def test_build_profile_from_intake_payload() -> None:
    profile = build_profile_use_case().execute(
        {
            "goal": "investment",
            "budgetBand": "1m-2m",
            "urgency": "short-term",
            "riskTolerance": "aggressive",
            "country": "India",
            "email": "buyer@example.com",
            "firstName": "Priya",
        }
    )

    assert profile.persona is Persona.CAPITAL_INVESTOR
    assert profile.confidence == 75
    assert profile.urgency_score == 80
    assert profile.lead_temperature is LeadTemperature.WARM
    assert profile.currency is Currency.INR
    assert profile.first_name == "Priya"


def test_build_profile_fills_defaults_for_missing_answers() -> None:
    profile = build_profile_use_case().execute({})

    assert profile.persona is Persona.YIELD_INVESTOR
    assert profile.confidence == 70
    assert profile.urgency_score == 50
    assert profile.lead_temperature is LeadTemperature.COLD
    assert profile.currency is Currency.USD
    assert profile.country == "other"
    assert profile.risk_tolerance == "moderate"
    assert profile.first_name == "Friend"


def test_chat_annotation_without_composer() -> None:
    use_case = HandleChatMessageUseCase(KeywordIntentDetector(), EscalationPolicy())
    message = ChatMessage(role=MessageRole.BUYER, content="Which options are available?")

    turn = use_case.execute(message)

    assert turn.buyer_message.intent_signals == {IntentSignal.PROPERTY_INTEREST}
    assert turn.buyer_message.escalation is False
    assert turn.advisor_message is None
    assert turn.escalate is False
    assert message.intent_signals is None


def test_chat_reply_flags_first_escalation_only() -> None:
    detector = KeywordIntentDetector()
    policy = EscalationPolicy()
    use_case = HandleChatMessageUseCase(detector, policy, AdvisorReplyComposer(detector, policy))
    message = ChatMessage(role=MessageRole.BUYER, content="Can I talk to someone today")

    first = use_case.execute(message)
    history = [first.buyer_message, first.advisor_message]
    second = use_case.execute(message, history=history)

    assert first.escalate is True
    assert first.first_escalation is True
    assert first.advisor_message is not None
    assert first.advisor_message.role is MessageRole.ADVISOR
    assert second.escalate is True
    assert second.first_escalation is False


def test_chat_rejects_advisor_messages() -> None:
    use_case = HandleChatMessageUseCase(KeywordIntentDetector(), EscalationPolicy())

    with pytest.raises(ValueError):
        use_case.execute(ChatMessage(role=MessageRole.ADVISOR, content="hi"))


def test_chat_accepts_buyer_message_with_string_role() -> None:
    use_case = HandleChatMessageUseCase(KeywordIntentDetector(), EscalationPolicy())

    turn = use_case.execute(ChatMessage(role="buyer", content="I want to buy a villa"))

    assert turn.buyer_message.role is MessageRole.BUYER
    assert turn.buyer_message.intent_signals == {IntentSignal.PURCHASE_INTENT}
    assert turn.escalate is True


def test_simulate_investment_validates_raw_values() -> None:
    use_case = SimulateInvestmentUseCase(ROISimulator())

    result = use_case.execute(2_000_000, "villa", "family-hub", time_horizon=10, display_currency="EUR")

    assert result.inputs.display_currency is Currency.EUR
    assert result.moderate_yield == pytest.approx(5.8 * 0.85)
    with pytest.raises(InvalidSimulationInput):
        use_case.execute(2_000_000, "villa", "atlantis")


def test_prepare_handoff_detects_call_request_from_history() -> None:
    profile = build_profile_use_case().execute({"goal": "visa", "urgency": "immediate"})
    messages = [
        ChatMessage(
            role=MessageRole.BUYER,
            content="Can you call me?",
            intent_signals=frozenset({IntentSignal.CALL_REQUEST}),
            escalation=True,
        )
    ]
    use_case = PrepareHandoffUseCase(EngagementLeadScorer(), HandoffPackageBuilder())

    package = use_case.execute(profile, LeadActivity(conversations=1, buyer_messages=1), messages)

    assert package.score.call_requested is True
    assert package.next_best_action.startswith("Schedule call immediately")
    assert package.questions_asked == ["Can you call me?"]
    assert package.persona_summary.startswith("Primary motivation is UAE residency")
