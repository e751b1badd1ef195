"""Templated advisor replies for the buyer chat."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from buyer_engine.core.entities import AdvisorReply, BuyerProfile, IntentSignal, Persona
from buyer_engine.infrastructure.conversation.escalation import EscalationPolicy
from buyer_engine.infrastructure.conversation.intent import KeywordIntentDetector
from buyer_engine.utils.logger import logger

_GREETING_PATTERN = re.compile(r"^(hi|hello|hey)")
_ROI_KEYWORDS = ("roi", "return", "yield")
_VISA_KEYWORDS = ("visa", "golden visa", "residency")


@dataclass(frozen=True)
class ReplyContext:
    """Buyer details used to personalise replies."""

    persona: Optional[Persona] = None
    budget_band: str = "500k-1m"
    goal: str = "investment"

    @classmethod
    def from_profile(cls, profile: Optional[BuyerProfile]) -> "ReplyContext":
        if profile is None:
            return cls()
        return cls(
            persona=profile.persona,
            budget_band=profile.budget_band or "500k-1m",
            goal=profile.goal or "investment",
        )

    @property
    def persona_label(self) -> str:
        return self.persona.value.replace("-", " ", 1) if self.persona else "buyer"


def describe_budget_band(budget_band: Optional[str]) -> str:
    """Render ``500k-1m`` as ``500K TO 1M``."""

    if not budget_band:
        return "FLEXIBLE RANGE"
    return budget_band.replace("-", " to ", 1).upper()


class AdvisorReplyComposer:
    """Pick a reply topic for a buyer message, first match wins."""

    def __init__(
        self,
        detector: KeywordIntentDetector | None = None,
        policy: EscalationPolicy | None = None,
    ) -> None:
        self._detector = detector or KeywordIntentDetector()
        self._policy = policy or EscalationPolicy()

    def welcome(self, profile: Optional[BuyerProfile]) -> str:
        first_name = profile.first_name if profile else "there"
        goal = (profile.goal if profile else None) or "property investment"
        budget = describe_budget_band(profile.budget_band if profile else None)
        return (
            f"Hi {first_name}! I'm your investment advisor.\n\n"
            f"I can see you're interested in {goal} with a budget of {budget}.\n\n"
            "How can I help you today?"
        )

    def compose(self, text: str, context: ReplyContext | None = None) -> AdvisorReply:
        context = context or ReplyContext()
        signals = self._detector.detect(text)
        lowered = text.strip().lower()

        if _GREETING_PATTERN.match(lowered):
            reply = AdvisorReply("greeting", self._greeting(context), signals, False)
        elif any(keyword in lowered for keyword in _ROI_KEYWORDS):
            reply = AdvisorReply("roi", self._roi_overview(), signals, False)
        elif any(keyword in lowered for keyword in _VISA_KEYWORDS):
            reply = AdvisorReply("visa", self._visa_overview(), signals, False)
        elif IntentSignal.CALL_REQUEST in signals:
            reply = AdvisorReply("call", self._call_handoff(context), signals, True)
        elif IntentSignal.PLANNING_VISIT in signals:
            reply = AdvisorReply("visit", self._visit_planning(), signals, True)
        else:
            reply = AdvisorReply(
                "general",
                self._general(context),
                signals,
                self._policy.should_escalate(signals),
            )

        logger.debug("Composed '{}' reply (escalate={})", reply.topic, reply.escalate)
        return reply

    @staticmethod
    def _greeting(context: ReplyContext) -> str:
        return (
            "Hello! I'm your dedicated investment advisor.\n\n"
            f"Based on your profile as a {context.persona_label}, I can help you with:\n\n"
            "• Property recommendations for your budget\n"
            "• ROI projections and market analysis\n"
            "• Visa options and buying process\n"
            "• Area comparisons\n\n"
            "What would you like to explore?"
        )

    @staticmethod
    def _roi_overview() -> str:
        return (
            "Here's what you can expect for your budget range:\n\n"
            "Rental yields:\n"
            "• Growth areas (JVC, Dubai South): 7-8.5%\n"
            "• Prime areas (Downtown, Marina): 5-6%\n"
            "• Emerging areas: 6.5-8%\n\n"
            "Capital appreciation:\n"
            "• Prime: 5-8% annually\n"
            "• Growth areas: 10-15% annually\n\n"
            "Would you like a detailed projection for your scenario? "
            "The ROI simulator can run a custom analysis."
        )

    @staticmethod
    def _visa_overview() -> str:
        return (
            "The UAE offers residency options through property investment.\n\n"
            "Golden Visa (10-year):\n"
            "• Minimum: AED 2,000,000 (~$545,000)\n"
            "• Includes family members\n"
            "• No sponsor required\n\n"
            "Property Visa (2-year):\n"
            "• Minimum: AED 750,000 (~$205,000)\n"
            "• Renewable, covers family\n\n"
            "Would you like property recommendations that meet visa requirements?"
        )

    @staticmethod
    def _call_handoff(context: ReplyContext) -> str:
        focus = "Investment acquisitions" if context.goal == "investment" else "Lifestyle purchases"
        return (
            "I'd be happy to connect you with one of our property consultants.\n\n"
            "You'll be matched with someone specializing in:\n"
            f"• {context.budget_band} properties\n"
            f"• {focus}\n\n"
            "Next steps:\n"
            "1. A consultant will reach out within 4 hours\n"
            "2. They'll have your complete profile\n"
            "3. No obligation, just expert guidance\n\n"
            "What's your preferred contact method, call or WhatsApp?"
        )

    @staticmethod
    def _visit_planning() -> str:
        return (
            "Visiting Dubai is the best way to finalize your decision.\n\n"
            "We can arrange:\n"
            "• Personalized property tours\n"
            "• Area orientation drives\n"
            "• Developer showroom visits\n"
            "• Meetings with our consultants\n\n"
            "When are you planning to visit? I can help coordinate everything."
        )

    @staticmethod
    def _general(context: ReplyContext) -> str:
        return (
            f"As a {context.persona_label} with your profile, you have excellent options in Dubai.\n\n"
            "I can provide detailed information on:\n"
            "• Property recommendations\n"
            "• ROI calculations\n"
            "• Area comparisons\n"
            "• Buying process\n"
            "• Visa options\n\n"
            "What would you like to explore?"
        )


__all__ = ["AdvisorReplyComposer", "ReplyContext", "describe_budget_band"]
