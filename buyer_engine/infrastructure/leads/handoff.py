"""Agent handoff package assembly."""
from __future__ import annotations

from typing import Sequence

from buyer_engine.core.entities import (
    BuyerProfile,
    ChatMessage,
    HandoffPackage,
    LeadScoreBreakdown,
    MessageRole,
    Persona,
)
from buyer_engine.infrastructure.profiling.urgency import TimelineUrgencyScorer

PERSONA_SUMMARIES: dict[Persona, str] = {
    Persona.YIELD_INVESTOR: (
        "Focused on rental returns. Prioritizes areas with high occupancy and stable yields."
    ),
    Persona.CAPITAL_INVESTOR: (
        "Looking for capital appreciation. Interested in emerging areas and off-plan opportunities."
    ),
    Persona.LIFESTYLE: (
        "Buying for personal use. Quality of life, amenities, and location are key factors."
    ),
    Persona.VISA_DRIVEN: (
        "Primary motivation is UAE residency. Needs to meet visa threshold requirements."
    ),
    Persona.EXPLORER: (
        "Early stage, gathering information. Not ready to commit but showing interest."
    ),
}

MAX_QUESTIONS = 5


def format_budget_band(budget_band: str) -> str:
    """Render ``500k-1m`` as ``500K to 1M``."""

    return budget_band.replace("-", " to ", 1).replace("k", "K").replace("m", "M")


class HandoffPackageBuilder:
    """Summarise a buyer for the agent taking over the conversation."""

    def __init__(self, urgency_scorer: TimelineUrgencyScorer | None = None) -> None:
        self._urgency_scorer = urgency_scorer or TimelineUrgencyScorer()

    def build(
        self,
        profile: BuyerProfile,
        score: LeadScoreBreakdown,
        messages: Sequence[ChatMessage] = (),
        simulations_run: int = 0,
    ) -> HandoffPackage:
        buyer_messages = [message for message in messages if message.role == MessageRole.BUYER]
        questions = [message.content for message in buyer_messages if "?" in message.content]

        return HandoffPackage(
            profile=profile,
            score=score,
            persona_summary=PERSONA_SUMMARIES[profile.persona],
            urgency_level=self._urgency_scorer.level(profile.urgency_score),
            timeline_hints=self.timeline_hints(profile),
            tools_used={
                "roi_simulations": simulations_run,
                "recommendations_viewed": 1 if score.recommendations_viewed > 0 else 0,
                "chat_messages": len(buyer_messages),
            },
            questions_asked=questions[-MAX_QUESTIONS:],
            suggested_opener=self.opener(profile),
            next_best_action=self.next_best_action(score),
            talking_points=self.talking_points(profile, simulations_run),
        )

    @staticmethod
    def timeline_hints(profile: BuyerProfile) -> list[str]:
        hints: list[str] = []
        if profile.urgency_score >= 70:
            hints.append("Mentioned visiting Dubai soon")
        if profile.goal == "visa":
            hints.append("Visa deadline may be a factor")
        if profile.budget_band == "5m-plus":
            hints.append("Serious budget indicates readiness")
        return hints

    @staticmethod
    def opener(profile: BuyerProfile) -> str:
        name = profile.first_name
        if profile.goal == "investment":
            return (
                f"Hi {name}, I saw you've been exploring investment opportunities in Dubai. "
                "Based on your profile, I have some specific yield opportunities that match your "
                "criteria. Would you have 15 minutes this week to discuss?"
            )
        if profile.goal == "visa":
            return (
                f"Hi {name}, I understand you're interested in the UAE residency pathway through "
                "property. I can walk you through the most efficient options that meet the visa "
                "threshold. When works for a quick call?"
            )
        if profile.goal == "lifestyle":
            return (
                f"Hi {name}, I noticed you're looking at Dubai for a lifestyle move. I'd love to "
                "share some communities that match what you're looking for. Shall we schedule a call?"
            )
        return (
            f"Hi {name}, thank you for your interest in Dubai real estate. I'd be happy to answer "
            "any questions and share personalized recommendations. What's the best time to connect?"
        )

    @staticmethod
    def next_best_action(score: LeadScoreBreakdown) -> str:
        if score.call_requested:
            return "Schedule call immediately - buyer requested contact"
        if score.total_score >= 80:
            return "Call within 4 hours - hot lead"
        if score.roi_simulations_run > 2:
            return "Send detailed property comparison based on their ROI interests"
        if not score.budget_clarity:
            return "Qualify budget and timeline"
        return "Send personalized follow-up with area recommendations"

    @staticmethod
    def talking_points(profile: BuyerProfile, simulations_run: int) -> list[str]:
        points: list[str] = []
        if profile.persona is Persona.YIELD_INVESTOR:
            points.append("Discuss current rental yields in their preferred areas")
            points.append("Mention property management services")
        if profile.persona is Persona.VISA_DRIVEN:
            points.append("Confirm visa threshold requirements (AED 750k minimum)")
            points.append("Explain the Golden Visa option for 2M+ investments")
        if simulations_run > 0:
            points.append(
                f"They ran {simulations_run} ROI simulation(s) - discuss their specific scenarios"
            )
        points.append(f"They prefer communication in {profile.language}")
        if profile.budget_band:
            points.append(f"Their budget range is {format_budget_band(profile.budget_band)}")
        return points


__all__ = ["HandoffPackageBuilder", "PERSONA_SUMMARIES", "format_budget_band"]
