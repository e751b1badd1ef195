"""Use case for preparing an agent handoff package."""
from __future__ import annotations

from dataclasses import replace
from typing import Optional, Protocol, Sequence

from buyer_engine.core.entities import (
    BuyerProfile,
    ChatMessage,
    HandoffPackage,
    IntentSignal,
    LeadActivity,
    LeadScoreBreakdown,
)
from buyer_engine.utils.logger import logger


class LeadScorer(Protocol):
    def score(self, profile: Optional[BuyerProfile], activity: LeadActivity) -> LeadScoreBreakdown:
        ...


class HandoffBuilder(Protocol):
    def build(
        self,
        profile: BuyerProfile,
        score: LeadScoreBreakdown,
        messages: Sequence[ChatMessage] = (),
        simulations_run: int = 0,
    ) -> HandoffPackage:
        ...


class PrepareHandoffUseCase:
    """Score the lead and assemble what the agent needs to take over."""

    def __init__(self, scorer: LeadScorer, builder: HandoffBuilder) -> None:
        self._scorer = scorer
        self._builder = builder

    def execute(
        self,
        profile: BuyerProfile,
        activity: LeadActivity,
        messages: Sequence[ChatMessage] = (),
    ) -> HandoffPackage:
        if not activity.call_requested and any(
            IntentSignal.CALL_REQUEST in (message.intent_signals or frozenset())
            for message in messages
        ):
            activity = replace(activity, call_requested=True)

        score = self._scorer.score(profile, activity)
        logger.info(
            "Preparing handoff for {} ({} / {})",
            profile.first_name,
            score.total_score,
            score.category.value,
        )
        return self._builder.build(
            profile,
            score,
            messages=messages,
            simulations_run=activity.roi_simulations_run,
        )


__all__ = ["PrepareHandoffUseCase"]
