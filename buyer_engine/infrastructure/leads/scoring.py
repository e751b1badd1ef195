"""Engagement-based lead scoring."""
from __future__ import annotations

from typing import Optional

from buyer_engine.core.entities import BuyerProfile, LeadActivity, LeadCategory, LeadScoreBreakdown
from buyer_engine.utils.logger import logger


class EngagementLeadScorer:
    """Add up engagement points and bucket the total into a lead category."""

    def __init__(
        self,
        ready_threshold: int = 80,
        hot_threshold: int = 60,
        warm_threshold: int = 40,
    ) -> None:
        if not warm_threshold <= hot_threshold <= ready_threshold:
            raise ValueError(
                "Lead category thresholds must satisfy warm <= hot <= ready-to-call."
            )
        self._categories: tuple[tuple[int, LeadCategory], ...] = (
            (ready_threshold, LeadCategory.READY_TO_CALL),
            (hot_threshold, LeadCategory.HOT),
            (warm_threshold, LeadCategory.WARM),
        )

    def category(self, score: int) -> LeadCategory:
        for threshold, label in self._categories:
            if score >= threshold:
                return label
        return LeadCategory.COLD

    def score(self, profile: Optional[BuyerProfile], activity: LeadActivity) -> LeadScoreBreakdown:
        onboarding = 20 if activity.onboarding_completed else 0
        simulations = min(activity.roi_simulations_run * 10, 30)
        chat = min(activity.conversations * 5 + activity.buyer_messages, 20)

        budget = 0
        urgency = 0
        if profile is not None:
            if profile.budget_band and profile.budget_band != "under-500k":
                budget = 10
            if profile.urgency_score > 70:
                urgency = 10
        returning = 5 if activity.days_since_creation > 1 else 0

        total = min(onboarding + simulations + chat + budget + urgency + returning, 100)
        category = self.category(total)
        logger.debug("Lead score {} ({})", total, category.value)

        return LeadScoreBreakdown(
            onboarding_points=onboarding,
            simulation_points=simulations,
            chat_points=chat,
            budget_points=budget,
            urgency_points=urgency,
            returning_points=returning,
            roi_simulations_run=activity.roi_simulations_run,
            conversations=activity.conversations,
            buyer_messages=activity.buyer_messages,
            recommendations_viewed=activity.recommendations_viewed,
            call_requested=activity.call_requested,
            contact_shared=activity.contact_shared,
            budget_clarity=profile is not None and bool(profile.budget_band),
            total_score=total,
            category=category,
        )


__all__ = ["EngagementLeadScorer"]
