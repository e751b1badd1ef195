"""Urgency scoring and lead temperature derivation from the timeline answer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from buyer_engine.core.entities import LeadTemperature
from buyer_engine.utils.logger import logger


@dataclass(frozen=True)
class UrgencyAssessment:
    """Result of scoring a timeline answer."""

    score: int
    temperature: LeadTemperature


class TimelineUrgencyScorer:
    """Map a timeline answer to a 0-100 urgency score and lead temperature."""

    def __init__(
        self,
        timeline_scores: Optional[Mapping[str, int]] = None,
        default_score: int = 50,
        warm_threshold: int = 70,
    ) -> None:
        scores = dict(timeline_scores) if timeline_scores is not None else {
            "immediate": 95,
            "short-term": 80,
            "medium-term": 60,
            "long-term": 40,
            "just-exploring": 20,
        }
        for timeline, value in [*scores.items(), ("<default>", default_score)]:
            if not 0 <= value <= 100:
                raise ValueError(f"Urgency score for '{timeline}' must be within [0, 100], got {value}.")
        if not 0 <= warm_threshold <= 100:
            raise ValueError(f"warm_threshold must be within [0, 100], got {warm_threshold}.")

        self._timeline_scores = {key.strip().lower(): int(value) for key, value in scores.items()}
        self._default_score = int(default_score)
        self._warm_threshold = int(warm_threshold)
        self._levels: tuple[tuple[int, str], ...] = (
            (80, "Very High - Ready to move now"),
            (60, "High - Active buyer, 1-3 months"),
            (40, "Medium - 3-6 months timeline"),
            (20, "Low - 6-12 months, still researching"),
        )

    @classmethod
    def from_config(cls, config: Mapping[str, object]) -> "TimelineUrgencyScorer":
        raw_scores = config.get("timeline_scores")
        timeline_scores = (
            {str(key): int(value) for key, value in dict(raw_scores).items()}  # type: ignore[call-overload]
            if raw_scores is not None
            else None
        )
        return cls(
            timeline_scores=timeline_scores,
            default_score=int(config.get("default_score", 50)),  # type: ignore[arg-type]
            warm_threshold=int(config.get("warm_threshold", 70)),  # type: ignore[arg-type]
        )

    def score(self, timeline: Optional[str]) -> int:
        key = (timeline or "").strip().lower()
        score = self._timeline_scores.get(key)
        if score is None:
            logger.debug("Unknown timeline '{}'; using neutral score {}", timeline, self._default_score)
            return self._default_score
        return score

    def temperature(self, score: int) -> LeadTemperature:
        return LeadTemperature.WARM if score >= self._warm_threshold else LeadTemperature.COLD

    def assess(self, timeline: Optional[str]) -> UrgencyAssessment:
        score = self.score(timeline)
        return UrgencyAssessment(score=score, temperature=self.temperature(score))

    def level(self, score: int) -> str:
        """Describe an urgency score for agents reading a handoff package."""

        for threshold, label in self._levels:
            if score >= threshold:
                return label
        return "Very Low - Just exploring, no timeline"


__all__ = ["TimelineUrgencyScorer", "UrgencyAssessment"]
