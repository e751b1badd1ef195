"""Human handoff decision based on detected intent signals."""
from __future__ import annotations

from typing import AbstractSet, Iterable, Sequence

from buyer_engine.core.entities import ChatMessage, IntentSignal
from buyer_engine.utils.logger import logger

HIGH_INTENT_SIGNALS: frozenset[IntentSignal] = frozenset(
    {
        IntentSignal.CALL_REQUEST,
        IntentSignal.BOOKING_INTENT,
        IntentSignal.PLANNING_VISIT,
    }
)


class EscalationPolicy:
    """Escalate whenever a high-intent signal is present."""

    def __init__(self, high_intent_signals: Iterable[IntentSignal] = HIGH_INTENT_SIGNALS) -> None:
        self._high_intent = frozenset(high_intent_signals)
        if not self._high_intent:
            raise ValueError("At least one escalation signal must be configured.")

    @classmethod
    def from_config(cls, signals: Sequence[str]) -> "EscalationPolicy":
        return cls(IntentSignal(str(signal)) for signal in signals)

    @property
    def high_intent_signals(self) -> frozenset[IntentSignal]:
        return self._high_intent

    def should_escalate(self, signals: AbstractSet[IntentSignal]) -> bool:
        matched = self._high_intent & frozenset(signals)
        if matched:
            logger.debug("Escalation triggered by {}", sorted(signal.value for signal in matched))
        return bool(matched)

    @staticmethod
    def conversation_escalated(messages: Iterable[ChatMessage]) -> bool:
        """Return whether any message of the conversation was flagged for handoff."""

        return any(message.escalation for message in messages)


__all__ = ["EscalationPolicy", "HIGH_INTENT_SIGNALS"]
