"""Keyword-based detection of buyer intent signals in chat messages."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from buyer_engine.core.entities import IntentSignal
from buyer_engine.utils.logger import logger


@dataclass(frozen=True)
class PhraseFamily:
    """Phrases whose presence anywhere in a message emits ``signal``."""

    signal: IntentSignal
    phrases: tuple[str, ...]


class KeywordIntentDetector:
    """Emit every signal whose phrase family occurs in the message.

    Matching is a plain case-insensitive substring test. There is no stemming
    and no negation handling: "I don't want to buy" still yields
    ``purchase_intent``.
    """

    def __init__(self, families: Sequence[PhraseFamily] | None = None) -> None:
        if families is None:
            families = (
                PhraseFamily(IntentSignal.PLANNING_VISIT, ("visit", "coming to dubai")),
                PhraseFamily(IntentSignal.PURCHASE_INTENT, ("buy", "purchase")),
                PhraseFamily(IntentSignal.CALL_REQUEST, ("speak", "call", "talk to someone")),
                PhraseFamily(IntentSignal.PROPERTY_INTEREST, ("available", "options")),
                PhraseFamily(IntentSignal.BOOKING_INTENT, ("reserve", "book")),
            )
        self._families: tuple[PhraseFamily, ...] = tuple(
            PhraseFamily(family.signal, tuple(phrase.lower() for phrase in family.phrases if phrase))
            for family in families
        )

    @classmethod
    def from_config(cls, config: Sequence[Mapping[str, object]]) -> "KeywordIntentDetector":
        families: list[PhraseFamily] = []
        for entry in config:
            raw_signal = entry.get("signal")
            if raw_signal is None:
                raise ValueError("Each intent family must define a 'signal'.")
            try:
                signal = IntentSignal(str(raw_signal))
            except ValueError as error:
                raise ValueError(f"Unknown intent signal '{raw_signal}'.") from error

            phrases = [str(phrase) for phrase in entry.get("phrases") or []]  # type: ignore[union-attr]
            if not phrases:
                raise ValueError(f"Intent family '{signal.value}' must define at least one phrase.")
            families.append(PhraseFamily(signal, tuple(phrases)))
        return cls(families)

    def detect(self, text: str) -> frozenset[IntentSignal]:
        lowered = text.lower()
        logger.debug("Detecting intent signals for a {}-character message", len(text))
        signals = frozenset(
            family.signal
            for family in self._families
            if any(phrase in lowered for phrase in family.phrases)
        )
        if signals:
            logger.debug("Detected signals: {}", sorted(signal.value for signal in signals))
        return signals


__all__ = ["KeywordIntentDetector", "PhraseFamily"]
