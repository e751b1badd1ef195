"""Use case for annotating inbound chat messages and answering them."""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Optional, Protocol, Sequence

from buyer_engine.core.entities import (
    AdvisorReply,
    BuyerProfile,
    ChatMessage,
    IntentSignal,
    MessageRole,
)
from buyer_engine.infrastructure.conversation.replies import ReplyContext
from buyer_engine.utils.logger import logger


class IntentDetector(Protocol):
    def detect(self, text: str) -> frozenset[IntentSignal]:
        ...


class EscalationDecider(Protocol):
    def should_escalate(self, signals: AbstractSet[IntentSignal]) -> bool:
        ...


class ReplyComposer(Protocol):
    def compose(self, text: str, context: ReplyContext | None = None) -> AdvisorReply:
        ...


@dataclass(frozen=True)
class ChatTurn:
    """Outcome of processing one buyer message."""

    buyer_message: ChatMessage
    advisor_message: Optional[ChatMessage]
    escalate: bool
    first_escalation: bool


class HandleChatMessageUseCase:
    """Annotate a buyer message with signals and an escalation decision."""

    def __init__(
        self,
        detector: IntentDetector,
        policy: EscalationDecider,
        composer: ReplyComposer | None = None,
    ) -> None:
        self._detector = detector
        self._policy = policy
        self._composer = composer

    def annotate(self, message: ChatMessage) -> ChatMessage:
        signals = self._detector.detect(message.content)
        escalate = self._policy.should_escalate(signals)
        return message.annotate(signals, escalate)

    def execute(
        self,
        message: ChatMessage,
        history: Sequence[ChatMessage] = (),
        profile: Optional[BuyerProfile] = None,
    ) -> ChatTurn:
        if message.role != MessageRole.BUYER:
            raise ValueError("Only buyer messages can be processed by the chat use case.")

        logger.info("Processing buyer message ({} previous messages)", len(history))
        annotated = self.annotate(message)
        escalate = bool(annotated.escalation)

        advisor_message: Optional[ChatMessage] = None
        if self._composer is not None:
            reply = self._composer.compose(message.content, ReplyContext.from_profile(profile))
            advisor_message = ChatMessage(
                role=MessageRole.ADVISOR,
                content=reply.content,
                intent_signals=reply.signals,
                escalation=reply.escalate,
            )
            escalate = reply.escalate

        already_escalated = any(previous.escalation for previous in history)
        if escalate:
            logger.info("Conversation flagged for human handoff")

        return ChatTurn(
            buyer_message=annotated,
            advisor_message=advisor_message,
            escalate=escalate,
            first_escalation=escalate and not already_escalated,
        )


__all__ = ["ChatTurn", "HandleChatMessageUseCase"]
