"""Assemble the engine's use cases from configuration."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from buyer_engine.config import AppConfig, load_config
from buyer_engine.infrastructure.conversation.escalation import EscalationPolicy
from buyer_engine.infrastructure.conversation.intent import KeywordIntentDetector
from buyer_engine.infrastructure.conversation.replies import AdvisorReplyComposer
from buyer_engine.infrastructure.currency.exchange import ExchangeTable
from buyer_engine.infrastructure.leads.handoff import HandoffPackageBuilder
from buyer_engine.infrastructure.leads.scoring import EngagementLeadScorer
from buyer_engine.infrastructure.profiling.persona import PersonaClassifier
from buyer_engine.infrastructure.profiling.urgency import TimelineUrgencyScorer
from buyer_engine.infrastructure.reports.projections import ProjectionTableBuilder
from buyer_engine.infrastructure.simulation.roi import ROISimulator
from buyer_engine.use_cases.build_profile import BuildBuyerProfileUseCase
from buyer_engine.use_cases.handle_chat_message import HandleChatMessageUseCase
from buyer_engine.use_cases.prepare_handoff import PrepareHandoffUseCase
from buyer_engine.use_cases.simulate_investment import SimulateInvestmentUseCase
from buyer_engine.utils.logger import configure_logging, logger


@dataclass(frozen=True)
class BuyerEngine:
    """Entry points a host application calls into."""

    exchange: ExchangeTable
    build_profile: BuildBuyerProfileUseCase
    handle_chat_message: HandleChatMessageUseCase
    simulate_investment: SimulateInvestmentUseCase
    prepare_handoff: PrepareHandoffUseCase
    projections: ProjectionTableBuilder


def build_engine(config: Optional[AppConfig] = None) -> BuyerEngine:
    """Wire every component, using built-in tables where ``config`` is silent."""

    config = config or {}
    logging_cfg = config.get("logging")
    if logging_cfg and logging_cfg.get("level"):
        configure_logging(logging_cfg["level"])

    currency_cfg = config.get("currency")
    exchange = ExchangeTable.from_config(currency_cfg) if currency_cfg else ExchangeTable.default()

    urgency_cfg = config.get("urgency")
    urgency = (
        TimelineUrgencyScorer.from_config(urgency_cfg) if urgency_cfg else TimelineUrgencyScorer()
    )

    conversation_cfg = config.get("conversation") or {}
    families = conversation_cfg.get("intent_families")
    detector = KeywordIntentDetector.from_config(families) if families else KeywordIntentDetector()
    escalation_signals = conversation_cfg.get("escalation_signals")
    policy = (
        EscalationPolicy.from_config(escalation_signals) if escalation_signals else EscalationPolicy()
    )

    simulation_cfg = config.get("simulation")
    simulator = ROISimulator.from_config(simulation_cfg) if simulation_cfg else ROISimulator()

    logger.info("Buyer engine assembled")
    return BuyerEngine(
        exchange=exchange,
        build_profile=BuildBuyerProfileUseCase(PersonaClassifier(), urgency, exchange),
        handle_chat_message=HandleChatMessageUseCase(
            detector, policy, AdvisorReplyComposer(detector, policy)
        ),
        simulate_investment=SimulateInvestmentUseCase(simulator),
        prepare_handoff=PrepareHandoffUseCase(
            EngagementLeadScorer(), HandoffPackageBuilder(urgency)
        ),
        projections=ProjectionTableBuilder(exchange),
    )


def build_engine_from_file(path: Path | str | None = None) -> BuyerEngine:
    return build_engine(load_config(path))


__all__ = ["BuyerEngine", "build_engine", "build_engine_from_file"]
