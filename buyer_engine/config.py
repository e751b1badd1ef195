"""Configuration loading for the buyer intelligence engine."""
from __future__ import annotations

from pathlib import Path
from typing import TypedDict

import yaml

from buyer_engine.utils.logger import logger

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "configs" / "config.yaml"


class LoggingConfig(TypedDict, total=False):
    level: str


class CurrencyConfig(TypedDict, total=False):
    rates: dict[str, float]
    symbols: dict[str, str]
    country_currencies: dict[str, str]
    default_currency: str


class UrgencyConfig(TypedDict, total=False):
    timeline_scores: dict[str, int]
    default_score: int
    warm_threshold: int


class IntentFamilyEntry(TypedDict, total=False):
    signal: str
    phrases: list[str]


class ConversationConfig(TypedDict, total=False):
    intent_families: list[IntentFamilyEntry]
    escalation_signals: list[str]


class SimulationConfig(TypedDict, total=False):
    base_yields: dict[str, float]
    base_appreciation: dict[str, float]
    property_modifiers: dict[str, float]
    min_horizon: int
    max_horizon: int


class AppConfig(TypedDict, total=False):
    logging: LoggingConfig
    currency: CurrencyConfig
    urgency: UrgencyConfig
    conversation: ConversationConfig
    simulation: SimulationConfig


def load_config(path: Path | str | None = None) -> AppConfig:
    """Read the YAML configuration at ``path`` (or the bundled default)."""

    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info("Loading configuration from {}", config_path)
    with config_path.open("r", encoding="utf-8") as file:
        data = yaml.safe_load(file) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be a mapping, got {type(data).__name__}")
    return data  # type: ignore[return-value]


__all__ = ["AppConfig", "DEFAULT_CONFIG_PATH", "load_config"]
