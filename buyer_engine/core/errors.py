"""Validation errors raised at the boundary of the engine."""
from __future__ import annotations


class InvalidSimulationInput(ValueError):
    """Raised when simulation parameters are malformed or out of range."""


class UnsupportedCurrency(ValueError):
    """Raised when a currency code is not present in the exchange table."""


__all__ = ["InvalidSimulationInput", "UnsupportedCurrency"]
