"""Tabular renderings of simulation results for host dashboards."""
from __future__ import annotations

from typing import Optional

import pandas as pd

from buyer_engine.core.entities import Currency, SimulationResult
from buyer_engine.infrastructure.currency.exchange import ExchangeTable, parse_currency


class ProjectionTableBuilder:
    """Build DataFrames from a :class:`SimulationResult` in a display currency.

    The result itself is never modified; converted columns are added next to
    the USD figures.
    """

    def __init__(self, exchange: ExchangeTable | None = None) -> None:
        self._exchange = exchange or ExchangeTable.default()

    def _currency(self, result: SimulationResult, currency: Optional[Currency | str]) -> Currency:
        return parse_currency(currency) if currency is not None else result.inputs.display_currency

    def timeline(
        self, result: SimulationResult, currency: Optional[Currency | str] = None
    ) -> pd.DataFrame:
        """One row per projection year with exit value and total return."""

        display = self._currency(result, currency)
        years = sorted(result.exit_value)
        frame = pd.DataFrame(
            {
                "year": years,
                "exit_value_usd": [result.exit_value[year] for year in years],
                "total_return_pct": [result.total_return[year] for year in years],
            }
        )
        frame["exit_value"] = frame["exit_value_usd"] * self._exchange.rate(display)
        frame["exit_value_display"] = frame["exit_value_usd"].apply(
            lambda value: self._exchange.format_money(value, display)
        )
        frame["currency"] = display.value
        return frame

    def scenarios(
        self, result: SimulationResult, currency: Optional[Currency | str] = None
    ) -> pd.DataFrame:
        """One row per scenario with yield, appreciation and annual income."""

        display = self._currency(result, currency)
        yields = result.yields.as_dict()
        appreciation = result.appreciation.as_dict()
        income = result.annual_rental_income.as_dict()
        frame = pd.DataFrame(
            {
                "scenario": list(yields),
                "yield_pct": [yields[name] for name in yields],
                "appreciation_pct": [appreciation[name] for name in yields],
                "annual_income_usd": [income[name] for name in yields],
            }
        )
        frame["annual_income"] = frame["annual_income_usd"] * self._exchange.rate(display)
        frame["annual_income_display"] = frame["annual_income_usd"].apply(
            lambda value: self._exchange.format_money(value, display)
        )
        frame["currency"] = display.value
        return frame

    def summary(self, result: SimulationResult, currency: Optional[Currency | str] = None) -> str:
        """One-line narrative of the moderate scenario."""

        display = self._currency(result, currency)
        budget = self._exchange.format_money(result.inputs.budget, display)
        income = self._exchange.format_money(result.annual_rental_income.moderate, display)
        return (
            f"A {budget} investment could generate approximately {income} in annual rental "
            f"income with {result.appreciation.moderate:.1f}% appreciation per year."
        )


__all__ = ["ProjectionTableBuilder"]
