"""Multi-scenario rental yield and appreciation projections."""
from __future__ import annotations

import math
from typing import Mapping, Optional, TypeVar

from buyer_engine.core.entities import (
    AreaCluster,
    Currency,
    PropertyType,
    ScenarioSet,
    SimulationInputs,
    SimulationResult,
)
from buyer_engine.core.errors import InvalidSimulationInput, UnsupportedCurrency
from buyer_engine.infrastructure.currency.exchange import parse_currency
from buyer_engine.utils.logger import logger

PROJECTION_YEARS: tuple[int, ...] = (1, 3, 5, 10)

CONSERVATIVE_YIELD_FACTOR = 0.85
OPTIMISTIC_YIELD_FACTOR = 1.15
CONSERVATIVE_APPRECIATION_FACTOR = 0.70
OPTIMISTIC_APPRECIATION_FACTOR = 1.30

_E = TypeVar("_E", PropertyType, AreaCluster)


def _parse_member(enum_type: type[_E], value: _E | str, label: str) -> _E:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).strip().lower())
    except ValueError as error:
        allowed = ", ".join(member.value for member in enum_type)
        raise InvalidSimulationInput(
            f"Unknown {label} '{value}'. Expected one of: {allowed}."
        ) from error


def _parse_number(value: object, label: str) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as error:
        raise InvalidSimulationInput(f"{label} must be a number, got '{value}'.") from error


def _parse_horizon(value: object) -> int:
    years = _parse_number(value, "Time horizon")
    if not years.is_integer():
        raise InvalidSimulationInput(f"Time horizon must be a whole number of years, got {value}.")
    return int(years)


def _complete_table(
    enum_type: type[_E], table: Mapping[_E, float], label: str
) -> dict[_E, float]:
    missing = [member.value for member in enum_type if member not in table]
    if missing:
        raise ValueError(f"{label} table is missing entries for: " + ", ".join(missing))
    return {member: float(table[member]) for member in enum_type}


class ROISimulator:
    """Project yield, appreciation, exit value and total return for an investment.

    All figures are computed in USD. Only the moderate appreciation path feeds
    exit values and total returns; the conservative and optimistic appreciation
    rates are reported alongside for display.
    """

    def __init__(
        self,
        base_yields: Optional[Mapping[AreaCluster, float]] = None,
        base_appreciation: Optional[Mapping[AreaCluster, float]] = None,
        property_modifiers: Optional[Mapping[PropertyType, float]] = None,
        min_horizon: int = 1,
        max_horizon: int = 10,
    ) -> None:
        self._base_yields = _complete_table(
            AreaCluster,
            base_yields
            or {
                AreaCluster.PRIME: 5.5,
                AreaCluster.GROWTH_CORRIDOR: 7.5,
                AreaCluster.FAMILY_HUB: 5.8,
                AreaCluster.WATERFRONT: 6.2,
                AreaCluster.EMERGING: 6.8,
            },
            "Base yield",
        )
        self._base_appreciation = _complete_table(
            AreaCluster,
            base_appreciation
            or {
                AreaCluster.PRIME: 6.0,
                AreaCluster.GROWTH_CORRIDOR: 10.0,
                AreaCluster.FAMILY_HUB: 5.0,
                AreaCluster.WATERFRONT: 7.0,
                AreaCluster.EMERGING: 12.0,
            },
            "Base appreciation",
        )
        self._property_modifiers = _complete_table(
            PropertyType,
            property_modifiers
            or {
                PropertyType.STUDIO: 1.10,
                PropertyType.ONE_BEDROOM: 1.05,
                PropertyType.TWO_BEDROOM: 1.00,
                PropertyType.THREE_BEDROOM: 0.95,
                PropertyType.TOWNHOUSE: 0.90,
                PropertyType.VILLA: 0.85,
                PropertyType.PENTHOUSE: 0.80,
            },
            "Property modifier",
        )
        for label, table in (
            ("Base yield", self._base_yields),
            ("Base appreciation", self._base_appreciation),
            ("Property modifier", self._property_modifiers),
        ):
            for key, value in table.items():
                if value < 0:
                    raise ValueError(f"{label} for '{key.value}' cannot be negative, got {value}.")
        if min_horizon < 1 or min_horizon > max_horizon:
            raise ValueError(
                f"Invalid horizon bounds: min ({min_horizon}) must be >= 1 and <= max ({max_horizon})."
            )
        self._min_horizon = min_horizon
        self._max_horizon = max_horizon

    @classmethod
    def from_config(cls, config: Mapping[str, object]) -> "ROISimulator":
        def _areas(key: str) -> Optional[dict[AreaCluster, float]]:
            raw = config.get(key)
            if raw is None:
                return None
            return {AreaCluster(str(area)): float(value) for area, value in dict(raw).items()}  # type: ignore[call-overload]

        raw_modifiers = config.get("property_modifiers")
        modifiers = (
            {PropertyType(str(kind)): float(value) for kind, value in dict(raw_modifiers).items()}  # type: ignore[call-overload]
            if raw_modifiers is not None
            else None
        )
        return cls(
            base_yields=_areas("base_yields"),
            base_appreciation=_areas("base_appreciation"),
            property_modifiers=modifiers,
            min_horizon=int(config.get("min_horizon", 1)),  # type: ignore[arg-type]
            max_horizon=int(config.get("max_horizon", 10)),  # type: ignore[arg-type]
        )

    def build_inputs(
        self,
        budget: float,
        property_type: PropertyType | str,
        area_cluster: AreaCluster | str,
        time_horizon: int = 5,
        display_currency: Currency | str = Currency.USD,
    ) -> SimulationInputs:
        """Parse raw host values into validated :class:`SimulationInputs`."""

        try:
            currency = parse_currency(display_currency)
        except UnsupportedCurrency as error:
            raise InvalidSimulationInput(str(error)) from error

        inputs = SimulationInputs(
            budget=_parse_number(budget, "Budget"),
            property_type=_parse_member(PropertyType, property_type, "property type"),
            area_cluster=_parse_member(AreaCluster, area_cluster, "area cluster"),
            time_horizon=_parse_horizon(time_horizon),
            display_currency=currency,
        )
        self.validate(inputs)
        return inputs

    def validate(self, inputs: SimulationInputs) -> None:
        if not isinstance(inputs.property_type, PropertyType):
            raise InvalidSimulationInput(f"Unknown property type '{inputs.property_type}'.")
        if not isinstance(inputs.area_cluster, AreaCluster):
            raise InvalidSimulationInput(f"Unknown area cluster '{inputs.area_cluster}'.")
        if not isinstance(inputs.display_currency, Currency):
            raise InvalidSimulationInput(f"Unsupported display currency '{inputs.display_currency}'.")
        if not math.isfinite(inputs.budget) or inputs.budget <= 0:
            raise InvalidSimulationInput(f"Budget must be a positive amount, got {inputs.budget}.")
        if isinstance(inputs.time_horizon, float) and not inputs.time_horizon.is_integer():
            raise InvalidSimulationInput(
                f"Time horizon must be a whole number of years, got {inputs.time_horizon}."
            )
        if not self._min_horizon <= inputs.time_horizon <= self._max_horizon:
            raise InvalidSimulationInput(
                f"Time horizon must be between {self._min_horizon} and {self._max_horizon} years, "
                f"got {inputs.time_horizon}."
            )

    def simulate(self, inputs: SimulationInputs) -> SimulationResult:
        self.validate(inputs)
        budget = inputs.budget

        moderate_yield = (
            self._base_yields[inputs.area_cluster] * self._property_modifiers[inputs.property_type]
        )
        yields = ScenarioSet(
            conservative=moderate_yield * CONSERVATIVE_YIELD_FACTOR,
            moderate=moderate_yield,
            optimistic=moderate_yield * OPTIMISTIC_YIELD_FACTOR,
        )

        base_appreciation = self._base_appreciation[inputs.area_cluster]
        appreciation = ScenarioSet(
            conservative=base_appreciation * CONSERVATIVE_APPRECIATION_FACTOR,
            moderate=base_appreciation,
            optimistic=base_appreciation * OPTIMISTIC_APPRECIATION_FACTOR,
        )

        income = ScenarioSet(
            conservative=budget * (yields.conservative / 100),
            moderate=budget * (yields.moderate / 100),
            optimistic=budget * (yields.optimistic / 100),
        )

        exit_value: dict[int, float] = {}
        total_return: dict[int, float] = {}
        for years in PROJECTION_YEARS:
            exit_value[years] = budget * (1 + appreciation.moderate / 100) ** years
            capital_gain = exit_value[years] - budget
            total_return[years] = (income.moderate * years + capital_gain) / budget * 100

        logger.debug(
            "Simulated {} in {}: yield {:.3f}%, appreciation {:.1f}%",
            inputs.property_type.value,
            inputs.area_cluster.value,
            yields.moderate,
            appreciation.moderate,
        )
        return SimulationResult(
            inputs=inputs,
            yields=yields,
            appreciation=appreciation,
            annual_rental_income=income,
            exit_value=exit_value,
            total_return=total_return,
        )


__all__ = ["PROJECTION_YEARS", "ROISimulator"]
