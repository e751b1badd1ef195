"""Use case for running ROI simulations requested by the host."""
from __future__ import annotations

from typing import Protocol

from buyer_engine.core.entities import AreaCluster, Currency, PropertyType, SimulationInputs, SimulationResult
from buyer_engine.utils.logger import logger


class Simulator(Protocol):
    def build_inputs(
        self,
        budget: float,
        property_type: PropertyType | str,
        area_cluster: AreaCluster | str,
        time_horizon: int = 5,
        display_currency: Currency | str = Currency.USD,
    ) -> SimulationInputs:
        ...

    def simulate(self, inputs: SimulationInputs) -> SimulationResult:
        ...


class SimulateInvestmentUseCase:
    """Validate raw parameters and delegate to the simulator."""

    def __init__(self, simulator: Simulator) -> None:
        self._simulator = simulator

    def execute(
        self,
        budget: float,
        property_type: PropertyType | str,
        area_cluster: AreaCluster | str,
        time_horizon: int = 5,
        display_currency: Currency | str = Currency.USD,
    ) -> SimulationResult:
        logger.info(
            "Simulating {} in {} for budget {} over {} years",
            property_type,
            area_cluster,
            budget,
            time_horizon,
        )
        inputs = self._simulator.build_inputs(
            budget,
            property_type,
            area_cluster,
            time_horizon=time_horizon,
            display_currency=display_currency,
        )
        return self._simulator.simulate(inputs)


__all__ = ["SimulateInvestmentUseCase"]
