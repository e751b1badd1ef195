"""Tests for the simulation projection tables."""
from __future__ import annotations

import pytest

pd = pytest.importorskip("pandas")

from buyer_engine.core.entities import AreaCluster, Currency, PropertyType, SimulationInputs
from buyer_engine.infrastructure.reports.projections import ProjectionTableBuilder
from buyer_engine.infrastructure.simulation.roi import ROISimulator


@pytest.fixture()
def result():
    return ROISimulator().simulate(
        SimulationInputs(
            1_000_000,
            PropertyType.TWO_BEDROOM,
            AreaCluster.GROWTH_CORRIDOR,
            time_horizon=5,
            display_currency=Currency.AED,
        )
    )


def test_timeline_has_one_row_per_projection_year(result) -> None:
    frame = ProjectionTableBuilder().timeline(result)

    assert frame["year"].tolist() == [1, 3, 5, 10]
    assert frame["currency"].unique().tolist() == ["AED"]
    row = frame.set_index("year").loc[5]
    assert row["exit_value_usd"] == pytest.approx(1_610_510)
    assert row["exit_value"] == pytest.approx(1_610_510 * 3.67)
    assert row["total_return_pct"] == pytest.approx(98.551)
    assert row["exit_value_display"].startswith("AED 5.91M")


def test_conversion_leaves_result_untouched(result) -> None:
    before = dict(result.exit_value)

    ProjectionTableBuilder().timeline(result, currency="GBP")

    assert dict(result.exit_value) == before


def test_scenarios_table(result) -> None:
    frame = ProjectionTableBuilder().scenarios(result, currency=Currency.USD)

    assert frame["scenario"].tolist() == ["conservative", "moderate", "optimistic"]
    assert frame["yield_pct"].is_monotonic_increasing
    assert frame.loc[1, "annual_income_display"] == "$75,000"


def test_summary_uses_moderate_scenario(result) -> None:
    summary = ProjectionTableBuilder().summary(result, currency="USD")

    assert summary == (
        "A $1.00M investment could generate approximately $75,000 in annual rental "
        "income with 10.0% appreciation per year."
    )
