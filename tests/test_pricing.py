import math

import pytest

from src.eddm_planner.services.pricing.engine import (
    InvalidTierTableError,
    PricingTable,
    PricingTier,
    estimated_cost,
    price_for,
    rate_for,
)
from src.eddm_planner.services.pricing.tables import (
    PRICING_TABLES,
    PRINT_TABLE,
    TURNKEY_TABLE,
    UnknownProductError,
    get_table,
)


def _table(min_quantity: int = 1000) -> PricingTable:
    return PricingTable(
        name="test",
        tiers=(
            PricingTier(min=min_quantity, max=4999, rate_per_unit=0.20),
            PricingTier(min=5000, max=math.inf, rate_per_unit=0.15),
        ),
    )


def test_below_minimum_boundary():
    table = _table(1000)
    assert rate_for(999, table) is None
    assert rate_for(1000, table) == table.tiers[0].rate_per_unit


def test_below_minimum_result_has_no_cost_fields():
    result = price_for(499, PRINT_TABLE)
    assert result.below_minimum is True
    assert result.minimum_quantity == 500
    assert result.total is None
    assert result.tier_rate is None
    assert result.add_on_costs == {}


def test_print_pricing_just_below_a_tier_break():
    result = price_for(2450, PRINT_TABLE)

    assert result.tier_rate == 0.17
    assert result.total == pytest.approx(2450 * (0.17 + 0.25 + 0.035))
    assert result.units_until_next_tier == 50
    assert result.next_tier_rate == 0.12
    assert result.add_on_costs["postage"] == pytest.approx(2450 * 0.25)
    assert result.add_on_costs["bundling"] == pytest.approx(2450 * 0.035)


def test_print_pricing_at_tier_start():
    result = price_for(2500, PRINT_TABLE)

    assert result.tier_rate == 0.12
    assert result.total == pytest.approx(2500 * 0.405)
    assert result.current_tier_label == "$0.120/piece"
    assert result.next_tier_label == "$0.100/piece"


def test_potential_savings_is_tier_jump_total_delta():
    result = price_for(2450, PRINT_TABLE)
    assert result.potential_savings == pytest.approx(2450 * 0.455 - 2500 * 0.405)


def test_top_tier_has_no_next_tier():
    result = price_for(25000, PRINT_TABLE)
    assert result.tier_rate == 0.089
    assert result.units_until_next_tier == 0
    assert result.potential_savings == 0.0
    assert result.next_tier_label is None


@pytest.mark.parametrize("table", list(PRICING_TABLES.values()), ids=list(PRICING_TABLES))
def test_rates_never_increase_with_quantity(table):
    quantities = [table.minimum_quantity + step for step in range(0, 30000, 37)]
    rates = [rate_for(quantity, table) for quantity in quantities]
    assert all(later <= earlier for earlier, later in zip(rates, rates[1:]))


def test_turnkey_has_no_minimum_but_flags_small_orders():
    zero = price_for(0, TURNKEY_TABLE)
    assert zero.below_minimum is False
    assert zero.total == 0
    assert zero.below_recommended is False

    small = price_for(800, TURNKEY_TABLE)
    assert small.total == pytest.approx(800 * 0.65)
    assert small.below_recommended is True
    assert small.current_tier_label == "$0.65/piece"

    assert price_for(1000, TURNKEY_TABLE).below_recommended is False


def test_price_for_is_pure():
    assert price_for(3210, PRINT_TABLE) == price_for(3210, PRINT_TABLE)


def test_negative_quantity_is_rejected():
    with pytest.raises(ValueError):
        price_for(-1, PRINT_TABLE)


def test_estimated_cost_uses_entry_rate_below_minimum():
    assert estimated_cost(400, PRINT_TABLE) == pytest.approx(400 * (0.23 + 0.285))
    assert estimated_cost(2500, PRINT_TABLE) == pytest.approx(2500 * 0.405)


@pytest.mark.parametrize(
    "tiers",
    [
        (),
        (PricingTier(min=0, max=99, rate_per_unit=0.5), PricingTier(min=150, max=math.inf, rate_per_unit=0.4)),
        (PricingTier(min=0, max=99, rate_per_unit=0.5), PricingTier(min=50, max=math.inf, rate_per_unit=0.4)),
        (PricingTier(min=0, max=99, rate_per_unit=0.5), PricingTier(min=100, max=math.inf, rate_per_unit=0.6)),
        (PricingTier(min=0, max=99, rate_per_unit=0.5), PricingTier(min=100, max=999, rate_per_unit=0.4)),
    ],
    ids=["empty", "gap", "overlap", "rising-rate", "bounded-top"],
)
def test_invalid_tier_tables_are_rejected(tiers):
    with pytest.raises(InvalidTierTableError):
        PricingTable(name="bad", tiers=tiers)


def test_get_table():
    assert get_table("turnkey") is TURNKEY_TABLE
    with pytest.raises(UnknownProductError):
        get_table("letterpress")
