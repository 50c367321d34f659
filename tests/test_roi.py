import pytest

from src.eddm_planner.services.roi.profiles import (
    INDUSTRY_PROFILES,
    ScenarioRates,
    UnknownIndustryError,
    get_profile,
)
from src.eddm_planner.services.roi.projector import project, validate_overrides, with_overrides


def test_restaurant_projection():
    projection = project(5000, 2000.0, get_profile("restaurant"))
    baseline = projection.baseline

    assert baseline.responses == pytest.approx(50)
    assert baseline.customers == pytest.approx(16)
    assert baseline.revenue == pytest.approx(16 * 192)
    assert baseline.gross_profit == pytest.approx(16 * 192 * 0.32)
    assert baseline.net_profit == pytest.approx(16 * 192 * 0.32 - 2000)
    assert baseline.roi_multiple == pytest.approx(16 * 192 * 0.32 / 2000)
    assert baseline.cac == pytest.approx(125)
    assert projection.break_even_customers == pytest.approx(2000 / (192 * 0.32))


def test_scenarios_are_ordered_by_performance():
    projection = project(10000, 4500.0, get_profile("home_services"))
    scenarios = projection.scenarios()

    assert list(scenarios) == ["baseline", "typical", "best_in_class"]
    assert scenarios["baseline"].customers < scenarios["typical"].customers < scenarios["best_in_class"].customers


def test_typical_scenario_is_profitable_for_every_industry():
    # Reference data is tuned so a typical campaign clears 1.1x.
    for profile in INDUSTRY_PROFILES.values():
        addresses = 5000
        cost = addresses * 0.455
        assert project(addresses, cost, profile).typical.roi_multiple > 1.1, profile.key


def test_zero_denominators_return_zero():
    zero_cost = project(5000, 0.0, get_profile("retail"))
    assert zero_cost.typical.roi_multiple == 0
    assert zero_cost.typical.roi_percentage == 0
    assert zero_cost.typical.cac == 0

    no_addresses = project(0, 500.0, get_profile("retail"))
    assert no_addresses.typical.customers == 0
    assert no_addresses.typical.cac == 0
    assert no_addresses.typical.break_even_response_rate == 0


def test_break_even_is_scenario_independent():
    projection = project(8000, 3000.0, get_profile("healthcare"))
    values = {scenario.break_even_customers for scenario in projection.scenarios().values()}
    assert values == {projection.break_even_customers}


def test_unknown_industry():
    with pytest.raises(UnknownIndustryError):
        get_profile("aerospace")


def test_overrides_return_a_new_profile():
    profile = get_profile("real_estate")
    custom = with_overrides(profile, economics={"ltv": 9000})

    assert custom.economics.ltv == 9000
    assert profile.economics.ltv == 4500
    assert custom.response_rate == profile.response_rate


def test_override_validation():
    errors = validate_overrides(
        response_rate=ScenarioRates(baseline=0.5, typical=0.5, best_in_class=0.5),
        economics={"margin": 2.0, "repeats": 3},
    )
    assert errors == [
        "Response rate should be between 0.01% and 10%",
        "Margin should be between 1% and 100%",
    ]
    assert validate_overrides(economics={"ticket": 40}) == []


def test_unknown_economics_field_is_rejected():
    with pytest.raises(ValueError):
        with_overrides(get_profile("retail"), economics={"churn": 0.1})
