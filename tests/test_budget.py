import pytest

from src.eddm_planner.services.budget.optimizer import optimize, plan_within_budget
from src.eddm_planner.services.catalog import build_route
from src.eddm_planner.services.pricing.engine import estimated_cost
from src.eddm_planner.services.pricing.tables import PRINT_TABLE


def _route(crid: str, residential: int, business: int = 0):
    return build_route(
        route_id=f"33815-{crid}",
        zip_code="33815",
        rings=[[(28.0, -81.9), (28.0, -81.8), (28.1, -81.8)]],
        residential_count=residential,
        business_count=business,
    )


def _cost(routes, ids, delivery_type="all"):
    by_id = {route.route_id: route for route in routes}
    return estimated_cost(sum(by_id[rid].count_for(delivery_type) for rid in ids), PRINT_TABLE)


def test_empty_candidates_and_non_positive_budget():
    assert optimize([], "all", 1000, PRINT_TABLE) == []
    assert optimize([_route("A", 600)], "all", 0, PRINT_TABLE) == []


def test_greedy_fills_budget_and_skips_routes_that_do_not_fit():
    # Value densities: A 2500/1012.5, B 1000/455, C 300/154.5.
    routes = [_route("C", 300), _route("B", 1000), _route("A", 2500)]
    chosen = optimize(routes, "all", 1200, PRINT_TABLE)

    assert chosen == ["33815-A", "33815-C"]
    assert _cost(routes, chosen) <= 1200


def test_cheaper_later_route_still_fits():
    routes = [_route("BIG", 2000), _route("SMALL", 100)]
    # BIG alone would cost 2000 * 0.455 = 910; only SMALL fits under 100.
    chosen = optimize(routes, "all", 100, PRINT_TABLE)
    assert chosen == ["33815-SMALL"]


def test_forced_inclusion_when_nothing_fits():
    routes = [_route("A", 600), _route("B", 900)]
    plan = plan_within_budget(routes, "all", 50, PRINT_TABLE)

    assert len(plan.route_ids) == 1
    assert plan.forced is True
    assert plan.estimated_cost > 50


def test_ties_break_by_input_order():
    routes = [_route("FIRST", 500), _route("SECOND", 500), _route("THIRD", 500)]
    chosen = optimize(routes, "all", 300, PRINT_TABLE)
    assert chosen == ["33815-FIRST"]


def test_delivery_type_drives_address_counts():
    routes = [_route("HOMES", 800, 0), _route("SHOPS", 10, 600)]
    plan = plan_within_budget(routes, "business", 1000, PRINT_TABLE)

    assert plan.route_ids == ["33815-SHOPS"]
    assert plan.total_addresses == 600


@pytest.mark.parametrize("budget", [150, 400, 900, 1500, 4000, 12000])
def test_never_exceeds_budget_unless_forced(budget):
    routes = [_route(f"R{index}", 120 + (index * 97) % 900, (index * 31) % 80) for index in range(30)]
    plan = plan_within_budget(routes, "all", budget, PRINT_TABLE)

    assert plan.estimated_cost <= budget or len(plan.route_ids) == 1
    assert plan_within_budget(routes, "all", budget, PRINT_TABLE).route_ids == plan.route_ids
