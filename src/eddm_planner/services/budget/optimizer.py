"""Greedy route selection under a campaign budget."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from ...models.domain import Route
from ..pricing.engine import PricingResult, PricingTable, estimated_cost, price_for

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Candidate:
    route: Route
    addresses: int
    standalone_cost: float

    @property
    def density(self) -> float:
        if self.standalone_cost <= 0:
            return 0.0
        return self.addresses / self.standalone_cost


@dataclass(slots=True)
class BudgetPlan:
    route_ids: List[str]
    total_addresses: int
    estimated_cost: float
    forced: bool
    pricing: PricingResult


def _rank(routes: Sequence[Route], delivery_type: str, table: PricingTable) -> list[_Candidate]:
    candidates = []
    for route in routes:
        addresses = route.count_for(delivery_type)
        candidates.append(
            _Candidate(route=route, addresses=addresses, standalone_cost=estimated_cost(addresses, table))
        )
    # sorted() is stable, so equal densities keep input order.
    return sorted(candidates, key=lambda candidate: candidate.density, reverse=True)


def _select(
    routes: Sequence[Route], delivery_type: str, budget: float, table: PricingTable
) -> tuple[list[str], int, bool]:
    if not routes or budget <= 0:
        return [], 0, False

    ranked = _rank(routes, delivery_type, table)
    chosen: list[str] = []
    running_total = 0
    for candidate in ranked:
        if candidate.addresses <= 0:
            continue
        projected = running_total + candidate.addresses
        # Tiered pricing makes cost path-dependent: re-price the whole running total.
        if estimated_cost(projected, table) > budget:
            continue
        chosen.append(candidate.route.route_id)
        running_total = projected

    if chosen:
        return chosen, running_total, False

    viable = [candidate for candidate in ranked if candidate.addresses > 0]
    if not viable:
        return [], 0, False
    best = viable[0]
    logger.info(
        f"No route fits a budget of ${budget:,.2f}; forcing {best.route.route_id} "
        f"({best.addresses} addresses, ~${best.standalone_cost:,.2f})"
    )
    return [best.route.route_id], best.addresses, True


def optimize(routes: Sequence[Route], delivery_type: str, budget: float, table: PricingTable) -> list[str]:
    """Route ids that maximise addresses reached without exceeding ``budget``.

    When not even one route fits, the single best-value route is returned
    so the caller always has something to quote; the caller surfaces any
    below-minimum warning.
    """

    route_ids, _, _ = _select(routes, delivery_type, budget, table)
    return route_ids


def plan_within_budget(
    routes: Sequence[Route], delivery_type: str, budget: float, table: PricingTable
) -> BudgetPlan:
    route_ids, total_addresses, forced = _select(routes, delivery_type, budget, table)
    logger.debug(f"Budget plan: {len(route_ids)} routes, {total_addresses} addresses, forced={forced}")
    return BudgetPlan(
        route_ids=route_ids,
        total_addresses=total_addresses,
        estimated_cost=estimated_cost(total_addresses, table),
        forced=forced,
        pricing=price_for(total_addresses, table),
    )
