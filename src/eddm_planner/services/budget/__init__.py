"""Budget-driven route selection."""

from .optimizer import BudgetPlan, optimize, plan_within_budget

__all__ = ["BudgetPlan", "optimize", "plan_within_budget"]
