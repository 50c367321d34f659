"""Route scope filtering and planning sessions."""

from .filter import RegionState, in_scope, prune_selection, total_address_count
from .session import PlanningSession, SessionSummary, summarize
from .store import SessionNotFoundError, SessionStore

__all__ = [
    "RegionState",
    "in_scope",
    "prune_selection",
    "total_address_count",
    "PlanningSession",
    "SessionSummary",
    "summarize",
    "SessionNotFoundError",
    "SessionStore",
]
