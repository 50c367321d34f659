"""Campaign ROI projections."""

from .profiles import (
    INDUSTRY_PROFILES,
    Economics,
    IndustryProfile,
    ScenarioRates,
    UnknownIndustryError,
    get_profile,
)
from .projector import RoiProjection, ScenarioProjection, project, validate_overrides, with_overrides

__all__ = [
    "INDUSTRY_PROFILES",
    "Economics",
    "IndustryProfile",
    "ScenarioRates",
    "UnknownIndustryError",
    "get_profile",
    "RoiProjection",
    "ScenarioProjection",
    "project",
    "validate_overrides",
    "with_overrides",
]
