"""API routes for campaign ROI projections."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...config import settings
from ...schemas.roi import IndustryModel, RoiRequest, RoiResponse
from ...services.roi.profiles import INDUSTRY_PROFILES, UnknownIndustryError, get_profile
from ...services.roi.projector import project, validate_overrides, with_overrides

router = APIRouter(prefix="/roi", tags=["roi"])


@router.get("/industries", response_model=list[IndustryModel])
def list_industries() -> list[IndustryModel]:
    return [IndustryModel.from_profile(profile) for profile in INDUSTRY_PROFILES.values()]


@router.post("/project", response_model=RoiResponse)
def project_roi(payload: RoiRequest) -> RoiResponse:
    industry = payload.industry or settings.default_industry
    try:
        profile = get_profile(industry)
    except UnknownIndustryError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown industry '{industry}'") from exc

    overrides = payload.overrides
    if overrides is not None:
        response_rate = overrides.response_rate.to_domain() if overrides.response_rate else None
        conversion_rate = overrides.conversion_rate.to_domain() if overrides.conversion_rate else None
        economics = overrides.economics.model_dump(exclude_none=True) if overrides.economics else None
        errors = validate_overrides(response_rate, conversion_rate, economics)
        if errors:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=errors)
        profile = with_overrides(profile, response_rate, conversion_rate, economics)

    return RoiResponse.from_projection(project(payload.total_addresses, payload.campaign_cost, profile))
