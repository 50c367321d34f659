"""API routes for campaign pricing."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...config import settings
from ...schemas.pricing import PricingResultModel, PricingTableModel, QuoteRequest, QuoteResponse
from ...services.pricing.engine import price_for
from ...services.pricing.tables import PRICING_TABLES, UnknownProductError, get_table

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.get("/tables", response_model=list[PricingTableModel])
def list_tables() -> list[PricingTableModel]:
    return [PricingTableModel.from_table(table) for table in PRICING_TABLES.values()]


@router.post("/quote", response_model=QuoteResponse)
def quote(payload: QuoteRequest) -> QuoteResponse:
    """Price a quantity of pieces; quantities under the table minimum come back flagged, not priced."""
    product = payload.product or settings.default_product
    try:
        table = get_table(product)
    except UnknownProductError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown product '{product}'") from exc
    return QuoteResponse(product=table.name, pricing=PricingResultModel.from_result(price_for(payload.quantity, table)))
