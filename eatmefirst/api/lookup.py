"""Barcode lookup API endpoints."""

from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, HTTPException, status

from eatmefirst.api.dependencies import get_product_lookup_service
from eatmefirst.schemas.lookup import ProductPrefill
from eatmefirst.services.product_lookup import ProductLookupService

router = APIRouter(prefix="/api/v1/lookup", tags=["lookup"])


@router.get("/barcode/{barcode}", response_model=ProductPrefill)
async def lookup_barcode(
    barcode: str,
    lookup_service: Annotated[ProductLookupService, Depends(get_product_lookup_service)],
):
    """Prefill item fields from a scanned barcode."""
    try:
        prefill = await lookup_service.lookup(barcode)
    except httpx.HTTPError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to look up product. Please try again or add it manually.",
        ) from None

    if prefill is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Barcode {barcode} is not in the product database",
        )
    return prefill
