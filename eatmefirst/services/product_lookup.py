"""Barcode lookup using the Open Food Facts API."""

import logging
from typing import Any

import httpx

from eatmefirst.config import get_settings
from eatmefirst.models import Category
from eatmefirst.schemas.lookup import ProductPrefill
from eatmefirst.schemas.product import NutritionFacts

logger = logging.getLogger(__name__)


class ProductLookupService:
    """Turns a scanned barcode into prefilled item fields."""

    def __init__(self) -> None:
        settings = get_settings()
        self.base_url = settings.openfoodfacts_base_url.rstrip("/")
        self.timeout = settings.http_timeout_seconds

    async def _fetch_product(self, barcode: str) -> dict[str, Any] | None:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(f"{self.base_url}/api/v0/product/{barcode}.json")
            response.raise_for_status()
            data = response.json()

        if data.get("status") != 1 or not data.get("product"):
            return None
        return data["product"]

    def _extract_nutrition(self, product: dict[str, Any]) -> NutritionFacts | None:
        """Per-100g values; calories fall back to the per-serving figure."""
        nutriments = product.get("nutriments") or {}
        nutrition = NutritionFacts(
            calories=nutriments.get("energy-kcal_100g") or nutriments.get("energy-kcal_serving"),
            protein=nutriments.get("proteins_100g"),
            carbs=nutriments.get("carbohydrates_100g"),
            fat=nutriments.get("fat_100g"),
        )
        if all(value is None for value in nutrition.model_dump().values()):
            return None
        return nutrition

    async def lookup(self, barcode: str) -> ProductPrefill | None:
        """Look up a barcode.

        Returns:
            Prefill fields, or None if the product is unknown

        Raises:
            httpx.HTTPError: if the lookup service cannot be reached
        """
        barcode = barcode.strip()
        try:
            product = await self._fetch_product(barcode)
        except httpx.HTTPError as e:
            logger.error(f"Barcode lookup failed for {barcode}: {e}")
            raise

        if product is None:
            logger.info(f"Barcode {barcode} not found in Open Food Facts")
            return None

        return ProductPrefill(
            barcode=barcode,
            name=(product.get("product_name") or "").strip(),
            image=product.get("image_url") or None,
            quantity=product.get("quantity") or None,
            category=Category.FRIDGE,
            nutrition=self._extract_nutrition(product),
        )


def get_product_lookup_service() -> ProductLookupService:
    """Get a product lookup service instance."""
    return ProductLookupService()
