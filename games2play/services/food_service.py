from __future__ import annotations

import json
import logging
from pathlib import Path

import requests
from pydantic import BaseModel, ConfigDict, Field

from games2play.core.config import Settings

logger = logging.getLogger(__name__)

FALLBACK_SCORE = 50


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    barcode: str
    name: str
    image_url: str = Field("", alias="imageUrl")


class ProductInfo(Product):
    eco_score: int


def load_products(path: Path) -> list[Product]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return [Product.model_validate(item) for item in data]


def _clamp(v: float) -> int:
    return int(max(0, min(100, v)))


class EcoScoreLookup:
    """Score lookups on the Open Food Facts product API.

    The game only needs something to compare, so any failure falls back to
    a neutral score of 50 instead of aborting the round.
    """

    def __init__(self, base_url: str = "https://us.openfoodfacts.org", app_host: str = "games2play.vercel.app", timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.app_host = app_host
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "EcoScoreLookup":
        return cls(base_url=settings.off_base_url, app_host=settings.off_app_host)

    def user_agent(self, user_id: str | None) -> str:
        return f"Food Guessing Game - Web - {user_id or 'anonymous'} - {self.app_host}"

    def fetch_eco_score(self, barcode: str, user_id: str | None = None) -> int:
        url = f"{self.base_url}/api/v0/product/{barcode}"
        try:
            r = requests.get(url, timeout=self.timeout, headers={"User-Agent": self.user_agent(user_id)})
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Error fetching ecoScore for %s: %s", barcode, e)
            return FALLBACK_SCORE

        if not isinstance(data, dict) or data.get("status") != 1:
            return FALLBACK_SCORE
        product = data.get("product")
        if not isinstance(product, dict) or not product:
            return FALLBACK_SCORE

        raw = product.get("nutriscore_score")
        if not isinstance(raw, (int, float)) or isinstance(raw, bool) or raw != raw:
            return FALLBACK_SCORE
        return _clamp(raw)

    def product_info(self, product: Product, user_id: str | None = None) -> ProductInfo:
        return ProductInfo(
            barcode=product.barcode,
            name=product.name,
            image_url=product.image_url,
            eco_score=self.fetch_eco_score(product.barcode, user_id),
        )
