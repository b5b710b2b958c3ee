"""Warehouse-scoped item search against the Costco search API."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from costco_availability.config import Settings
from costco_availability.errors import UpstreamLookupError
from costco_availability.models import Item
from costco_availability.upstream import get_json

logger = logging.getLogger(__name__)

SEARCH_LOCALE = "en-US"
IN_WAREHOUSE_FILTER = (
    '{!tag=item_program_eligibility}item_program_eligibility:("InWarehouse")'
)

# Upstream search doc field -> Item field.
ITEM_FIELDS = {
    "item_product_name": "name",
    "item_location_pricing_salePrice": "price",
    "item_location_availability": "availability",
    "item_program_eligibility": "delivery_eligibility",
    "item_partnumber": "part_number",
}


def warehouse_location(warehouse_id: str) -> str:
    return f"{warehouse_id}-wh"


async def search_items(
    client: httpx.AsyncClient,
    settings: Settings,
    warehouse_id: str,
    keyword: str,
    limit: int = 24,
) -> list[Item]:
    """Search for in-warehouse items by keyword at a specific warehouse."""
    headers = {"Referer": settings.referer}
    if settings.api_key:
        headers["x-api-key"] = settings.api_key
    location = warehouse_location(warehouse_id)
    data = await get_json(
        client,
        settings.search_url,
        params={
            "expoption": "lucidworks",
            "q": keyword,
            "locale": SEARCH_LOCALE,
            "start": 0,
            "rows": limit,
            "whloc": location,
            "loc": location,
            "fq": IN_WAREHOUSE_FILTER,
        },
        headers=headers,
        what="Item search",
    )
    try:
        docs = data["response"]["docs"]
        if limit > 0:
            docs = docs[:limit]
        items = [_parse_item(doc) for doc in docs]
    except (KeyError, TypeError, ValidationError) as e:
        raise UpstreamLookupError(f"Item search returned malformed data: {e}") from e
    logger.info(
        "Found %d items for %r at warehouse %s", len(items), keyword, warehouse_id
    )
    return items


def _parse_item(doc: dict) -> Item:
    """Project a raw search doc onto an Item model."""
    return Item(**{field: doc.get(key) for key, field in ITEM_FIELDS.items()})
