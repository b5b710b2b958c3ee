"""Warehouse resolution from a zip code or an explicit warehouse id."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx

from costco_availability.config import Settings
from costco_availability.errors import NotFoundError, UpstreamLookupError
from costco_availability.models import Warehouse
from costco_availability.upstream import get_json

logger = logging.getLogger(__name__)


async def resolve_warehouse(
    client: httpx.AsyncClient,
    settings: Settings,
    zip_code: str,
    warehouse_id: str | None = None,
) -> Warehouse:
    """Resolve the warehouse a search should be scoped to.

    An explicit ``warehouse_id`` is trusted as-is and no lookup is made, so
    its name, city and state are placeholders. Otherwise the zip code is
    geocoded and the nearest open warehouse to that point is used.
    """
    if warehouse_id:
        return Warehouse(
            id=warehouse_id,
            name=f"Store {warehouse_id}",
            city="Unknown",
            state="Unknown",
        )

    latitude, longitude = await geocode_zip(client, settings, zip_code)
    warehouse = await find_nearest_warehouse(client, settings, latitude, longitude)
    logger.info(
        "Resolved zip %s to warehouse %s (%s, %s)",
        zip_code,
        warehouse.id,
        warehouse.city,
        warehouse.state,
    )
    return warehouse


async def geocode_zip(
    client: httpx.AsyncClient,
    settings: Settings,
    zip_code: str,
) -> tuple[float, float]:
    """Return the coordinates of the first geocoding match for a zip code."""
    data = await get_json(
        client,
        settings.geocode_url,
        params={"q": zip_code},
        headers={"Referer": settings.referer},
        what="Geocode lookup",
    )
    if not data:
        raise NotFoundError("zip code not found")
    try:
        first = data[0]
        return first["latitude"], first["longitude"]
    except (KeyError, IndexError, TypeError) as e:
        raise UpstreamLookupError(f"Geocode lookup returned malformed data: {e}") from e


async def find_nearest_warehouse(
    client: httpx.AsyncClient,
    settings: Settings,
    latitude: float,
    longitude: float,
) -> Warehouse:
    """Find the single warehouse nearest to a point."""
    headers = {"Referer": settings.referer}
    if settings.client_identifier:
        headers["client-identifier"] = settings.client_identifier
    data = await get_json(
        client,
        settings.warehouse_url,
        params={
            "latitude": latitude,
            "longitude": longitude,
            "limit": 1,
            "openingDate": datetime.now(timezone.utc).date().isoformat(),
        },
        headers=headers,
        what="Warehouse lookup",
    )
    warehouses = data.get("warehouses") if isinstance(data, dict) else None
    if not warehouses:
        raise NotFoundError("no warehouses found")
    return _parse_warehouse(warehouses[0])


def _parse_warehouse(item: dict) -> Warehouse:
    """Parse a raw warehouse-locator entry into a Warehouse model."""
    try:
        address = item["address"]
        return Warehouse(
            id=str(item["warehouseId"]),
            name=item["name"][0]["value"],
            city=address.get("city", ""),
            state=address.get("territory", ""),
        )
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise UpstreamLookupError(
            f"Warehouse lookup returned malformed data: {e}"
        ) from e
