"""Shared test fixtures."""

import httpx
import pytest

from costco_availability.config import Settings
from costco_availability.upstream import build_client

GEOCODE_URL = "https://geocodeservice.costco.com/Locations"
WAREHOUSE_URL = "https://ecom-api.costco.com/core/warehouse-locator/v1/warehouses.json"
SEARCH_URL = (
    "https://search.costco.com/api/apps/www_costco_com/query/www_costco_com_search"
)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        port=3847,
        geocode_url=GEOCODE_URL,
        warehouse_url=WAREHOUSE_URL,
        search_url=SEARCH_URL,
        client_identifier="test-client-identifier",
        api_key="test-api-key",
        default_keyword="juice",
        default_zip_code="90210",
        default_limit=24,
        default_warehouse_id="",
    )


@pytest.fixture()
async def client(settings: Settings) -> httpx.AsyncClient:
    async with build_client(settings) as client:
        yield client


@pytest.fixture()
def zip_code() -> str:
    return "90210"


@pytest.fixture()
def warehouse_id() -> str:
    return "123"


@pytest.fixture()
def geocode_payload() -> list:
    return [{"latitude": 34.1, "longitude": -118.4}]


@pytest.fixture()
def warehouse_payload() -> dict:
    return {
        "warehouses": [
            {
                "warehouseId": "123",
                "name": [{"value": "Test Store"}],
                "address": {"city": "Beverly Hills", "territory": "CA"},
            }
        ]
    }


@pytest.fixture()
def search_payload() -> dict:
    return {
        "response": {
            "docs": [
                {
                    "item_product_name": "Kirkland Signature Orange Juice, 2 x 89 oz",
                    "item_location_pricing_salePrice": 9.99,
                    "item_location_availability": "in stock",
                    "item_program_eligibility": ["InWarehouse"],
                    "item_partnumber": "1234567",
                },
                {
                    "item_product_name": "Tropicana Apple Juice, 12 x 10 oz",
                    "item_location_pricing_salePrice": None,
                    "item_location_availability": "limited",
                    "item_program_eligibility": ["InWarehouse", "ShipIt"],
                    "item_partnumber": "7654321",
                },
            ]
        }
    }
