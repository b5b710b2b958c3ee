"""Tests for the search module."""

import pytest
import respx
from httpx import Response

from costco_availability.errors import UpstreamLookupError
from costco_availability.search import IN_WAREHOUSE_FILTER, search_items

from conftest import SEARCH_URL


@respx.mock
async def test_search_items(client, settings, warehouse_id, search_payload):
    respx.get(SEARCH_URL).mock(return_value=Response(200, json=search_payload))

    items = await search_items(client, settings, warehouse_id, "juice", 24)

    assert len(items) == 2
    assert items[0].name == "Kirkland Signature Orange Juice, 2 x 89 oz"
    assert items[0].price == 9.99
    assert items[0].availability == "in stock"
    assert items[0].delivery_eligibility == ["InWarehouse"]
    assert items[0].part_number == "1234567"
    assert items[1].price is None
    assert items[1].part_number == "7654321"


@respx.mock
async def test_search_query_parameters(client, settings, warehouse_id, search_payload):
    route = respx.get(SEARCH_URL).mock(return_value=Response(200, json=search_payload))

    await search_items(client, settings, warehouse_id, "paper towels", 5)

    params = route.calls.last.request.url.params
    assert params["q"] == "paper towels"
    assert params["rows"] == "5"
    assert params["start"] == "0"
    assert params["locale"] == "en-US"
    assert params["whloc"] == "123-wh"
    assert params["loc"] == "123-wh"
    assert params["fq"] == IN_WAREHOUSE_FILTER
    assert route.calls.last.request.headers["x-api-key"] == "test-api-key"


@respx.mock
async def test_search_never_exceeds_limit(client, settings, warehouse_id):
    docs = [{"item_product_name": f"Item {i}", "item_partnumber": str(i)} for i in range(5)]
    respx.get(SEARCH_URL).mock(
        return_value=Response(200, json={"response": {"docs": docs}})
    )

    items = await search_items(client, settings, warehouse_id, "juice", 3)

    assert [item.part_number for item in items] == ["0", "1", "2"]


@respx.mock
async def test_search_keeps_upstream_order(client, settings, warehouse_id):
    docs = [{"item_product_name": name} for name in ("b", "a", "c")]
    respx.get(SEARCH_URL).mock(
        return_value=Response(200, json={"response": {"docs": docs}})
    )

    items = await search_items(client, settings, warehouse_id, "juice")

    assert [item.name for item in items] == ["b", "a", "c"]


@respx.mock
async def test_search_items_failure(client, settings, warehouse_id):
    respx.get(SEARCH_URL).mock(
        return_value=Response(500, text="Internal Server Error")
    )
    with pytest.raises(UpstreamLookupError) as exc_info:
        await search_items(client, settings, warehouse_id, "juice")
    assert exc_info.value.status_code == 500


@respx.mock
async def test_search_items_malformed_response(client, settings, warehouse_id):
    respx.get(SEARCH_URL).mock(return_value=Response(200, json={"hits": []}))

    with pytest.raises(UpstreamLookupError, match="malformed"):
        await search_items(client, settings, warehouse_id, "juice")


@respx.mock
async def test_search_passes_through_numeric_and_blank_values(
    client, settings, warehouse_id
):
    docs = [
        {"item_product_name": "Milk", "item_partnumber": 1234567},
        {"item_product_name": "Eggs", "item_location_pricing_salePrice": ""},
    ]
    respx.get(SEARCH_URL).mock(
        return_value=Response(200, json={"response": {"docs": docs}})
    )

    items = await search_items(client, settings, warehouse_id, "juice")

    assert len(items) == 2
    assert items[0].part_number == "1234567"
    assert items[1].price == ""


@respx.mock
async def test_search_non_positive_limit_keeps_every_doc(
    client, settings, warehouse_id, search_payload
):
    respx.get(SEARCH_URL).mock(return_value=Response(200, json=search_payload))

    items = await search_items(client, settings, warehouse_id, "juice", -1)

    assert len(items) == 2
