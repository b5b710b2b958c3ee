"""The item availability workflow: resolve a warehouse, then search it."""

from __future__ import annotations

from costco_availability.config import Settings
from costco_availability.models import ProcessDefaults, WorkflowOutputs
from costco_availability.search import search_items
from costco_availability.upstream import build_client
from costco_availability.warehouse import resolve_warehouse


async def run_workflow(inputs: ProcessDefaults, settings: Settings) -> WorkflowOutputs:
    """Run both stages for one request's effective search fields."""
    async with build_client(settings) as client:
        warehouse = await resolve_warehouse(
            client, settings, inputs.zip_code, inputs.warehouse_id
        )
        items = await search_items(
            client, settings, warehouse.id, inputs.keyword, inputs.limit
        )
    return WorkflowOutputs(warehouse=warehouse, items=items)
