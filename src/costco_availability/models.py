"""Pydantic models for Costco API responses and service payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Warehouse(BaseModel):
    """A Costco warehouse that a search is scoped to."""

    id: str
    name: str
    city: str = ""
    state: str = ""


class Item(BaseModel):
    """An item returned by the warehouse-scoped search.

    Values are passed through from the search API as-is; only numbers are
    turned into strings for the text fields.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: str | None = None
    price: float | str | None = None
    availability: Any = None
    delivery_eligibility: Any = Field(default=None, alias="deliveryOptions")
    part_number: str | None = Field(default=None, alias="partNumber")


class WorkflowOutputs(BaseModel):
    """Resolved warehouse plus the items found there."""

    warehouse: Warehouse
    items: list[Item]


class SearchInputs(BaseModel):
    """Search fields supplied by a caller; omitted fields fall back to defaults.

    Also used as the partial payload of a configuration update.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    keyword: str | None = None
    zip_code: str | None = Field(default=None, alias="zipCode")
    limit: int | None = None
    warehouse_id: str | None = Field(default=None, alias="warehouseId")


class ProcessDefaults(BaseModel):
    """Fallback search fields shared by every request in the process."""

    model_config = ConfigDict(populate_by_name=True)

    keyword: str = "juice"
    zip_code: str = Field(default="90210", alias="zipCode")
    limit: int = 24
    warehouse_id: str | None = Field(default=None, alias="warehouseId")

    def merge(self, inputs: SearchInputs) -> "ProcessDefaults":
        """Return the effective search fields for one request.

        A request value wins when it is present and non-empty (positive for
        ``limit``); otherwise the current default is used.
        """
        return ProcessDefaults(
            keyword=inputs.keyword or self.keyword,
            zip_code=inputs.zip_code or self.zip_code,
            limit=_usable_limit(inputs.limit) or self.limit,
            warehouse_id=inputs.warehouse_id or self.warehouse_id,
        )

    def update(self, changes: SearchInputs) -> None:
        """Overwrite only the fields supplied in ``changes``.

        Fields are written one at a time without locking, so a concurrent
        reader may see a partially applied update.
        """
        if changes.keyword:
            self.keyword = changes.keyword
        if changes.zip_code:
            self.zip_code = changes.zip_code
        if _usable_limit(changes.limit):
            self.limit = changes.limit
        if changes.warehouse_id:
            self.warehouse_id = changes.warehouse_id


def _usable_limit(limit: int | None) -> int | None:
    """Return ``limit`` when it is positive; otherwise None."""
    if limit is not None and limit > 0:
        return limit
    return None
