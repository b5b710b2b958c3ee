"""Service configuration with environment variable overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from costco_availability.models import ProcessDefaults

DEFAULT_PORT = 3847

logger = logging.getLogger(__name__)


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _get_int_env(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


def _get_float_env(name: str, default: float) -> float:
    raw = _get_env(name, str(default))
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    """Settings container; every field can be overridden from the environment."""

    host: str = _get_env("HOST", "0.0.0.0")
    port: int = _get_int_env("PORT", DEFAULT_PORT)
    log_level: str = _get_env("LOG_LEVEL", "INFO")

    geocode_url: str = _get_env(
        "COSTCO_GEOCODE_URL", "https://geocodeservice.costco.com/Locations"
    )
    warehouse_url: str = _get_env(
        "COSTCO_WAREHOUSE_URL",
        "https://ecom-api.costco.com/core/warehouse-locator/v1/warehouses.json",
    )
    search_url: str = _get_env(
        "COSTCO_SEARCH_URL",
        "https://search.costco.com/api/apps/www_costco_com/query/www_costco_com_search",
    )
    referer: str = _get_env("COSTCO_REFERER", "https://www.costco.com/")
    client_identifier: str = _get_env("COSTCO_CLIENT_IDENTIFIER", "")
    api_key: str = _get_env("COSTCO_API_KEY", "")
    request_timeout: float = _get_float_env("REQUEST_TIMEOUT_SECONDS", 10.0)

    default_keyword: str = _get_env("DEFAULT_KEYWORD", "juice")
    default_zip_code: str = _get_env("DEFAULT_ZIP_CODE", "90210")
    default_limit: int = _get_int_env("DEFAULT_LIMIT", 24)
    default_warehouse_id: str = _get_env("DEFAULT_WAREHOUSE_ID", "")

    def initial_defaults(self) -> ProcessDefaults:
        """Build the starting ProcessDefaults for a new application."""
        return ProcessDefaults(
            keyword=self.default_keyword,
            zip_code=self.default_zip_code,
            limit=self.default_limit,
            warehouse_id=self.default_warehouse_id or None,
        )


settings = Settings()
