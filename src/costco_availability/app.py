"""FastAPI application exposing the item availability workflow."""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from costco_availability.config import Settings, settings as default_settings
from costco_availability.errors import WorkflowError
from costco_availability.models import ProcessDefaults, SearchInputs
from costco_availability.workflow import run_workflow

SERVICE_NAME = "costco-item-availability"
SERVICE_TITLE = "Costco Item Availability API"
SERVICE_VERSION = "1.1.0"

logger = logging.getLogger(__name__)


def _log_unhandled(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    # Failures that never reached a request handler are logged, never fatal.
    exc = context.get("exception")
    logger.error("Unhandled async error: %s", exc or context.get("message"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    loop = asyncio.get_running_loop()
    previous = loop.get_exception_handler()
    loop.set_exception_handler(_log_unhandled)
    try:
        yield
    finally:
        loop.set_exception_handler(previous)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_defaults(request: Request) -> ProcessDefaults:
    return request.app.state.defaults


def _duration(started: float) -> str:
    return f"{time.perf_counter() - started:.2f}s"


def _parse_limit(raw: str | None) -> int | None:
    """Parse a query-string limit; unusable values fall back to the default."""
    if not raw:
        return None
    try:
        limit = int(raw)
    except ValueError:
        return None
    return limit if limit > 0 else None


async def _respond(
    load_inputs: Callable[[], Awaitable[SearchInputs]],
    settings: Settings,
    defaults: ProcessDefaults,
) -> Any:
    """Run the workflow and shape the success or failure envelope."""
    started = time.perf_counter()
    try:
        inputs = defaults.merge(await load_inputs())
        outputs = await run_workflow(inputs, settings)
    except WorkflowError as e:
        logger.warning("Workflow failed: %s", e)
        return _failure(e, started)
    except Exception as e:
        logger.exception("Unexpected workflow error")
        return _failure(e, started)

    duration = _duration(started)
    logger.info(
        "Returned %d items from warehouse %s in %s",
        len(outputs.items),
        outputs.warehouse.id,
        duration,
    )
    return {
        "success": True,
        "duration": duration,
        "outputs": outputs.model_dump(by_alias=True),
    }


def _failure(error: Exception, started: float) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": str(error),
            "duration": _duration(started),
        },
    )


def create_app(
    settings: Settings | None = None,
    defaults: ProcessDefaults | None = None,
) -> FastAPI:
    """Build the application with its own settings and ProcessDefaults."""
    settings = settings or default_settings
    app = FastAPI(title=SERVICE_TITLE, version=SERVICE_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.defaults = defaults or settings.initial_defaults()

    @app.get("/api/costco")
    async def search_get(
        keyword: str | None = None,
        zipCode: str | None = None,
        limit: str | None = None,
        warehouseId: str | None = None,
        settings: Settings = Depends(get_settings),
        defaults: ProcessDefaults = Depends(get_defaults),
    ) -> Any:
        async def load_inputs() -> SearchInputs:
            return SearchInputs(
                keyword=keyword,
                zip_code=zipCode,
                limit=_parse_limit(limit),
                warehouse_id=warehouseId,
            )

        return await _respond(load_inputs, settings, defaults)

    @app.post("/api/costco")
    async def search_post(
        request: Request,
        settings: Settings = Depends(get_settings),
        defaults: ProcessDefaults = Depends(get_defaults),
    ) -> Any:
        async def load_inputs() -> SearchInputs:
            body = await request.body()
            payload = await request.json() if body else {}
            if not isinstance(payload, dict):
                payload = {}
            return SearchInputs.model_validate(payload)

        return await _respond(load_inputs, settings, defaults)

    @app.post("/api/config")
    async def update_config(
        changes: SearchInputs | None = None,
        defaults: ProcessDefaults = Depends(get_defaults),
    ) -> dict:
        if changes is not None:
            defaults.update(changes)
            logger.info("Defaults updated: %s", defaults.model_dump(by_alias=True))
        return {"success": True, "config": defaults.model_dump(by_alias=True)}

    @app.get("/health")
    async def health() -> dict:
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "timestamp": timestamp.replace("+00:00", "Z"),
        }

    @app.get("/")
    async def root(settings: Settings = Depends(get_settings)) -> dict:
        base_url = f"http://localhost:{settings.port}"
        return {
            "service": SERVICE_TITLE,
            "version": SERVICE_VERSION,
            "endpoints": {
                "GET /api/costco": (
                    "Search for items (query params: keyword, zipCode, limit, "
                    "warehouseId)"
                ),
                "POST /api/costco": (
                    "Search for items (JSON body: keyword, zipCode, limit, "
                    "warehouseId)"
                ),
                "POST /api/config": (
                    "Update global configuration (JSON body: keyword, zipCode, "
                    "limit, warehouseId)"
                ),
                "GET /health": "Health check",
            },
            "example": f"{base_url}/api/costco?keyword=juice&zipCode=90210&limit=5",
        }

    return app
