"""Shared httpx plumbing for calls to the Costco APIs."""

from __future__ import annotations

import httpx

from costco_availability.config import Settings
from costco_availability.errors import BODY_EXCERPT_LENGTH, UpstreamLookupError

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
}


def build_client(settings: Settings) -> httpx.AsyncClient:
    """Create an AsyncClient with the per-call timeout and browser-like headers."""
    return httpx.AsyncClient(
        timeout=settings.request_timeout,
        headers=BROWSER_HEADERS,
    )


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: dict,
    headers: dict,
    what: str,
) -> object:
    """GET ``url`` and decode the JSON body.

    Timeouts, transport errors, non-2xx statuses and undecodable bodies all
    raise UpstreamLookupError.
    """
    try:
        response = await client.get(url, params=params, headers=headers)
    except httpx.TimeoutException as e:
        raise UpstreamLookupError(f"{what} timed out") from e
    except httpx.HTTPError as e:
        raise UpstreamLookupError(f"{what} failed: {e}") from e
    if not response.is_success:
        raise UpstreamLookupError(
            f"{what} failed: {response.status_code} "
            f"{response.text[:BODY_EXCERPT_LENGTH]}",
            status_code=response.status_code,
            body=response.text,
        )
    try:
        return response.json()
    except ValueError as e:
        raise UpstreamLookupError(
            f"{what} returned invalid JSON",
            status_code=response.status_code,
            body=response.text,
        ) from e
