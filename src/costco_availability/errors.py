"""Errors raised while resolving a warehouse or searching its items."""

from __future__ import annotations

BODY_EXCERPT_LENGTH = 200


class WorkflowError(Exception):
    """Raised when the item availability workflow cannot complete."""


class NotFoundError(WorkflowError):
    """Raised when a zip code or a nearby warehouse cannot be found."""


class UpstreamLookupError(WorkflowError):
    """Raised when a Costco API call fails or returns an unusable response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body[:BODY_EXCERPT_LENGTH]
