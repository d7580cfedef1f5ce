"""Domain errors raised by the swipe engine services.

Services raise these instead of HTTP exceptions; the API layer maps each
class onto a status code via ``http_status``.
"""

from __future__ import annotations

HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409
HTTP_SERVICE_UNAVAILABLE = 503


class GridWayError(RuntimeError):
    """Base exception for all recoverable swipe engine failures."""

    http_status: int = HTTP_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(GridWayError):
    """Malformed request rejected before storage is touched."""

    http_status = HTTP_BAD_REQUEST


class ConflictError(GridWayError):
    """The operation was already performed for this key.

    Callers should treat this as "already done" rather than a failure.
    """

    http_status = HTTP_CONFLICT


class NotFoundError(GridWayError):
    """The record to remove or read does not exist."""

    http_status = HTTP_NOT_FOUND


class DownstreamUnavailableError(GridWayError):
    """A side-effect write could not be completed."""

    http_status = HTTP_SERVICE_UNAVAILABLE
