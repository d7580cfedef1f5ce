"""HTTP client for the Grid Way API.

Used by app-side code (and the card stack's dispatcher) to talk to the
decision, feed, connection, calendar and moderation endpoints. Error
responses are mapped back onto the same domain exceptions the services
raise, so callers handle a remote conflict exactly like a local one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from gridway.core.errors import (
    ConflictError,
    DownstreamUnavailableError,
    GridWayError,
    NotFoundError,
    ValidationError,
)
from gridway.core.settings import settings
from gridway.domain import AttendeeItem, Direction, EventItem, SwipeableItem, TargetType
from gridway.schemas import (
    AttendeeResponse,
    BlockResponse,
    CalendarResponse,
    ConnectionResponse,
    DecisionOutcomeResponse,
    DecisionResponse,
    EventResponse,
    ReportOutcomeResponse,
    ReportResponse,
)

from .cardstack import Dispatcher, SwipeIntent

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

_STATUS_ERRORS: dict[int, type[GridWayError]] = {
    400: ValidationError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def _error_for(response: httpx.Response) -> GridWayError:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    detail = payload.get("detail") if isinstance(payload, dict) else None
    if detail is None:
        detail = response.text
    elif not isinstance(detail, str):
        detail = str(detail)
    error_type = _STATUS_ERRORS.get(response.status_code)
    if error_type is None:
        return DownstreamUnavailableError(f"Server responded with {response.status_code}: {detail}")
    return error_type(detail)


def _to_item(kind: TargetType, payload: Mapping[str, Any]) -> SwipeableItem:
    if kind is TargetType.EVENT:
        event = EventResponse.model_validate(payload)
        return EventItem(
            id=event.id,
            name=event.name,
            location=event.location,
            time_label=event.time_label,
            day=event.day,
            tags=tuple(event.tags),
            recommended=event.recommended,
        )
    attendee = AttendeeResponse.model_validate(payload)
    return AttendeeItem(
        id=attendee.id,
        name=attendee.name,
        role=attendee.role,
        bio=attendee.bio,
        tags=tuple(attendee.tags),
        recommended=attendee.recommended,
    )


class GridWayClient:
    """Async HTTP client wrapper for the Grid Way API."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.api_url
        self.timeout_seconds = (
            settings.http_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=httpx.Timeout(self.timeout_seconds),
                    transport=self._transport,
                )
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_data: Any | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        client = await self._ensure_client()
        try:
            response = await client.request(
                method,
                f"{API_PREFIX}{path}",
                json=json_data,
                params=params,
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise DownstreamUnavailableError(f"Request failed: {exc}") from exc

        if response.is_error:
            raise _error_for(response)
        return response

    async def close(self) -> None:
        """Release the underlying connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GridWayClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def record_decision(
        self,
        user_id: str,
        target_id: str,
        target_type: TargetType,
        direction: Direction,
    ) -> DecisionOutcomeResponse:
        """Post one decision; ConflictError when it was already recorded."""
        response = await self._request(
            "POST",
            "/decisions",
            json_data={
                "user_id": user_id,
                "target_id": target_id,
                "target_type": TargetType(target_type).value,
                "direction": Direction(direction).value,
            },
        )
        outcome = DecisionOutcomeResponse.model_validate(response.json())
        if outcome.side_effect_error:
            logger.warning(
                "Decision %s stored with side effect failure: %s",
                outcome.decision.id,
                outcome.side_effect_error,
            )
        return outcome

    async def decisions(self, user_id: str) -> list[DecisionResponse]:
        response = await self._request("GET", "/decisions", params={"user_id": user_id})
        return [DecisionResponse.model_validate(row) for row in response.json()]

    async def feed(
        self,
        user_id: str,
        kind: TargetType,
        tag: str | None = None,
    ) -> list[SwipeableItem]:
        """Fetch the ordered candidate queue for a card stack."""
        kind = TargetType(kind)
        params: dict[str, Any] = {"user_id": user_id}
        if tag:
            params["tag"] = tag
        response = await self._request("GET", f"/feed/{kind.value}", params=params)
        return [_to_item(kind, row) for row in response.json()]

    async def connections(self, user_id: str) -> list[ConnectionResponse]:
        response = await self._request("GET", "/connections", params={"user_id": user_id})
        return [ConnectionResponse.model_validate(row) for row in response.json()]

    async def remove_connection(self, user_id: str, other_id: str) -> None:
        await self._request("DELETE", f"/connections/{user_id}/{other_id}")

    async def calendar(self, user_id: str, day: int | None = None) -> CalendarResponse:
        params: dict[str, Any] = {"user_id": user_id}
        if day is not None:
            params["day"] = day
        response = await self._request("GET", "/calendar", params=params)
        return CalendarResponse.model_validate(response.json())

    async def block(self, blocker_id: str, blocked_user_id: str) -> BlockResponse:
        response = await self._request(
            "POST",
            "/blocks",
            json_data={"blocker_id": blocker_id, "blocked_user_id": blocked_user_id},
        )
        return BlockResponse.model_validate(response.json())

    async def unblock(self, blocker_id: str, blocked_user_id: str) -> None:
        await self._request("DELETE", f"/blocks/{blocker_id}/{blocked_user_id}")

    async def is_blocked(self, blocker_id: str, blocked_user_id: str) -> bool:
        response = await self._request("GET", f"/blocks/{blocker_id}/{blocked_user_id}")
        return bool(response.json()["is_blocked"])

    async def report(
        self,
        reporter_id: str,
        reported_user_id: str,
        reason: str,
        additional_details: str | None = None,
        *,
        also_block: bool = False,
    ) -> ReportOutcomeResponse:
        response = await self._request(
            "POST",
            "/reports",
            json_data={
                "reporter_id": reporter_id,
                "reported_user_id": reported_user_id,
                "reason": reason,
                "additional_details": additional_details,
                "also_block": also_block,
            },
        )
        return ReportOutcomeResponse.model_validate(response.json())

    async def reports(self, reporter_id: str) -> list[ReportResponse]:
        response = await self._request("GET", f"/reports/{reporter_id}")
        return [ReportResponse.model_validate(row) for row in response.json()]

    def dispatcher_for(self, user_id: str) -> Dispatcher:
        """Return a card stack dispatcher that posts intents as ``user_id``."""

        async def dispatch(intent: SwipeIntent) -> DecisionOutcomeResponse:
            return await self.record_decision(
                user_id,
                intent.item_id,
                intent.target_type,
                intent.direction,
            )

        return dispatch


class _GridWayClientSingleton:
    """Singleton wrapper for GridWayClient."""

    _instance: GridWayClient | None = None

    @classmethod
    def get_instance(cls) -> GridWayClient:
        """Get or create the singleton GridWayClient instance."""
        if cls._instance is None:
            cls._instance = GridWayClient()
        return cls._instance


def get_client() -> GridWayClient:
    """Return a singleton API client configured from settings."""
    return _GridWayClientSingleton.get_instance()
