"""
HTTP client for the railway API gateway.

The calendar only needs three reads:

    GET /tickets/availability/{train_id}?date=YYYY-MM-DD   -> booked seat count
    GET /trains/operational-status/{train_id}?date=...     -> status object or token
    GET /trains/get/{train_id}                              -> train details

Every failure (connection, timeout, non-2xx, malformed body) surfaces
as GatewayError so callers have one thing to handle.
"""

import logging
from datetime import date
from typing import Any, Callable, Optional, Protocol

import httpx
from pydantic import ValidationError

from railcal.config import settings
from railcal.errors import GatewayError
from railcal.schemas.train_schema import OperationalStatus, TrainDetails

logger = logging.getLogger(__name__)


class TrainGateway(Protocol):
    """Read-only view of the backend used by the calendar."""

    async def get_booked_seats(self, train_id: str, day: date) -> int: ...

    async def get_operational_status(self, train_id: str, day: date) -> OperationalStatus: ...

    async def get_train_details(self, train_id: str) -> TrainDetails: ...


def _parse_booked_count(payload: Any) -> int:
    if isinstance(payload, bool):
        raise ValueError(f"Booked seat count must be an integer, got {payload!r}")
    if isinstance(payload, int):
        count = payload
    elif isinstance(payload, str) and payload.strip().isdigit():
        count = int(payload.strip())
    else:
        raise ValueError(f"Booked seat count must be an integer, got {payload!r}")
    if count < 0:
        raise ValueError(f"Booked seat count must be >= 0, got {count}")
    return count


class GatewayClient:
    """
    Async gateway client built on a shared httpx.AsyncClient.

    Usage:
        async with GatewayClient() as gateway:
            booked = await gateway.get_booked_seats("12", date(2026, 3, 14))
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.api.gateway_url).rstrip("/")
        self._token_provider = token_provider
        # Ignore HTTP(S)_PROXY env vars for gateway calls.
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.api.request_timeout_sec,
            transport=transport,
            trust_env=False,
        )

    async def __aenter__(self) -> "GatewayClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        token = self._token_provider() if self._token_provider else None
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    async def _get(self, path: str, params: Optional[dict[str, str]] = None) -> httpx.Response:
        try:
            response = await self._client.get(path, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning("GET %s failed: %s", path, e)
            raise GatewayError(f"GET {path} failed: {e}") from e

        if response.status_code >= 400:
            logger.warning("GET %s returned HTTP %d", path, response.status_code)
            raise GatewayError(
                f"GET {path} returned HTTP {response.status_code}: {response.text[:200]}"
            )
        logger.debug("GET %s -> %d", path, response.status_code)
        return response

    @staticmethod
    def _body(response: httpx.Response) -> Any:
        content_type = response.headers.get("content-type", "")
        if "json" in content_type:
            try:
                return response.json()
            except ValueError as e:
                raise GatewayError(f"Malformed JSON from {response.url}: {e}") from e
        return response.text

    async def get_booked_seats(self, train_id: str, day: date) -> int:
        """Number of seats already booked on ``train_id`` for ``day``."""
        path = f"/tickets/availability/{train_id}"
        response = await self._get(path, params={"date": day.isoformat()})
        try:
            return _parse_booked_count(self._body(response))
        except ValueError as e:
            raise GatewayError(f"Unexpected availability payload for {day}: {e}") from e

    async def get_operational_status(self, train_id: str, day: date) -> OperationalStatus:
        """Whether ``train_id`` runs on ``day``."""
        path = f"/trains/operational-status/{train_id}"
        response = await self._get(path, params={"date": day.isoformat()})
        try:
            return OperationalStatus.from_payload(self._body(response))
        except ValueError as e:
            raise GatewayError(f"Unexpected operational status for {day}: {e}") from e

    async def get_train_details(self, train_id: str) -> TrainDetails:
        response = await self._get(f"/trains/get/{train_id}")
        payload = self._body(response)
        if not isinstance(payload, dict):
            raise GatewayError(f"Unexpected train details payload: {payload!r}")
        try:
            return TrainDetails.model_validate(payload)
        except ValidationError as e:
            raise GatewayError(f"Invalid train details for {train_id}: {e}") from e
