"""HTTP client for the restaurant's public menu and order endpoints."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from scanplate.core.constants import API_TIMEOUT_SECONDS, DEFAULT_API_URL
from scanplate.core.exceptions import SubmissionFailed
from scanplate.domain.menu import MenuItem, available_items
from scanplate.domain.order import OrderConfirmation, OrderPayload

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Failed to place order. Please try again."


def extract_error_message(body: Any, fallback: str = DEFAULT_FAILURE_MESSAGE) -> str:
    """Pick the human-facing message out of an error response body.

    The server answers either ``{"message": ...}`` or a validation error
    with ``{"errors": [{"message"|"msg": ...}, ...]}``.
    """
    if not isinstance(body, dict):
        return fallback
    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        parts = [
            str(err.get("message") or err.get("msg"))
            for err in errors
            if isinstance(err, dict) and (err.get("message") or err.get("msg"))
        ]
        if parts:
            return " ".join(parts)
    message = body.get("message")
    if message:
        return str(message)
    return fallback


class PublicApiClient:
    """
    Client for ``/api/public``.

    Example:
    ```python
    client = PublicApiClient("http://localhost:5000/api/public")
    menu = await client.fetch_menu(restaurant_id)
    confirmation = await client.submit_order(payload)
    await client.close()
    ```
    """

    def __init__(self, base_url: str = DEFAULT_API_URL, timeout: float = API_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> PublicApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def fetch_menu(self, restaurant_id: str) -> list[MenuItem]:
        """Available menu items of a restaurant."""
        session = await self._get_session()
        url = f"{self.base_url}/menu/{restaurant_id}"
        async with session.get(url) as response:
            response.raise_for_status()
            records = await response.json()
        if not isinstance(records, list):
            logger.warning("Menu response for %s is not a list", restaurant_id)
            return []
        return available_items(records)

    async def submit_order(self, payload: OrderPayload) -> OrderConfirmation:
        """POST the order; any failure surfaces as SubmissionFailed."""
        session = await self._get_session()
        url = f"{self.base_url}/orders"
        try:
            async with session.post(url, json=payload.to_wire()) as response:
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None
                if response.status >= 400:
                    message = extract_error_message(body)
                    logger.warning("Order rejected with HTTP %s: %s", response.status, message)
                    raise SubmissionFailed(message, status_code=response.status)
        except asyncio.TimeoutError as e:
            raise SubmissionFailed("Order request timed out. Please try again.") from e
        except aiohttp.ClientError as e:
            raise SubmissionFailed(str(e) or DEFAULT_FAILURE_MESSAGE) from e

        if not isinstance(body, dict):
            raise SubmissionFailed("Unexpected response from the order service.", status_code=response.status)
        return OrderConfirmation.from_response(body)
