"""Transparent forwarding of payloads to the configured webhook."""

import logging
from dataclasses import dataclass

import httpx

from ..errors import RelayUnreachable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelayResponse:
    """Status and raw body returned by the webhook endpoint."""

    status_code: int
    body: bytes
    media_type: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class WebhookRelay:
    """POSTs payloads, unchanged, to one fixed URL."""

    def __init__(self, url: str, client: httpx.AsyncClient | None = None):
        self.url = url
        self._client = client or httpx.AsyncClient()

    async def relay(self, payload: bytes) -> RelayResponse:
        """Forward a payload and return the endpoint's response verbatim.

        Raises RelayUnreachable if the request cannot be completed.
        """
        try:
            response = await self._client.post(
                self.url,
                content=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.TransportError as e:
            logger.warning("Webhook endpoint unreachable: %s", e)
            raise RelayUnreachable(str(e)) from e

        logger.info("Webhook responded with %d", response.status_code)
        return RelayResponse(
            status_code=response.status_code,
            body=response.content,
            media_type=response.headers.get("content-type"),
        )

    async def aclose(self) -> None:
        await self._client.aclose()
