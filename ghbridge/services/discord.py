"""Discord webhook delivery"""

from __future__ import annotations

import json

import httpx

from ghbridge.config import DEFAULT_TIMEOUT_SECONDS
from ghbridge.logs import get_logger
from ghbridge.schemas import DiscordMessage

log = get_logger(__name__)


class DeliveryError(Exception):
    """The message did not reach Discord."""


class DeliveryHTTPError(DeliveryError):
    """Discord answered with a status outside 2xx."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"discord returned {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class DeliveryNetworkError(DeliveryError):
    """The request never got a response (refused, timed out, DNS...)."""


async def send_webhook(
    webhook_url: str,
    message: DiscordMessage,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> httpx.Response:
    """POST ``message`` to a Discord webhook once, without retrying."""
    payload = message.to_payload()
    log.debug("discord_send", payload=json.dumps(payload, ensure_ascii=False))

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.post(webhook_url, json=payload)
    except httpx.TransportError as exc:
        raise DeliveryNetworkError(f"request error: {exc}") from exc

    if not 200 <= resp.status_code < 300:
        raise DeliveryHTTPError(resp.status_code, resp.text)

    log.info("discord_response", status=resp.status_code)
    return resp


class DiscordForwarder:
    """Sends translated messages to the one configured webhook."""

    def __init__(self, webhook_url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._webhook_url = webhook_url
        self._timeout = timeout

    async def deliver(self, message: DiscordMessage) -> None:
        await send_webhook(self._webhook_url, message, timeout=self._timeout)
