"""GitHub webhook receiver"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.responses import PlainTextResponse

from ghbridge.logs import get_logger
from ghbridge.schemas import EventKind
from ghbridge.services.discord import DeliveryError, DiscordForwarder
from ghbridge.services.github import translate

log = get_logger(__name__)

router = APIRouter(tags=["github"])


def get_forwarder(request: Request) -> DiscordForwarder:
    return request.app.state.forwarder


def _parse_payload(body: bytes) -> dict[str, Any]:
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError) as exc:
        log.warning("webhook_bad_json", error=str(exc), body=body[:500].decode("utf-8", "replace"))
        raise HTTPException(400, "Bad request") from exc
    if not isinstance(payload, dict):
        log.warning("webhook_bad_json", error="payload is not an object")
        raise HTTPException(400, "Bad request")
    return payload


@router.post("/webhook", response_class=PlainTextResponse)
async def github_webhook(
    request: Request,
    x_github_event: str | None = Header(None),
    x_github_delivery: str | None = Header(None),
    forwarder: DiscordForwarder = Depends(get_forwarder),
):
    """
    GitHub webhook endpoint.

    The event is translated into one Discord embed and forwarded to the
    configured webhook. Delivery failures are logged only: GitHub always
    gets ``OK`` once the payload has been accepted.
    """
    body = await request.body()
    event = x_github_event or ""
    log.info("webhook_received", github_event=event, delivery=x_github_delivery or "")

    if not event:
        log.warning("webhook_missing_event")
        raise HTTPException(400, "Bad request")

    if event == EventKind.PING.value:
        log.info("webhook_ping", delivery=x_github_delivery or "")
        return "pong"

    payload = _parse_payload(body)
    message = translate(event, payload)

    try:
        await forwarder.deliver(message)
    except DeliveryError as exc:
        log.error("discord_delivery_failed", github_event=event, delivery=x_github_delivery or "", error=str(exc))
        return "OK"

    log.info("webhook_processed", github_event=event)
    return "OK"
