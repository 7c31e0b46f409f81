"""the beautiful world start from here."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ghbridge.config import Settings
from ghbridge.routers import gh, info
from ghbridge.services.discord import DiscordForwarder


async def plain_text_http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Error responses (400/404/405) as text, like the 200 answers."""
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def create_app(settings: Settings, forwarder: Optional[DiscordForwarder] = None) -> FastAPI:
    """
    Build the ASGI app around an already-validated ``settings``.

    ``forwarder`` defaults to one posting to ``settings.discord.webhook_url``.
    """
    app = FastAPI(
        title="GitHub → Discord",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.forwarder = forwarder or DiscordForwarder(
        settings.discord.webhook_url,
        timeout=settings.discord.timeout,
    )

    app.add_exception_handler(StarletteHTTPException, plain_text_http_error)
    app.include_router(info.router)
    app.include_router(gh.router)
    return app
