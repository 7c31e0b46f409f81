"""Ruter Ingfo?"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

BANNER = "GitHub Webhook Discord Bridge"


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return BANNER


@router.get("/health", response_class=PlainTextResponse)
def health() -> str:
    """Liveness probe."""
    return "OK"
