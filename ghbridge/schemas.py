"""Event kinds and Discord message schemas"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class EventKind(str, Enum):
    """GitHub event names (``X-GitHub-Event``) with a dedicated rule."""

    PING = "ping"
    PUSH = "push"
    PULL_REQUEST = "pull_request"
    ISSUES = "issues"
    ISSUE_COMMENT = "issue_comment"
    PULL_REQUEST_REVIEW_COMMENT = "pull_request_review_comment"
    PULL_REQUEST_REVIEW = "pull_request_review"
    STAR = "star"
    FORK = "fork"
    CREATE = "create"
    DELETE = "delete"

    @classmethod
    def parse(cls, name: str | None) -> Optional[EventKind]:
        """Return the matching kind, or None for events without a rule."""
        try:
            return cls(name or "")
        except ValueError:
            return None


class EmbedAuthor(BaseModel):
    name: str = ""
    url: str = ""
    icon_url: str = ""


class Embed(BaseModel):
    """
    A Discord embed card.

    ``color`` is a 24-bit RGB integer; None leaves the client default.
    """

    title: str = ""
    url: str = ""
    color: Optional[int] = None
    author: EmbedAuthor = Field(default_factory=EmbedAuthor)
    description: Optional[str] = None


class DiscordMessage(BaseModel):
    """Body of a Discord webhook execution."""

    content: Optional[str] = None
    embeds: list[Embed] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """JSON body for the webhook; empty content and embeds are left out."""
        data = self.model_dump(exclude_none=True)
        if not data.get("content"):
            data.pop("content", None)
        if not data.get("embeds"):
            data.pop("embeds", None)
        return data
