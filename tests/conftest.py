from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from ghbridge.app import create_app
from ghbridge.config import DiscordSettings, Settings
from ghbridge.schemas import DiscordMessage
from ghbridge.services.discord import DeliveryError

WEBHOOK_URL = "https://discord.com/api/webhooks/123/abc-token"


class StubForwarder:
    """Records deliveries instead of calling Discord."""

    def __init__(self, error: DeliveryError | None = None):
        self.error = error
        self.messages: list[DiscordMessage] = []

    @property
    def call_count(self) -> int:
        return len(self.messages)

    async def deliver(self, message: DiscordMessage) -> None:
        self.messages.append(message)
        if self.error is not None:
            raise self.error


@pytest.fixture
def settings() -> Settings:
    return Settings(discord=DiscordSettings(webhook_url=WEBHOOK_URL))


@pytest.fixture
def forwarder() -> StubForwarder:
    return StubForwarder()


@pytest.fixture
def client(settings: Settings, forwarder: StubForwarder) -> Iterator[TestClient]:
    app = create_app(settings, forwarder=forwarder)
    with TestClient(app) as test_client:
        yield test_client
