"""Settings loaded from config.yml (plus .env overrides)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CONFIG_PATH = os.getenv("GHBRIDGE_CONFIG", "config.yml")
PLACEHOLDER_WEBHOOK_URL = "https://discord.com/api/webhooks/YOUR_WEBHOOK_URL"
DEFAULT_TIMEOUT_SECONDS = 10.0

DEFAULT_CONFIG = f"""server:
  host: "0.0.0.0"
  port: 8080

discord:
  webhook_url: "{PLACEHOLDER_WEBHOOK_URL}"
  timeout: 10

logging:
  level: "INFO"
  json: false
"""


class ConfigurationError(Exception):
    """The configuration file is missing a required value or cannot be read."""


@dataclass(frozen=True)
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass(frozen=True)
class DiscordSettings:
    webhook_url: str = ""
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def is_placeholder(self) -> bool:
        return self.webhook_url == PLACEHOLDER_WEBHOOK_URL


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"
    json: bool = False


@dataclass(frozen=True)
class Settings:
    """App Settings"""

    server: ServerSettings = field(default_factory=ServerSettings)
    discord: DiscordSettings = field(default_factory=DiscordSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @property
    def listen_address(self) -> str:
        return f"{self.server.host}:{self.server.port}"


def ensure_config_file(path: str | Path = DEFAULT_CONFIG_PATH) -> bool:
    """
    Write the default config when ``path`` does not exist.

    Returns
    -------
    bool
        True if a new file was created, False if one was already there.
    """
    target = Path(path)
    if target.exists():
        return False
    try:
        target.write_text(DEFAULT_CONFIG, encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Error creating config {target}: {exc}") from exc
    return True


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"'{name}' must be a mapping")
    return value


def _parse(data: Mapping[str, Any]) -> Settings:
    server = _section(data, "server")
    discord = _section(data, "discord")
    logging_ = _section(data, "logging")

    try:
        port = int(server.get("port", ServerSettings.port))
        timeout = float(discord.get("timeout", DEFAULT_TIMEOUT_SECONDS))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid number in config: {exc}") from exc
    if not 0 < port < 65536:
        raise ConfigurationError(f"server.port out of range: {port}")
    if timeout <= 0:
        raise ConfigurationError(f"discord.timeout must be positive: {timeout}")

    webhook_url = os.getenv("DISCORD_WEBHOOK_URL") or str(discord.get("webhook_url") or "")
    if not webhook_url.strip():
        raise ConfigurationError("Discord webhook URL not configured")

    return Settings(
        server=ServerSettings(host=str(server.get("host") or ServerSettings.host), port=port),
        discord=DiscordSettings(webhook_url=webhook_url.strip(), timeout=timeout),
        logging=LoggingSettings(
            level=str(logging_.get("level") or LoggingSettings.level),
            json=bool(logging_.get("json", False)),
        ),
    )


def load_settings(path: str | Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Read and validate the YAML config at ``path``."""
    target = Path(path)
    try:
        raw = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Error reading config {target}: {exc}") from exc
    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Error parsing config {target}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Config {target} must contain a mapping")
    return _parse(data)
