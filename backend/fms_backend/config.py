from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_PORT = 8888


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True, slots=True)
class AppConfig:
    port: int = DEFAULT_PORT
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None
    gmail_user: Optional[str] = None
    gmail_pass: Optional[str] = None
    wasender_url: Optional[str] = None
    wasender_token: Optional[str] = None

    @property
    def oauth_configured(self) -> bool:
        return bool(self.client_id and self.client_secret and self.redirect_uri)

    @property
    def mail_configured(self) -> bool:
        return bool(self.gmail_user and self.gmail_pass)

    @property
    def whatsapp_configured(self) -> bool:
        return bool(self.wasender_url and self.wasender_token)


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_config() -> AppConfig:
    """Load configuration from environment variables/.env file."""
    backend_dir = Path(__file__).resolve().parent.parent
    load_dotenv(backend_dir / ".env")

    port_raw = os.getenv("PORT", str(DEFAULT_PORT))
    try:
        port = int(port_raw)
    except ValueError as exc:
        raise ConfigError(f"PORT must be an integer, got '{port_raw}'") from exc
    if port <= 0:
        raise ConfigError("PORT must be positive")

    return AppConfig(
        port=port,
        client_id=_optional_env("CLIENT_ID"),
        client_secret=_optional_env("CLIENT_SECRET"),
        redirect_uri=_optional_env("REDIRECT_URI"),
        gmail_user=_optional_env("GMAIL_USER"),
        gmail_pass=_optional_env("GMAIL_PASS"),
        wasender_url=_optional_env("WASENDER_URL"),
        wasender_token=_optional_env("WASENDER_TOKEN"),
    )


def describe_config(config: AppConfig) -> dict[str, str]:
    """Summarize which settings are present without exposing secrets."""

    def loaded(value: Optional[str]) -> str:
        return "loaded" if value else "MISSING"

    if config.gmail_user:
        gmail_user = f"{config.gmail_user.split('@')[0]}@…"
    else:
        gmail_user = "MISSING"

    return {
        "CLIENT_ID": loaded(config.client_id),
        "CLIENT_SECRET": loaded(config.client_secret),
        "REDIRECT_URI": loaded(config.redirect_uri),
        "GMAIL_USER": gmail_user,
        "GMAIL_PASS": loaded(config.gmail_pass),
        "WASENDER_URL": config.wasender_url or "MISSING",
        "WASENDER_TOKEN": loaded(config.wasender_token),
    }
