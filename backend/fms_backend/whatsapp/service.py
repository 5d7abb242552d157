from __future__ import annotations

import logging
from typing import Any

import requests

from ..errors import ConfigurationError, GatewayError

log = logging.getLogger(__name__)


class WasenderGateway:
    """Client for the WasenderApi send-message endpoint."""

    def __init__(
        self,
        *,
        url: str | None,
        token: str | None,
        http_session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.token = token
        self._http = http_session or requests.Session()

    def send(self, recipient: str, text: str) -> Any:
        if not self.url or not self.token:
            raise ConfigurationError("WasenderApi credentials missing")

        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        try:
            response = self._http.post(
                self.url,
                json={"to": recipient, "text": text},
                headers=headers,
                timeout=20,
            )
        except requests.RequestException as exc:
            raise GatewayError("Failed to send WhatsApp message", detail=str(exc)) from exc

        if not 200 <= response.status_code < 300:
            raise GatewayError(
                "Failed to send WhatsApp message",
                detail=f"WasenderApi returned {response.status_code}: {response.text}",
            )

        if not response.content:
            return None
        try:
            data = response.json()
        except ValueError:
            data = response.text
        log.info("WasenderApi accepted message (status %s)", response.status_code)
        return data


__all__ = ["WasenderGateway"]
