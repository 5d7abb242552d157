import sys
from pathlib import Path
from typing import Any

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
BACKEND_PATH = str(BACKEND_ROOT)
if BACKEND_PATH not in sys.path:
    sys.path.insert(0, BACKEND_PATH)

from fms_backend import create_app  # noqa: E402
from fms_backend.config import AppConfig  # noqa: E402
from fms_backend.errors import (  # noqa: E402
    DeliveryError,
    GatewayError,
    ProviderError,
    ProviderExchangeError,
)
from fms_backend.providers import Providers  # noqa: E402


class StubExchanger:
    def __init__(self, tokens: dict[str, Any] | None = None, *, fail: bool = False):
        self.tokens = tokens or {"access_token": "access-123", "token_type": "Bearer"}
        self.fail = fail
        self.codes: list[str] = []

    def build_authorization_url(self) -> str:
        return "https://accounts.example/consent?client_id=client"

    def exchange_code(self, code: str) -> dict[str, Any]:
        self.codes.append(code)
        if self.fail:
            raise ProviderExchangeError("Error exchanging code", detail="invalid_grant")
        return dict(self.tokens)


class StubForms:
    def __init__(self, *, form_id: str = "form-1", failing_emails: set[str] | None = None):
        self.form_id = form_id
        self.fail_create = False
        self.failing_emails = failing_emails or set()
        self.created: list[tuple[dict, str]] = []
        self.grants: list[str] = []

    def create_form(self, credentials, title: str) -> str:
        self.created.append((dict(credentials), title))
        if self.fail_create:
            raise ProviderError("Error creating form", detail="403 insufficient scopes")
        return self.form_id

    def grant_writer(self, credentials, form_id: str, email: str) -> None:
        self.grants.append(email)
        if email in self.failing_emails:
            raise ProviderError("Error creating form", detail=f"permission denied for {email}")


class StubMail:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.sent: list[tuple[str, str, str]] = []

    def send(self, recipient: str, subject: str, body: str) -> str:
        self.sent.append((recipient, subject, body))
        if self.fail:
            raise DeliveryError("Failed to send email", detail="550 rejected")
        return "<msg-1@gmail.com>"


class StubGateway:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.sent: list[tuple[str, str]] = []

    def send(self, recipient: str, text: str):
        self.sent.append((recipient, text))
        if self.fail:
            raise GatewayError("Failed to send WhatsApp message", detail="401 unauthorized")
        return {"success": True, "msgId": 42}


FULL_CONFIG = AppConfig(
    port=8888,
    client_id="google-client",
    client_secret="secret",
    redirect_uri="http://localhost:8888/auth/callback",
    gmail_user="sender@gmail.com",
    gmail_pass="app-password",
    wasender_url="https://wasender.example/api/send-message",
    wasender_token="wa-token",
)


@pytest.fixture
def stubs() -> Providers:
    return Providers(
        authorization=StubExchanger(),
        forms=StubForms(),
        mail=StubMail(),
        gateway=StubGateway(),
    )


@pytest.fixture
def client(stubs):
    app = create_app(FULL_CONFIG, providers=stubs)
    app.testing = True
    return app.test_client()


@pytest.fixture
def unconfigured_client(stubs):
    app = create_app(AppConfig(), providers=stubs)
    app.testing = True
    return app.test_client()
