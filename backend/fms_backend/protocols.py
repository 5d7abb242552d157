"""Provider abstractions the route handlers depend on."""

from __future__ import annotations

from typing import Any, Mapping, Protocol


class AuthorizationExchanger(Protocol):
    def build_authorization_url(self) -> str:
        """Return the consent URL the browser is redirected to."""
        ...

    def exchange_code(self, code: str) -> dict[str, Any]:
        """Trade an authorization code for the provider's token payload."""
        ...


class FormProvisioner(Protocol):
    def create_form(self, credentials: Mapping[str, Any], title: str) -> str:
        """Create a form and return its id."""
        ...

    def grant_writer(self, credentials: Mapping[str, Any], form_id: str, email: str) -> None:
        ...


class MailSender(Protocol):
    def send(self, recipient: str, subject: str, body: str) -> str:
        """Deliver a plain-text message and return its Message-ID."""
        ...


class MessageGateway(Protocol):
    def send(self, recipient: str, text: str) -> Any:
        ...
