from __future__ import annotations

from datetime import datetime, timedelta, timezone
from http import HTTPStatus
import logging
from typing import Any, Mapping, MutableMapping, Sequence
from urllib.parse import urlencode

import requests

from ..config import AppConfig
from ..errors import ConfigurationError, ProviderError, ProviderExchangeError

log = logging.getLogger(__name__)

AUTH_BASE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
FORMS_BASE_URL = "https://forms.googleapis.com/v1"
DRIVE_BASE_URL = "https://www.googleapis.com/drive/v3"
FORM_EDIT_URL = "https://docs.google.com/forms/d/{form_id}/edit"
DEFAULT_SCOPES = (
    "https://www.googleapis.com/auth/forms.body",
    "https://www.googleapis.com/auth/drive",
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def build_edit_url(form_id: str) -> str:
    return FORM_EDIT_URL.format(form_id=form_id)


class GoogleAuthService:
    """Authorization-code flow against Google's OAuth2 endpoints."""

    def __init__(
        self,
        config: AppConfig,
        *,
        scopes: Sequence[str] = DEFAULT_SCOPES,
        http_session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self.scopes = tuple(scopes)
        self._http = http_session or requests.Session()

    def _require_credentials(self) -> None:
        if not self.config.oauth_configured:
            raise ConfigurationError("Google OAuth credentials missing")

    def build_authorization_url(self) -> str:
        self._require_credentials()
        params: MutableMapping[str, str] = {
            "access_type": "offline",
            "scope": " ".join(self.scopes),
            "response_type": "code",
            "client_id": self.config.client_id or "",
            "redirect_uri": self.config.redirect_uri or "",
        }
        return f"{AUTH_BASE_URL}?{urlencode(params)}"

    def exchange_code(self, code: str) -> dict[str, Any]:
        self._require_credentials()
        payload = {
            "code": code,
            "client_id": self.config.client_id or "",
            "client_secret": self.config.client_secret or "",
            "redirect_uri": self.config.redirect_uri or "",
            "grant_type": "authorization_code",
        }
        try:
            response = self._http.post(TOKEN_ENDPOINT, data=payload, timeout=15)
        except requests.RequestException as exc:
            raise ProviderExchangeError(
                "Error exchanging code",
                detail=f"Failed to contact Google token endpoint: {exc}",
            ) from exc

        if response.status_code != HTTPStatus.OK:
            raise ProviderExchangeError(
                "Error exchanging code",
                detail=f"Google token endpoint returned {response.status_code}: {response.text}",
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderExchangeError(
                "Error exchanging code",
                detail="Google token response was not valid JSON",
            ) from exc
        if not isinstance(data, dict) or not data.get("access_token"):
            raise ProviderExchangeError(
                "Error exchanging code",
                detail="Google token response was missing an access_token",
            )

        tokens = dict(data)
        # Absolute expiry in epoch milliseconds, the shape Google's client libraries hand out.
        expires_in = tokens.pop("expires_in", None)
        if isinstance(expires_in, (int, float)):
            expiry = _now() + timedelta(seconds=float(expires_in))
            tokens["expiry_date"] = int(expiry.timestamp() * 1000)
        return tokens


class GoogleFormsService:
    """Form creation through the Forms API and sharing through the Drive API."""

    def __init__(self, *, http_session: requests.Session | None = None) -> None:
        self._http = http_session or requests.Session()

    def create_form(self, credentials: Mapping[str, Any], title: str) -> str:
        body = {"info": {"title": title, "documentTitle": f"Form for {title}"}}
        data = self._call_google_api("POST", f"{FORMS_BASE_URL}/forms", credentials, json=body)
        form_id = data.get("formId") if isinstance(data, dict) else None
        if not isinstance(form_id, str) or not form_id:
            raise ProviderError(
                "Error creating form",
                detail="Google Forms response was missing a formId",
            )
        log.info("Created Google Form %s", form_id)
        return form_id

    def grant_writer(self, credentials: Mapping[str, Any], form_id: str, email: str) -> None:
        body = {"role": "writer", "type": "user", "emailAddress": email}
        self._call_google_api(
            "POST",
            f"{DRIVE_BASE_URL}/files/{form_id}/permissions",
            credentials,
            json=body,
        )
        log.info("Granted writer access on form %s", form_id)

    def _call_google_api(
        self,
        method: str,
        url: str,
        credentials: Mapping[str, Any],
        *,
        json: Mapping[str, Any] | None = None,
        expected_statuses: Sequence[HTTPStatus] = (HTTPStatus.OK,),
    ) -> Any:
        headers = {
            "Authorization": f"Bearer {credentials.get('access_token')}",
            "Accept": "application/json",
        }
        try:
            response = self._http.request(method, url, headers=headers, json=json, timeout=20)
        except requests.RequestException as exc:
            raise ProviderError(
                "Error creating form",
                detail=f"Failed to contact Google API {url}: {exc}",
            ) from exc

        if response.status_code not in expected_statuses:
            raise ProviderError(
                "Error creating form",
                detail=f"Google API error {response.status_code} from {url}: {response.text}",
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(
                "Error creating form",
                detail=f"Failed to parse Google API response from {url} as JSON",
            ) from exc


__all__ = [
    "DEFAULT_SCOPES",
    "GoogleAuthService",
    "GoogleFormsService",
    "build_edit_url",
]
