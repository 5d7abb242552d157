from __future__ import annotations

from http import HTTPStatus
import json
import logging
from typing import Any
from urllib.parse import quote, urlencode

from flask import Blueprint, jsonify, redirect, request

from ..errors import ConfigurationError, InvalidToken, MissingParameter, service_endpoint
from ..http_utils import json_body
from ..providers import get_config, get_providers
from .service import build_edit_url

log = logging.getLogger(__name__)

# The callback hands the raw OAuth token to this fixed origin in a query
# string. Anything that sees the URL sees the credential.
FRONTEND_ORIGIN = "http://localhost:3000"
TOKEN_QUERY_PARAM = "googleToken"

auth_bp = Blueprint("auth", __name__)
forms_bp = Blueprint("forms", __name__)


def _require_oauth_config() -> None:
    if not get_config().oauth_configured:
        raise ConfigurationError("Google OAuth credentials missing")


def build_token_redirect(tokens: dict[str, Any]) -> str:
    serialized = json.dumps(tokens, separators=(",", ":"))
    encoded = urlencode({TOKEN_QUERY_PARAM: serialized}, quote_via=quote)
    return f"{FRONTEND_ORIGIN}/?{encoded}"


def parse_token(raw: Any) -> dict[str, Any]:
    """Decode the token the client echoes back from the callback redirect."""
    if isinstance(raw, dict):
        token = raw
    else:
        try:
            token = json.loads(raw)
        except (TypeError, ValueError):
            raise InvalidToken("Invalid token") from None
    if not isinstance(token, dict) or not token.get("access_token"):
        raise InvalidToken("Invalid token")
    return token


@auth_bp.get("/auth")
@service_endpoint
def begin_authorization():
    _require_oauth_config()
    url = get_providers().authorization.build_authorization_url()
    return redirect(url, code=HTTPStatus.FOUND)


@auth_bp.get("/auth/callback")
@service_endpoint
def complete_authorization():
    _require_oauth_config()
    code = request.args.get("code")
    if not code:
        raise MissingParameter("No code provided")

    tokens = get_providers().authorization.exchange_code(code)
    log.info("Authorization code exchanged; redirecting to %s", FRONTEND_ORIGIN)
    return redirect(build_token_redirect(tokens), code=HTTPStatus.FOUND)


@forms_bp.post("/createForm")
@service_endpoint
def create_form():
    payload = json_body()
    raw_token = payload.get("token")
    title = payload.get("title")
    owner_emails = payload.get("ownerEmails")
    if not raw_token or not title:
        raise MissingParameter("Missing token or title")
    credentials = parse_token(raw_token)

    forms = get_providers().forms
    form_id = forms.create_form(credentials, title)
    if isinstance(owner_emails, list):
        # Sequential and not rolled back: a failed grant leaves the form and
        # any earlier grants in place.
        for email in owner_emails:
            forms.grant_writer(credentials, form_id, email)

    return jsonify({"formId": form_id, "editUrl": build_edit_url(form_id)}), HTTPStatus.OK
