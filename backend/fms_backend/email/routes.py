from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify

from ..errors import ConfigurationError, MissingParameter, service_endpoint
from ..http_utils import json_body
from ..providers import get_config, get_providers
from .service import DEFAULT_SUBJECT

email_bp = Blueprint("email", __name__)


@email_bp.post("/sendEmail")
@service_endpoint
def send_email():
    if not get_config().mail_configured:
        raise ConfigurationError("Email credentials missing")

    payload = json_body()
    recipient = payload.get("emailTo")
    body = payload.get("emailMessage")
    if not recipient or not body:
        raise MissingParameter("Missing emailTo or emailMessage")

    message_id = get_providers().mail.send(recipient, DEFAULT_SUBJECT, body)
    return jsonify({"success": True, "messageId": message_id}), HTTPStatus.OK
