from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify

from ..errors import ConfigurationError, MissingParameter, service_endpoint
from ..http_utils import json_body
from ..providers import get_config, get_providers

whatsapp_bp = Blueprint("whatsapp", __name__)


@whatsapp_bp.post("/sendWhatsApp")
@service_endpoint
def send_whatsapp():
    if not get_config().whatsapp_configured:
        raise ConfigurationError("WasenderApi credentials missing")

    payload = json_body()
    recipient = payload.get("to")
    message = payload.get("message")
    if not recipient or not message:
        raise MissingParameter("Missing to or message")

    data = get_providers().gateway.send(recipient, message)
    return jsonify({"success": True, "data": data}), HTTPStatus.OK
