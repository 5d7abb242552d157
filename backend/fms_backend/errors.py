from __future__ import annotations

from functools import wraps
from http import HTTPStatus
import logging

from flask import jsonify

log = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for request handling.

    ``message`` is returned to the caller. ``detail`` carries whatever the
    upstream provider reported and is only ever written to the server log.
    """

    status: HTTPStatus = HTTPStatus.BAD_REQUEST
    code: str = "service_error"

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        code: str | None = None,
        status: HTTPStatus | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        if code is not None:
            self.code = code
        if status is not None:
            self.status = status


class MissingParameter(ServiceError):
    status = HTTPStatus.BAD_REQUEST
    code = "missing_parameter"


class InvalidToken(ServiceError):
    status = HTTPStatus.BAD_REQUEST
    code = "invalid_token"


class ConfigurationError(ServiceError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "configuration_error"


class ProviderExchangeError(ServiceError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "provider_exchange_error"


class ProviderError(ServiceError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "provider_error"


class DeliveryError(ServiceError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "delivery_error"


class GatewayError(ServiceError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "gateway_error"


def service_endpoint(fn):
    """Translate ``ServiceError`` raised by a view into a JSON error response."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except ServiceError as exc:
            if exc.detail:
                log.error("%s in %s: %s (%s)", exc.code, fn.__name__, exc.message, exc.detail)
            return jsonify({"error": exc.code, "message": exc.message}), exc.status

    return wrapper


__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "GatewayError",
    "InvalidToken",
    "MissingParameter",
    "ProviderError",
    "ProviderExchangeError",
    "ServiceError",
    "service_endpoint",
]
