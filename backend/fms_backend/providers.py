from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from flask import current_app

from .config import AppConfig
from .protocols import AuthorizationExchanger, FormProvisioner, MailSender, MessageGateway

CONFIG_KEY = "FMS_CONFIG"
PROVIDERS_KEY = "fms_providers"


@dataclass(frozen=True, slots=True)
class Providers:
    authorization: AuthorizationExchanger
    forms: FormProvisioner
    mail: MailSender
    gateway: MessageGateway


ProviderFactory = Callable[[AppConfig], Providers]


def get_config() -> AppConfig:
    return current_app.config[CONFIG_KEY]


def get_providers() -> Providers:
    """Build the provider clients for the current request."""
    factory: ProviderFactory = current_app.extensions[PROVIDERS_KEY]
    return factory(get_config())
