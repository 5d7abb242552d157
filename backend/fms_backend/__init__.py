from __future__ import annotations

import logging

from flask import Flask
from flask_cors import CORS

from .config import AppConfig, ConfigError, describe_config, load_config
from .email import email_bp
from .email.service import SmtpMailSender
from .google import auth_bp, forms_bp
from .google.service import GoogleAuthService, GoogleFormsService
from .providers import CONFIG_KEY, PROVIDERS_KEY, Providers
from .whatsapp import whatsapp_bp
from .whatsapp.service import WasenderGateway

log = logging.getLogger(__name__)

LANDING_PAGE = """
    <h1>Google Forms + Gmail Demo</h1>
    <p>1) <a href="/auth">Sign in with Google</a>.</p>
    <p>2) POST <code>/createForm</code> to create a Google Form.</p>
    <p>3) POST <code>/sendEmail</code> to send an email.</p>
    <p>4) POST <code>/sendWhatsApp</code> via WasenderApi.</p>
"""


def build_providers(config: AppConfig) -> Providers:
    """Wire the default network-backed provider clients for ``config``."""
    return Providers(
        authorization=GoogleAuthService(config),
        forms=GoogleFormsService(),
        mail=SmtpMailSender(user=config.gmail_user, password=config.gmail_pass),
        gateway=WasenderGateway(url=config.wasender_url, token=config.wasender_token),
    )


def create_app(config: AppConfig | None = None, *, providers: Providers | None = None) -> Flask:
    """Application factory for the FMS backend."""
    if config is None:
        try:
            config = load_config()
        except ConfigError as exc:
            raise RuntimeError(f"Configuration error: {exc}") from exc

    for name, state in describe_config(config).items():
        log.info("ENV · %s: %s", name, state)

    app = Flask(__name__)
    app.config.update(PORT=config.port)
    app.config[CONFIG_KEY] = config
    if providers is None:
        # Fresh clients (and HTTP sessions) per request; nothing carries over.
        app.extensions[PROVIDERS_KEY] = build_providers
    else:
        app.extensions[PROVIDERS_KEY] = lambda _config: providers

    CORS(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(forms_bp)
    app.register_blueprint(email_bp)
    app.register_blueprint(whatsapp_bp)

    @app.get("/")
    def home() -> str:
        return LANDING_PAGE

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return app


__all__ = ["build_providers", "create_app"]
