"""Google OAuth2 sign-in and Forms/Drive provisioning."""

from __future__ import annotations

from .routes import auth_bp, forms_bp

__all__ = ["auth_bp", "forms_bp"]
