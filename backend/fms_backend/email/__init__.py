"""Outbound email through the Gmail SMTP relay."""

from __future__ import annotations

from .routes import email_bp

__all__ = ["email_bp"]
