"""WhatsApp delivery through the WasenderApi gateway."""

from __future__ import annotations

from .routes import whatsapp_bp

__all__ = ["whatsapp_bp"]
