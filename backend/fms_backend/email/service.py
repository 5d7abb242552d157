from __future__ import annotations

from email.message import EmailMessage
from email.utils import make_msgid
import logging
import smtplib
from typing import Callable

from ..errors import ConfigurationError, DeliveryError

log = logging.getLogger(__name__)

GMAIL_SMTP_HOST = "smtp.gmail.com"
GMAIL_SMTP_PORT = 465
DEFAULT_SUBJECT = "FMS Message"


class SmtpMailSender:
    """Plain-text delivery through an authenticated SMTP relay (implicit TLS)."""

    def __init__(
        self,
        *,
        user: str | None,
        password: str | None,
        host: str = GMAIL_SMTP_HOST,
        port: int = GMAIL_SMTP_PORT,
        timeout: float = 20,
        smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP_SSL,
    ) -> None:
        self.user = user
        self.password = password
        self.host = host
        self.port = port
        self.timeout = timeout
        self._smtp_factory = smtp_factory

    def _build_message(self, recipient: str, subject: str, body: str) -> EmailMessage:
        domain = self.user.rpartition("@")[2] if self.user and "@" in self.user else None
        message = EmailMessage()
        message["From"] = self.user
        message["To"] = recipient
        message["Subject"] = subject
        message["Message-ID"] = make_msgid(domain=domain)
        message.set_content(body)
        return message

    def send(self, recipient: str, subject: str, body: str) -> str:
        if not self.user or not self.password:
            raise ConfigurationError("Email credentials missing")

        try:
            message = self._build_message(recipient, subject, body)
            with self._smtp_factory(self.host, self.port, timeout=self.timeout) as mail:
                mail.login(self.user, self.password)
                mail.send_message(message)
        except (smtplib.SMTPException, OSError, ValueError) as exc:
            raise DeliveryError("Failed to send email", detail=str(exc)) from exc

        message_id = message["Message-ID"]
        log.info("Sent email %s via %s", message_id, self.host)
        return message_id


__all__ = ["DEFAULT_SUBJECT", "SmtpMailSender"]
