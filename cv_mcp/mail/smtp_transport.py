"""SMTP mail transport.

smtplib is blocking, so each send runs in a worker thread via
``asyncio.to_thread`` to keep the MCP event loop responsive.  Port 465 uses
implicit TLS (``SMTP_SSL``); set ``starttls=True`` for submission on 587.
"""

import asyncio
import email.message
import logging
import smtplib
from email.utils import make_msgid

from cv_mcp.mail.sender import DeliveryFailed
from cv_mcp.mail.types import EmailMessage

logger = logging.getLogger(__name__)

_SMTP_TIMEOUT_SECONDS = 30


class SmtpMailTransport:
    """Logs in to an SMTP account and sends one message per connection."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        *,
        starttls: bool = False,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._starttls = starttls

    async def send(self, message: EmailMessage) -> str:
        """Send ``message`` and return its Message-ID header.

        Raises:
            DeliveryFailed: on authentication, recipient or network errors.
        """
        mime = build_mime_message(message)
        try:
            await asyncio.to_thread(self._send_blocking, mime)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP send to %s failed: %s", message.to, exc)
            raise DeliveryFailed(str(exc)) from exc
        return str(mime["Message-ID"])

    def _send_blocking(self, mime: email.message.EmailMessage) -> None:
        smtp: smtplib.SMTP
        if self._starttls:
            smtp = smtplib.SMTP(self._host, self._port, timeout=_SMTP_TIMEOUT_SECONDS)
        else:
            smtp = smtplib.SMTP_SSL(self._host, self._port, timeout=_SMTP_TIMEOUT_SECONDS)
        with smtp:
            if self._starttls:
                smtp.starttls()
            smtp.login(self._username, self._password)
            smtp.send_message(mime)
        logger.debug("SMTP %s:%d accepted %s", self._host, self._port, mime["Message-ID"])


def build_mime_message(message: EmailMessage) -> email.message.EmailMessage:
    """Convert an EmailMessage into a stdlib MIME message with a Message-ID."""
    mime = email.message.EmailMessage()
    mime["From"] = message.sender
    mime["To"] = message.to
    mime["Subject"] = message.subject
    mime["Message-ID"] = make_msgid(domain=_domain_of(message.sender))
    mime.set_content(message.body)
    return mime


def _domain_of(address: str) -> str | None:
    _, sep, domain = address.rpartition("@")
    if not sep:
        return None
    return domain.strip(" >") or None
