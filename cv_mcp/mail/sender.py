"""Notification sender — one delivery attempt per call through a mail transport."""

import logging
from typing import Protocol, runtime_checkable

from cv_mcp.mail.types import EmailMessage
from cv_mcp.tools.types import ToolError

logger = logging.getLogger(__name__)


class DeliveryFailed(ToolError):
    """Raised when the mail transport rejects or fails a send."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Email delivery failed: {detail}")
        self.detail = detail


@runtime_checkable
class MailTransport(Protocol):
    """Delivers a message and returns its delivery identifier."""

    async def send(self, message: EmailMessage) -> str:
        """Send ``message``.

        Implementations raise DeliveryFailed on any rejection or I/O error.
        """
        ...


class NotificationSender:
    """Sends notifications from the fixed, configured sender identity."""

    def __init__(self, transport: MailTransport, sender: str) -> None:
        self._transport = transport
        self._sender = sender

    @property
    def sender(self) -> str:
        return self._sender

    async def send(self, recipient: str, subject: str, body: str) -> str:
        """Send one email and return the transport's delivery id.

        No retry and no queueing: a failure is raised to the caller.

        Raises:
            DeliveryFailed: if the transport fails for any reason.
        """
        message = EmailMessage(sender=self._sender, to=recipient, subject=subject, body=body)
        try:
            delivery_id = await self._transport.send(message)
        except DeliveryFailed:
            raise
        except Exception as exc:  # noqa: BLE001
            raise DeliveryFailed(str(exc)) from exc

        logger.info("Sent email to %s: %r (id=%s)", recipient, subject, delivery_id)
        return delivery_id
