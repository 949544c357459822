# airfiber_billing/services/notification_service.py
"""
Notification dispatcher: render one email and hand it to the transport.

Each call is a single request/response cycle. Nothing is queued, retried or
persisted; calling twice sends twice.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from email.utils import formataddr
from typing import Optional

from ..core.constants import BRAND_NAME, NotificationType
from ..core.exceptions import TransportError, ValidationError
from .email_template_service import ClientSnapshot, render_email
from .email_transport import EmailTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    message_id: str
    subject: str
    notification_type: NotificationType


class NotificationDispatcher:
    """
    Sends templated notification emails through an injected transport.
    """

    def __init__(
        self,
        transport: EmailTransport,
        sender_address: Optional[str],
        sender_name: str = BRAND_NAME,
    ):
        self.transport = transport
        self.sender_address = sender_address
        self.sender_name = sender_name

    @property
    def sender(self) -> str:
        return formataddr((self.sender_name, self.sender_address or ""))

    def is_configured(self) -> bool:
        return bool(self.sender_address) and self.transport.is_configured()

    def dispatch(
        self,
        email: Optional[str],
        message: Optional[str],
        subject: Optional[str] = None,
        notification_type: Optional[str] = None,
        client: Optional[ClientSnapshot] = None,
        now: Optional[datetime] = None,
    ) -> DispatchResult:
        """
        Render and send one notification.

        Raises:
            ValidationError: email or message is missing.
            TransportError: the transport failed; nothing was retried.
        """
        if not email or not str(email).strip() or not message or not str(message).strip():
            raise ValidationError("email and message are required")

        kind = NotificationType.parse(notification_type)
        rendered = render_email(client, message, kind, subject=subject, now=now)

        if not self.sender_address:
            raise TransportError("Sender address is not configured")

        try:
            message_id = self.transport.send(
                self.sender, email, rendered.subject, rendered.text, rendered.html
            )
        except TransportError as e:
            logger.error(f"Error sending {kind.value} email to {email}: {e}")
            raise
        except Exception as e:
            logger.error(f"Unexpected transport failure sending to {email}: {e}")
            raise TransportError(f"Failed to send email: {e}", cause=e) from e

        logger.info(f"Email sent ({kind.value}) to {email}: {message_id}")
        return DispatchResult(message_id=message_id, subject=rendered.subject, notification_type=kind)
