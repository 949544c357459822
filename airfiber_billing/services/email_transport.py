# airfiber_billing/services/email_transport.py
"""
Outbound email transports.

A transport is the single capability the dispatcher depends on:
``send(sender, recipient, subject, text, html) -> message_id``.
Failures of any kind (missing credentials, network errors, provider
rejections) are raised as TransportError.
"""
import logging
import smtplib
import ssl
from abc import ABC, abstractmethod
from email.message import EmailMessage
from email.utils import make_msgid, parseaddr
from typing import Optional

import httpx

from ..core.config import Settings
from ..core.constants import EmailProvider
from ..core.exceptions import TransportError

logger = logging.getLogger(__name__)


class EmailTransport(ABC):
    """Abstract base class for email transports."""

    provider_name: str = "base"

    @abstractmethod
    def is_configured(self) -> bool:
        """Return True when the credentials needed to send are present."""

    @abstractmethod
    def send(self, sender: str, recipient: str, subject: str, text: str, html: str) -> str:
        """
        Deliver one email.

        Returns:
            The message id assigned to the email.

        Raises:
            TransportError: if the email could not be handed to the provider.
        """


class SmtpTransport(EmailTransport):
    """
    SMTP transport, Gmail with an App Password by default.

    Port 465 uses implicit SSL; any other port uses STARTTLS.
    """

    provider_name = "smtp"

    def __init__(
        self,
        username: Optional[str],
        password: Optional[str],
        host: str = "smtp.gmail.com",
        port: int = 465,
        timeout: float = 10.0,
    ):
        self.username = username
        self.password = password
        self.host = host
        self.port = port
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.username and self.password)

    def send(self, sender: str, recipient: str, subject: str, text: str, html: str) -> str:
        if not self.is_configured():
            raise TransportError("SMTP credentials are not configured")

        msg = EmailMessage()
        msg["From"] = sender
        msg["To"] = recipient
        msg["Subject"] = subject
        message_id = make_msgid(domain=self.host)
        msg["Message-ID"] = message_id
        msg.set_content(text)
        msg.add_alternative(html, subtype="html")

        context = ssl.create_default_context()
        try:
            if self.port == 465:
                with smtplib.SMTP_SSL(self.host, self.port, context=context, timeout=self.timeout) as server:
                    server.login(self.username, self.password)
                    server.send_message(msg)
            else:
                with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                    server.starttls(context=context)
                    server.login(self.username, self.password)
                    server.send_message(msg)
        except smtplib.SMTPAuthenticationError as e:
            raise TransportError("SMTP authentication failed", cause=e) from e
        except (smtplib.SMTPException, OSError) as e:
            raise TransportError(f"SMTP delivery failed: {e}", cause=e) from e

        return message_id


class SendGridTransport(EmailTransport):
    """Transport for the SendGrid v3 ``mail/send`` REST endpoint."""

    provider_name = "sendgrid"
    api_url = "https://api.sendgrid.com/v3/mail/send"

    def __init__(self, api_key: Optional[str], timeout: float = 10.0, client: Optional[httpx.Client] = None):
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _post(self, payload: dict) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if self._client is not None:
            return self._client.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        return httpx.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)

    def send(self, sender: str, recipient: str, subject: str, text: str, html: str) -> str:
        if not self.is_configured():
            raise TransportError("SendGrid API key is not configured")

        name, address = parseaddr(sender)
        from_field = {"email": address, "name": name} if name else {"email": address}
        payload = {
            "personalizations": [{"to": [{"email": recipient}]}],
            "from": from_field,
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": text},
                {"type": "text/html", "value": html},
            ],
        }

        try:
            response = self._post(payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"SendGrid rejected the email (HTTP {e.response.status_code})", cause=e
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"Connection error talking to SendGrid: {e}", cause=e) from e

        return response.headers.get("X-Message-Id", "")


def build_transport(settings: Settings) -> EmailTransport:
    """Create the transport selected by EMAIL_PROVIDER."""
    if settings.email_provider == EmailProvider.SENDGRID:
        return SendGridTransport(settings.sendgrid_api_key, timeout=settings.email_timeout)
    return SmtpTransport(
        settings.gmail_user,
        settings.gmail_app_password,
        host=settings.smtp_host,
        port=settings.smtp_port,
        timeout=settings.email_timeout,
    )
