# airfiber_billing/services/email_template_service.py
"""
Email template engine.

Turns a client snapshot, a free-text message and a notification type into a
subject, a plain-text body and an HTML body. Rendering is pure: the only
non-input value is the clock, and callers can pin it through ``now``.
"""
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from ..core.constants import (
    BRAND_NAME,
    CURRENCY_SYMBOL,
    DEFAULT_SUBJECT,
    PLACEHOLDER,
    NotificationType,
)

current_dir = os.path.dirname(os.path.abspath(__file__))
email_templates_dir = os.path.normpath(os.path.join(current_dir, "..", "templates", "emails"))


class ClientSnapshot(BaseModel):
    """Client fields shown in an email. Every field is optional."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    amount: Optional[str] = None
    due_date: Optional[str] = None
    wifi: Optional[str] = None
    status: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def drop_unusable_values(cls, data: Any) -> Any:
        # Lists, objects and the like render as a placeholder instead of failing
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if value is None or (isinstance(value, (str, int, float)) and not isinstance(value, bool))
            }
        return data


@dataclass(frozen=True)
class NotificationStyle:
    banner_color: str
    caption: str
    title: str
    layout: str


NOTIFICATION_STYLES = {
    NotificationType.REMINDER: NotificationStyle(
        banner_color="#f97316",
        caption="Your payment is due soon",
        title="Please review your billing details",
        layout="notice",
    ),
    NotificationType.DISCONNECTION: NotificationStyle(
        banner_color="#b91c1c",
        caption="Important account notice",
        title="Your account is scheduled for disconnection",
        layout="notice",
    ),
    NotificationType.RECEIPT: NotificationStyle(
        banner_color="#16a34a",
        caption="Payment received",
        title="Payment Receipt",
        layout="receipt",
    ),
}


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    text: str
    html: str


def nl2br(value: Optional[str]) -> Markup:
    """Escape the text and turn each line break into ``<br />``."""
    lines = str(value or "").replace("\r\n", "\n").split("\n")
    return Markup("<br />").join(escape(line) for line in lines)


_env = Environment(
    loader=FileSystemLoader(email_templates_dir),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)
_env.filters["nl2br"] = nl2br


def _or_placeholder(value: Optional[str]) -> str:
    return value if value else PLACEHOLDER


def _money(value: Optional[str]) -> str:
    return f"{CURRENCY_SYMBOL}{_or_placeholder(value)}"


def render_email(
    client: Optional[ClientSnapshot],
    message: Optional[str],
    notification_type: Optional[str] = None,
    subject: Optional[str] = None,
    now: Optional[datetime] = None,
) -> RenderedEmail:
    """
    Render a notification email.

    Args:
        client: Snapshot of the client; missing fields render as ``-``.
        message: Free-text body. Line breaks become ``<br />`` in the HTML.
        notification_type: reminder, receipt or disconnection. Anything else
            renders as a reminder.
        subject: Email subject. Falls back to "Billing Reminder".
        now: Render time used for the receipt stamp and footer year.

    Returns:
        RenderedEmail with subject, plain text and HTML.
    """
    client = client or ClientSnapshot()
    now = now or datetime.now()
    kind = NotificationType.parse(notification_type)
    style = NOTIFICATION_STYLES[kind]
    subject = subject.strip() if subject and subject.strip() else DEFAULT_SUBJECT

    context = {
        "brand": BRAND_NAME,
        "style": style,
        "subject": subject,
        "message": message or "",
        "customer_name": client.name or "Valued Customer",
        "wifi": _or_placeholder(client.wifi),
        "service": client.wifi or "INTERNET SERVICE",
        "amount": _money(client.amount),
        "due_date": _or_placeholder(client.due_date),
        "device_mac": _or_placeholder(client.phone),
        "date_str": f"{now.month}/{now.day}/{now.year}",
        "time_str": now.strftime("%I:%M:%S %p"),
        "year": now.year,
    }
    template = _env.get_template(f"{style.layout}.html")
    return RenderedEmail(subject=subject, text=message or "", html=template.render(**context))
