"""
Constantes centralizadas para el sistema de facturación.
Elimina "magic strings" en estados de cliente y tipos de notificación.
"""

from enum import Enum, unique
from typing import Any


@unique
class ClientStatus(str, Enum):
    """Estados de cobro de un cliente."""

    PENDING = "pending"
    PAID = "paid"
    DISCONNECTED = "disconnected"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


@unique
class NotificationType(str, Enum):
    """Tipos de correo que se pueden enviar a un cliente."""

    REMINDER = "reminder"
    RECEIPT = "receipt"
    DISCONNECTION = "disconnection"

    @classmethod
    def parse(cls, value: Any) -> "NotificationType":
        """Unknown or missing types fall back to a reminder."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return cls.REMINDER


@unique
class EmailProvider(str, Enum):
    """Transportes de correo soportados."""

    SMTP = "smtp"
    SENDGRID = "sendgrid"


BRAND_NAME = "AirFiber Internet Billing"
DEFAULT_SUBJECT = "Billing Reminder"
CURRENCY_SYMBOL = "₱"
PLACEHOLDER = "-"

# Required on create and on full update; phone may be blank
REQUIRED_CLIENT_FIELDS = ("name", "email", "amount", "due_date", "wifi")
