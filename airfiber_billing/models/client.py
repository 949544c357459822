# airfiber_billing/models/client.py
"""
Client model for ISP billing.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

from ..core.constants import ClientStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Client(SQLModel, table=True):
    """
    Client model representing one billed subscriber.

    Fields:
    - id: Auto-increment primary key, never reused after a delete
    - name: Client name (required)
    - email: Notification destination (required)
    - phone: Contact phone, also used to hold the device MAC
    - amount: Monthly fee as a display string
    - due_date: Due date as a display string
    - wifi: Network / service identifier (required)
    - status: pending, paid or disconnected
    - created_at: Registration timestamp
    """

    __tablename__ = "clients"
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    email: str = Field(nullable=False)
    phone: str = Field(default="", nullable=False)
    amount: str = Field(nullable=False)
    due_date: str = Field(nullable=False)
    wifi: str = Field(nullable=False)
    status: str = Field(default=ClientStatus.PENDING.value, nullable=False)
    created_at: datetime = Field(default_factory=_utcnow, nullable=False)
