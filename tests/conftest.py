"""
Shared fixtures: an in-memory database, a recording email transport and a
TestClient wired to both.
"""
import os

# Must be set before the application modules build their engine
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from airfiber_billing.core.exceptions import TransportError
from airfiber_billing.db.engine_sync import build_engine, create_sync_db_and_tables, get_sync_session
from airfiber_billing.main import app
from airfiber_billing.services.client_service import ClientService
from airfiber_billing.services.email_transport import EmailTransport
from airfiber_billing.services.notification_service import NotificationDispatcher

FIXED_NOW = datetime(2025, 2, 1, 14, 5, 9)


class RecordingTransport(EmailTransport):
    """Transport double that keeps every sent email in memory."""

    provider_name = "recording"

    def __init__(self, fail_with: Optional[Exception] = None):
        self.sent: List[dict] = []
        self.fail_with = fail_with

    def is_configured(self) -> bool:
        return True

    def send(self, sender, recipient, subject, text, html):
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(
            {"sender": sender, "to": recipient, "subject": subject, "text": text, "html": html}
        )
        return f"<msg-{len(self.sent)}@test>"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    create_sync_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client_service(session):
    return ClientService(session)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def dispatcher(transport):
    return NotificationDispatcher(transport, sender_address="billing@airfiber.test")


@pytest.fixture
def api(engine, dispatcher):
    def override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_sync_session] = override_session
    app.state.dispatcher = dispatcher
    yield TestClient(app)
    app.dependency_overrides.clear()
    app.state.dispatcher = None


@pytest.fixture
def sample_client_data():
    return {
        "name": "Ana",
        "email": "a@x.com",
        "phone": "AA:BB:CC:DD:EE:FF",
        "amount": "500",
        "due_date": "2025-02-01",
        "wifi": "ana-wifi",
    }


@pytest.fixture
def failing_transport():
    return RecordingTransport(fail_with=TransportError("provider rejected the email"))
