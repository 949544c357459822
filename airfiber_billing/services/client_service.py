# airfiber_billing/services/client_service.py
"""
Client service layer using SQLModel ORM.

Every write validates its input first, so a rejected request never reaches
the database. Missing rows raise NotFoundError; any SQLAlchemy failure is
rolled back and re-raised as StorageError.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.constants import REQUIRED_CLIENT_FIELDS, ClientStatus
from ..core.exceptions import NotFoundError, StorageError, ValidationError
from ..models import Client

logger = logging.getLogger(__name__)

# Fields a full update is allowed to overwrite (id, status, created_at are not)
EDITABLE_FIELDS = ("name", "email", "phone", "amount", "due_date", "wifi")


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def validate_required_fields(data: Dict[str, Any]) -> None:
    """Raise ValidationError if any required client field is missing or blank."""
    missing = [field for field in REQUIRED_CLIENT_FIELDS if _is_blank(data.get(field))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def _clean_client_data(data: Dict[str, Any]) -> Dict[str, str]:
    cleaned = {field: data.get(field) for field in EDITABLE_FIELDS}
    cleaned["phone"] = cleaned["phone"] or ""
    return cleaned


class ClientService:
    """
    Service layer for Client operations using SQLModel ORM.
    """

    def __init__(self, session: Session):
        """
        Initialize with a SQLModel session.

        Args:
            session: SQLModel Session instance
        """
        self.session = session

    def _get_or_raise(self, client_id: int) -> Client:
        try:
            client = self.session.get(Client, client_id)
        except SQLAlchemyError as e:
            logger.error(f"Error loading client {client_id}: {e}")
            raise StorageError("Failed to load client") from e
        if not client:
            raise NotFoundError("Client not found")
        return client

    def _commit(self, action: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Error {action}: {e}")
            raise StorageError(f"Failed to {action}") from e

    def get_all_clients(self) -> List[Dict[str, Any]]:
        """Get all clients, most recently created first."""
        try:
            statement = select(Client).order_by(Client.id.desc())
            clients = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching clients: {e}")
            raise StorageError("Failed to load clients") from e
        return [client.model_dump() for client in clients]

    def get_client_by_id(self, client_id: int) -> Dict[str, Any]:
        """Get a single client by ID."""
        return self._get_or_raise(client_id).model_dump()

    def create_client(self, client_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new client.

        The status is always forced to ``pending`` regardless of the payload.
        """
        validate_required_fields(client_data)

        new_client = Client(**_clean_client_data(client_data), status=ClientStatus.PENDING.value)
        self.session.add(new_client)
        self._commit("save client")
        self.session.refresh(new_client)

        logger.info(f"Client added: id={new_client.id} name={new_client.name!r}")
        return new_client.model_dump()

    def update_status(self, client_id: int, status: Any) -> bool:
        """
        Update only the billing status of a client.

        Raises:
            ValidationError: status is not pending, paid or disconnected.
            NotFoundError: no client with that id.
        """
        if status not in ClientStatus.values():
            raise ValidationError("Invalid status")

        client = self._get_or_raise(client_id)
        client.status = ClientStatus(status).value
        self.session.add(client)
        self._commit("update status")
        return True

    def update_client(self, client_id: int, client_data: Dict[str, Any]) -> bool:
        """Overwrite every editable field of an existing client."""
        validate_required_fields(client_data)

        client = self._get_or_raise(client_id)
        for key, value in _clean_client_data(client_data).items():
            setattr(client, key, value)

        self.session.add(client)
        self._commit("update client")
        return True

    def update_all_due_dates(self, due_date: Any) -> int:
        """
        Apply one due date to every client.

        Returns:
            Number of clients updated (0 on an empty table).
        """
        if _is_blank(due_date):
            raise ValidationError("dueDate is required")

        try:
            clients = self.session.exec(select(Client)).all()
        except SQLAlchemyError as e:
            logger.error(f"Error loading clients for due date update: {e}")
            raise StorageError("Failed to update due dates") from e

        for client in clients:
            client.due_date = due_date
            self.session.add(client)
        self._commit("update due dates")

        logger.info(f"Due date set to {due_date!r} for {len(clients)} clients")
        return len(clients)

    def delete_client(self, client_id: int) -> bool:
        """Hard-delete a client."""
        client = self._get_or_raise(client_id)
        self.session.delete(client)
        self._commit("delete client")
        logger.info(f"Client deleted: id={client_id}")
        return True
