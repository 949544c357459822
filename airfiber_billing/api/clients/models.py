from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # camelCase on the wire (dueDate, createdAt), snake_case in Python
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        coerce_numbers_to_str=True,
    )


# --- Modelos Pydantic (Cliente) ---
class Client(CamelModel):
    id: int
    name: str
    email: str
    phone: str = ""
    amount: str
    due_date: str
    wifi: str
    status: str
    created_at: datetime


# Fields are optional here so a missing one is reported as 400 by the service
class ClientPayload(CamelModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    amount: str | None = None
    due_date: str | None = None
    wifi: str | None = None


class StatusUpdate(CamelModel):
    status: str | None = None


class DueDateUpdate(CamelModel):
    due_date: str | None = None


# --- Respuestas ---
class ClientList(CamelModel):
    clients: list[Client]


class ClientEnvelope(CamelModel):
    client: Client


class ClientCreated(CamelModel):
    success: bool = True
    client: Client


class SuccessResponse(CamelModel):
    success: bool = True


class DueDatesUpdated(CamelModel):
    success: bool = True
    updated_count: int
