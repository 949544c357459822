from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ...services.email_template_service import ClientSnapshot


class SendEmailRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: str | None = None
    subject: str | None = None
    message: str | None = None
    # Unknown types are rendered as a reminder, so any value is accepted here
    type: Any = None
    client: ClientSnapshot | None = None

    @field_validator("client", mode="before")
    @classmethod
    def ignore_non_object_client(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, ClientSnapshot)) else None


class SendEmailResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message_id: str
