"""Pydantic schemas for Client domain."""

from pydantic import BaseModel, field_validator
from datetime import datetime
from decimal import Decimal
from typing import Optional

from clientdesk.core.money import to_decimal

# Fields the client edit form may overwrite
EDITABLE_FIELDS = (
    "name",
    "contact_person",
    "email",
    "invoice_email",
    "contract_value",
    "classification",
    "source",
)


class ProfileFolderRead(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProfileRead(BaseModel):
    id: str
    name: str
    folder_id: Optional[str] = None
    link: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ClientBase(BaseModel):
    name: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    invoice_email: Optional[str] = None
    contract_value: Optional[Decimal] = None
    classification: Optional[str] = None
    source: Optional[str] = None


class ClientUpdate(ClientBase):
    """Payload of the client edit form.

    Identity and nested relations are not fields of this model, so anything
    built from a full client record drops them on validation.
    """


class ClientRead(ClientBase):
    id: str
    profiles: list[ProfileRead] = []
    folders: list[ProfileFolderRead] = []

    model_config = {"from_attributes": True}

    @field_validator("contract_value", mode="before")
    @classmethod
    def _numeric_or_none(cls, value):
        if value is None or value == "":
            return None
        return to_decimal(value)
