import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class ForwarderResponse(BaseModel):
    id: uuid.UUID
    name: str
    short_code: str
    logo_url: str | None = None
    default_quote_email: str | None = None
    api_enabled: bool = False

    model_config = {"from_attributes": True}


class ForwarderListResponse(BaseModel):
    forwarders: list[ForwarderResponse]


class AddUserForwarderRequest(BaseModel):
    forwarder_id: uuid.UUID | None = None
    contact_email: str | None = Field(None, max_length=255)
    contact_name: str | None = Field(None, max_length=100)
    notes: str | None = None


class UserForwarderResponse(BaseModel):
    id: uuid.UUID
    forwarder_id: uuid.UUID
    contact_email: str | None = None
    contact_name: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    forwarder: ForwarderResponse

    model_config = {"from_attributes": True}


class UserForwarderListResponse(BaseModel):
    forwarders: list[UserForwarderResponse]


class AddUserForwarderResponse(BaseModel):
    user_forwarder: UserForwarderResponse
