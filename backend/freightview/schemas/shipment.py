import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from freightview.schemas.quote import QuoteResponse

RequestStatus = Literal[
    "draft", "pending_quotes", "quotes_received", "decision_pending", "booked", "cancelled"
]
ModePreference = Literal["air", "sea", "any"]


class CreateShipmentRequest(BaseModel):
    reference: str | None = None
    origin_country: str = Field(..., min_length=2, max_length=2)
    origin_city: str | None = None
    origin_port: str | None = None
    dest_country: str = Field(..., min_length=2, max_length=2)
    dest_city: str | None = None
    dest_port: str | None = None
    cargo_type: str
    cargo_description: str | None = None
    weight_kg: float | None = Field(None, ge=0)
    volume_cbm: float | None = Field(None, ge=0)
    pieces: int | None = Field(None, ge=0)
    value_usd: float | None = Field(None, ge=0)
    is_stackable: bool = True
    is_hazmat: bool = False
    cargo_ready_date: date | None = None
    delivery_required_date: date | None = None
    mode_preference: ModePreference = "any"
    incoterms: str = "FOB"
    special_instructions: str | None = None


class UpdateShipmentRequest(BaseModel):
    """Only these fields may change after creation."""
    status: RequestStatus | None = None
    reference: str | None = None
    special_instructions: str | None = None
    cargo_description: str | None = None
    mode_preference: ModePreference | None = None


class ShipmentRequestResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    reference: str | None
    status: str
    origin_country: str | None
    origin_city: str | None
    origin_port: str | None
    dest_country: str | None
    dest_city: str | None
    dest_port: str | None
    cargo_type: str | None
    cargo_description: str | None
    weight_kg: float | None
    volume_cbm: float | None
    pieces: int | None
    value_usd: float | None
    is_stackable: bool
    is_hazmat: bool
    cargo_ready_date: date | None
    delivery_required_date: date | None
    mode_preference: str
    incoterms: str
    special_instructions: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    submitted_at: datetime | None = None

    model_config = {"from_attributes": True}


class ShipmentRequestDetail(ShipmentRequestResponse):
    quotes: list[QuoteResponse] = []


class RequestListResponse(BaseModel):
    requests: list[ShipmentRequestResponse]
    count: int


class RequestEnvelope(BaseModel):
    request: ShipmentRequestResponse


class RequestDetailEnvelope(BaseModel):
    request: ShipmentRequestDetail


class DeleteRequestResponse(BaseModel):
    message: str
    deleted_id: uuid.UUID
