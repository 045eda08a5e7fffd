import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from freightview.schemas.forwarder import ForwarderResponse


class CreateQuoteRequest(BaseModel):
    forwarder_id: uuid.UUID
    mode: Literal["air", "sea"]
    total_amount: float = Field(..., gt=0)
    freight_charge: float | None = None
    fuel_surcharge: float | None = None
    handling_charge: float | None = None
    documentation_fee: float | None = None
    terminal_handling: float | None = None
    currency: str = "USD"
    etd: date | None = None
    eta: date | None = None
    transit_days: int | None = Field(None, ge=0)
    carrier: str | None = None
    routing: str | None = None
    valid_until: date | None = None
    notes: str | None = None


class QuoteResponse(BaseModel):
    id: uuid.UUID
    request_id: uuid.UUID
    forwarder_id: uuid.UUID
    mode: str
    status: str
    currency: str
    total_amount: float
    freight_charge: float | None = None
    fuel_surcharge: float | None = None
    handling_charge: float | None = None
    documentation_fee: float | None = None
    terminal_handling: float | None = None
    other_charges: float | None = None
    etd: date | None = None
    eta: date | None = None
    transit_days: int | None = None
    carrier: str | None = None
    routing: str | None = None
    valid_until: date | None = None
    received_via: str
    notes: str | None = None
    forwarder: ForwarderResponse | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class QuoteSummary(BaseModel):
    total: int
    air_count: int
    sea_count: int
    lowest_air: float | None
    lowest_sea: float | None


class QuoteListResponse(BaseModel):
    quotes: list[QuoteResponse]
    summary: QuoteSummary


class CreateQuoteResponse(BaseModel):
    quote: QuoteResponse
