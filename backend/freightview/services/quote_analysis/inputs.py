"""Input records for the quote analysis engine and their field coercion."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

AIR = "air"
SEA = "sea"


class QuoteAnalysisValidationError(ValueError):
    """Raised when an input field cannot be interpreted."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ForwarderInput:
    id: str | None = None
    name: str | None = None
    short_code: str | None = None


@dataclass(frozen=True)
class QuoteInput:
    """A single forwarder quote as seen by the engine."""
    id: str
    mode: str
    total_amount: Any
    request_id: str | None = None
    forwarder_id: str | None = None
    transit_days: int | None = None
    etd: Any = None
    eta: Any = None
    status: str = "active"
    forwarder: ForwarderInput | None = None

    @classmethod
    def from_mapping(cls, data: dict) -> "QuoteInput":
        fwd = data.get("forwarder")
        if isinstance(fwd, dict):
            fwd = ForwarderInput(
                id=fwd.get("id"),
                name=fwd.get("name"),
                short_code=fwd.get("short_code"),
            )
        return cls(
            id=str(data.get("id")),
            mode=data.get("mode"),
            total_amount=data.get("total_amount"),
            request_id=data.get("request_id"),
            forwarder_id=data.get("forwarder_id"),
            transit_days=data.get("transit_days"),
            etd=data.get("etd"),
            eta=data.get("eta"),
            status=data.get("status") or "active",
            forwarder=fwd,
        )


@dataclass(frozen=True)
class ShipmentInput:
    """The subset of a shipment request the analysis needs."""
    id: str
    cargo_ready_date: Any = None
    delivery_required_date: Any = None
    value_usd: Any = None

    @classmethod
    def from_mapping(cls, data: dict) -> "ShipmentInput":
        return cls(
            id=str(data.get("id")),
            cargo_ready_date=data.get("cargo_ready_date"),
            delivery_required_date=data.get("delivery_required_date"),
            value_usd=data.get("value_usd"),
        )


@dataclass(frozen=True)
class NormalizedQuote:
    """A validated quote: amounts as Decimal, dates as UTC datetimes."""
    source: QuoteInput
    total_amount: Decimal
    transit_days: int | None
    eta: datetime | None
    forwarder_label: str | None = None
    field_prefix: str = ""


def to_moment(value: Any, field_name: str) -> datetime | None:
    """Normalize a date-ish value to an aware UTC datetime.

    Plain dates become midnight UTC. Naive datetimes are taken as UTC.
    Strings must be ISO 8601 (date or datetime).
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            if len(value) == 10:
                value = date.fromisoformat(value)
            else:
                value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise QuoteAnalysisValidationError(field_name, f"invalid date {value!r}") from None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    raise QuoteAnalysisValidationError(field_name, f"expected a date, got {type(value).__name__}")


def to_amount(value: Any, field_name: str, required: bool = True) -> Decimal | None:
    """Parse a non-negative decimal amount."""
    if value is None or value == "":
        if required:
            raise QuoteAnalysisValidationError(field_name, "amount is required")
        return None
    if isinstance(value, bool):
        raise QuoteAnalysisValidationError(field_name, "expected a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise QuoteAnalysisValidationError(field_name, f"invalid amount {value!r}") from None
    if not amount.is_finite():
        raise QuoteAnalysisValidationError(field_name, "amount must be finite")
    if amount < 0:
        raise QuoteAnalysisValidationError(field_name, "amount must not be negative")
    return amount


def to_days(value: Any, field_name: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise QuoteAnalysisValidationError(field_name, "expected an integer")
    try:
        days = int(value)
    except (TypeError, ValueError):
        raise QuoteAnalysisValidationError(field_name, f"invalid day count {value!r}") from None
    if days < 0:
        raise QuoteAnalysisValidationError(field_name, "day count must not be negative")
    return days
