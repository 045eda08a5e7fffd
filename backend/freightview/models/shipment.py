import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freightview.database import Base

REQUEST_STATUSES = (
    "draft",
    "pending_quotes",
    "quotes_received",
    "decision_pending",
    "booked",
    "cancelled",
)
QUOTE_STATUSES = ("active", "expired", "selected", "declined")
TRANSPORT_MODES = ("air", "sea")


class ShipmentRequest(Base):
    __tablename__ = "requests"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reference: Mapped[str | None] = mapped_column(String(100))
    status: Mapped[str] = mapped_column(String(50), default="draft")

    # Origin
    origin_country: Mapped[str | None] = mapped_column(String(2))
    origin_city: Mapped[str | None] = mapped_column(String(100))
    origin_port: Mapped[str | None] = mapped_column(String(10))
    origin_address: Mapped[str | None] = mapped_column(Text)

    # Destination
    dest_country: Mapped[str | None] = mapped_column(String(2))
    dest_city: Mapped[str | None] = mapped_column(String(100))
    dest_port: Mapped[str | None] = mapped_column(String(10))
    dest_address: Mapped[str | None] = mapped_column(Text)

    # Cargo
    cargo_type: Mapped[str | None] = mapped_column(String(50))
    cargo_description: Mapped[str | None] = mapped_column(Text)
    weight_kg: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    volume_cbm: Mapped[Decimal | None] = mapped_column(Numeric(10, 3))
    pieces: Mapped[int | None] = mapped_column(Integer)
    value_usd: Mapped[Decimal | None] = mapped_column(Numeric(15, 2))
    is_stackable: Mapped[bool] = mapped_column(Boolean, default=True)
    is_hazmat: Mapped[bool] = mapped_column(Boolean, default=False)
    temperature_required: Mapped[str | None] = mapped_column(String(20))

    # Requirements
    cargo_ready_date: Mapped[date | None] = mapped_column(Date)
    delivery_required_date: Mapped[date | None] = mapped_column(Date)
    mode_preference: Mapped[str] = mapped_column(String(10), default="any")
    incoterms: Mapped[str] = mapped_column(String(10), default="FOB")
    special_instructions: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    quotes: Mapped[list["Quote"]] = relationship(
        back_populates="request", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("mode_preference IN ('air', 'sea', 'any')", name="ck_requests_mode_preference"),
    )


class Quote(Base):
    __tablename__ = "quotes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    request_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("requests.id", ondelete="CASCADE"), nullable=False, index=True
    )
    forwarder_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("forwarders.id", ondelete="CASCADE"), nullable=False
    )
    mode: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="active")

    # Pricing
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    freight_charge: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    fuel_surcharge: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    handling_charge: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    documentation_fee: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    terminal_handling: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    other_charges: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))

    # Schedule
    etd: Mapped[date | None] = mapped_column(Date)
    eta: Mapped[date | None] = mapped_column(Date)
    transit_days: Mapped[int | None] = mapped_column(Integer)
    carrier: Mapped[str | None] = mapped_column(String(100))
    routing: Mapped[str | None] = mapped_column(String(100))

    # Terms
    valid_until: Mapped[date | None] = mapped_column(Date)
    received_via: Mapped[str] = mapped_column(String(20), default="manual")
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    request: Mapped["ShipmentRequest"] = relationship(back_populates="quotes")
    forwarder: Mapped["Forwarder"] = relationship(lazy="joined")

    __table_args__ = (
        CheckConstraint("mode IN ('air', 'sea')", name="ck_quotes_mode"),
        CheckConstraint("total_amount >= 0", name="ck_quotes_total_amount"),
    )
