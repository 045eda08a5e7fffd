import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from freightview.database import Base


class UserForwarder(Base):
    """A forwarder on a user's designated list, with per-user contact details."""
    __tablename__ = "user_forwarders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    forwarder_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("forwarders.id", ondelete="CASCADE"), nullable=False
    )
    contact_email: Mapped[str | None] = mapped_column(String(255))
    contact_name: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    forwarder: Mapped["Forwarder"] = relationship(lazy="joined")

    __table_args__ = (
        UniqueConstraint("user_id", "forwarder_id", name="uq_user_forwarders_user_forwarder"),
    )
