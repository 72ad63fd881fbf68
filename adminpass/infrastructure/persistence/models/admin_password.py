"""Admin password ORM models: weekly PIN records, usage log, generation events."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Connection,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    event,
    text,
)
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from adminpass.infrastructure.persistence.database import Base
from adminpass.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class AdminPassword(CuidMixin, TimestampMixin, Base):
    """One generated admin PIN. Deactivated when superseded, never deleted.

    The partial unique index allows at most one row with is_active = true;
    concurrent generators that lose the race get an IntegrityError.
    """

    __tablename__ = "admin_password"
    __table_args__ = (
        Index(
            "uq_admin_password_single_active",
            "is_active",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
        Index("ix_admin_password_period_active", "period", "is_active"),
    )

    period: Mapped[str] = mapped_column(String(8), nullable=False)
    password: Mapped[str] = mapped_column(String(16), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    usage_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    last_used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    deactivated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class AdminPasswordUsage(CuidMixin, Base):
    """One successful use of the admin password. Append-only."""

    __tablename__ = "admin_password_usage"

    password_id: Mapped[str] = mapped_column(
        String, ForeignKey("admin_password.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    target_id: Mapped[str | None] = mapped_column(String, nullable=True)
    target_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    usage_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSON, nullable=True
    )
    ip_address: Mapped[str | None] = mapped_column(String, nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False, index=True
    )


class AdminPasswordEvent(CuidMixin, Base):
    """Generation event log (who/what produced each PIN). Append-only; no plaintext."""

    __tablename__ = "admin_password_event"

    password_id: Mapped[str] = mapped_column(
        String, ForeignKey("admin_password.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    event_type: Mapped[str] = mapped_column(String(32), nullable=False)
    period: Mapped[str] = mapped_column(String(8), nullable=False)
    method: Mapped[str] = mapped_column(String(16), nullable=False)
    actor_id: Mapped[str | None] = mapped_column(String, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False
    )


@event.listens_for(AdminPassword, "before_delete")
def _prevent_admin_password_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: AdminPassword
) -> None:
    """Admin password records are deactivated, never deleted."""
    raise ValueError("Admin password records cannot be deleted; deactivate them instead.")


@event.listens_for(AdminPasswordUsage, "before_update")
@event.listens_for(AdminPasswordEvent, "before_update")
def _prevent_log_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: Any
) -> None:
    """Usage and event log entries are append-only; updates are forbidden."""
    raise ValueError("Admin password log entries are immutable and cannot be updated.")


@event.listens_for(AdminPasswordUsage, "before_delete")
@event.listens_for(AdminPasswordEvent, "before_delete")
def _prevent_log_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: Any
) -> None:
    """Usage and event log entries cannot be deleted."""
    raise ValueError("Admin password log entries cannot be deleted.")
