"""SQLAlchemy mixins for common model patterns: CUID primary key and timestamps."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from adminpass.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )
