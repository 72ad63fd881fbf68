"""User role ORM model. Maps an authenticated user id to a staff role."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from adminpass.infrastructure.persistence.database import Base
from adminpass.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class UserRoleAssignment(CuidMixin, TimestampMixin, Base):
    """Role of one user. Users without a row are treated as staff."""

    __tablename__ = "user_role"

    user_id: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
