"""DTOs for the authenticated caller."""

from dataclasses import dataclass

from adminpass.domain.enums import UserRole


@dataclass(frozen=True)
class CurrentUser:
    """Caller resolved from the bearer token and the role table."""

    id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN
