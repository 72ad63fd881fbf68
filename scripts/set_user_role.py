"""Assign a role to a user id.

Usage:
    uv run python -m scripts.set_user_role <user_id> <admin|manager|staff|tax>
"""

import asyncio
import sys

from sqlalchemy.exc import SQLAlchemyError

import adminpass.infrastructure.persistence.database as database
from adminpass.domain.enums import UserRole
from adminpass.domain.exceptions import AdminPassError
from adminpass.infrastructure.persistence.repositories import UserRoleRepository


async def main() -> None:
    """Create or update the role row for user_id."""
    if len(sys.argv) < 3 or sys.argv[2] not in UserRole.values():
        print(
            "Usage: uv run python -m scripts.set_user_role <user_id> "
            f"<{'|'.join(UserRole.values())}>",
            file=sys.stderr,
        )
        sys.exit(1)
    user_id, role = sys.argv[1], UserRole(sys.argv[2])

    try:
        session_factory = database.get_session_factory()
        async with session_factory() as session:
            async with session.begin():
                await UserRoleRepository(session).set_role(user_id, role)
    except AdminPassError as e:
        print(f"Could not set role: {e.message}", file=sys.stderr)
        sys.exit(1)
    except SQLAlchemyError as e:
        print(f"Could not set role: database error ({type(e).__name__})", file=sys.stderr)
        sys.exit(1)
    finally:
        await database.dispose_engine()
    print(f"User {user_id} is now {role.value}")


if __name__ == "__main__":
    asyncio.run(main())
