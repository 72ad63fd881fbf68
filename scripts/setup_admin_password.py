"""Create the admin password tables (local SQLite / dev only) and ensure this week's PIN.

Usage:
    uv run python -m scripts.setup_admin_password [--create-tables]
Production databases are migrated with `alembic upgrade head`; --create-tables
runs Base.metadata.create_all for quick local setups.
"""

import asyncio
import sys

from sqlalchemy.exc import SQLAlchemyError

import adminpass.infrastructure.persistence.database as database
from adminpass.api.v1.dependencies import build_admin_password_service
from adminpass.domain.enums import GenerationMethod
from adminpass.domain.exceptions import AdminPassError
from adminpass.infrastructure.persistence import models  # noqa: F401  (registers tables)
from adminpass.shared.telemetry import setup_logging


async def main() -> None:
    """Optionally create tables, then ensure an active password exists."""
    setup_logging()
    create_tables = "--create-tables" in sys.argv[1:]
    try:
        session_factory = database.get_session_factory()
        if create_tables:
            async with database.engine.begin() as conn:
                await conn.run_sync(database.Base.metadata.create_all)
            print("Tables created")

        async with session_factory() as session:
            async with session.begin():
                service = build_admin_password_service(session)
                result = await service.ensure_active_password(method=GenerationMethod.SCRIPT)
    except AdminPassError as e:
        print(f"Setup failed: {e.message}", file=sys.stderr)
        sys.exit(1)
    except SQLAlchemyError as e:
        print(f"Setup failed: database error ({type(e).__name__})", file=sys.stderr)
        sys.exit(1)
    finally:
        await database.dispose_engine()

    record = result.record
    state = "Generated" if result.created else "Existing"
    print(f"{state} admin password for {record.period}: {record.password}")
    print(f"Valid until {record.expires_at.isoformat()}")


if __name__ == "__main__":
    asyncio.run(main())
