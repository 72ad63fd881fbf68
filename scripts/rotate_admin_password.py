"""Cron entry point: ensure this week's admin PIN, or rotate it with --force.

Usage:
    uv run python -m scripts.rotate_admin_password [--force]
Without --force the run is idempotent (safe to schedule daily). The PIN is
never printed; admins read it from GET /api/v1/admin/password?action=current.
"""

import asyncio
import sys

from sqlalchemy.exc import SQLAlchemyError

import adminpass.infrastructure.persistence.database as database
from adminpass.api.v1.dependencies import build_admin_password_service
from adminpass.domain.enums import GenerationMethod
from adminpass.domain.exceptions import AdminPassError
from adminpass.shared.telemetry import setup_logging


async def main() -> None:
    """Ensure or force-rotate the active admin password."""
    setup_logging()
    force = "--force" in sys.argv[1:]
    try:
        session_factory = database.get_session_factory()
        async with session_factory() as session:
            async with session.begin():
                service = build_admin_password_service(session)
                if force:
                    rotated = await service.force_regenerate_password(
                        method=GenerationMethod.SCRIPT
                    )
                    record, message = rotated.record, "Rotated"
                else:
                    ensured = await service.ensure_active_password(
                        method=GenerationMethod.SCRIPT
                    )
                    record = ensured.record
                    message = "Generated" if ensured.created else "Already active"
    except AdminPassError as e:
        print(f"Rotation failed: {e.message}", file=sys.stderr)
        sys.exit(1)
    except SQLAlchemyError as e:
        print(f"Rotation failed: database error ({type(e).__name__})", file=sys.stderr)
        sys.exit(1)
    finally:
        await database.dispose_engine()

    print(f"{message}: admin password for {record.period} (expires {record.expires_at.isoformat()})")


if __name__ == "__main__":
    asyncio.run(main())
