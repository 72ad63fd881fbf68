"""Maintenance scripts exit cleanly when the database rejects the commit."""

from types import SimpleNamespace

import pytest

import adminpass.infrastructure.persistence.database as database
from adminpass.infrastructure.persistence.models import AdminPassword
from scripts import rotate_admin_password, setup_admin_password
from tests.fakes import WEDNESDAY_W10


class _UncommittableService:
    """Leaves a row missing NOT NULL columns, so the flush at commit fails."""

    def __init__(self, session) -> None:
        self.session = session

    async def _stage_bad_row(self):
        self.session.add(AdminPassword(period=None, expires_at=WEDNESDAY_W10))
        return SimpleNamespace(record=None, created=True)

    async def ensure_active_password(self, **_kwargs):
        return await self._stage_bad_row()

    async def force_regenerate_password(self, **_kwargs):
        return await self._stage_bad_row()


@pytest.fixture
def failing_commit(monkeypatch: pytest.MonkeyPatch, session_factory) -> None:
    monkeypatch.setattr(database, "get_session_factory", lambda: session_factory)
    for module in (rotate_admin_password, setup_admin_password):
        monkeypatch.setattr(module, "build_admin_password_service", _UncommittableService)
        monkeypatch.setattr(module, "setup_logging", lambda: None)


@pytest.mark.parametrize("argv", [[], ["--force"]])
async def test_rotate_reports_database_error(
    failing_commit, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture, argv
) -> None:
    monkeypatch.setattr("sys.argv", ["rotate_admin_password", *argv])
    with pytest.raises(SystemExit) as exc_info:
        await rotate_admin_password.main()
    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("Rotation failed: database error (IntegrityError)")
    assert "Traceback" not in err


async def test_setup_reports_database_error(
    failing_commit, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.setattr("sys.argv", ["setup_admin_password"])
    with pytest.raises(SystemExit) as exc_info:
        await setup_admin_password.main()
    assert exc_info.value.code == 1
    assert capsys.readouterr().err.startswith("Setup failed: database error (IntegrityError)")
