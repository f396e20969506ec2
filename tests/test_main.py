"""
Tests for the command line entry points.
"""
import asyncio
import json

import httpx
import pytest

from harmonet import main as cli
from harmonet.core.config import settings
from harmonet.core.overlay import OverlayClient


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)


@pytest.mark.asyncio
async def test_lookup_applies_tenant_overlay():
    def handler(request):
        return httpx.Response(200, json={"messages": {"board.detail.title": "Notice details"}})

    client = OverlayClient("http://testserver", transport=httpx.MockTransport(handler))
    values = await cli.lookup(
        ["board.detail.title", "common.save"], "en",
        tenant_id="tenant-a", api_path="board-detail", client=client,
    )
    await client.aclose()
    assert values == ["Notice details", "Save"]


@pytest.mark.asyncio
async def test_lookup_without_tenant_uses_base():
    client = OverlayClient("http://testserver", transport=httpx.MockTransport(lambda r: httpx.Response(500)))
    values = await cli.lookup(["nav.home"], "zh", client=client)
    await client.aclose()
    assert values == ["首页"]


def test_payload_command(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    assert cli.main(["payload", "board-detail", "--tenant", "tenant-a", "--lang", "ja"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == {"screenKey": "board_detail", "lang": "ja", "messages": {}}


def test_payload_command_rejects_bad_lang(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    assert cli.main(["payload", "board-detail", "--tenant", "tenant-a", "--lang", "fr"]) == 2
    assert json.loads(capsys.readouterr().out) == {"errorCode": "validation_error"}


async def seed_nav_defaults():
    from harmonet.infra import db
    from harmonet.infra.migrate import migrate
    from harmonet.infra.translations_repo import TranslationRepo

    await db.init_engine(settings.DATABASE_URL)
    db.init_sessionmaker()
    try:
        await migrate()
        async with db.SessionLocal() as s:  # type: ignore
            await TranslationRepo(s).upsert_default_text("nav", "nav.home", ja="ホーム", en="Home", zh="首页")
            await s.commit()
    finally:
        await db.dispose()


def test_defaults_command(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    asyncio.run(seed_nav_defaults())
    assert cli.main(["defaults", "nav", "--lang", "en"]) == 0
    assert json.loads(capsys.readouterr().out) == {"messages": {"nav.home": "Home"}}


def test_defaults_command_rejects_unknown_screen(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    assert cli.main(["defaults", "board-detail"]) == 2
    assert json.loads(capsys.readouterr().out) == {"errorCode": "validation_error"}


def test_payload_command_database_unreachable(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    missing = tmp_path / "no-such-dir" / "cli.db"
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{missing}")
    assert cli.main(["payload", "board-detail", "--tenant", "tenant-a", "--lang", "ja"]) == 1
    assert json.loads(capsys.readouterr().out) == {"errorCode": "server_error"}


def test_unexpected_failure_maps_to_server_error(monkeypatch, capsys):
    async def broken(*args):
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "defaults", broken)
    assert cli.main(["defaults", "nav"]) == 1
    assert json.loads(capsys.readouterr().out) == {"errorCode": "server_error"}
