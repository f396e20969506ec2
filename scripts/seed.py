#!/usr/bin/env python3
from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from harmonet.core.config import settings
from harmonet.core.logging_config import setup_logging
from harmonet.infra import db
from harmonet.infra.migrate import migrate
from harmonet.infra.models import Tenant
from harmonet.infra.translations_repo import TranslationRepo

log = logging.getLogger(__name__)

DEMO_TENANT_ID = "demo-tenant"

BOARD_DETAIL = {
    "board.detail.title": ("お知らせ詳細", "Notice details", "通知详情"),
    "board.detail.comments": ("住民コメント", "Resident comments", ""),
}

CLEANING_DUTY = {
    "cleaningDuty.title": ("ゴミ当番", "Garbage duty", "垃圾值日"),
}

NAV_DEFAULTS = {
    "nav.home": ("ホーム", "Home", "首页"),
    "nav.board": ("掲示板", "Board", "公告板"),
}


async def main() -> None:
    Path("data").mkdir(exist_ok=True)

    await db.init_engine(settings.DATABASE_URL)
    db.init_sessionmaker()
    await migrate()
    async with db.SessionLocal() as s:  # type: ignore
        if await s.get(Tenant, DEMO_TENANT_ID) is None:
            s.add(Tenant(id=DEMO_TENANT_ID, name="Demo Residence"))
            await s.flush()
        repo = TranslationRepo(s)
        for screen_key, rows in (("board_detail", BOARD_DETAIL), ("cleaning_duty", CLEANING_DUTY)):
            for key, (ja, en, zh) in rows.items():
                await repo.upsert_tenant_text(DEMO_TENANT_ID, screen_key, key, ja=ja, en=en, zh=zh)
        for key, (ja, en, zh) in NAV_DEFAULTS.items():
            await repo.upsert_default_text("nav", key, ja=ja, en=en, zh=zh)
        await s.commit()
    log.info("Seeded tenant %s", DEMO_TENANT_ID)
    await db.dispose()


if __name__ == "__main__":
    setup_logging(log_file=False)
    asyncio.run(main())
