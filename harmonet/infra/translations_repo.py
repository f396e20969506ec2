from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import StaticTranslationDefault, TenantStaticTranslation


class TranslationRepo:
    def __init__(self, session: AsyncSession) -> None:
        self.s = session

    async def list_tenant_rows(
        self, tenant_id: str, screen_key: str, status: str = "active"
    ) -> List[TenantStaticTranslation]:
        q = select(TenantStaticTranslation).where(
            TenantStaticTranslation.tenant_id == tenant_id,
            TenantStaticTranslation.screen_key == screen_key,
            TenantStaticTranslation.status == status,
        )
        return list((await self.s.execute(q)).scalars().all())

    async def list_default_rows(self, screen_key: str) -> List[StaticTranslationDefault]:
        q = select(StaticTranslationDefault).where(StaticTranslationDefault.screen_key == screen_key)
        return list((await self.s.execute(q)).scalars().all())

    async def upsert_tenant_text(
        self,
        tenant_id: str,
        screen_key: str,
        message_key: str,
        *,
        ja: Optional[str] = None,
        en: Optional[str] = None,
        zh: Optional[str] = None,
        status: str = "active",
    ) -> TenantStaticTranslation:
        q = select(TenantStaticTranslation).where(
            TenantStaticTranslation.tenant_id == tenant_id,
            TenantStaticTranslation.screen_key == screen_key,
            TenantStaticTranslation.message_key == message_key,
        )
        row = (await self.s.execute(q)).scalars().first()
        if row is None:
            row = TenantStaticTranslation(
                tenant_id=tenant_id,
                screen_key=screen_key,
                message_key=message_key,
                text_ja=ja,
                text_en=en,
                text_zh=zh,
                status=status,
            )
            self.s.add(row)
        else:
            row.text_ja, row.text_en, row.text_zh = ja, en, zh
            row.status = status
        return row

    async def upsert_default_text(
        self,
        screen_key: str,
        message_key: str,
        *,
        ja: Optional[str] = None,
        en: Optional[str] = None,
        zh: Optional[str] = None,
    ) -> StaticTranslationDefault:
        q = select(StaticTranslationDefault).where(
            StaticTranslationDefault.screen_key == screen_key,
            StaticTranslationDefault.message_key == message_key,
        )
        row = (await self.s.execute(q)).scalars().first()
        if row is None:
            row = StaticTranslationDefault(
                screen_key=screen_key, message_key=message_key, text_ja=ja, text_en=en, text_zh=zh
            )
            self.s.add(row)
        else:
            row.text_ja, row.text_en, row.text_zh = ja, en, zh
        return row
