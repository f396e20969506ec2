"""Server side of the translation overlays.

Reads tenant overrides and app-wide screen defaults from the database and
shapes them into the payloads returned by
``GET /api/tenant-static-translations/<api_path>`` and
``GET /api/static-translations/<screen>``.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import SUPPORTED_LOCALES
from ..core.errors import ValidationError
from ..infra.translations_repo import TranslationRepo

log = logging.getLogger(__name__)

# Public API path -> screen_key column value
SCREEN_KEYS: Dict[str, str] = {
    "board-detail": "board_detail",
    "cleaning-duty": "cleaning_duty",
}

# Screens with app-wide defaults under /api/static-translations/<screen>
DEFAULT_SCREENS = ("nav", "login")

MessagesByLocale = Dict[str, Dict[str, str]]


def _clean(text: Optional[str], key: str) -> str:
    # A blank text, or one that merely repeats the key, counts as untranslated.
    # No cross-language fallback: gaps in the master data stay visible.
    value = (text or "").strip()
    return value if value and value != key else ""


def _empty() -> MessagesByLocale:
    return {lang: {} for lang in SUPPORTED_LOCALES}


class TenantStaticTranslationService:
    def __init__(self, session: AsyncSession) -> None:
        self.repo = TranslationRepo(session)

    async def get_messages_for_screen(self, tenant_id: str, screen_key: str) -> MessagesByLocale:
        result = _empty()
        try:
            rows = await self.repo.list_tenant_rows(tenant_id, screen_key)
        except SQLAlchemyError:
            log.exception("Failed to read tenant translations for %s/%s", tenant_id, screen_key)
            return _empty()
        for row in rows:
            key = row.message_key or ""
            if not key:
                continue
            result["ja"][key] = _clean(row.text_ja, key)
            result["en"][key] = _clean(row.text_en, key)
            result["zh"][key] = _clean(row.text_zh, key)
        return result


class StaticTranslationDefaultsService:
    def __init__(self, session: AsyncSession) -> None:
        self.repo = TranslationRepo(session)

    async def get_messages(self, screen_key: str, lang: Optional[str]) -> Dict[str, str]:
        lang_code = lang if lang in ("en", "zh") else "ja"
        column = f"text_{lang_code}"
        messages: Dict[str, str] = {}
        try:
            rows = await self.repo.list_default_rows(screen_key)
        except SQLAlchemyError:
            log.exception("Failed to read translation defaults for %s", screen_key)
            return {}
        for row in rows:
            key = row.message_key or ""
            if key:
                messages[key] = _clean(getattr(row, column), key)
        return messages


async def build_tenant_payload(
    session: AsyncSession, api_path: str, tenant_id: Optional[str], lang: Optional[str]
) -> dict:
    if not tenant_id:
        raise ValidationError("tenantId is required")
    if lang not in SUPPORTED_LOCALES:
        raise ValidationError(f"unsupported lang: {lang!r}")
    screen_key = SCREEN_KEYS.get(api_path.strip("/"))
    if screen_key is None:
        raise ValidationError(f"unknown translation screen: {api_path!r}")

    all_messages = await TenantStaticTranslationService(session).get_messages_for_screen(
        tenant_id, screen_key
    )
    log.debug("Overlay payload for %s/%s: %d keys", tenant_id, screen_key, len(all_messages[lang]))
    return {"screenKey": screen_key, "lang": lang, "messages": all_messages[lang]}


async def build_defaults_payload(session: AsyncSession, screen_key: str, lang: Optional[str]) -> dict:
    if screen_key not in DEFAULT_SCREENS:
        raise ValidationError(f"unknown defaults screen: {screen_key!r}")
    messages = await StaticTranslationDefaultsService(session).get_messages(screen_key, lang)
    return {"messages": messages}
