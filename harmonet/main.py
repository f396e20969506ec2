from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .core.config import SUPPORTED_LOCALES, settings
from .core.errors import ValidationError
from .core.i18n import StaticI18n
from .core.logging_config import setup_logging
from .core.overlay import OverlayClient, TenantStaticTranslations
from .infra import db
from .infra.db import dispose, init_engine, init_sessionmaker
from .infra.migrate import migrate
from .services import build_defaults_payload, build_tenant_payload

log = logging.getLogger(__name__)


async def lookup(
    keys: Sequence[str],
    locale: str,
    tenant_id: Optional[str] = None,
    api_path: str = "",
    client: Optional[OverlayClient] = None,
) -> List[str]:
    """Resolve ``keys`` the way a tenant screen would see them."""
    i18n = StaticI18n(locale)
    owned = client is None
    client = client or OverlayClient()
    try:
        overlay = TenantStaticTranslations(i18n, client, tenant_id=tenant_id, api_path=api_path)
        overlay.start()
        try:
            await overlay.settle()
            return [i18n.t(k) for k in keys]
        finally:
            await overlay.close()
    finally:
        if owned:
            await client.aclose()


async def _with_session(build, *args) -> dict:
    Path("data").mkdir(exist_ok=True)
    await init_engine(settings.DATABASE_URL)
    init_sessionmaker()
    try:
        await migrate()
        async with db.SessionLocal() as s:  # type: ignore
            return await build(s, *args)
    finally:
        await dispose()


async def payload(api_path: str, tenant_id: str, lang: str) -> dict:
    """Build the tenant overlay payload straight from the database."""
    return await _with_session(build_tenant_payload, api_path, tenant_id, lang)


async def defaults(screen_key: str, lang: str) -> dict:
    """Build the screen defaults payload straight from the database."""
    return await _with_session(build_defaults_payload, screen_key, lang)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="harmonet", description="HarmoNet static translations")
    sub = parser.add_subparsers(dest="command", required=True)

    p_t = sub.add_parser("t", help="Translate keys, applying a tenant overlay if given")
    p_t.add_argument("keys", nargs="+")
    p_t.add_argument("--lang", default=settings.DEFAULT_LOCALE, choices=SUPPORTED_LOCALES)
    p_t.add_argument("--tenant")
    p_t.add_argument("--screen", default="", help="overlay API path, e.g. board-detail")

    p_p = sub.add_parser("payload", help="Print the overlay payload served for a tenant screen")
    p_p.add_argument("screen")
    p_p.add_argument("--tenant", required=True)
    p_p.add_argument("--lang", default=settings.DEFAULT_LOCALE)

    p_d = sub.add_parser("defaults", help="Print the app-wide default texts for a screen")
    p_d.add_argument("screen")
    p_d.add_argument("--lang", default=settings.DEFAULT_LOCALE)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    debug_mode = os.getenv("DEBUG", "").lower() in ("1", "true", "yes")
    setup_logging(log_file=False, debug=debug_mode)

    if args.command == "t":
        values = asyncio.run(lookup(args.keys, args.lang, args.tenant, args.screen))
        for key, value in zip(args.keys, values):
            print(f"{key}\t{value}")
        return 0

    try:
        if args.command == "payload":
            data = asyncio.run(payload(args.screen, args.tenant, args.lang))
        else:
            data = asyncio.run(defaults(args.screen, args.lang))
    except ValidationError as e:
        log.error("Rejected request: %s", e.message)
        print(json.dumps(e.to_dict()))
        return 2
    except Exception:
        log.exception("Unexpected failure in %s %s", args.command, args.screen)
        print(json.dumps({"errorCode": "server_error"}))
        return 1
    print(json.dumps(data, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
