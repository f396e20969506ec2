"""Best-effort loading of tenant translation overlays.

A tenant may override any default string for a screen. The overlay is fetched
from ``/api/tenant-static-translations/<api_path>`` each time the locale
changes and merged into the owning :class:`~harmonet.core.i18n.StaticI18n`.
Failures leave the dictionary untouched: the base strings are always enough.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Dict, Optional, Set

import httpx

from .config import settings
from .i18n import StaticI18n

log = logging.getLogger(__name__)

OVERLAY_PATH = "/api/tenant-static-translations/{api_path}"


class CancellationToken:
    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class OverlayClient:
    """Thin wrapper over ``httpx.AsyncClient`` for the overlay endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=httpx.Timeout(timeout if timeout is not None else settings.OVERLAY_TIMEOUT),
            transport=transport,
        )

    async def fetch(self, api_path: str, tenant_id: str, lang: str) -> Optional[Dict[str, str]]:
        """Return the overlay messages, or None when there is no usable overlay."""
        url = OVERLAY_PATH.format(api_path=api_path.strip("/"))
        try:
            resp = await self._client.get(url, params={"tenantId": tenant_id, "lang": lang})
        except httpx.HTTPError as e:
            log.debug("Overlay fetch failed for %s (%s/%s): %s", api_path, tenant_id, lang, e)
            return None
        if not resp.is_success:
            log.debug("Overlay fetch for %s returned HTTP %s", api_path, resp.status_code)
            return None
        try:
            data = resp.json()
        except ValueError:
            log.debug("Overlay body for %s is not JSON", api_path)
            return None
        messages = data.get("messages") if isinstance(data, dict) else None
        if not isinstance(messages, dict):
            return None
        # Empty text means "not translated for this tenant"
        return {
            k: v for k, v in messages.items()
            if isinstance(k, str) and isinstance(v, str) and v
        }

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "OverlayClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class TenantStaticTranslations:
    """Keeps one tenant/screen overlay merged into a StaticI18n.

    Every locale change supersedes the in-flight fetch: its token is cancelled
    so a slow response for the old locale is dropped on arrival.
    """

    def __init__(
        self,
        i18n: StaticI18n,
        client: OverlayClient,
        *,
        tenant_id: Optional[str],
        api_path: str,
    ) -> None:
        self.i18n = i18n
        self.client = client
        self.tenant_id = tenant_id
        self.api_path = api_path
        self._token: Optional[CancellationToken] = None
        self._tasks: Set[asyncio.Task] = set()
        self._started = False

    def start(self) -> Optional[asyncio.Task]:
        if self._started:
            return None
        self._started = True
        self.i18n.add_locale_listener(self._on_locale_change)
        return self.refresh()

    def _on_locale_change(self, locale: str) -> None:
        self.refresh()

    def refresh(self) -> Optional[asyncio.Task]:
        """Schedule a fetch for the current locale, superseding any pending one."""
        if self._token is not None:
            self._token.cancel()
            self._token = None
        if not self.tenant_id or not self.api_path:
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            log.warning("No running event loop; overlay for %s not refreshed", self.api_path)
            return None
        token = CancellationToken()
        self._token = token
        task = loop.create_task(self._load(token, self.i18n.current_locale))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _load(self, token: CancellationToken, locale: str) -> None:
        try:
            messages = await self.client.fetch(self.api_path, self.tenant_id or "", locale)
        except Exception:
            log.debug("Overlay load for %s crashed", self.api_path, exc_info=True)
            return
        if token.cancelled or not messages:
            return
        if self.i18n.current_locale != locale:
            return
        self.i18n.merge_translations(messages)
        log.debug("Merged %d overlay messages for %s (%s)", len(messages), self.api_path, locale)

    async def settle(self) -> None:
        """Wait until every scheduled fetch has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        self.i18n.remove_locale_listener(self._on_locale_change)
        self._started = False
        if self._token is not None:
            self._token.cancel()
            self._token = None
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        for task in pending:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def __aenter__(self) -> "TenantStaticTranslations":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
