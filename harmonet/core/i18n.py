from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Callable, Dict, List, Mapping, Optional

from .config import SUPPORTED_LOCALES, settings
from .errors import DictionaryLoadError, UnsupportedLocaleError


log = logging.getLogger(__name__)

FALLBACK_LOCALE = "ja"
LOCALES = SUPPORTED_LOCALES

Translations = Dict[str, Any]
Loader = Callable[[str], Translations]
LocaleListener = Callable[[str], None]


@lru_cache()
def load_dictionary(locale: str) -> Translations:
    """Load the packaged base dictionary for ``locale``.

    The result is cached and shared, so callers must treat it as read-only.
    """
    try:
        source = resources.files("harmonet.locales").joinpath(f"{locale}.json")
        with source.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as e:
        raise DictionaryLoadError(locale, str(e)) from e
    if not isinstance(data, dict):
        raise DictionaryLoadError(locale, "top level is not an object")
    return data


def resolve_key(tree: Mapping[str, Any], key: str) -> Optional[str]:
    """Walk a dotted ``key`` through nested mappings; only string leaves resolve."""
    current: Any = tree
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current if isinstance(current, str) else None


class StaticI18n:
    """Locale state for one session: base dictionary plus tenant overlay.

    Owned by whoever creates it and handed to consumers explicitly. State only
    changes through ``set_locale`` and ``merge_translations``.
    """

    def __init__(
        self,
        initial_locale: Optional[str] = None,
        *,
        loader: Optional[Loader] = None,
        warn_missing: Optional[bool] = None,
    ) -> None:
        locale = initial_locale or settings.DEFAULT_LOCALE
        if locale not in LOCALES:
            raise UnsupportedLocaleError(locale)
        self._loader: Loader = loader or load_dictionary
        self.warn_missing = settings.I18N_WARN_MISSING if warn_missing is None else warn_missing
        self._listeners: List[LocaleListener] = []
        self._locale = locale
        self._base: Translations = {}
        self._overlay: Dict[str, str] = {}
        self._activate(locale)

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def current_locale(self) -> str:
        """Same as ``locale``."""
        return self._locale

    def _activate(self, target: str) -> None:
        try:
            data = self._loader(target)
        except DictionaryLoadError as e:
            log.error("[i18n] Failed to load dictionary: %s (%s)", target, e)
            if target != FALLBACK_LOCALE:
                self._activate(FALLBACK_LOCALE)
                return
            data = {}
        self._locale = target
        self._base = data
        self._overlay = {}

    def set_locale(self, locale: str) -> None:
        if locale == self._locale:
            return
        if locale not in LOCALES:
            raise UnsupportedLocaleError(locale)
        self._activate(locale)
        log.debug("[i18n] locale switched to %s", self._locale)
        for listener in list(self._listeners):
            listener(self._locale)

    def merge_translations(self, partial: Mapping[str, str]) -> None:
        """Shallow-merge flat ``key -> text`` pairs over the current locale."""
        for key, value in partial.items():
            if isinstance(key, str) and isinstance(value, str):
                self._overlay[key] = value

    def t(self, key: str) -> str:
        if not self._base and not self._overlay:
            # Nothing loaded yet: echo the key without noise
            return key
        value = self._overlay.get(key)
        if value is None:
            value = resolve_key(self._base, key)
        if value is not None:
            return value
        if self.warn_missing:
            log.warning("[i18n] Missing key: %s (locale=%s)", key, self._locale)
        return key

    def add_locale_listener(self, listener: LocaleListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_locale_listener(self, listener: LocaleListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass
