"""Exception types raised by the localization layer."""

from __future__ import annotations


class HarmonetError(Exception):
    """Base class for all harmonet errors."""


class UnsupportedLocaleError(HarmonetError, ValueError):
    def __init__(self, locale: str) -> None:
        super().__init__(f"Unsupported locale: {locale!r}")
        self.locale = locale


class DictionaryLoadError(HarmonetError):
    """A base dictionary could not be read or parsed."""

    def __init__(self, locale: str, reason: str) -> None:
        super().__init__(f"LOAD_FAIL ({locale}): {reason}")
        self.locale = locale
        self.reason = reason


class ValidationError(HarmonetError):
    """Bad request parameters for an overlay payload."""

    error_code = "validation_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"errorCode": self.error_code}
