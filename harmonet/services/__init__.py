from .static_translations import (
    DEFAULT_SCREENS,
    SCREEN_KEYS,
    StaticTranslationDefaultsService,
    TenantStaticTranslationService,
    build_defaults_payload,
    build_tenant_payload,
)

__all__ = [
    "DEFAULT_SCREENS",
    "SCREEN_KEYS",
    "StaticTranslationDefaultsService",
    "TenantStaticTranslationService",
    "build_defaults_payload",
    "build_tenant_payload",
]
