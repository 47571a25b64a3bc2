"""Named registry of translation providers and its construction from settings."""

import os
from collections.abc import Callable, Mapping

from lingocards_core.config import Settings
from lingocards_core.translation.providers.base import BaseTranslationProvider
from lingocards_core.translation.providers.google import GoogleProvider
from lingocards_core.translation.providers.openai import OpenAIProvider
from lingocards_core.utils.logging import get_logger

logger = get_logger(__name__)

GEMINI = "gemini"
OPENAI = "openai"

# Provider names in the order keys are looked up when the configured one has none.
PROVIDER_PREFERENCE = (GEMINI, OPENAI)


class ProviderRegistry:
    """Providers keyed by name, plus the name of the primary one.

    The fallback is the first registered provider whose name differs from the
    primary. An empty primary name means no provider is preferred.
    """

    def __init__(
        self,
        providers: Mapping[str, BaseTranslationProvider] | None = None,
        primary: str = "",
    ):
        self._providers: dict[str, BaseTranslationProvider] = dict(providers or {})
        self.primary = primary or ""

    @property
    def names(self) -> list[str]:
        return list(self._providers)

    @property
    def has_providers(self) -> bool:
        return bool(self._providers)

    def register(self, name: str, provider: BaseTranslationProvider) -> None:
        self._providers[name] = provider

    def primary_provider(self) -> BaseTranslationProvider | None:
        """The configured primary provider, if it is registered."""
        if not self.primary:
            return None
        return self._providers.get(self.primary)

    def fallback_provider(self) -> BaseTranslationProvider | None:
        """The first registered provider that is not the primary."""
        for name, provider in self._providers.items():
            if name != self.primary:
                return provider
        return None

    def fallback_name(self) -> str | None:
        for name in self._providers:
            if name != self.primary:
                return name
        return None


def _environment_keys(settings: Settings) -> dict[str, str | None]:
    return {
        GEMINI: settings.resolved_gemini_key
        or os.environ.get("GEMINI_API_KEY")
        or os.environ.get("GOOGLE_API_KEY"),
        OPENAI: settings.openai_api_key or os.environ.get("OPENAI_API_KEY"),
    }


def create_providers(settings: Settings) -> ProviderRegistry:
    """Build the provider registry from settings and environment keys.

    ``translation_api_key`` belongs to ``translation_api_provider``. When that
    provider has no key, the primary switches to the first provider that has
    one. Every provider with a key is registered, primary first.

    Args:
        settings: Application settings

    Returns:
        Registry, possibly empty (baseline translator only)
    """
    keys = _environment_keys(settings)
    primary = settings.translation_api_provider or ""
    if primary and settings.translation_api_key:
        keys[primary] = settings.translation_api_key

    if primary and not keys.get(primary):
        for name in PROVIDER_PREFERENCE:
            if keys.get(name):
                logger.info(
                    f"No API key for {primary}; using {name} as primary provider"
                )
                primary = name
                break

    factories: dict[str, Callable[[str], BaseTranslationProvider]] = {
        GEMINI: lambda key: GoogleProvider(
            key,
            model=settings.gemini_model,
            timeout=settings.translation_timeout,
            max_retries=settings.translation_max_retries,
        ),
        OPENAI: lambda key: OpenAIProvider(
            key,
            model=settings.openai_model,
            timeout=settings.translation_timeout,
            max_retries=settings.translation_max_retries,
        ),
    }

    order = [primary] if primary in factories else []
    order += [name for name in PROVIDER_PREFERENCE if name not in order]

    registry = ProviderRegistry(primary=primary)
    for name in order:
        key = keys.get(name)
        if not key:
            continue
        try:
            registry.register(name, factories[name](key))
        except ValueError as e:
            logger.error(f"Failed to initialize {name} provider: {e}")

    if not registry.has_providers:
        logger.warning(
            "No translation providers initialized. Using baseline implementation."
        )
    return registry
