from __future__ import annotations

from ..recommendations.models import ProviderId
from .anthropic_provider import AnthropicProvider
from .base import LLMProvider
from .config import Settings
from .errors import UnknownProviderError
from .gemini_provider import GeminiProvider
from .perplexity_provider import PerplexityProvider

# Declaration order is the order providers are listed and fanned out in.
PROVIDER_IDS: tuple[ProviderId, ...] = (
    ProviderId.anthropic,
    ProviderId.perplexity,
    ProviderId.gemini,
)

_PROVIDER_CLASSES: dict[ProviderId, type[LLMProvider]] = {
    ProviderId.anthropic: AnthropicProvider,
    ProviderId.perplexity: PerplexityProvider,
    ProviderId.gemini: GeminiProvider,
}


def _resolve(provider_id: str) -> ProviderId:
    try:
        return ProviderId(provider_id)
    except ValueError:
        raise UnknownProviderError(f"Unknown provider: {provider_id}") from None


def create_provider(provider_id: str, settings: Settings) -> LLMProvider:
    """Build the adapter for ``provider_id``.

    Raises ``UnknownProviderError`` for ids outside ``PROVIDER_IDS`` and
    ``ConfigurationMissingError`` (from the adapter) when its key is unset.
    """
    pid = _resolve(provider_id)
    return _PROVIDER_CLASSES[pid](settings.for_provider(pid), settings.debug_logging)


def provider_class(provider_id: str) -> type[LLMProvider]:
    return _PROVIDER_CLASSES[_resolve(provider_id)]


def is_provider_available(provider_id: str, settings: Settings) -> bool:
    """True when the provider's API key is configured. Makes no network call."""
    try:
        pid = ProviderId(provider_id)
    except ValueError:
        return False
    return bool(settings.for_provider(pid).api_key)


def get_available_providers(settings: Settings) -> list[ProviderId]:
    return [pid for pid in PROVIDER_IDS if is_provider_available(pid, settings)]
