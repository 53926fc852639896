"""
Recommendation service.

Entry points used by the HTTP layer:

- ``get_recommendations``: one provider, one time-boxed call; the first
  failure propagates to the caller.
- ``get_multi_provider_recommendations``: every available provider at once.
  Each branch is time-boxed and converted into a ``ProviderResult`` at its own
  boundary, so one slow or broken provider never affects the others. Results
  come back in provider declaration order, not completion order.

Adapters are blocking (vendor SDKs / requests), so they run on worker threads.
"""
from __future__ import annotations

import asyncio
import logging

from ..llm.config import Settings
from ..llm.errors import NoProvidersAvailableError, RecommendationError
from ..llm.factory import create_provider, get_available_providers
from .models import ProviderId, ProviderResult, RecommendResponse, SearchCriteria
from .sanitize import sanitize_error_message
from .timeout import with_timeout

logger = logging.getLogger(__name__)

MODEL_NAME_UNAVAILABLE = "Model name unavailable"


def _timeout_message(label: str, ms: int) -> str:
    return f"{label} request timed out after {ms / 1000:g} seconds"


async def get_recommendations(
    criteria: SearchCriteria,
    provider_id: str,
    settings: Settings,
) -> RecommendResponse:
    provider = create_provider(provider_id, settings)
    logger.info("Single-provider search via %s for %s", provider.provider_id.value, criteria.location)

    recommendations = await with_timeout(
        asyncio.to_thread(provider.generate, criteria),
        settings.provider_timeout_ms,
        _timeout_message(provider.model_name, settings.provider_timeout_ms),
        provider=provider.provider_id.value,
    )
    return RecommendResponse(
        recommendations=recommendations,
        provider=provider.provider_id,
        model_name=provider.model_name,
    )


def _failure(
    provider_id: ProviderId,
    model_name: str,
    error: BaseException,
    settings: Settings,
) -> ProviderResult:
    kind = error.kind if isinstance(error, RecommendationError) else "internal_error"
    return ProviderResult(
        provider=provider_id,
        model_name=model_name,
        error=sanitize_error_message(error, settings.expose_error_details),
        error_kind=kind,
    )


async def _run_provider(
    provider_id: ProviderId,
    criteria: SearchCriteria,
    settings: Settings,
) -> ProviderResult:
    try:
        provider = create_provider(provider_id, settings)
    except Exception as err:
        logger.warning("Failed to initialise provider %s", provider_id.value, exc_info=True)
        return _failure(provider_id, MODEL_NAME_UNAVAILABLE, err, settings)

    try:
        recommendations = await with_timeout(
            asyncio.to_thread(provider.generate, criteria),
            settings.provider_timeout_ms,
            _timeout_message(provider.model_name, settings.provider_timeout_ms),
            provider=provider_id.value,
        )
    except Exception as err:
        logger.warning("Provider %s failed", provider_id.value, exc_info=True)
        return _failure(provider_id, provider.model_name, err, settings)

    return ProviderResult(
        provider=provider_id,
        model_name=provider.model_name,
        recommendations=recommendations,
    )


async def get_multi_provider_recommendations(
    criteria: SearchCriteria,
    settings: Settings,
    providers: list[ProviderId] | None = None,
) -> list[ProviderResult]:
    """Query every available provider concurrently and wait for all of them."""
    if providers is None:
        providers = get_available_providers(settings)
    if not providers:
        raise NoProvidersAvailableError(
            "No AI providers are configured. Please set at least one API key."
        )

    logger.info(
        "Multi-provider search across %s for %s",
        ", ".join(p.value for p in providers), criteria.location,
    )

    results = await asyncio.gather(
        *(_run_provider(pid, criteria, settings) for pid in providers)
    )

    succeeded = sum(1 for r in results if r.ok)
    logger.info("Multi-provider search finished: %d/%d succeeded", succeeded, len(results))
    return list(results)
