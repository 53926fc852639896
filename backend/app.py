from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .llm.config import Settings, load_settings
from .llm.errors import RecommendationError
from .llm.factory import get_available_providers, provider_class
from .recommendations.models import (
    ALL_PROVIDERS,
    MultiProviderResponse,
    ProviderId,
    ProviderInfo,
    ProvidersResponse,
    RecommendResponse,
    SearchCriteria,
)
from .recommendations.sanitize import GENERIC_ERROR, sanitize_error_message
from .recommendations.service import get_multi_provider_recommendations, get_recommendations

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = ProviderId.anthropic

_startup_settings = load_settings()

app = FastAPI(title="Family Activity Recommendation API", version="1.0.0")
app.state.settings = _startup_settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_startup_settings.frontend_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


# ── Error mapping ────────────────────────────────────────────────────────


@app.exception_handler(RecommendationError)
async def recommendation_error_handler(request: Request, exc: RecommendationError) -> JSONResponse:
    logger.warning("%s failed with %s: %s", request.url.path, exc.kind, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": sanitize_error_message(exc, request.app.state.settings.expose_error_details),
            "kind": exc.kind,
        },
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    message = GENERIC_ERROR
    if request.app.state.settings.expose_error_details:
        message = sanitize_error_message(exc, include_details=True)
    return JSONResponse(status_code=500, content={"error": message, "kind": "internal_error"})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/api/providers", response_model=ProvidersResponse)
def providers(settings: Settings = Depends(get_settings)) -> ProvidersResponse:
    return ProvidersResponse(providers=[
        ProviderInfo(
            id=pid,
            model_name=settings.for_provider(pid).display_name,
            supports_web_search=provider_class(pid).web_search,
        )
        for pid in get_available_providers(settings)
    ])


@app.post(
    "/api/recommend",
    response_model=RecommendResponse | MultiProviderResponse,
)
async def recommend(
    body: SearchCriteria,
    settings: Settings = Depends(get_settings),
) -> RecommendResponse | MultiProviderResponse:
    provider = body.provider or DEFAULT_PROVIDER
    logger.info(
        "Recommendation request: %s, ages=%s, date=%s, slot=%s, provider=%s",
        body.location, body.ages, body.date, body.time_slot.value, getattr(provider, "value", provider),
    )

    if provider == ALL_PROVIDERS:
        results = await get_multi_provider_recommendations(body, settings)
        return MultiProviderResponse(results=results)

    return await get_recommendations(body, provider, settings)
