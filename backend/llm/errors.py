"""Failure kinds raised by the provider layer.

Every error carries a ``kind`` tag that survives sanitisation, so callers can
tell "upstream is slow" from "upstream rejected" without string matching, and
a ``status_code`` the HTTP layer uses when the error ends a request.
"""
from __future__ import annotations


class RecommendationError(Exception):
    kind = "internal_error"
    status_code = 500

    def __init__(self, message: str, *, provider: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.provider = provider


class ConfigurationMissingError(RecommendationError):
    kind = "configuration_missing"
    status_code = 503


class EmptyResponseError(RecommendationError):
    kind = "empty_response"
    status_code = 502


class UnparsableResponseError(RecommendationError):
    kind = "unparsable_response"
    status_code = 502


class UpstreamError(RecommendationError):
    kind = "upstream_error"
    status_code = 502

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(message, provider=provider)
        self.upstream_status = upstream_status


class ProviderTimeoutError(RecommendationError):
    kind = "timeout"
    status_code = 504


class UnknownProviderError(RecommendationError):
    kind = "unknown_provider"
    status_code = 400


class NoProvidersAvailableError(RecommendationError):
    kind = "no_providers_available"
    status_code = 503
