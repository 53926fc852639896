from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from ..recommendations.models import ProviderId, Recommendation, SearchCriteria
from ..recommendations.parser import parse_recommendations
from .config import ProviderConfig
from .errors import ConfigurationMissingError, EmptyResponseError, UnparsableResponseError

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """One upstream model behind the shared recommendation contract.

    Subclasses own their transport; this base validates configuration at
    construction and turns the raw reply into ``Recommendation`` records.
    """

    provider_id: ClassVar[ProviderId]
    label: ClassVar[str]
    web_search: ClassVar[bool]

    def __init__(self, config: ProviderConfig, debug_logging: bool = False) -> None:
        env_prefix = self.provider_id.value.upper()
        if not config.api_key:
            raise ConfigurationMissingError(
                f"{env_prefix}_API_KEY environment variable is not set",
                provider=self.provider_id.value,
            )
        if not config.api_model:
            raise ConfigurationMissingError(
                f"{env_prefix}_API_MODEL environment variable must be a non-empty string",
                provider=self.provider_id.value,
            )
        if not config.display_name:
            raise ConfigurationMissingError(
                f"{env_prefix}_MODEL_NAME environment variable must be a non-empty string",
                provider=self.provider_id.value,
            )
        self.config = config
        self.debug_logging = debug_logging

    @property
    def model_name(self) -> str:
        """Human-readable model name shown next to results."""
        return self.config.display_name

    def supports_web_search(self) -> bool:
        return self.web_search

    @abstractmethod
    def build_prompt(self, criteria: SearchCriteria) -> str:
        ...

    @abstractmethod
    def generate(self, criteria: SearchCriteria) -> list[Recommendation]:
        """Run one search against the upstream model and parse the reply."""

    def _parse_response(self, response_text: str) -> list[Recommendation]:
        if self.debug_logging:
            logger.info(
                "Full %s response (%d chars):\n%s",
                self.label, len(response_text), response_text,
            )

        if not response_text or not response_text.strip():
            raise EmptyResponseError(
                f"Empty response from {self.label} API", provider=self.provider_id.value,
            )

        recommendations = parse_recommendations(response_text)
        logger.info("Parsed %d recommendations from %s", len(recommendations), self.label)

        if not recommendations:
            logger.error("Unparsable %s response: %s", self.label, response_text)
            raise UnparsableResponseError(
                f"Unable to parse recommendations from {self.label} response",
                provider=self.provider_id.value,
            )
        return recommendations
