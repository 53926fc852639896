from __future__ import annotations

import logging

from google import genai
from google.genai import errors, types

from ..recommendations.models import ProviderId, Recommendation, SearchCriteria
from ..recommendations.prompts import PromptStyle, build_prompt
from .base import LLMProvider
from .config import ProviderConfig
from .errors import UpstreamError

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """Gemini without grounding; answers come from the model's own knowledge."""

    provider_id = ProviderId.gemini
    label = "Gemini"
    web_search = False

    def __init__(self, config: ProviderConfig, debug_logging: bool = False) -> None:
        super().__init__(config, debug_logging)
        self._client = genai.Client(
            api_key=config.api_key,
            http_options=types.HttpOptions(timeout=int(config.timeout * 1000)),
        )

    def build_prompt(self, criteria: SearchCriteria) -> str:
        return build_prompt(criteria, PromptStyle.plain)

    def generate(self, criteria: SearchCriteria) -> list[Recommendation]:
        prompt = self.build_prompt(criteria)
        logger.info("Calling Gemini API (model=%s)", self.config.api_model)

        try:
            response = self._client.models.generate_content(
                model=self.config.api_model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    max_output_tokens=self.config.max_tokens,
                ),
            )
        except errors.APIError as err:
            raise UpstreamError(
                f"Gemini API error: {err.message or err.status}",
                provider=self.provider_id.value,
                upstream_status=err.code,
            ) from err
        except Exception as err:
            raise UpstreamError(
                "Unknown error calling Gemini API", provider=self.provider_id.value,
            ) from err

        logger.info("Gemini API response received")

        return self._parse_response(response.text or "")
