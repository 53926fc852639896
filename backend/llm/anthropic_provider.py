from __future__ import annotations

import logging

import anthropic

from ..recommendations.models import ProviderId, Recommendation, SearchCriteria
from ..recommendations.prompts import PromptStyle, build_prompt
from .base import LLMProvider
from .config import ProviderConfig
from .errors import UpstreamError

logger = logging.getLogger(__name__)

WEB_SEARCH_TOOL = {
    "type": "web_search_20250305",
    "name": "web_search",
    "max_uses": 5,
}


class AnthropicProvider(LLMProvider):
    """Claude with the server-side web search tool."""

    provider_id = ProviderId.anthropic
    label = "Claude"
    web_search = True

    def __init__(self, config: ProviderConfig, debug_logging: bool = False) -> None:
        super().__init__(config, debug_logging)
        self._client = anthropic.Anthropic(api_key=config.api_key, timeout=config.timeout)

    def build_prompt(self, criteria: SearchCriteria) -> str:
        return build_prompt(criteria, PromptStyle.markdown)

    def generate(self, criteria: SearchCriteria) -> list[Recommendation]:
        prompt = self.build_prompt(criteria)
        logger.info("Calling Claude API with web search (model=%s)", self.config.api_model)

        try:
            message = self._client.messages.create(
                model=self.config.api_model,
                max_tokens=self.config.max_tokens,
                tools=[WEB_SEARCH_TOOL],
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as err:
            raise UpstreamError(
                f"Claude API error: {err.message}",
                provider=self.provider_id.value,
                upstream_status=getattr(err, "status_code", None),
            ) from err
        except Exception as err:
            raise UpstreamError(
                "Unknown error calling Claude API", provider=self.provider_id.value,
            ) from err

        logger.info("Claude API response received")

        # Tool-use and search-result blocks are interleaved with the text.
        response_text = "\n".join(
            block.text for block in message.content if block.type == "text"
        )
        return self._parse_response(response_text)
