from __future__ import annotations

import logging

import requests

from ..recommendations.models import ProviderId, Recommendation, SearchCriteria
from ..recommendations.prompts import PromptStyle, build_prompt
from .base import LLMProvider
from .errors import UpstreamError

logger = logging.getLogger(__name__)

PERPLEXITY_URL = "https://api.perplexity.ai/chat/completions"


def _error_detail(response: requests.Response) -> str:
    """Best-effort ``error.message`` from a failed Perplexity response."""
    try:
        data = response.json()
    except ValueError:
        return response.reason or f"HTTP {response.status_code}"

    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return response.reason or f"HTTP {response.status_code}"


def _message_content(data: object) -> str | None:
    """``choices[0].message.content``; ``""`` when absent, None when malformed."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices") or [{}]
    if not isinstance(choices, list) or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message") or {}
    if not isinstance(message, dict):
        return None
    content = message.get("content") or ""
    return content if isinstance(content, str) else None


class PerplexityProvider(LLMProvider):
    """Perplexity Sonar: the model searches the web on its own."""

    provider_id = ProviderId.perplexity
    label = "Perplexity"
    web_search = True

    def build_prompt(self, criteria: SearchCriteria) -> str:
        return build_prompt(criteria, PromptStyle.plain)

    def generate(self, criteria: SearchCriteria) -> list[Recommendation]:
        prompt = self.build_prompt(criteria)
        logger.info("Calling Perplexity API with web search (model=%s)", self.config.api_model)

        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.config.api_model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": 0.7,
            "max_tokens": self.config.max_tokens,
        }

        try:
            response = requests.post(
                PERPLEXITY_URL,
                headers=headers,
                json=payload,
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as err:
            raise UpstreamError(
                "Perplexity API request failed", provider=self.provider_id.value,
            ) from err

        if not response.ok:
            raise UpstreamError(
                f"Perplexity API error ({response.status_code}): {_error_detail(response)}",
                provider=self.provider_id.value,
                upstream_status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as err:
            raise UpstreamError(
                "Perplexity API returned invalid JSON", provider=self.provider_id.value,
            ) from err

        logger.info("Perplexity API response received")

        response_text = _message_content(data)
        if response_text is None:
            raise UpstreamError(
                "Perplexity API returned an unexpected payload", provider=self.provider_id.value,
            )
        return self._parse_response(response_text)
