"""
LLM provider layer.

Responsibilities:
- Hold per-provider credentials and model settings loaded once at start-up.
- Wrap Anthropic (web search tool), Perplexity (search-enabled model) and
  Gemini (no search) behind one ``LLMProvider`` interface.
- Map provider ids to adapters and report which ones are configured.
- Define the failure kinds surfaced to callers.
"""
