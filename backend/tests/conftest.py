from __future__ import annotations

from datetime import date, timedelta

import pytest

from backend.llm.config import ProviderConfig, Settings
from backend.recommendations.models import SearchCriteria

SAMPLE_BLOCKS = [
    (
        "🎨",
        "Kids Art Lab at Dublin Library - Saturday 10am-12pm",
        "Dublin Public Library",
        "0.8 miles",
        "The library hosts a drop-in art lab with paints, clay and collage stations. "
        "Free admission and all materials are provided. Great for curious 7-year-olds.",
    ),
    (
        "🌳",
        "Emerald Glen Park Adventure Playground - All Day",
        "Emerald Glen Park",
        "1.5 miles",
        "A huge playground with climbing structures, a splash pad and shaded picnic areas.\n"
        "Open from sunrise to sunset and completely free.",
    ),
    (
        "🦕",
        "Dinosaur Discovery Day at Lawrence Hall of Science - Saturday 10am-5pm",
        "Lawrence Hall of Science, Berkeley",
        "24 miles",
        "Hands-on fossil digs and life-size dinosaur models. Admission is $19 for kids.",
    ),
    (
        "⚽",
        "Youth Soccer Clinic - Saturday 9am-11am",
        "Dublin Sports Grounds",
        "1.2 miles",
        "Coaches run skills games for ages 5-10. Bring water and shin guards.",
    ),
    (
        "🎭",
        "Puppet Show at Bankhead Theater - Saturday 2pm-3pm",
        "Bankhead Theater, Livermore",
        "9 miles",
        "A 45-minute marionette performance of classic fairy tales. Tickets are $12.",
    ),
]

EXTRA_BLOCKS = [
    (
        "🚂",
        "Niles Canyon Railway - Saturday 11am",
        "Sunol Depot",
        "7 miles",
        "Vintage train rides through the canyon. Kids under 3 ride free.",
    ),
    (
        "🐐",
        "Ardenwood Historic Farm - Saturday 10am-4pm",
        "Ardenwood Historic Farm, Fremont",
        "15 miles",
        "Feed goats and watch blacksmith demonstrations on a working farm.",
    ),
]


def render_block(emoji: str, title: str, location: str, distance: str, description: str) -> str:
    return f"{emoji} **{title}**\n📍 {location} • {distance}\n{description}"


def render_response(blocks, intro: str = "Here are 5 family-friendly activities in Dublin, CA:") -> str:
    body = "\n\n".join(render_block(*block) for block in blocks)
    return f"{intro}\n\n{body}" if intro else body


def next_saturday(today: date | None = None) -> date:
    today = today or date.today()
    return today + timedelta(days=(5 - today.weekday()) % 7 or 7)


@pytest.fixture
def criteria() -> SearchCriteria:
    return SearchCriteria(
        city="Dublin",
        state="CA",
        ages=[7],
        date=next_saturday(),
        time_slot="all_day",
        distance=10,
        preferences="outdoor",
    )


@pytest.fixture
def sample_response() -> str:
    return render_response(SAMPLE_BLOCKS)


def make_settings(*keys: str, timeout_ms: int = 60_000, environment: str = "production") -> Settings:
    """Settings with API keys set only for the named providers."""

    def block(name: str, model: str, display: str) -> ProviderConfig:
        return ProviderConfig(
            api_key=f"test-{name}-key" if name in keys else "",
            api_model=model,
            display_name=display,
        )

    return Settings(
        anthropic=block("anthropic", "claude-sonnet-4-5-20250929", "Claude Sonnet 4.5"),
        perplexity=block("perplexity", "sonar", "Perplexity Sonar"),
        gemini=block("gemini", "gemini-2.5-flash", "Gemini 2.5 Flash"),
        provider_timeout_ms=timeout_ms,
        environment=environment,
    )


@pytest.fixture
def all_settings() -> Settings:
    return make_settings("anthropic", "perplexity", "gemini")
