"""
Response parser.

Turns the free-text reply of an LLM into at most ``MAX_RECOMMENDATIONS``
``Recommendation`` records. The model is asked to emit blocks shaped like::

    🎨 **Title - Saturday 2pm-4pm**
    📍 Place name • 0.3 miles
    Two to four sentences of description.

Two independent strategies:

- ``parse_blocks`` matches whole blocks with a single pattern. A description
  runs until the next line that *starts* with a pictograph, so a description
  line beginning with an emoji ends the block early.
- ``parse_paragraphs`` runs only when no block matched. It splits on blank
  lines and accepts any paragraph whose first line has a leading emoji and a
  bold title; location and distance fall back to ``PLACEHOLDER``.
"""
from __future__ import annotations

import logging
import re

from .models import Recommendation

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 5
PLACEHOLDER = "See description"

PIN = "\U0001F4CD"  # 📍
SEPARATOR = "\u2022"  # •
_EMOJI = "[\U0001F300-\U0001F9FF\u2600-\u26FF\u2700-\u27BF]"
_VARIATION_SELECTOR = "\uFE0F"

_BLOCK_RE = re.compile(
    rf"({_EMOJI}{_VARIATION_SELECTOR}?)\s*"
    r"\*\*([^*]+)\*\*\s*\n"
    rf"{PIN}\s*([^{SEPARATOR}\n]+){SEPARATOR}\s*([^\n]+)\s*\n+"
    rf"(.+?)(?=\n{_EMOJI}|\Z)",
    re.DOTALL,
)

_PARAGRAPH_SPLIT_RE = re.compile(r"\n\n+")
_LEADING_EMOJI_RE = re.compile(rf"^({_EMOJI}{_VARIATION_SELECTOR}?)")
_BOLD_TITLE_RE = re.compile(r"\*\*([^*]+)\*\*")
_PIN_LINE_RE = re.compile(rf"{PIN}\s*([^{SEPARATOR}]+){SEPARATOR}\s*([^\n]+)")
_AFTER_PIN_RE = re.compile(rf"{PIN}[^\n]+\n(.+)", re.DOTALL)
_PIN_LINE_STRIP_RE = re.compile(rf"{PIN}[^\n]+\n?")


def parse_blocks(text: str) -> list[Recommendation]:
    """Primary strategy: match complete emoji/title/pin/description blocks."""
    results: list[Recommendation] = []
    for match in _BLOCK_RE.finditer(text):
        emoji, title, location, distance, description = (g.strip() for g in match.groups())
        if not all((emoji, title, location, distance, description)):
            logger.debug("Skipped malformed recommendation block at offset %d", match.start())
            continue
        results.append(Recommendation(
            emoji=emoji,
            title=title,
            description=description,
            location=location,
            distance=distance,
        ))
    return results


def parse_paragraphs(text: str) -> list[Recommendation]:
    """Fallback strategy: one recommendation per blank-line separated paragraph."""
    results: list[Recommendation] = []
    for section in _PARAGRAPH_SPLIT_RE.split(text):
        lines = section.strip().split("\n")
        if len(lines) < 2:
            continue

        first_line = lines[0]
        emoji_match = _LEADING_EMOJI_RE.match(first_line)
        title_match = _BOLD_TITLE_RE.search(first_line)
        if not emoji_match or not title_match:
            continue

        body = "\n".join(lines[1:])

        pin_match = _PIN_LINE_RE.search(body)
        location = pin_match.group(1).strip() if pin_match else ""
        distance = pin_match.group(2).strip() if pin_match else ""

        after_pin = _AFTER_PIN_RE.search(body)
        if after_pin:
            description = after_pin.group(1).strip()
        else:
            description = _PIN_LINE_STRIP_RE.sub("", body, count=1).strip()

        results.append(Recommendation(
            emoji=emoji_match.group(1),
            title=title_match.group(1).strip(),
            description=description or body.strip(),
            location=location or PLACEHOLDER,
            distance=distance or PLACEHOLDER,
        ))
    return results


def parse_recommendations(text: str) -> list[Recommendation]:
    """Parse ``text`` into at most ``MAX_RECOMMENDATIONS`` records.

    An empty list means neither strategy found anything; the caller decides
    whether that is fatal.
    """
    if not text:
        return []

    recommendations = parse_blocks(text)
    logger.info("Block pattern matched %d recommendation(s)", len(recommendations))

    if not recommendations:
        recommendations = parse_paragraphs(text)
        if recommendations:
            logger.info("Paragraph fallback recovered %d recommendation(s)", len(recommendations))

    return recommendations[:MAX_RECOMMENDATIONS]
