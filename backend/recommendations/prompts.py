from __future__ import annotations

from datetime import date
from enum import Enum

from .models import TIME_SLOT_LABELS, SearchCriteria
from .sanitize import sanitize_for_prompt

NO_PREFERENCES = "No specific preferences"

EXAMPLE_BLOCK = (
    "🎨 **Children's Art Workshop at SFMOMA - Saturday 2pm-4pm**\n"
    "📍 San Francisco Museum of Modern Art • 0.3 miles\n"
    "The San Francisco Museum of Modern Art hosts hands-on art workshops every "
    "Saturday afternoon specifically designed for kids ages 4-10. The free workshops "
    "let children create their own masterpieces inspired by current exhibitions. "
    "Perfect for creative kids who love getting messy with paint and exploring "
    "different art techniques."
)

FORMAT_TEMPLATE = (
    "[Emoji] **[Activity Title with Timing]**\n"
    "📍 [Location Name] • [Distance]\n"
    "[Description paragraph]"
)


class PromptStyle(str, Enum):
    # Markdown headings and fenced examples, for the tool-search model.
    markdown = "markdown"
    # Same sections without markdown decoration.
    plain = "plain"


def format_date_long(value: date) -> str:
    """``2025-11-16`` -> ``Sunday, November 16, 2025``."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def format_distance(miles: float) -> str:
    return f"{miles:g}"


def _heading(text: str, style: PromptStyle) -> str:
    return f"**{text}:**" if style is PromptStyle.markdown else f"{text}:"


def _fenced(text: str, style: PromptStyle) -> str:
    return f"```\n{text}\n```" if style is PromptStyle.markdown else text


def build_prompt(criteria: SearchCriteria, style: PromptStyle = PromptStyle.markdown) -> str:
    """Render the activity-search prompt for one request.

    The output-format section is the contract the response parser relies on:
    a leading emoji, a ``**bold**`` title, a ``📍 place • distance`` line and a
    short description, five times over.
    """
    location = criteria.location
    ages = ", ".join(str(age) for age in criteria.ages)
    distance = format_distance(criteria.distance)
    date_str = format_date_long(criteria.date)
    time_str = TIME_SLOT_LABELS[criteria.time_slot]
    preferences = sanitize_for_prompt(criteria.preferences) or NO_PREFERENCES

    md = style is PromptStyle.markdown
    bullet = "- " if md else ""

    def item(label: str, value: str) -> str:
        return f"**{label}:** {value}" if md else f"{label}: {value}"

    def field(label: str, value: str) -> str:
        return bullet + item(label, value)

    if md:
        task = (
            f"**Task:** Search the web for family-friendly activities happening in "
            f"{location}, USA that match the following criteria."
        )
    else:
        task = (
            f"Search the web for family-friendly activities happening in "
            f"{location}, USA that match the following criteria:"
        )

    count = "**5 recommendations**" if md else "5 recommendations"

    sections = [
        "You are a family activity expert helping parents discover real, current "
        "activities for their children.",
        task,
        "\n".join(filter(None, [
            _heading("Requirements", style) if md else "",
            field("Location", f"{location}, USA and surrounding areas within {distance} miles"),
            field("Children's Ages", f"{ages} years old"),
            field("Date", date_str),
            field("Time", time_str),
            field("Preferences", preferences),
        ])),
        "\n".join([
            _heading("Instructions", style),
            "1. Use web search to find REAL, CURRENT activities - not hypothetical suggestions",
            "2. Focus on activities actually happening during the specified time",
            "3. Find a diverse mix including:",
            "   - Local events (festivals, markets, workshops, performances, story times)",
            "   - Standing venues (museums, parks, play spaces, libraries, entertainment centers)",
            "   - Both free and paid options when possible",
            "   - Indoor and outdoor options for variety",
        ]),
        "\n".join([
            "4. Ensure all activities are:",
            f"   - Age-appropriate for children ages {ages}",
            f"   - Actually available on {date_str} during {time_str}",
            f"   - Within {distance} miles of {location}, USA",
            "   - Safe and family-friendly",
        ]),
        f"5. Provide exactly {count}",
        "\n".join([
            _heading("Output Format", style),
            "For each recommendation, provide:",
        ]),
        "\n".join([
            item("1. Emoji", "A single relevant emoji that represents the activity type"),
            item("2. Title", 'The venue or event name with timing (e.g., "Museum Name - Sunday 10am-4pm")'),
            item("3. Location", "Specific location or neighborhood name"),
            item(
                "4. Distance",
                f'Approximate distance from {location} (e.g., "0.5 miles", "2 miles")',
            ),
            item("5. Description", "2-4 sentences including:"),
            "   - What the activity is and what makes it special",
            '   - Key practical details (e.g., "Free admission", "Open 10am-5pm")',
            "   - Why it's great for kids of the specified ages",
        ]),
        "\n".join([
            _heading("Format each recommendation EXACTLY as", style),
            _fenced(FORMAT_TEMPLATE, style),
        ]),
        "\n".join([
            _heading("Example", style),
            _fenced(EXAMPLE_BLOCK, style),
        ]),
        "\n".join([
            "Please prioritize:",
            "- Accuracy (verify activities are real and current via web search)",
            "- Diversity (different types of activities, not all museums or all parks)",
            f"- Age-appropriateness (genuinely suitable for {ages})",
            "- Practical usefulness (include enough detail for parents to make decisions)",
        ]),
        "Begin your web search now and provide 5 recommendations.",
    ]

    return "\n\n".join(sections)
