from __future__ import annotations

import re
from datetime import date as date_type
from datetime import timedelta
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

US_STATES = frozenset({
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    "DC",
})

MIN_AGE = 0
MAX_AGE = 18
MAX_CHILDREN = 10
MIN_DISTANCE = 1
MAX_DISTANCE = 50
PREFERENCES_MAX_LENGTH = 500
CITY_MAX_LENGTH = 100
# Dates are accepted up to this far either side of today.
DATE_WINDOW = timedelta(days=365)

_CITY_RE = re.compile(r"^[a-zA-Z\s\-'.]+$")
_ZIP_RE = re.compile(r"^\d{5}$")


class TimeSlot(str, Enum):
    all_day = "all_day"
    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"
    night = "night"


TIME_SLOT_LABELS: dict[TimeSlot, str] = {
    TimeSlot.all_day: "All Day",
    TimeSlot.morning: "Morning (8 AM - 12 PM)",
    TimeSlot.afternoon: "Afternoon (12 PM - 4 PM)",
    TimeSlot.evening: "Evening (4 PM - 8 PM)",
    TimeSlot.night: "Night (8 PM - 11 PM)",
}


class ProviderId(str, Enum):
    anthropic = "anthropic"
    perplexity = "perplexity"
    gemini = "gemini"


ALL_PROVIDERS = "all"


class SearchCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    city: str = Field(..., min_length=1, max_length=CITY_MAX_LENGTH)
    state: str = Field(..., min_length=2, max_length=2, description="Two-letter US state code")
    zip_code: str | None = Field(default=None, description="Optional 5-digit ZIP code")
    ages: list[int] = Field(..., min_length=1, max_length=MAX_CHILDREN)
    date: date_type
    time_slot: TimeSlot
    distance: float = Field(..., ge=MIN_DISTANCE, le=MAX_DISTANCE, description="Search radius in miles")
    preferences: str | None = Field(default=None, max_length=PREFERENCES_MAX_LENGTH)
    provider: ProviderId | Literal["all"] | None = None

    @field_validator("city")
    @classmethod
    def _check_city(cls, value: str) -> str:
        value = value.strip()
        if not value or not _CITY_RE.match(value):
            raise ValueError("City contains invalid characters")
        return value

    @field_validator("state")
    @classmethod
    def _check_state(cls, value: str) -> str:
        value = value.upper()
        if value not in US_STATES:
            raise ValueError("State must be a valid US state code (e.g., CA, NY, TX)")
        return value

    @field_validator("zip_code")
    @classmethod
    def _check_zip(cls, value: str | None) -> str | None:
        if not value:
            return None
        if not _ZIP_RE.match(value):
            raise ValueError("Zip code must be a 5-digit number")
        return value

    @field_validator("ages")
    @classmethod
    def _check_ages(cls, value: list[int]) -> list[int]:
        for age in value:
            if age < MIN_AGE or age > MAX_AGE:
                raise ValueError(f"All ages must be between {MIN_AGE} and {MAX_AGE}")
        return value

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: date_type) -> date_type:
        today = date_type.today()
        if value < today - DATE_WINDOW or value > today + DATE_WINDOW:
            raise ValueError("Date must be within one year from today")
        return value

    @field_validator("preferences")
    @classmethod
    def _blank_preferences_to_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def location(self) -> str:
        if self.zip_code:
            return f"{self.city}, {self.state} {self.zip_code}"
        return f"{self.city}, {self.state}"


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    emoji: str
    title: str
    description: str
    location: str
    distance: str


class RecommendResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    recommendations: list[Recommendation]
    provider: ProviderId
    model_name: str


class ProviderResult(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    provider: ProviderId
    model_name: str
    recommendations: list[Recommendation] | None = None
    error: str | None = None
    error_kind: str | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> ProviderResult:
        if (self.recommendations is None) == (self.error is None):
            raise ValueError("ProviderResult needs exactly one of recommendations or error")
        if self.recommendations is not None and not self.recommendations:
            raise ValueError("A successful ProviderResult must carry recommendations")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


class MultiProviderResponse(BaseModel):
    results: list[ProviderResult]


class ProviderInfo(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    id: ProviderId
    model_name: str
    supports_web_search: bool


class ProvidersResponse(BaseModel):
    providers: list[ProviderInfo]
