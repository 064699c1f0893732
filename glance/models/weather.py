"""Weather data models for BrightSky current conditions and hourly series."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class ConditionCode(StrEnum):
    DRY = "dry"
    CLEAR_DAY = "clear-day"
    CLEAR_NIGHT = "clear-night"
    PARTLY_CLOUDY_DAY = "partly-cloudy-day"
    PARTLY_CLOUDY_NIGHT = "partly-cloudy-night"
    CLOUDY = "cloudy"
    FOG = "fog"
    WIND = "wind"
    RAIN = "rain"
    DRIZZLE = "drizzle"
    SLEET = "sleet"
    SNOW = "snow"
    HAIL = "hail"
    THUNDERSTORM = "thunderstorm"
    UNKNOWN = "unknown"  # missing or unmapped provider value
    ERROR = "error"  # fallback marker, never sent by the provider

    @classmethod
    def parse(cls, value: str | None) -> "ConditionCode":
        """Map a provider string onto the vocabulary, UNKNOWN when unmapped."""
        if not value:
            return cls.UNKNOWN
        try:
            code = cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN
        if code is cls.ERROR:
            return cls.UNKNOWN
        return code


@dataclass(frozen=True)
class RawHourlySample:
    timestamp: datetime  # UTC
    temperature: float | None
    condition: ConditionCode
    precipitation_mm: float = 0.0
    precipitation_probability: int | None = None
    cloud_cover: int | None = None
    icon: ConditionCode = ConditionCode.UNKNOWN


@dataclass(frozen=True)
class CurrentConditions:
    temperature: float
    condition: ConditionCode
    icon: ConditionCode
    precipitation_mm: float
    precipitation_30min: float
    precipitation_60min: float
    cloud_cover: int | None
    timestamp: datetime

    @property
    def is_fallback(self) -> bool:
        return self.condition is ConditionCode.ERROR
