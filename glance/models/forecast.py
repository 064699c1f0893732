"""Enriched forecast models produced by the chart pipeline."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

from glance.models.weather import ConditionCode, RawHourlySample


class DaySection(StrEnum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


@dataclass(frozen=True)
class EnrichedSample:
    sample: RawHourlySample
    local_day_label: str
    local_date: date
    local_hour: int
    local_time: str  # HH:MM
    day_section: DaySection
    is_daytime: bool
    is_day_high: bool = False
    is_day_low: bool = False
    is_past: bool = False

    @property
    def timestamp(self) -> datetime:
        return self.sample.timestamp

    @property
    def temperature(self) -> float | None:
        return self.sample.temperature

    @property
    def condition(self) -> ConditionCode:
        return self.sample.condition

    @property
    def precipitation_mm(self) -> float:
        return self.sample.precipitation_mm

    @property
    def precipitation_probability(self) -> int | None:
        return self.sample.precipitation_probability

    @property
    def is_extreme(self) -> bool:
        return self.is_day_high or self.is_day_low


@dataclass(frozen=True)
class EnrichedForecast:
    samples: list[EnrichedSample]
    now: datetime
    now_pointer: datetime | None  # None only when there are no samples
    current_day_label: str
    current_date: date
    day_ticks: list[datetime] = field(default_factory=list)
    hour_ticks: list[datetime] = field(default_factory=list)
    day_label_ticks: list[datetime] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.samples

    @property
    def pointer_anchored(self) -> bool:
        """True when the now-pointer sits on one of today's samples."""
        if self.now_pointer is None:
            return False
        return any(
            s.timestamp == self.now_pointer
            and s.local_date == self.current_date
            for s in self.samples
        )

    def pointer_index(self) -> int | None:
        if self.now_pointer is None:
            return None
        for i, s in enumerate(self.samples):
            if s.timestamp == self.now_pointer:
                return i
        return None
