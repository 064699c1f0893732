"""Display snapshot: one fully resolved refresh cycle."""

from dataclasses import dataclass
from datetime import datetime

from glance.models.forecast import EnrichedForecast
from glance.models.precipitation import PrecipitationChart
from glance.models.weather import ConditionCode, CurrentConditions


@dataclass(frozen=True)
class DisplaySnapshot:
    current: CurrentConditions
    forecast: EnrichedForecast
    precipitation: PrecipitationChart
    fetched_at: datetime

    @property
    def degraded(self) -> bool:
        """True when any part of the snapshot is fallback data."""
        if self.current.is_fallback:
            return True
        return any(s.condition is ConditionCode.ERROR for s in self.forecast.samples)
