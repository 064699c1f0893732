"""Weather fetcher: normalizes BrightSky payloads and fails closed to fallbacks."""

import logging
from datetime import datetime, timedelta

from glance.chart.local_clock import LocalClock, parse_instant
from glance.config.schema import LocationConfig
from glance.ingest.brightsky_client import BrightSkyClient
from glance.models.common import utc_now
from glance.models.weather import ConditionCode, CurrentConditions, RawHourlySample

logger = logging.getLogger(__name__)

FALLBACK_FORECAST_HOURS = 24


class MalformedPayloadError(ValueError):
    """The provider answered, but not with the shape we rely on."""


class WeatherFetcher:
    def __init__(
        self,
        client: BrightSkyClient,
        location: LocationConfig,
        clock: LocalClock,
        forecast_days: int = 3,
    ):
        self.client = client
        self.location = location
        self.clock = clock
        self.forecast_days = forecast_days

    async def fetch_current(self, now: datetime | None = None) -> CurrentConditions:
        """Fetch current conditions, or the sentinel record on any failure."""
        now = now or utc_now()
        try:
            raw = await self.client.get_current_weather(
                self.location.latitude,
                self.location.longitude,
                self.location.timezone,
            )
            return _parse_current(raw)
        except Exception:
            logger.exception(
                "Failed to fetch current conditions for %s", self.location.name
            )
            return fallback_current(now)

    async def fetch_forecast(
        self, now: datetime | None = None
    ) -> list[RawHourlySample]:
        """Fetch hourly samples for local today through today + forecast_days.

        Returns the 24-hour fallback series on any failure.
        """
        now = now or utc_now()
        first_day = self.clock.local_date(now)
        last_day = first_day + timedelta(days=self.forecast_days)
        try:
            raw = await self.client.get_weather(
                self.location.latitude,
                self.location.longitude,
                self.location.timezone,
                first_day,
                # last_date is an upper timestamp bound, so ask for the day after
                last_day + timedelta(days=1),
            )
            samples = _parse_series(raw)
        except Exception:
            logger.exception(
                "Failed to fetch forecast for %s (%s to %s)",
                self.location.name, first_day, last_day,
            )
            return fallback_forecast(now)

        samples = [
            s for s in samples
            if first_day <= self.clock.local_date(s.timestamp) <= last_day
        ]
        if not samples:
            logger.error(
                "Forecast for %s had no samples between %s and %s",
                self.location.name, first_day, last_day,
            )
            return fallback_forecast(now)
        return samples


def fallback_current(now: datetime) -> CurrentConditions:
    return CurrentConditions(
        temperature=0.0,
        condition=ConditionCode.ERROR,
        icon=ConditionCode.ERROR,
        precipitation_mm=0.0,
        precipitation_30min=0.0,
        precipitation_60min=0.0,
        cloud_cover=None,
        timestamp=parse_instant(now),
    )


def fallback_forecast(
    now: datetime, hours: int = FALLBACK_FORECAST_HOURS
) -> list[RawHourlySample]:
    """Hourly error-marked placeholders so the chart never sees an empty series."""
    start = parse_instant(now)
    return [
        RawHourlySample(
            timestamp=start + timedelta(hours=i),
            temperature=None,
            condition=ConditionCode.ERROR,
            precipitation_mm=0.0,
            precipitation_probability=0,
            cloud_cover=None,
            icon=ConditionCode.ERROR,
        )
        for i in range(hours)
    ]


def _parse_current(raw: dict) -> CurrentConditions:
    weather = raw.get("weather") if isinstance(raw, dict) else None
    if not isinstance(weather, dict) or not weather:
        raise MalformedPayloadError("current_weather response has no weather object")
    if not weather.get("timestamp"):
        raise MalformedPayloadError("current_weather response has no timestamp")

    temperature = weather.get("temperature")
    return CurrentConditions(
        temperature=float(temperature) if temperature is not None else 0.0,
        condition=ConditionCode.parse(weather.get("condition")),
        icon=ConditionCode.parse(weather.get("icon")),
        precipitation_mm=_float_or_zero(
            weather.get("precipitation", weather.get("precipitation_10"))
        ),
        precipitation_30min=_float_or_zero(weather.get("precipitation_30")),
        precipitation_60min=_float_or_zero(weather.get("precipitation_60")),
        cloud_cover=_int_or_none(weather.get("cloud_cover")),
        timestamp=parse_instant(weather["timestamp"]),
    )


def _parse_series(raw: dict) -> list[RawHourlySample]:
    weather = raw.get("weather") if isinstance(raw, dict) else None
    if not isinstance(weather, list) or not weather:
        raise MalformedPayloadError("weather response has no weather records")

    samples: list[RawHourlySample] = []
    for item in weather:
        if not isinstance(item, dict) or not item.get("timestamp"):
            raise MalformedPayloadError(f"weather record without timestamp: {item!r}")
        temperature = item.get("temperature")
        samples.append(
            RawHourlySample(
                timestamp=parse_instant(item["timestamp"]),
                temperature=float(temperature) if temperature is not None else None,
                condition=ConditionCode.parse(item.get("condition")),
                precipitation_mm=_float_or_zero(item.get("precipitation")),
                precipitation_probability=_int_or_none(
                    item.get("precipitation_probability")
                ),
                cloud_cover=_int_or_none(item.get("cloud_cover")),
                icon=ConditionCode.parse(item.get("icon")),
            )
        )

    samples.sort(key=lambda s: s.timestamp)
    return samples


def _float_or_zero(value: object) -> float:
    if value is None:
        return 0.0
    return float(value)


def _int_or_none(value: object) -> int | None:
    if value is None:
        return None
    return int(round(float(value)))
