"""Refresh cycle: one fetch-enrich-bucketize pass producing a display snapshot."""

import asyncio
import logging
import time
from collections.abc import Callable
from datetime import datetime

from glance.chart.enrichment import enrich
from glance.chart.local_clock import LocalClock
from glance.chart.precipitation import bucketize
from glance.config.schema import GlanceConfig
from glance.ingest.brightsky_client import BrightSkyClient
from glance.ingest.weather_fetcher import WeatherFetcher
from glance.models.common import utc_now
from glance.models.display import DisplaySnapshot

logger = logging.getLogger(__name__)


class RefreshCycle:
    def __init__(
        self,
        config: GlanceConfig,
        fetcher: WeatherFetcher,
        clock: LocalClock,
        now_fn: Callable[[], datetime] = utc_now,
    ):
        self.config = config
        self.fetcher = fetcher
        self.clock = clock
        self._now = now_fn

    @classmethod
    def from_config(cls, config: GlanceConfig) -> "RefreshCycle":
        clock = LocalClock(config.location.timezone)
        client = BrightSkyClient(
            base_url=config.api.base_url,
            user_agent=config.api.user_agent,
            timeout=config.api.timeout_seconds,
        )
        fetcher = WeatherFetcher(
            client, config.location, clock, forecast_days=config.api.forecast_days
        )
        return cls(config, fetcher, clock)

    async def run(self) -> DisplaySnapshot:
        """Fetch both endpoints concurrently, then derive chart data."""
        start_time = time.monotonic()
        now = self._now()

        # Each fetch handles its own failure, so the join never raises for I/O.
        current, samples = await asyncio.gather(
            self.fetcher.fetch_current(now),
            self.fetcher.fetch_forecast(now),
        )

        display = self.config.display
        forecast = enrich(samples, now, self.clock, hour_ticks=display.hour_ticks)
        precipitation = bucketize(
            forecast.samples,
            forecast.now_pointer,
            forecast.current_day_label,
            block_hours=display.precip_block_hours,
            probability_threshold=display.precip_probability_threshold,
            max_bar_mm=display.max_bar_mm,
            bar_height_px=display.bar_height_px,
            min_bar_px=display.min_bar_px,
        )

        snapshot = DisplaySnapshot(
            current=current,
            forecast=forecast,
            precipitation=precipitation,
            fetched_at=now,
        )
        logger.info(
            "Refresh complete: %d samples, %d precipitation blocks, degraded=%s (%.2fs)",
            len(forecast.samples),
            len(precipitation.indicators),
            snapshot.degraded,
            time.monotonic() - start_time,
        )
        return snapshot

    async def close(self) -> None:
        await self.fetcher.client.close()
