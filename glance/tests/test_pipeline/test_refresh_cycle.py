"""Tests for one fetch-enrich-bucketize pass."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from glance.config.schema import DisplayConfig, GlanceConfig
from glance.ingest.weather_fetcher import fallback_current, fallback_forecast
from glance.pipeline.refresh_cycle import RefreshCycle


def _fetcher(current, samples) -> MagicMock:
    fetcher = MagicMock()
    fetcher.fetch_current = AsyncMock(return_value=current)
    fetcher.fetch_forecast = AsyncMock(return_value=samples)
    fetcher.client.close = AsyncMock()
    return fetcher


class TestRefreshCycle:
    def test_fetches_both_with_same_now(self, clock, berlin, current_ok, make_samples):
        now = berlin(2026, 2, 10, 12, 10)
        fetcher = _fetcher(current_ok, make_samples(berlin(2026, 2, 10), [5.0] * 24))
        cycle = RefreshCycle(GlanceConfig(), fetcher, clock, now_fn=lambda: now)

        snapshot = asyncio.run(cycle.run())

        fetcher.fetch_current.assert_awaited_once_with(now)
        fetcher.fetch_forecast.assert_awaited_once_with(now)
        assert snapshot.fetched_at == now
        assert snapshot.current is current_ok
        assert len(snapshot.forecast.samples) == 24
        assert snapshot.forecast.now_pointer == berlin(2026, 2, 10, 12)
        assert not snapshot.degraded

    def test_display_settings_applied(self, clock, berlin, current_ok, make_samples):
        now = berlin(2026, 2, 10, 0, 5)
        probabilities = [0] * 24
        probabilities[13] = 20
        probabilities[14] = 25
        fetcher = _fetcher(
            current_ok,
            make_samples(berlin(2026, 2, 10), [5.0] * 24, probabilities=probabilities),
        )
        config = GlanceConfig(
            display=DisplayConfig(precip_probability_threshold=25, precip_block_hours=6)
        )
        cycle = RefreshCycle(config, fetcher, clock, now_fn=lambda: now)

        snapshot = asyncio.run(cycle.run())
        chart = snapshot.precipitation
        assert len(chart.blocks) == 4
        assert [b.index for b in chart.bars if b.active] == [14]
        assert [(b.start_hour, b.end_hour) for b in chart.indicators] == [(12, 18)]

    def test_total_outage_still_renders(self, clock, berlin):
        now = berlin(2026, 2, 10, 9)
        fetcher = _fetcher(fallback_current(now), fallback_forecast(now))
        cycle = RefreshCycle(GlanceConfig(), fetcher, clock, now_fn=lambda: now)

        snapshot = asyncio.run(cycle.run())
        assert snapshot.degraded
        assert snapshot.current.is_fallback
        assert len(snapshot.forecast.samples) == 24
        assert snapshot.precipitation.indicators == []

    def test_close_closes_client(self, clock, current_ok):
        fetcher = _fetcher(current_ok, [])
        cycle = RefreshCycle(GlanceConfig(), fetcher, clock)
        asyncio.run(cycle.close())
        fetcher.client.close.assert_awaited_once()

    def test_from_config(self):
        config = GlanceConfig()
        cycle = RefreshCycle.from_config(config)
        assert cycle.fetcher.forecast_days == config.api.forecast_days
        assert cycle.fetcher.client.base_url == "https://api.brightsky.dev"
        assert cycle.clock.timezone == "Europe/Berlin"
