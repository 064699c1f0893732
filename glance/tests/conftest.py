"""Shared test fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import yaml

from glance.chart.enrichment import enrich
from glance.chart.local_clock import LocalClock
from glance.chart.precipitation import bucketize
from glance.config.schema import GlanceConfig
from glance.models.display import DisplaySnapshot
from glance.models.weather import ConditionCode, CurrentConditions, RawHourlySample

BERLIN = ZoneInfo("Europe/Berlin")


@pytest.fixture
def default_config() -> GlanceConfig:
    return GlanceConfig()


@pytest.fixture
def clock() -> LocalClock:
    return LocalClock("Europe/Berlin")


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "display": {"precip_probability_threshold": 20, "precip_block_hours": 6},
        "api": {"forecast_days": 2},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


def _berlin(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=BERLIN).astimezone(UTC)


@pytest.fixture
def berlin() -> Callable[..., datetime]:
    """Turn a Berlin wall-clock time into an aware UTC instant."""
    return _berlin


@pytest.fixture
def make_samples() -> Callable[..., list[RawHourlySample]]:
    """Build consecutive hourly samples starting at a Berlin local time.

    Temperatures, probabilities and amounts are given per hour; shorter
    lists are padded with defaults.
    """

    def _make(
        start: datetime,
        temperatures: list[float | None],
        probabilities: list[int] | None = None,
        amounts: list[float] | None = None,
        condition: ConditionCode = ConditionCode.DRY,
    ) -> list[RawHourlySample]:
        samples = []
        for i, temp in enumerate(temperatures):
            samples.append(
                RawHourlySample(
                    timestamp=start + timedelta(hours=i),
                    temperature=temp,
                    condition=condition,
                    precipitation_mm=amounts[i] if amounts and i < len(amounts) else 0.0,
                    precipitation_probability=(
                        probabilities[i] if probabilities and i < len(probabilities) else 0
                    ),
                    cloud_cover=50,
                )
            )
        return samples

    return _make


@pytest.fixture
def current_ok(berlin) -> CurrentConditions:
    return CurrentConditions(
        temperature=3.6,
        condition=ConditionCode.RAIN,
        icon=ConditionCode.PARTLY_CLOUDY_DAY,
        precipitation_mm=0.1,
        precipitation_30min=0.4,
        precipitation_60min=0.9,
        cloud_cover=75,
        timestamp=berlin(2026, 2, 10, 12, 30),
    )


@pytest.fixture
def make_snapshot(clock, berlin, current_ok, make_samples) -> Callable[..., DisplaySnapshot]:
    """Build a display snapshot the way a refresh cycle would.

    Defaults to 48 dry hours from Tue 2026-02-10 00:00 Berlin, with now at
    12:10 local.
    """

    def _make(
        current: CurrentConditions | None = None,
        samples: list[RawHourlySample] | None = None,
        now: datetime | None = None,
    ) -> DisplaySnapshot:
        now = now or berlin(2026, 2, 10, 12, 10)
        if samples is None:
            samples = make_samples(
                berlin(2026, 2, 10), [float(i % 24) / 2 for i in range(48)]
            )
        forecast = enrich(samples, now, clock)
        precipitation = bucketize(
            forecast.samples, forecast.now_pointer, forecast.current_day_label
        )
        return DisplaySnapshot(
            current=current or current_ok,
            forecast=forecast,
            precipitation=precipitation,
            fetched_at=now,
        )

    return _make
