"""Tests for config schema validation."""

import pytest
from pydantic import ValidationError

from glance.config.schema import (
    ApiConfig,
    DisplayConfig,
    GlanceConfig,
    LocationConfig,
)


class TestGlanceConfig:
    def test_defaults(self):
        config = GlanceConfig()
        assert config.location.name == "Berlin"
        assert config.location.latitude == 52.52
        assert config.display.refresh_interval_minutes == 20
        assert config.display.precip_probability_threshold == 10
        assert config.display.max_bar_mm == 5.0
        assert config.display.precip_block_hours == 4
        assert config.api.forecast_days == 3

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            GlanceConfig(unknown_field="bad")

    def test_nested_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            DisplayConfig(bogus=True)


class TestLocationConfig:
    def test_valid(self):
        loc = LocationConfig(
            name="Tokyo", latitude=35.68, longitude=139.69, timezone="Asia/Tokyo"
        )
        assert loc.timezone == "Asia/Tokyo"

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError, match="Unknown IANA timezone"):
            LocationConfig(name="X", latitude=0, longitude=0, timezone="Mars/Olympus")

    def test_coordinate_bounds(self):
        with pytest.raises(ValidationError):
            LocationConfig(name="X", latitude=91, longitude=0, timezone="UTC")
        with pytest.raises(ValidationError):
            LocationConfig(name="X", latitude=0, longitude=-181, timezone="UTC")


class TestDisplayConfig:
    @pytest.mark.parametrize("hours", [1, 2, 3, 4, 6, 8, 12, 24])
    def test_block_hours_dividing_day(self, hours: int):
        assert DisplayConfig(precip_block_hours=hours).precip_block_hours == hours

    @pytest.mark.parametrize("hours", [0, 5, 7, 25])
    def test_block_hours_must_tile_day(self, hours: int):
        with pytest.raises(ValidationError):
            DisplayConfig(precip_block_hours=hours)

    def test_threshold_bounds(self):
        assert DisplayConfig(precip_probability_threshold=1).precip_probability_threshold == 1
        with pytest.raises(ValidationError):
            DisplayConfig(precip_probability_threshold=0)
        with pytest.raises(ValidationError):
            DisplayConfig(precip_probability_threshold=101)
        with pytest.raises(ValidationError):
            DisplayConfig(precip_probability_threshold=-1)

    def test_max_bar_must_be_positive(self):
        with pytest.raises(ValidationError):
            DisplayConfig(max_bar_mm=0.0)

    def test_hour_ticks_sorted_and_unique(self):
        assert DisplayConfig(hour_ticks=[18, 0, 6, 6]).hour_ticks == [0, 6, 18]

    def test_hour_ticks_range(self):
        with pytest.raises(ValidationError):
            DisplayConfig(hour_ticks=[24])


class TestApiConfig:
    def test_forecast_days_bounds(self):
        assert ApiConfig(forecast_days=0).forecast_days == 0
        with pytest.raises(ValidationError):
            ApiConfig(forecast_days=11)

    def test_timeout_positive(self):
        with pytest.raises(ValidationError):
            ApiConfig(timeout_seconds=0)
