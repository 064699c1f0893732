"""Pydantic v2 configuration schema with strict validation."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

from glance.config.defaults import DEFAULT_HOUR_TICKS, DEFAULT_LOCATION


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    name: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    timezone: str

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown IANA timezone: {value}") from e
        return value


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.brightsky.dev"
    timeout_seconds: float = Field(default=15.0, gt=0.0)
    user_agent: str = "weatherglance/0.1.0"
    forecast_days: int = Field(default=3, ge=0, le=10)


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    refresh_interval_minutes: int = Field(default=20, ge=1)
    precip_probability_threshold: int = Field(default=10, ge=1, le=100)
    max_bar_mm: float = Field(default=5.0, gt=0.0)
    precip_block_hours: int = Field(default=4, ge=1, le=24)
    bar_height_px: int = Field(default=30, ge=1)
    min_bar_px: int = Field(default=2, ge=0)
    hour_ticks: list[int] = Field(default_factory=lambda: list(DEFAULT_HOUR_TICKS))

    @field_validator("precip_block_hours")
    @classmethod
    def _tiles_day(cls, value: int) -> int:
        if 24 % value != 0:
            raise ValueError("precip_block_hours must divide 24")
        return value

    @field_validator("hour_ticks")
    @classmethod
    def _valid_hours(cls, value: list[int]) -> list[int]:
        for hour in value:
            if not 0 <= hour <= 23:
                raise ValueError(f"hour tick out of range: {hour}")
        return sorted(set(value))


class OpsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    log_level: str = "INFO"
    dashboard_host: str = "0.0.0.0"
    dashboard_port: int = Field(default=8777, ge=1, le=65535)


class GlanceConfig(BaseModel):
    model_config = {"extra": "forbid"}

    location: LocationConfig = LocationConfig(**DEFAULT_LOCATION)
    api: ApiConfig = ApiConfig()
    display: DisplayConfig = DisplayConfig()
    ops: OpsConfig = OpsConfig()
