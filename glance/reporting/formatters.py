"""Output formatters for display snapshots and refresh state."""

import json
from datetime import date, datetime

from glance.chart.conditions import describe, icon_for, temperature_color
from glance.chart.local_clock import LocalClock
from glance.models.display import DisplaySnapshot
from glance.models.forecast import EnrichedForecast
from glance.models.weather import ConditionCode, CurrentConditions
from glance.pipeline.refresh_state import RefreshState

NO_FORECAST_MESSAGE = "No forecast data available"


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def current_to_dict(current: CurrentConditions, clock: LocalClock) -> dict:
    return {
        "temperature": current.temperature,
        "condition": current.condition.value,
        "icon": icon_for(current.icon),
        "description": describe(current.condition if current.is_fallback else current.icon),
        "precipitation_mm": current.precipitation_mm,
        "precipitation_30min": current.precipitation_30min,
        "precipitation_60min": current.precipitation_60min,
        "cloud_cover": current.cloud_cover,
        "timestamp": current.timestamp.isoformat(),
        "observed_at": clock.format_time(current.timestamp),
        "is_error": current.is_fallback,
    }


def forecast_to_dict(forecast: EnrichedForecast) -> dict:
    return {
        "now": forecast.now.isoformat(),
        "now_pointer": _iso(forecast.now_pointer),
        "pointer_anchored": forecast.pointer_anchored,
        "current_day_label": forecast.current_day_label,
        "current_date": forecast.current_date.isoformat(),
        "day_ticks": [t.isoformat() for t in forecast.day_ticks],
        "hour_ticks": [t.isoformat() for t in forecast.hour_ticks],
        "day_label_ticks": [t.isoformat() for t in forecast.day_label_ticks],
        "points": [
            {
                "timestamp": s.timestamp.isoformat(),
                "temperature": s.temperature,
                "color": temperature_color(s.temperature),
                "condition": s.condition.value,
                "local_time": s.local_time,
                "local_day_label": s.local_day_label,
                "local_date": s.local_date.isoformat(),
                "local_hour": s.local_hour,
                "day_section": s.day_section.value,
                "is_daytime": s.is_daytime,
                "is_day_high": s.is_day_high,
                "is_day_low": s.is_day_low,
                "is_past": s.is_past,
            }
            for s in forecast.samples
        ],
    }


def snapshot_to_dict(snapshot: DisplaySnapshot, clock: LocalClock) -> dict:
    precipitation = snapshot.precipitation
    return {
        "fetched_at": snapshot.fetched_at.isoformat(),
        "degraded": snapshot.degraded,
        "current": current_to_dict(snapshot.current, clock),
        "forecast": forecast_to_dict(snapshot.forecast),
        "precipitation": {
            "bars": [
                {
                    "index": b.index,
                    "timestamp": b.timestamp.isoformat(),
                    "is_past": b.is_past,
                    "active": b.active,
                    "kind": b.kind.value,
                    "height_ratio": round(b.height_ratio, 4),
                    "height_px": round(b.height_px, 2),
                    "label": b.label,
                }
                for b in precipitation.bars
            ],
            "indicators": [
                {
                    "day_label": blk.day_label,
                    "local_date": blk.local_date.isoformat(),
                    "start_hour": blk.start_hour,
                    "end_hour": blk.end_hour,
                    "kind": blk.kind.value,
                    "anchor_index": blk.anchor_index,
                    "anchor_fraction": round(blk.anchor_fraction, 4),
                }
                for blk in precipitation.indicators
            ],
        },
    }


def state_to_dict(state: RefreshState, clock: LocalClock) -> dict:
    return {
        "status": state.status.value,
        "loading": state.is_loading,
        "refreshing": state.in_flight,
        "error": state.error,
        "updated_at": _iso(state.updated_at),
        "snapshot": (
            snapshot_to_dict(state.snapshot, clock)
            if state.snapshot is not None
            else None
        ),
    }


def format_snapshot_json(snapshot: DisplaySnapshot, clock: LocalClock) -> str:
    """JSON snapshot for programmatic consumption."""
    return json.dumps(snapshot_to_dict(snapshot, clock), indent=2)


def format_snapshot_text(snapshot: DisplaySnapshot, clock: LocalClock) -> str:
    """Plain text rendering for the terminal."""
    current = snapshot.current
    lines: list[str] = []

    if current.is_fallback:
        lines.append("!! Current conditions unavailable (showing fallback data)")
    else:
        lines.append(
            f"Now: {round(current.temperature)}° {describe(current.icon)} "
            f"| precip {current.precipitation_mm:.1f} mm "
            f"(30m {current.precipitation_30min:.1f} mm, "
            f"60m {current.precipitation_60min:.1f} mm)"
        )
        cloud = f"{current.cloud_cover}%" if current.cloud_cover is not None else "N/A"
        lines.append(
            f"Cloud cover: {cloud} | observed at {clock.format_time(current.timestamp)}"
        )

    forecast = snapshot.forecast
    if forecast.is_empty:
        lines.append(NO_FORECAST_MESSAGE)
        return "\n".join(lines)

    if any(s.condition is ConditionCode.ERROR for s in forecast.samples):
        lines.append("!! Forecast unavailable (showing fallback data)")

    days: dict[date, dict[str, str]] = {}
    for s in forecast.samples:
        day = days.setdefault(
            s.local_date, {"label": s.local_day_label, "high": "--", "low": "--"}
        )
        if s.is_day_high:
            day["high"] = f"{round(s.temperature)}° at {s.local_time}"
        if s.is_day_low:
            day["low"] = f"{round(s.temperature)}° at {s.local_time}"
    for local_date, day in days.items():
        marker = " (today)" if local_date == forecast.current_date else ""
        lines.append(f"{day['label']}{marker}: high {day['high']}, low {day['low']}")

    indicators = snapshot.precipitation.indicators
    if indicators:
        spans = ", ".join(
            f"{b.day_label} {b.start_hour:02d}-{b.end_hour:02d} {b.kind.value}"
            for b in indicators
        )
        lines.append(f"Precipitation: {spans}")
    else:
        lines.append("Precipitation: none expected")

    if forecast.now_pointer is not None and forecast.pointer_anchored:
        lines.append(f"Now marker: {clock.format_time(forecast.now_pointer)}")
    return "\n".join(lines)
