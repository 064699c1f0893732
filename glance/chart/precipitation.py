"""Precipitation bucketing: per-sample bars and fixed-width block indicators."""

from collections.abc import Sequence
from datetime import date, datetime

from glance.chart.conditions import precipitation_kind
from glance.chart.local_clock import parse_instant
from glance.models.forecast import EnrichedSample
from glance.models.precipitation import (
    PrecipitationBar,
    PrecipitationBlock,
    PrecipitationChart,
    PrecipitationKind,
)

DEFAULT_BLOCK_HOURS = 4
DEFAULT_PROBABILITY_THRESHOLD = 10
DEFAULT_MAX_BAR_MM = 5.0
DEFAULT_BAR_HEIGHT_PX = 30
DEFAULT_MIN_BAR_PX = 2


def block_start(hour: int, block_hours: int) -> int:
    return (hour // block_hours) * block_hours


def is_active(
    sample: EnrichedSample, is_past: bool, probability_threshold: int
) -> bool:
    """Past samples use the observed amount, future ones the probability.

    A missing or 0% probability is never active.
    """
    if is_past:
        return (sample.precipitation_mm or 0.0) > 0
    if sample.precipitation_probability is None:
        return False
    return sample.precipitation_probability >= max(probability_threshold, 1)


def bucketize(
    samples: Sequence[EnrichedSample],
    pointer: datetime | str | None,
    current_day_label: str,
    *,
    block_hours: int = DEFAULT_BLOCK_HOURS,
    probability_threshold: int = DEFAULT_PROBABILITY_THRESHOLD,
    max_bar_mm: float = DEFAULT_MAX_BAR_MM,
    bar_height_px: int = DEFAULT_BAR_HEIGHT_PX,
    min_bar_px: int = DEFAULT_MIN_BAR_PX,
) -> PrecipitationChart:
    if block_hours < 1:
        raise ValueError("block_hours must be positive")
    if not samples:
        return PrecipitationChart()

    pointer_at = parse_instant(pointer) if pointer is not None else None
    bars: list[PrecipitationBar] = []
    members: dict[tuple[date, int], list[int]] = {}
    active_members: dict[tuple[date, int], list[PrecipitationKind]] = {}
    labels: dict[date, str] = {}

    for index, s in enumerate(samples):
        past = (
            pointer_at is not None
            and s.local_day_label == current_day_label
            and s.timestamp < pointer_at
        )
        active = is_active(s, past, probability_threshold)
        kind = precipitation_kind(s.condition.value)

        ratio = 0.0
        height = 0.0
        if active:
            if past:
                ratio = min(max((s.precipitation_mm or 0.0) / max_bar_mm, 0.0), 1.0)
            else:
                ratio = min((s.precipitation_probability or 0) / 100, 1.0)
            height = max(float(min_bar_px), ratio * bar_height_px)

        bars.append(
            PrecipitationBar(
                index=index,
                timestamp=s.timestamp,
                is_past=past,
                active=active,
                kind=kind,
                height_ratio=ratio,
                height_px=height,
                label=_bar_label(s, past),
            )
        )

        key = (s.local_date, block_start(s.local_hour, block_hours))
        labels.setdefault(s.local_date, s.local_day_label)
        members.setdefault(key, []).append(index)
        if active:
            active_members.setdefault(key, []).append(kind)

    last_index = len(samples) - 1
    blocks: list[PrecipitationBlock] = []
    for (day, start), indices in members.items():
        kinds = active_members.get((day, start), [])
        anchor = indices[len(indices) // 2]
        blocks.append(
            PrecipitationBlock(
                day_label=labels[day],
                local_date=day,
                start_hour=start,
                end_hour=min(start + block_hours, 24),
                indices=tuple(indices),
                active=bool(kinds),
                kind=(
                    PrecipitationKind.SNOW
                    if PrecipitationKind.SNOW in kinds
                    else PrecipitationKind.RAIN
                ),
                anchor_index=anchor,
                anchor_fraction=anchor / last_index if last_index > 0 else 0.0,
            )
        )

    return PrecipitationChart(bars=bars, blocks=blocks)


def _bar_label(sample: EnrichedSample, past: bool) -> str:
    if past:
        return f"{sample.local_time}: {sample.precipitation_mm or 0.0:.1f} mm"
    probability = sample.precipitation_probability or 0
    return f"{sample.local_time}: {probability}% chance of precipitation"
