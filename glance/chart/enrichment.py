"""Forecast enrichment: per-day extrema, day sections, ticks and the now-pointer."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import date, datetime

from glance.chart.local_clock import LocalClock, parse_instant
from glance.config.defaults import DEFAULT_HOUR_TICKS
from glance.models.forecast import DaySection, EnrichedForecast, EnrichedSample
from glance.models.weather import RawHourlySample

logger = logging.getLogger(__name__)

DAY_LABEL_HOUR = 12


def day_section_for(hour: int) -> DaySection:
    if 5 <= hour < 12:
        return DaySection.MORNING
    if 12 <= hour < 18:
        return DaySection.AFTERNOON
    if 18 <= hour < 22:
        return DaySection.EVENING
    return DaySection.NIGHT


def enrich(
    samples: Sequence[RawHourlySample],
    now: datetime | str,
    clock: LocalClock,
    hour_ticks: Iterable[int] = DEFAULT_HOUR_TICKS,
) -> EnrichedForecast:
    """Annotate an ordered hourly series for charting.

    Samples keep their input order. Extrema are computed per local calendar
    day over non-null temperatures; ties go to the earliest sample. The now-pointer is
    the today-sample closest to ``now`` or ``now`` itself when today has no
    samples.
    """
    now = parse_instant(now)
    current_day_label = clock.local_day_label(now)
    current_date = clock.local_date(now)

    if not samples:
        return EnrichedForecast(
            samples=[],
            now=now,
            now_pointer=None,
            current_day_label=current_day_label,
            current_date=current_date,
        )

    annotated = [_annotate(s, clock) for s in samples]

    highs, lows = _day_extrema(annotated)
    annotated = _flag_extrema(annotated, highs, lows)

    pointer = _closest_to_now(annotated, now, current_date)
    annotated = [
        replace(
            s,
            is_past=(
                s.local_date == current_date and s.timestamp < pointer
            ),
        )
        for s in annotated
    ]

    tick_hours = set(hour_ticks)
    day_ticks: list[datetime] = []
    seen_days: set[date] = set()
    for s in annotated:
        if s.local_date not in seen_days:
            seen_days.add(s.local_date)
            day_ticks.append(s.timestamp)

    return EnrichedForecast(
        samples=annotated,
        now=now,
        now_pointer=pointer,
        current_day_label=current_day_label,
        current_date=current_date,
        day_ticks=day_ticks,
        hour_ticks=[s.timestamp for s in annotated if s.local_hour in tick_hours],
        day_label_ticks=[
            s.timestamp for s in annotated if s.local_hour == DAY_LABEL_HOUR
        ],
    )


def _annotate(sample: RawHourlySample, clock: LocalClock) -> EnrichedSample:
    hour = clock.local_hour(sample.timestamp)
    return EnrichedSample(
        sample=sample,
        local_day_label=clock.local_day_label(sample.timestamp),
        local_date=clock.local_date(sample.timestamp),
        local_hour=hour,
        local_time=clock.format_time(sample.timestamp),
        day_section=day_section_for(hour),
        is_daytime=clock.is_daytime(sample.timestamp),
    )


def _day_extrema(
    samples: list[EnrichedSample],
) -> tuple[dict[date, float], dict[date, float]]:
    """Max and min temperature per local day, skipping null readings."""
    groups: dict[date, list[float]] = {}
    for s in samples:
        if s.temperature is None:
            continue
        groups.setdefault(s.local_date, []).append(s.temperature)

    highs = {day: max(temps) for day, temps in groups.items()}
    lows = {day: min(temps) for day, temps in groups.items()}
    return highs, lows


def _flag_extrema(
    samples: list[EnrichedSample],
    highs: dict[date, float],
    lows: dict[date, float],
) -> list[EnrichedSample]:
    seen_high: set[date] = set()
    seen_low: set[date] = set()
    flagged: list[EnrichedSample] = []

    for s in samples:
        day = s.local_date
        is_high = False
        is_low = False
        if s.temperature is not None and day in highs:
            # first occurrence wins
            if s.temperature == highs[day] and day not in seen_high:
                seen_high.add(day)
                is_high = True
            if s.temperature == lows[day] and day not in seen_low:
                seen_low.add(day)
                is_low = True
        flagged.append(replace(s, is_day_high=is_high, is_day_low=is_low))

    return flagged


def _closest_to_now(
    samples: list[EnrichedSample], now: datetime, current_date: date
) -> datetime:
    today = [s for s in samples if s.local_date == current_date]
    if not today:
        logger.debug("No samples for %s, now-pointer falls back to fetch instant",
                     current_date)
        return now

    closest = today[0]
    min_diff = abs((closest.timestamp - now).total_seconds())
    for s in today[1:]:
        diff = abs((s.timestamp - now).total_seconds())
        if diff < min_diff:
            closest = s
            min_diff = diff
    return closest.timestamp
