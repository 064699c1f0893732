"""Precipitation chart models: per-sample bars and per-block indicators."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum


class PrecipitationKind(StrEnum):
    RAIN = "rain"
    SNOW = "snow"


@dataclass(frozen=True)
class PrecipitationBar:
    index: int
    timestamp: datetime
    is_past: bool
    active: bool
    kind: PrecipitationKind
    height_ratio: float  # 0..1
    height_px: float
    label: str


@dataclass(frozen=True)
class PrecipitationBlock:
    day_label: str
    local_date: date
    start_hour: int
    end_hour: int  # exclusive
    indices: tuple[int, ...]
    active: bool
    kind: PrecipitationKind
    anchor_index: int
    anchor_fraction: float  # horizontal position across the whole chart


@dataclass(frozen=True)
class PrecipitationChart:
    bars: list[PrecipitationBar] = field(default_factory=list)
    blocks: list[PrecipitationBlock] = field(default_factory=list)

    @property
    def indicators(self) -> list[PrecipitationBlock]:
        """One glyph per active block."""
        return [b for b in self.blocks if b.active]
