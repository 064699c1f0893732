"""Condition-code lookup tables: glyphs, descriptions and temperature colours."""

from glance.models.precipitation import PrecipitationKind
from glance.models.weather import ConditionCode

ALERT_GLYPH = "alert-triangle"
UNKNOWN_GLYPH = "help-circle"

ICONS: dict[ConditionCode, str] = {
    ConditionCode.DRY: "sun",
    ConditionCode.CLEAR_DAY: "sun",
    ConditionCode.CLEAR_NIGHT: "moon",
    ConditionCode.PARTLY_CLOUDY_DAY: "cloud-sun",
    ConditionCode.PARTLY_CLOUDY_NIGHT: "cloud-moon",
    ConditionCode.CLOUDY: "cloud",
    ConditionCode.FOG: "cloud-fog",
    ConditionCode.WIND: "wind",
    ConditionCode.RAIN: "cloud-rain",
    ConditionCode.DRIZZLE: "cloud-drizzle",
    ConditionCode.SLEET: "cloud-rain",
    ConditionCode.SNOW: "cloud-snow",
    ConditionCode.HAIL: "cloud-hail",
    ConditionCode.THUNDERSTORM: "cloud-lightning",
    ConditionCode.UNKNOWN: UNKNOWN_GLYPH,
    ConditionCode.ERROR: ALERT_GLYPH,
}

DESCRIPTIONS: dict[ConditionCode, str] = {
    ConditionCode.DRY: "Dry",
    ConditionCode.CLEAR_DAY: "Clear",
    ConditionCode.CLEAR_NIGHT: "Clear",
    ConditionCode.PARTLY_CLOUDY_DAY: "Partly Cloudy",
    ConditionCode.PARTLY_CLOUDY_NIGHT: "Partly Cloudy",
    ConditionCode.CLOUDY: "Cloudy",
    ConditionCode.FOG: "Foggy",
    ConditionCode.WIND: "Windy",
    ConditionCode.RAIN: "Rain",
    ConditionCode.DRIZZLE: "Drizzle",
    ConditionCode.SLEET: "Sleet",
    ConditionCode.SNOW: "Snow",
    ConditionCode.HAIL: "Hail",
    ConditionCode.THUNDERSTORM: "Thunderstorm",
    ConditionCode.UNKNOWN: "Unknown",
    ConditionCode.ERROR: "Data unavailable",
}

# (upper bound exclusive, colour), coldest first
TEMPERATURE_COLORS: list[tuple[float, str]] = [
    (-5, "#1A1F2C"),
    (0, "#9b87f5"),
    (5, "#0EA5E9"),
    (10, "#22D3EE"),
    (15, "#4ade80"),
    (20, "#FEF08A"),
    (25, "#FB923C"),
    (30, "#ef4444"),
]
HOTTEST_COLOR = "#991b1b"
NO_DATA_COLOR = "#475569"


def icon_for(code: ConditionCode | str | None) -> str:
    if not isinstance(code, ConditionCode):
        code = ConditionCode.parse(code)
    return ICONS.get(code, UNKNOWN_GLYPH)


def describe(code: ConditionCode | str | None) -> str:
    if not isinstance(code, ConditionCode):
        code = ConditionCode.parse(code)
    return DESCRIPTIONS.get(code, DESCRIPTIONS[ConditionCode.UNKNOWN])


def temperature_color(temperature: float | None) -> str:
    if temperature is None:
        return NO_DATA_COLOR
    for upper, color in TEMPERATURE_COLORS:
        if temperature < upper:
            return color
    return HOTTEST_COLOR


def precipitation_kind(condition_text: str | None) -> PrecipitationKind:
    """Snow styling for anything mentioning snow or sleet, rain otherwise."""
    text = (condition_text or "").lower()
    if "snow" in text or "sleet" in text:
        return PrecipitationKind.SNOW
    return PrecipitationKind.RAIN
