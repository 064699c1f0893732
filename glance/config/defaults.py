"""Default display location and refresh tuning."""

DEFAULT_LOCATION: dict = {
    "name": "Berlin",
    "latitude": 52.52,
    "longitude": 13.405,
    "timezone": "Europe/Berlin",
}

DEFAULT_HOUR_TICKS: list[int] = [0, 6, 12, 18]
