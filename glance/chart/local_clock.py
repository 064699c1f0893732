"""Location-local time conversion shared by the fetcher, enrichment and bucketing.

Every day/hour boundary in the pipeline goes through one LocalClock so that
repeated calls with the same instant always agree.
"""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

# Fixed labels so grouping never depends on the process locale.
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

DAYTIME_START_HOUR = 6
DAYTIME_END_HOUR = 20

Instant = datetime | str


def parse_instant(value: Instant) -> datetime:
    """Parse an ISO timestamp or datetime into an aware UTC datetime.

    Naive values are taken to be UTC. Raises ValueError on garbage.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


class LocalClock:
    def __init__(self, timezone: str):
        self.timezone = timezone
        self._tz = ZoneInfo(timezone)

    def to_local(self, instant: Instant) -> datetime:
        return parse_instant(instant).astimezone(self._tz)

    def local_hour(self, instant: Instant) -> int:
        return self.to_local(instant).hour

    def local_date(self, instant: Instant) -> date:
        return self.to_local(instant).date()

    def local_day_label(self, instant: Instant) -> str:
        return WEEKDAY_LABELS[self.to_local(instant).weekday()]

    def is_daytime(self, instant: Instant) -> bool:
        return DAYTIME_START_HOUR <= self.local_hour(instant) < DAYTIME_END_HOUR

    def format_time(self, instant: Instant, fmt: str = "%H:%M") -> str:
        return self.to_local(instant).strftime(fmt)

    def __repr__(self) -> str:
        return f"LocalClock({self.timezone!r})"
