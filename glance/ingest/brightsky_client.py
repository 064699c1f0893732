"""BrightSky (DWD open data) API client.

No retries: a failed request surfaces as an exception and the caller
substitutes fallback data until the next refresh.
"""

import logging
from datetime import date

import httpx

logger = logging.getLogger(__name__)

BRIGHTSKY_BASE_URL = "https://api.brightsky.dev"
DEFAULT_USER_AGENT = "weatherglance/0.1.0"


class BrightSkyClient:
    def __init__(
        self,
        base_url: str = BRIGHTSKY_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 15.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "BrightSkyClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_current_weather(self, lat: float, lon: float, tz: str) -> dict:
        """Fetch the latest observation-based conditions near a coordinate."""
        return await self._get_json(
            "/current_weather", {"lat": lat, "lon": lon, "tz": tz}
        )

    async def get_weather(
        self,
        lat: float,
        lon: float,
        tz: str,
        first_date: date,
        last_date: date,
    ) -> dict:
        """Fetch the hourly series (observations + forecast) between two dates."""
        return await self._get_json(
            "/weather",
            {
                "lat": lat,
                "lon": lon,
                "tz": tz,
                "date": first_date.isoformat(),
                "last_date": last_date.isoformat(),
            },
        )

    async def _get_json(self, path: str, params: dict) -> dict:
        client = await self._get_client()
        resp = await client.get(path, params=params)
        logger.debug("BrightSky %s -> %d", resp.url, resp.status_code)
        resp.raise_for_status()
        return resp.json()
