"""
Singleton Google Maps web-services client with rate limiting using aiolimiter.
"""
from typing import Any, Dict, Iterable, Optional

from aiohttp import ClientSession, ClientTimeout
from aiolimiter import AsyncLimiter
from loguru import logger

from billwise.config import (
    AUTOCOMPLETE_URL,
    CONCURRENCY,
    GEOCODE_URL,
    GOOGLE_MAPS_API_KEY,
    NEARBY_SEARCH_URL,
    PLACE_DETAILS_URL,
)

DETAIL_FIELDS = (
    "name", "rating", "user_ratings_total", "formatted_address", "formatted_phone_number",
    "website", "price_level", "opening_hours", "reviews", "geometry",
)


class PlacesAPIError(Exception):
    """Google Maps returned a non-OK status or an unusable response."""

    def __init__(self, endpoint: str, status: str, message: Optional[str] = None):
        self.endpoint = endpoint
        self.status = status
        detail = f": {message}" if message else ""
        super().__init__(f"Google {endpoint} error ({status}){detail}")


class PlacesClient:
    """
    Singleton client for geocoding and place lookups.
    Uses AsyncLimiter for rate limiting instead of semaphores.
    """
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not PlacesClient._initialized:
            if not GOOGLE_MAPS_API_KEY:
                raise ValueError("GOOGLE_MAPS_API_KEY must be set in environment or config")
            self.api_key = GOOGLE_MAPS_API_KEY
            # Token bucket: CONCURRENCY requests per second
            self.rate_limiter = AsyncLimiter(max_rate=CONCURRENCY, time_period=1.0)
            self._session: Optional[ClientSession] = None
            PlacesClient._initialized = True

    async def _get_session(self) -> ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=ClientTimeout(total=30))
        return self._session

    async def _get_json(
        self,
        endpoint: str,
        url: str,
        params: Dict[str, Any],
        allowed_statuses: Iterable[str] = ("OK",),
    ) -> Dict[str, Any]:
        """
        Send a GET request to a Google Maps endpoint and return the parsed JSON body.

        Args:
            endpoint: Short endpoint name used in errors and logs.
            url: Endpoint URL.
            params: Query parameters (the API key is added here).
            allowed_statuses: Response statuses treated as success.

        Returns:
            Parsed JSON response body.

        Raises:
            PlacesAPIError: If the response status is not in allowed_statuses.
        """
        async with self.rate_limiter:
            session = await self._get_session()
            query = dict(params)
            query["key"] = self.api_key
            try:
                async with session.get(url, params=query) as resp:
                    data = await resp.json()
            except Exception as e:
                logger.debug(f"⚠️ Google {endpoint} request failed: {e}")
                raise

        status = data.get("status", "UNKNOWN")
        if status not in allowed_statuses:
            raise PlacesAPIError(endpoint, status, data.get("error_message"))
        return data

    async def geocode(self, address: str) -> Dict[str, float]:
        """
        Resolve a free-text location to coordinates.

        Returns:
            Dict with "lat" and "lng" keys.
        """
        data = await self._get_json("geocode", GEOCODE_URL, {"address": address})
        results = data.get("results") or []
        if not results:
            raise PlacesAPIError("geocode", "ZERO_RESULTS", f"no match for '{address}'")
        return results[0]["geometry"]["location"]

    async def nearby_search(
        self,
        lat: float,
        lng: float,
        radius: int,
        place_type: str,
        keyword: str,
    ) -> list:
        """Return raw nearby-search results (possibly empty)."""
        data = await self._get_json(
            "nearby search",
            NEARBY_SEARCH_URL,
            {
                "location": f"{lat},{lng}",
                "radius": radius,
                "type": place_type,
                "keyword": keyword,
            },
            allowed_statuses=("OK", "ZERO_RESULTS"),
        )
        return data.get("results") or []

    async def place_details(self, place_id: str) -> Dict[str, Any]:
        """Return the detail record for one place."""
        data = await self._get_json(
            "place details",
            PLACE_DETAILS_URL,
            {"place_id": place_id, "fields": ",".join(DETAIL_FIELDS)},
        )
        return data.get("result") or {}

    async def autocomplete(self, text: str) -> list:
        """Return raw city autocomplete predictions (possibly empty)."""
        data = await self._get_json(
            "autocomplete",
            AUTOCOMPLETE_URL,
            {"input": text, "types": "(cities)"},
            allowed_statuses=("OK", "ZERO_RESULTS"),
        )
        return data.get("predictions") or []

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
