import asyncio
import time
from typing import Any, Dict, List, Optional, Tuple
from loguru import logger
from billwise.config import DEFAULT_RADIUS_M, MAX_PLACES
from billwise.models import GeoPoint, PlaceCandidate, Review
from billwise.clients import PlacesClient

# Search types offered to users mapped onto Google place types
PLACE_TYPES = {
    "restaurant": "restaurant",
    "gym": "gym",
    "coffee": "cafe",
    "hotel": "lodging",
    "service": "establishment",
}
DEFAULT_PLACE_TYPE = "establishment"


def resolve_place_type(search_type: str) -> str:
    return PLACE_TYPES.get((search_type or "").lower(), DEFAULT_PLACE_TYPE)


def _parse_reviews(raw_reviews: Optional[List[Dict[str, Any]]]) -> List[Review]:
    reviews = []
    for raw in raw_reviews or []:
        reviews.append(Review(text=raw.get("text") or "", rating=raw.get("rating")))
    return reviews


def build_candidate(place: Dict[str, Any], details: Dict[str, Any], search_type: str) -> PlaceCandidate:
    """
    Merge a nearby-search result with its detail record into a PlaceCandidate.

    Args:
        place (Dict[str, Any]): Raw nearby-search result.
        details (Dict[str, Any]): Raw place-details result for the same place.
        search_type (str): Search type requested by the user, used when Google gives no type.

    Returns:
        PlaceCandidate: Candidate ready for scoring.
    """
    types = place.get("types") or []
    place_type = types[0].replace("_", " ") if types else search_type

    geometry = place.get("geometry") or details.get("geometry") or {}
    loc = geometry.get("location") or {}

    raw_reviews = details.get("reviews") or []
    review_count = details.get("user_ratings_total")
    if review_count is None:
        review_count = place.get("user_ratings_total", len(raw_reviews))

    return PlaceCandidate(
        id=place.get("place_id", ""),
        name=details.get("name") or place.get("name", ""),
        type=place_type,
        location=GeoPoint(lat=float(loc.get("lat", 0.0)), lon=float(loc.get("lng", 0.0))),
        rating=details.get("rating"),
        review_count=int(review_count or 0),
        price_level=details.get("price_level"),
        open_now=(details.get("opening_hours") or {}).get("open_now"),
        reviews=_parse_reviews(raw_reviews),
        address=details.get("formatted_address"),
        phone=details.get("formatted_phone_number"),
        website=details.get("website"),
    )


async def _fetch_details_one(places_client: PlacesClient, place: Dict[str, Any], search_type: str) -> Optional[PlaceCandidate]:
    """
    Fetch details for a single nearby-search result.

    Returns:
        Optional[PlaceCandidate]: The candidate, or None if the lookup failed.
    """
    place_id = place.get("place_id")
    if not place_id:
        return None

    start = time.perf_counter()
    try:
        details = await places_client.place_details(place_id)
        candidate = build_candidate(place, details, search_type)
        logger.debug(f"🏁 Details for {place_id} in {time.perf_counter() - start:.2f}s → {candidate.name}")
        return candidate
    except asyncio.TimeoutError:
        logger.debug(f"⏱️ TIMEOUT fetching details for {place_id}")
        return None
    except Exception as e:
        logger.debug(f"⚠️ ERROR fetching details for {place_id}: {e}")
        return None


async def fetch_candidates(
    query: str,
    location: str,
    search_type: str,
    radius: int = DEFAULT_RADIUS_M,
) -> Tuple[GeoPoint, List[PlaceCandidate]]:
    """
    Look up nearby places matching a query around a free-text location.

    Args:
        query (str): Search keyword; the search type is used when empty.
        location (str): City or address to search around.
        search_type (str): One of restaurant, gym, coffee, hotel, service.
        radius (int): Search radius in metres.

    Returns:
        Tuple[GeoPoint, List[PlaceCandidate]]: The geocoded search origin and up to
        MAX_PLACES candidates, in search-result order. Places whose details could
        not be fetched are left out.

    Raises:
        PlacesAPIError: If geocoding or the nearby search fails.
    """
    places_client = PlacesClient()

    coords = await places_client.geocode(location)
    origin = GeoPoint(lat=coords["lat"], lon=coords["lng"])

    keyword = (query or "").strip() or search_type
    results = await places_client.nearby_search(
        origin.lat, origin.lon, radius, resolve_place_type(search_type), keyword
    )
    logger.debug(f"Nearby search for '{keyword}' near '{location}' returned {len(results)} results")

    detailed = await asyncio.gather(
        *[_fetch_details_one(places_client, place, search_type) for place in results[:MAX_PLACES]]
    )
    return origin, [c for c in detailed if c is not None]


async def autocomplete_locations(text: str) -> List[Dict[str, Any]]:
    """Suggest city names for a partially typed location."""
    places_client = PlacesClient()
    predictions = await places_client.autocomplete(text)
    suggestions = []
    for p in predictions:
        suggestion = {"description": p.get("description", ""), "place_id": p.get("place_id", "")}
        if p.get("structured_formatting") is not None:
            suggestion["structured_formatting"] = p["structured_formatting"]
        suggestions.append(suggestion)
    return suggestions
