import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from billwise.config import MAX_PLACES
from billwise.clients import PlacesAPIError, PlacesClient
from billwise.clients import places_client as places_client_module
from billwise.scorers import score_candidate
from billwise.places_fetcher import (
    autocomplete_locations,
    build_candidate,
    fetch_candidates,
    resolve_place_type,
)


def nearby_result(place_id: str, lat: float = 40.001, lng: float = -75.0) -> dict:
    return {
        "place_id": place_id,
        "name": f"Place {place_id}",
        "types": ["meal_takeaway", "food"],
        "geometry": {"location": {"lat": lat, "lng": lng}},
    }


def details_result(place_id: str) -> dict:
    return {
        "name": f"Place {place_id} Detailed",
        "rating": 4.5,
        "user_ratings_total": 120,
        "price_level": 2,
        "opening_hours": {"open_now": True},
        "formatted_address": "1 Main St",
        "reviews": [
            {"text": "Friendly staff", "rating": 5},
            {"text": "Ok", "rating": 3},
            {"text": "Slow", "rating": 2},
            {"text": "Fourth", "rating": 4},
        ],
    }


@pytest.mark.parametrize(
    "search_type,expected",
    [("restaurant", "restaurant"), ("coffee", "cafe"), ("hotel", "lodging"), ("Gym", "gym"), ("bakery", "establishment")],
)
def test_resolve_place_type(search_type, expected):
    assert resolve_place_type(search_type) == expected


def test_build_candidate_maps_google_fields():
    candidate = build_candidate(nearby_result("a"), details_result("a"), "restaurant")

    assert candidate.id == "a"
    assert candidate.name == "Place a Detailed"
    assert candidate.type == "meal takeaway"
    assert candidate.location.lat == 40.001
    assert candidate.rating == 4.5
    assert candidate.review_count == 120
    assert candidate.price_level == 2
    assert candidate.open_now is True
    assert [r.text for r in candidate.reviews] == ["Friendly staff", "Ok", "Slow", "Fourth"]
    assert [r.text for r in candidate.top_reviews] == ["Friendly staff", "Ok", "Slow"]


def test_build_candidate_defaults():
    place = {"place_id": "b", "geometry": {"location": {"lat": 1.0, "lng": 2.0}}}
    details = {"name": "Bare", "reviews": [{"text": "nice", "rating": 5}]}

    candidate = build_candidate(place, details, "service")

    assert candidate.type == "service"
    assert candidate.rating is None
    assert candidate.price_level is None
    assert candidate.open_now is None
    assert candidate.review_count == 1


@pytest.mark.asyncio
async def test_fetch_candidates_limits_and_drops_failures():
    results = [nearby_result(str(i)) for i in range(MAX_PLACES + 3)]

    async def fake_details(place_id):
        if place_id == "1":
            raise PlacesAPIError("place details", "NOT_FOUND")
        return details_result(place_id)

    with patch("billwise.places_fetcher.PlacesClient") as mock_places:
        instance = MagicMock()
        instance.geocode = AsyncMock(return_value={"lat": 40.0, "lng": -75.0})
        instance.nearby_search = AsyncMock(return_value=results)
        instance.place_details = AsyncMock(side_effect=fake_details)
        mock_places.return_value = instance

        origin, candidates = await fetch_candidates("", "Philadelphia, PA", "coffee")

    assert (origin.lat, origin.lon) == (40.0, -75.0)
    assert [c.id for c in candidates] == [str(i) for i in range(MAX_PLACES) if i != 1]
    assert instance.place_details.await_count == MAX_PLACES
    instance.nearby_search.assert_awaited_once_with(40.0, -75.0, 5000, "cafe", "coffee")


@pytest.mark.asyncio
async def test_fetch_candidates_propagates_geocode_failure():
    with patch("billwise.places_fetcher.PlacesClient") as mock_places:
        instance = MagicMock()
        instance.geocode = AsyncMock(side_effect=PlacesAPIError("geocode", "ZERO_RESULTS"))
        mock_places.return_value = instance

        with pytest.raises(PlacesAPIError):
            await fetch_candidates("pizza", "Nowhere", "restaurant")


@pytest.mark.asyncio
async def test_autocomplete_locations():
    predictions = [{"description": "Paris, France", "place_id": "p1", "structured_formatting": {}}]
    with patch("billwise.places_fetcher.PlacesClient") as mock_places:
        instance = MagicMock()
        instance.autocomplete = AsyncMock(return_value=predictions)
        mock_places.return_value = instance

        suggestions = await autocomplete_locations("Par")

    assert suggestions == [{"description": "Paris, France", "place_id": "p1", "structured_formatting": {}}]


def test_places_client_requires_api_key(reset_places_client):
    with patch.object(places_client_module, "GOOGLE_MAPS_API_KEY", None):
        with pytest.raises(ValueError):
            PlacesClient()


def test_places_client_is_singleton(reset_places_client):
    with patch.object(places_client_module, "GOOGLE_MAPS_API_KEY", "test-key"):
        assert PlacesClient() is PlacesClient()


@pytest.mark.asyncio
async def test_places_client_raises_on_error_status(reset_places_client):
    with patch.object(places_client_module, "GOOGLE_MAPS_API_KEY", "test-key"):
        client = PlacesClient()

    response = MagicMock()
    response.json = AsyncMock(return_value={"status": "REQUEST_DENIED", "error_message": "bad key"})
    request_ctx = MagicMock()
    request_ctx.__aenter__ = AsyncMock(return_value=response)
    request_ctx.__aexit__ = AsyncMock(return_value=False)
    session = MagicMock()
    session.get = MagicMock(return_value=request_ctx)

    with patch.object(client, "_get_session", AsyncMock(return_value=session)):
        with pytest.raises(PlacesAPIError) as excinfo:
            await client.geocode("Philadelphia")

    assert excinfo.value.status == "REQUEST_DENIED"
    assert session.get.call_args.kwargs["params"]["key"] == "test-key"


def test_service_bonus_uses_reviews_beyond_display_limit():
    details = {
        "name": "Late Review Cafe",
        "rating": 4.0,
        "user_ratings_total": 10,
        "reviews": [
            {"text": "Nice view", "rating": 5},
            {"text": "Okay coffee", "rating": 4},
            {"text": "Too loud", "rating": 2},
            {"text": "Average", "rating": 3},
            {"text": "friendly staff", "rating": 5},
        ],
    }
    candidate = build_candidate(nearby_result("late", lat=40.0), details, "coffee")

    scored = score_candidate(candidate, 40.0, -75.0)

    assert len(candidate.top_reviews) == 3
    assert scored.service_score == 85


@pytest.mark.asyncio
async def test_autocomplete_locations_without_structured_formatting():
    with patch("billwise.places_fetcher.PlacesClient") as mock_places:
        instance = MagicMock()
        instance.autocomplete = AsyncMock(return_value=[{"description": "Lyon, France", "place_id": "p2"}])
        mock_places.return_value = instance

        suggestions = await autocomplete_locations("Ly")

    assert suggestions == [{"description": "Lyon, France", "place_id": "p2"}]
