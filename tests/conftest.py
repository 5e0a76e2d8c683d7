import pytest

from billwise.clients import places_client as places_client_module


@pytest.fixture
def reset_places_client():
    """Reset PlacesClient singleton state around a test."""
    places_client_module.PlacesClient._instance = None
    places_client_module.PlacesClient._initialized = False
    yield
    places_client_module.PlacesClient._instance = None
    places_client_module.PlacesClient._initialized = False
