"""Client singletons for external API interactions."""
from billwise.clients.places_client import PlacesAPIError, PlacesClient

__all__ = ["PlacesClient", "PlacesAPIError"]
