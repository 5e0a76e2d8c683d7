"""Great-circle distance helpers."""
import math

EARTH_RADIUS_KM = 6371.0


def deg2rad(deg: float) -> float:
    return deg * (math.pi / 180)


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine distance between two latitude/longitude points.

    Args:
        lat1 (float): Latitude of the first point, in degrees.
        lon1 (float): Longitude of the first point, in degrees.
        lat2 (float): Latitude of the second point, in degrees.
        lon2 (float): Longitude of the second point, in degrees.

    Returns:
        float: Distance in kilometres, never negative.
    """
    d_lat = deg2rad(lat2 - lat1)
    d_lon = deg2rad(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(deg2rad(lat1)) * math.cos(deg2rad(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a slightly outside [0, 1] for antipodal points
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return max(EARTH_RADIUS_KM * c, 0.0)
