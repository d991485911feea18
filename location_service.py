import logging
import math

from config import config
from schemas import Coords
from stores import simulate_latency

logger = logging.getLogger(__name__)

class LocationService:
    """
    Stand-in for GPS and routing.

    There is no geocoding backend: the current location is a fixed campus fix and
    routes are straight lines between the two points.
    """

    # University of Hargeisa main gate
    CAMPUS_LAT = 9.5632
    CAMPUS_LNG = 44.0672
    CAMPUS_ACCURACY_M = 10

    def __init__(self, average_speed_kmh: float = None):
        self.average_speed_kmh = average_speed_kmh or config.AVERAGE_SPEED_KMH

    def calculate_distance(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """
        Calculates Haversine distance between two coordinates in kilometers.
        """
        R = 6371  # Earth radius in km
        dlat = math.radians(lat2 - lat1)
        dlon = math.radians(lon2 - lon1)
        a = (math.sin(dlat / 2) * math.sin(dlat / 2) +
             math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) *
             math.sin(dlon / 2) * math.sin(dlon / 2))
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return R * c

    async def get_current_location(self) -> dict:
        await simulate_latency("get_current_location")
        return {
            "lat": self.CAMPUS_LAT,
            "lng": self.CAMPUS_LNG,
            "accuracy": self.CAMPUS_ACCURACY_M,
        }

    async def get_route(self, origin: Coords, destination: Coords) -> dict:
        await simulate_latency("get_route")
        distance = self.calculate_distance(origin.lat, origin.lng, destination.lat, destination.lng)
        duration = distance / self.average_speed_kmh * 60
        logger.debug("Route %s -> %s: %.2f km", origin, destination, distance)
        return {
            "distance": round(distance, 2),
            "duration": round(duration, 1),
            "coordinates": [origin, destination],
        }
