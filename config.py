import logging
import os
import sys


def _flag(name: str, default: bool = False) -> bool:
    value = (os.getenv(name) or "").strip().lower()
    if not value:
        return default
    return value in ("1", "true", "yes", "on")


class Config:
    """
    Runtime settings, read once from the environment.
    """

    # Simulated round-trip delays (ms) of the old mobile mock API, per operation
    LATENCY_MS = {
        "login": 1000,
        "register": 1000,
        "get_available_rides": 800,
        "get_ride": 500,
        "get_rides_for_driver": 800,
        "create_ride": 1000,
        "update_ride": 500,
        "delete_ride": 500,
        "create_booking": 1000,
        "get_bookings": 800,
        "update_booking": 500,
        "create_request": 1000,
        "get_requests": 800,
        "get_requests_for_passenger": 800,
        "update_request": 500,
        "get_current_location": 500,
        "get_route": 1000,
        "send_notification": 300,
    }

    def __init__(self):
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./uninoah.db")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.SIMULATE_LATENCY = _flag("SIMULATE_LATENCY")
        # Accepting a request books a seat without touching the ride unless this is on
        self.CASCADE_RESERVES_SEAT = _flag("CASCADE_RESERVES_SEAT")
        self.AVERAGE_SPEED_KMH = float(os.getenv("AVERAGE_SPEED_KMH", 40))
        self.PORT = int(os.getenv("PORT", 8000))

    def latency_seconds(self, operation: str) -> float:
        if not self.SIMULATE_LATENCY:
            return 0.0
        return self.LATENCY_MS.get(operation, 500) / 1000.0


config = Config()

_log_handler = None


def configure_logging(level: str = None):
    global _log_handler
    root = logging.getLogger()
    root.setLevel(level or config.LOG_LEVEL)
    if _log_handler is None:
        _log_handler = logging.StreamHandler(sys.stdout)
        _log_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
    if _log_handler not in root.handlers:
        root.addHandler(_log_handler)
    return _log_handler
