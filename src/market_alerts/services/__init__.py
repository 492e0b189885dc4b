"""Service helpers used by the routers: password hashing and stream bodies."""
from market_alerts.services.passwords import hash_password, verify_password
from market_alerts.services.stream_handler import STREAM_HEADERS, stream_session

__all__ = [
    "STREAM_HEADERS",
    "hash_password",
    "stream_session",
    "verify_password",
]
