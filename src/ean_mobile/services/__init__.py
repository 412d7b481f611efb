"""Service clients for the EAN hotel API."""

from .ean_client import EanClient, parse_reservation_response
from .errors import RedirectError, ServiceError

__all__ = [
    "EanClient",
    "RedirectError",
    "ServiceError",
    "parse_reservation_response",
]
