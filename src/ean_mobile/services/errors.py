"""Errors raised by the API clients."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from ean_mobile.utils.json_fields import opt_dict, opt_int, opt_str


class ServiceError(RuntimeError):
    """The remote service answered with a structured business error (``EanWsError``)."""

    def __init__(
        self,
        message: str,
        *,
        category: str = "",
        handling: str = "",
        presentation_message: str = "",
        itinerary_id: int = 0,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.handling = handling
        self.presentation_message = presentation_message
        self.itinerary_id = itinerary_id
        self.status = status

    @classmethod
    def from_payload(cls, error: Mapping[str, Any]) -> "ServiceError":
        verbose = opt_str(error, "verboseMessage")
        presentation = opt_str(error, "presentationMessage")
        return cls(
            verbose or presentation or "The API call returned an error",
            category=opt_str(error, "category"),
            handling=opt_str(error, "handling"),
            presentation_message=presentation,
            itinerary_id=opt_int(error, "itineraryId"),
        )

    @property
    def is_recoverable(self) -> bool:
        return self.handling.upper() == "RECOVERABLE"


class RedirectError(RuntimeError):
    """The API call was unexpectedly redirected, usually by a captive portal."""

    def __init__(self, location: str, status: Optional[int] = None) -> None:
        super().__init__(f"Request unexpectedly redirected to {location or '<unknown>'}")
        self.location = location
        self.status = status


def raise_for_ws_error(body: Mapping[str, Any]) -> None:
    """Raise :class:`ServiceError` when ``body`` carries an ``EanWsError`` element."""
    error = opt_dict(body, "EanWsError")
    if error:
        raise ServiceError.from_payload(error)
