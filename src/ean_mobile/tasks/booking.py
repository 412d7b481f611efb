"""Booking workflow: submit a reservation and surface failures to the user."""
from __future__ import annotations

import logging
from typing import Mapping, Protocol

from ean_mobile.hotels import DateFormatError, Reservation
from ean_mobile.services.errors import RedirectError, ServiceError

logger = logging.getLogger(__name__)

GENERIC_SERVICE_MESSAGE = (
    "We could not complete your reservation. Please review your booking details and try again."
)
REDIRECT_MESSAGE = (
    "Your connection redirected the booking request. If you are on a public Wi-Fi network, "
    "sign in to it and try again."
)
DATE_MESSAGE = (
    "Your reservation was received but its stay dates could not be read. "
    "Please contact customer support before booking again."
)


class ReservationBooker(Protocol):
    async def book_reservation(self, form: Mapping[str, str]) -> Reservation:
        ...


class BookingError(RuntimeError):
    """A booking failed; ``user_message`` is suitable for display."""

    def __init__(self, user_message: str) -> None:
        super().__init__(user_message)
        self.user_message = user_message


async def retrieve_reservation(client: ReservationBooker, form: Mapping[str, str]) -> Reservation:
    try:
        reservation = await client.book_reservation(form)
    except DateFormatError as exc:
        logger.error("Reservation response carried an unreadable %s: %r", exc.field, exc.value)
        raise BookingError(DATE_MESSAGE) from exc
    except ServiceError as exc:
        logger.warning("Booking rejected (category=%s handling=%s): %s", exc.category, exc.handling, exc)
        raise BookingError(exc.presentation_message or GENERIC_SERVICE_MESSAGE) from exc
    except RedirectError as exc:
        logger.warning("Booking request redirected: %s", exc)
        raise BookingError(REDIRECT_MESSAGE) from exc

    logger.info(
        "Reservation %s booked with confirmation(s) %s (%s)",
        reservation.itinerary_id,
        ", ".join(str(number) for number in reservation.confirmation_numbers),
        reservation.reservation_status_code.name,
    )
    return reservation
