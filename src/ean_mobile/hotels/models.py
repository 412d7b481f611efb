"""Immutable dataclasses for decoded reservation responses."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional, Tuple

from .enums import ConfirmationStatus, SupplierType


@dataclass(frozen=True, slots=True)
class Address:
    """Postal address of a property."""

    line1: str = ""
    city: str = ""
    state_province_code: str = ""
    country_code: str = ""
    postal_code: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "line1": self.line1,
            "city": self.city,
            "state_province_code": self.state_province_code,
            "country_code": self.country_code,
            "postal_code": self.postal_code,
        }


@dataclass(frozen=True, slots=True)
class CancellationPolicyEntry:
    """A single penalty window, anchored to the arrival date."""

    version_id: int
    cancel_time: time
    start_window_hours: int
    night_count: int
    amount: float
    percent: float
    currency_code: str
    time_zone_description: str
    deadline: datetime

    def to_dict(self) -> dict[str, object]:
        return {
            "version_id": self.version_id,
            "cancel_time": self.cancel_time.isoformat(),
            "start_window_hours": self.start_window_hours,
            "night_count": self.night_count,
            "amount": self.amount,
            "percent": self.percent,
            "currency_code": self.currency_code,
            "time_zone_description": self.time_zone_description,
            "deadline": self.deadline.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class CancellationPolicy:
    """Cancellation policy text plus its structured penalty windows."""

    text: str = ""
    entries: Tuple[CancellationPolicyEntry, ...] = ()

    @property
    def free_cancellation_deadline(self) -> Optional[datetime]:
        if not self.entries:
            return None
        return min(entry.deadline for entry in self.entries)

    def to_dict(self) -> dict[str, object]:
        deadline = self.free_cancellation_deadline
        return {
            "text": self.text,
            "entries": [entry.to_dict() for entry in self.entries],
            "free_cancellation_deadline": deadline.isoformat() if deadline else None,
        }


@dataclass(frozen=True, slots=True)
class NightlyRate:
    base_rate: float
    rate: float
    promo: bool = False

    def to_dict(self) -> dict[str, object]:
        return {"base_rate": self.base_rate, "rate": self.rate, "promo": self.promo}


@dataclass(frozen=True, slots=True)
class Surcharge:
    type: str
    amount: float

    def to_dict(self) -> dict[str, object]:
        return {"type": self.type, "amount": self.amount}


@dataclass(frozen=True, slots=True)
class ChargeableRate:
    """Amounts actually charged for the stay."""

    currency_code: str = ""
    total: float = 0.0
    average_rate: float = 0.0
    average_base_rate: float = 0.0
    nightly_rate_total: float = 0.0
    surcharge_total: float = 0.0
    nightly_rates: Tuple[NightlyRate, ...] = ()
    surcharges: Tuple[Surcharge, ...] = ()

    @property
    def nights(self) -> int:
        return len(self.nightly_rates)

    def to_dict(self) -> dict[str, object]:
        return {
            "currency_code": self.currency_code,
            "total": self.total,
            "average_rate": self.average_rate,
            "average_base_rate": self.average_base_rate,
            "nightly_rate_total": self.nightly_rate_total,
            "surcharge_total": self.surcharge_total,
            "nightly_rates": [nightly.to_dict() for nightly in self.nightly_rates],
            "surcharges": [surcharge.to_dict() for surcharge in self.surcharges],
        }


@dataclass(frozen=True, slots=True)
class RoomGroupEntry:
    """Occupancy details for one booked room."""

    rate_key: str = ""
    number_of_adults: int = 0
    number_of_children: int = 0
    first_name: str = ""
    last_name: str = ""
    bed_type_description: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "rate_key": self.rate_key,
            "number_of_adults": self.number_of_adults,
            "number_of_children": self.number_of_children,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "bed_type_description": self.bed_type_description,
        }


@dataclass(frozen=True, slots=True)
class Rate:
    """One entry of the reservation's rate information."""

    promo: bool = False
    non_refundable: bool = False
    rate_type: str = ""
    current_allotment: int = 0
    chargeable: ChargeableRate = field(default_factory=ChargeableRate)
    rooms: Tuple[RoomGroupEntry, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "promo": self.promo,
            "non_refundable": self.non_refundable,
            "rate_type": self.rate_type,
            "current_allotment": self.current_allotment,
            "chargeable": self.chargeable.to_dict(),
            "rooms": [room.to_dict() for room in self.rooms],
        }


@dataclass(frozen=True, slots=True)
class Reservation:
    """Everything the booking response tells us about a reservation."""

    itinerary_id: int
    confirmation_numbers: Tuple[int, ...]
    processed_with_confirmation: bool
    error_text: str
    hotel_reply_text: str
    supplier_type: SupplierType
    reservation_status_code: ConfirmationStatus
    existing_itinerary: bool
    check_in_instructions: str
    arrival_date: date
    departure_date: date
    hotel_name: str
    hotel_address: Address
    room_description: str
    non_refundable: bool
    rate_occupancy_per_room: int
    cancellation_policy: CancellationPolicy
    rate_informations: Tuple[Rate, ...] = ()

    def __post_init__(self) -> None:
        if not self.confirmation_numbers:
            raise ValueError("A reservation carries at least one confirmation number")

    def to_dict(self) -> dict[str, object]:
        return {
            "itinerary_id": self.itinerary_id,
            "confirmation_numbers": list(self.confirmation_numbers),
            "processed_with_confirmation": self.processed_with_confirmation,
            "error_text": self.error_text,
            "hotel_reply_text": self.hotel_reply_text,
            "supplier_type": self.supplier_type.name,
            "reservation_status_code": self.reservation_status_code.name,
            "existing_itinerary": self.existing_itinerary,
            "check_in_instructions": self.check_in_instructions,
            "arrival_date": self.arrival_date.isoformat(),
            "departure_date": self.departure_date.isoformat(),
            "nights": (self.departure_date - self.arrival_date).days,
            "hotel_name": self.hotel_name,
            "hotel_address": self.hotel_address.to_dict(),
            "room_description": self.room_description,
            "non_refundable": self.non_refundable,
            "rate_occupancy_per_room": self.rate_occupancy_per_room,
            "cancellation_policy": self.cancellation_policy.to_dict(),
            "rate_informations": [rate.to_dict() for rate in self.rate_informations],
        }
