"""Reservation domain models and parsing helpers."""

from .dates import DateFormatError, parse_api_date
from .enums import ConfirmationStatus, SupplierType
from .models import (
    Address,
    CancellationPolicy,
    CancellationPolicyEntry,
    ChargeableRate,
    NightlyRate,
    Rate,
    Reservation,
    RoomGroupEntry,
    Surcharge,
)
from .normalizer import (
    build_address,
    build_cancellation_policy,
    build_rate_informations,
    parse_reservation,
)

__all__ = [
    "Address",
    "CancellationPolicy",
    "CancellationPolicyEntry",
    "ChargeableRate",
    "ConfirmationStatus",
    "DateFormatError",
    "NightlyRate",
    "Rate",
    "Reservation",
    "RoomGroupEntry",
    "SupplierType",
    "Surcharge",
    "build_address",
    "build_cancellation_policy",
    "build_rate_informations",
    "parse_api_date",
    "parse_reservation",
]
