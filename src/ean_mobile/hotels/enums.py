"""Code-backed enumerations found in reservation responses."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class _CodedEnum(str, Enum):
    @classmethod
    def from_code(cls, code: Optional[str]):
        """Resolve ``code`` to a member, falling back to ``UNKNOWN``."""
        normalized = (code or "").strip().upper()
        for member in cls:
            if member.value and member.value == normalized:
                return member
        return cls.UNKNOWN  # type: ignore[attr-defined]


class SupplierType(_CodedEnum):
    """Booking system that processed the reservation."""

    EXPEDIA_COLLECT = "E"
    SABRE = "S"
    VENERE = "V"
    WORLDSPAN = "W"
    UNKNOWN = ""

    @property
    def is_hotel_collect(self) -> bool:
        return self in (SupplierType.SABRE, SupplierType.VENERE, SupplierType.WORLDSPAN)


class ConfirmationStatus(_CodedEnum):
    """Status of the booking in the supplier system at the time of booking."""

    CONFIRMED = "CF"
    UNCONFIRMED = "UC"
    PENDING_SUPPLIER = "PS"
    CANCELLED = "CX"
    DELETED = "DT"
    ERROR = "ER"
    UNKNOWN = ""

    @property
    def is_confirmed(self) -> bool:
        return self is ConfirmationStatus.CONFIRMED
