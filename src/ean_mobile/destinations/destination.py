"""Destination suggestion records."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from ean_mobile.utils.json_fields import opt_list, opt_str

logger = logging.getLogger(__name__)


class Category(str, Enum):
    CITY = "CITY"
    AIRPORT = "AIRPORT"
    LANDMARK = "LANDMARK"
    HOTEL = "HOTEL"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "Category":
        try:
            return cls((code or "").strip().upper())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Destination:
    """A place the user can search hotels in."""

    identifier: str
    name: str
    category: Category = Category.UNKNOWN
    category_localized: str = ""

    @property
    def is_city(self) -> bool:
        return self.category is Category.CITY

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> dict[str, object]:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "category": self.category.value,
            "category_localized": self.category_localized,
        }


def parse_destination(item: dict[str, Any]) -> Destination:
    return Destination(
        identifier=opt_str(item, "id"),
        name=opt_str(item, "name"),
        category=Category.from_code(opt_str(item, "category")),
        category_localized=opt_str(item, "categoryLocalized"),
    )


def parse_destinations(payload: Any) -> List[Destination]:
    """Decode a destination lookup response, either a bare array or ``{"items": [...]}``."""
    if isinstance(payload, list):
        items = payload
    else:
        items = opt_list(payload, "items") or []
    destinations: List[Destination] = []
    for item in items:
        if not isinstance(item, dict):
            logger.debug("Skipping malformed destination entry %r", item)
            continue
        destinations.append(parse_destination(item))
    return destinations
