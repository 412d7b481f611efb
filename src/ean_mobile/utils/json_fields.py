"""Lenient accessors for loosely typed JSON documents returned by the EAN API.

Each helper is a pure function of ``(document, key)`` and substitutes a default
instead of raising when the key is missing, ``null`` or of an unexpected shape.
"""
from __future__ import annotations

import math
from typing import Any, List, Mapping, Optional


def _lookup(document: Optional[Mapping[str, Any]], key: str) -> Any:
    if not isinstance(document, Mapping):
        return None
    return document.get(key)


def opt_str(document: Optional[Mapping[str, Any]], key: str, default: str = "") -> str:
    value = _lookup(document, key)
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return default


def opt_int(document: Optional[Mapping[str, Any]], key: str, default: int = 0) -> int:
    value = _lookup(document, key)
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return default
        return int(number) if math.isfinite(number) else default
    return default


def opt_float(document: Optional[Mapping[str, Any]], key: str, default: float = 0.0) -> float:
    value = _lookup(document, key)
    if value is None or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def opt_bool(document: Optional[Mapping[str, Any]], key: str, default: bool = False) -> bool:
    value = _lookup(document, key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return default


def opt_list(document: Optional[Mapping[str, Any]], key: str) -> Optional[List[Any]]:
    """Return the list stored under ``key`` or ``None`` when it is not a list."""
    value = _lookup(document, key)
    if isinstance(value, list):
        return value
    return None


def opt_dict(document: Optional[Mapping[str, Any]], key: str) -> dict[str, Any]:
    value = _lookup(document, key)
    if isinstance(value, dict):
        return value
    return {}


def one_or_many(value: Any) -> List[Any]:
    """Normalise a field the API sends as a bare value when it holds a single item."""
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def without_attribute_prefix(document: Any) -> dict[str, Any]:
    """Return ``document`` with the ``@`` prefix the API puts on XML attributes removed."""
    if not isinstance(document, Mapping):
        return {}
    return {(key[1:] if key.startswith("@") else key): value for key, value in document.items()}
