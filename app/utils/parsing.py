"""
Helpers for decoding loosely-typed upstream JSON values
"""
import re
from typing import Any, Optional


def parse_int(value: Any) -> Optional[int]:
    """
    Decode an integer from an upstream value.

    Accepts ints, integral floats and decimal strings. Booleans are
    rejected even though they are ints in Python.

    Args:
        value: Raw JSON value

    Returns:
        Integer or None if the value is not decodable
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if re.fullmatch(r"-?[0-9]+", text):
            return int(text)
    return None


def parse_price(value: Any) -> Optional[int]:
    """Return a positive integer price or None"""
    price = parse_int(value)
    if price is None or price <= 0:
        return None
    return price


def first_present(record: dict, *keys: str) -> Any:
    """Return the value of the first key present with a non-null value"""
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None
