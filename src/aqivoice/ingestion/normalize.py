"""Normalization helpers.

Centralizes defensive parsing and placeholder handling.
"""

from __future__ import annotations

import math
import time
from typing import Any


def now_ms() -> int:
    """Current epoch timestamp in milliseconds.

    Stamps fetched readings and measures cache ages, so both sides use this
    one clock.
    """
    return int(time.time() * 1000)


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip() in {"", "-", "--"}:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None or math.isinf(parsed):
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def first_present(mapping: Any, *keys: str) -> Any:
    """Return the first value in *mapping* under *keys* that is not ``None``."""
    if not isinstance(mapping, dict):
        return None
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return None


def normalize_timestamp_ms(value: Any) -> int | None:
    """Normalize epoch timestamps to milliseconds.

    - Empty/missing -> None
    - <= 0 -> None
    - Seconds (< 1e11) -> milliseconds
    """

    ts = safe_float(value)
    if ts is None or ts <= 0 or math.isinf(ts):
        return None
    if ts < 1e11:
        ts *= 1000.0
    return int(ts)
