"""Staleness policy for cached readings and pushed coordinates.

Pure functions; the cache and the resolver decide what to do with the
result.
"""

from __future__ import annotations

from enum import StrEnum


class Staleness(StrEnum):
    FRESH = "fresh"
    STALE = "stale"
    EXPIRED = "expired"


def classify_age(age_seconds: float, *, recent: float, refresh: float) -> Staleness:
    """Bucket a cached reading by age.

    - ``age <= recent``: reuse verbatim.
    - ``recent < age <= refresh``: reuse, annotated with its age.
    - older: fetch again.
    """
    if age_seconds <= recent:
        return Staleness.FRESH
    if age_seconds <= refresh:
        return Staleness.STALE
    return Staleness.EXPIRED


def is_fix_fresh(age_seconds: float, *, max_age: float) -> bool:
    """Whether a pushed device coordinate is recent enough to trust.

    Negative ages (clock went backwards) are treated as fresh.
    """
    return age_seconds <= max_age
