"""AQI severity table and classification."""

from __future__ import annotations

import math
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict


class SeverityLevel(BaseModel):
    """One row of the severity table.

    ``threshold_max`` is inclusive; the last row of a table uses
    ``math.inf`` so every index has a row.
    """

    model_config = ConfigDict(frozen=True)

    threshold_max: float
    label: str
    pictogram: str
    advice: str


DEFAULT_SEVERITY_TABLE: tuple[SeverityLevel, ...] = (
    SeverityLevel(threshold_max=50, label="Good", pictogram="😊", advice="Perfect for outdoor activities!"),
    SeverityLevel(
        threshold_max=100,
        label="Moderate",
        pictogram="😐",
        advice="Unusually sensitive people should reduce exertion",
    ),
    SeverityLevel(
        threshold_max=150,
        label="Unhealthy for Sensitive Groups",
        pictogram="😷",
        advice="Sensitive groups should limit outdoor exertion",
    ),
    SeverityLevel(
        threshold_max=200,
        label="Unhealthy",
        pictogram="😨",
        advice="Everyone should limit outdoor exertion",
    ),
    SeverityLevel(threshold_max=300, label="Very Unhealthy", pictogram="🤢", advice="Avoid outdoor activities"),
    SeverityLevel(
        threshold_max=math.inf,
        label="Hazardous",
        pictogram="☠️",
        advice="Stay indoors with windows closed",
    ),
)


def classify(index: int, table: Sequence[SeverityLevel] = DEFAULT_SEVERITY_TABLE) -> SeverityLevel:
    """Return the first row whose ``threshold_max`` is at least *index*.

    Falls back to the last row when the table has no catch-all.

    Raises :class:`ValueError` for an empty table.
    """
    if not table:
        raise ValueError("severity table must not be empty")
    ordered = sorted(table, key=lambda row: row.threshold_max)
    for level in ordered:
        if level.threshold_max >= index:
            return level
    return ordered[-1]
