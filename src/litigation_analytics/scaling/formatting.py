from __future__ import annotations

import math
from typing import Iterable

AVERAGE_LABEL = "Average"
AVERAGE_TOLERANCE_PERCENT = 1.0


def to_relative_percent(ratio: float | None) -> float | None:
    """Map a comparative ratio (1.0 = baseline) to a signed percent offset."""
    if ratio is None:
        return None
    value = float(ratio)
    if math.isnan(value):
        return None
    return (value - 1.0) * 100.0


def to_relative_percents(ratios: Iterable[float | None]) -> list[float | None]:
    return [to_relative_percent(ratio) for ratio in ratios]


def format_relative_percent(percent: float | None) -> str:
    if percent is None:
        return ""
    if abs(percent) < AVERAGE_TOLERANCE_PERCENT:
        return AVERAGE_LABEL
    direction = "above" if percent > 0 else "below"
    return f"{abs(percent):.0f}% {direction} average"


def format_relative_to_baseline(ratio: float | None) -> str:
    return format_relative_percent(to_relative_percent(ratio))


def format_number_abbreviated(value: float | None) -> str:
    if value is None:
        return ""
    if abs(value) >= 1000:
        return f"{value / 1000:.1f}K"
    return f"{value:.0f}"
