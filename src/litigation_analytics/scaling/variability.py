from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from litigation_analytics.series import SearchResults

VariabilityCategory = Literal["extreme", "high", "mild", "low"]

DEFAULT_DISPLAY_TYPE = "total_cases"

_CATEGORY_LABELS: dict[str, str] = {
    "extreme": "Extreme Variability",
    "high": "High Variability",
    "mild": "Mild Variability",
    "low": "Low Variability",
}

_SENTENCE_DISPLAY_TYPES: dict[str, str] = {
    "Fine": "fines",
    "Probation": "probation",
    "Incarceration": "incarceration",
    "License Suspension": "license_suspensions",
}


class VariabilityBand(BaseModel):
    """Case-count cut points and fill curve for one variability meter."""

    model_config = ConfigDict(frozen=True)

    thresholds: tuple[float, float, float, float, float]
    percentages: tuple[float, float, float, float, float] = (0.0, 20.0, 50.0, 80.0, 100.0)
    lambdas: tuple[float, float, float, float] = Field(default=(3.0, 3.0, 4.0, 100.0))

    @model_validator(mode="after")
    def _check_monotonic(self) -> VariabilityBand:
        if any(b < a for a, b in zip(self.thresholds, self.thresholds[1:])):
            raise ValueError("variability thresholds must be non-decreasing")
        if any(b < a for a, b in zip(self.percentages, self.percentages[1:])):
            raise ValueError("variability percentages must be non-decreasing")
        return self


def _band(t1: float, t2: float, t3: float, t_max: float) -> VariabilityBand:
    return VariabilityBand(thresholds=(0.0, t1, t2, t3, t_max))


def default_variability_bands() -> dict[str, VariabilityBand]:
    return {
        "total_cases": _band(20, 100, 500, 4_000_000),
        "bench_trials": _band(10, 75, 150, 1_000_000),
        "jury_trials": _band(10, 75, 150, 1_000_000),
        "license_suspensions": _band(50, 200, 500, 500_000),
        "fines": _band(50, 200, 500, 500_000),
        "probation": _band(50, 200, 500, 500_000),
        "incarceration": _band(50, 200, 500, 500_000),
        "cash_bails": _band(50, 200, 500, 500_000),
    }


@dataclass(frozen=True, slots=True)
class VariabilityInfo:
    display_type: str
    count: float
    category: VariabilityCategory
    label: str
    bar_width: float
    marker_percentages: tuple[float, float, float]

    def to_dict(self) -> dict[str, object]:
        return {
            "displayType": self.display_type,
            "count": self.count,
            "category": self.category,
            "label": self.label,
            "barWidth": self.bar_width,
            "markerPercentages": list(self.marker_percentages),
        }


def _resolve_band(
    display_type: str,
    bands: Mapping[str, VariabilityBand] | None,
) -> VariabilityBand:
    table = bands if bands is not None else default_variability_bands()
    band = table.get(display_type) or table.get(DEFAULT_DISPLAY_TYPE)
    if band is None:
        return default_variability_bands()[DEFAULT_DISPLAY_TYPE]
    return band


def classify_variability(
    count: float,
    display_type: str = DEFAULT_DISPLAY_TYPE,
    bands: Mapping[str, VariabilityBand] | None = None,
) -> VariabilityCategory:
    _, t1, t2, t3, _ = _resolve_band(display_type, bands).thresholds
    if count < t1:
        return "extreme"
    if count < t2:
        return "high"
    if count < t3:
        return "mild"
    return "low"


def variability_bar_width(
    count: float,
    display_type: str = DEFAULT_DISPLAY_TYPE,
    bands: Mapping[str, VariabilityBand] | None = None,
) -> float:
    """Fill percentage of the meter; each segment saturates exponentially."""
    count = max(float(count), 0.0)
    band = _resolve_band(display_type, bands)
    thresholds = band.thresholds
    percentages = band.percentages

    segment = 0
    while segment < len(thresholds) - 1 and count > thresholds[segment + 1]:
        segment += 1
    if segment == len(thresholds) - 1:
        return float(percentages[segment])

    start, end = thresholds[segment], thresholds[segment + 1]
    span = end - start
    position = (count - start) / span if span > 0 else 0.0
    fill = 1.0 - math.exp(-band.lambdas[segment] * position)
    low, high = percentages[segment], percentages[segment + 1]
    return float(low + (high - low) * fill)


def describe_variability(
    count: float,
    display_type: str = DEFAULT_DISPLAY_TYPE,
    bands: Mapping[str, VariabilityBand] | None = None,
) -> VariabilityInfo:
    band = _resolve_band(display_type, bands)
    category = classify_variability(count, display_type, bands)
    return VariabilityInfo(
        display_type=display_type,
        count=count,
        category=category,
        label=_CATEGORY_LABELS[category],
        bar_width=variability_bar_width(count, display_type, bands),
        marker_percentages=(band.percentages[1], band.percentages[2], band.percentages[3]),
    )


def resolve_display_type(
    tab: str,
    *,
    trial_type: str = "all",
    sentence_mode: str = "frequency",
    sentence_type: str | None = None,
    bail_mode: str = "frequency",
) -> str:
    if tab == "dispositions":
        if trial_type == "bench":
            return "bench_trials"
        if trial_type == "jury":
            return "jury_trials"
        return DEFAULT_DISPLAY_TYPE
    if tab == "sentences" and sentence_mode == "severity":
        return _SENTENCE_DISPLAY_TYPES.get(sentence_type or "", DEFAULT_DISPLAY_TYPE)
    if tab == "bail" and bail_mode == "severity":
        return "cash_bails"
    return DEFAULT_DISPLAY_TYPE


def variability_count(
    results: SearchResults,
    tab: str,
    *,
    trial_type: str = "all",
    sentence_mode: str = "frequency",
    sentence_type: str | None = None,
    bail_mode: str = "frequency",
    cash_bail_type: str = "Cash Bail",
) -> float:
    """Number of cases behind the chart currently on screen."""
    if tab == "dispositions" and trial_type in ("bench", "jury"):
        return float(
            sum(getattr(item.trial_type_counts, trial_type) for item in results.dispositions)
        )
    if tab == "sentences" and sentence_mode == "severity":
        match = next((item for item in results.sentences if item.type == sentence_type), None)
        return float(match.count) if match else 0.0
    if tab == "bail" and bail_mode == "severity":
        match = next((item for item in results.bail if item.type == cash_bail_type), None)
        return float(match.count) if match else 0.0
    return float(results.total_cases)
