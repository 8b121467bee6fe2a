from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Annotated, Iterable, Literal, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

MIN_BAR_FRACTION = 0.05
MIN_AXIS_RANGE = 0.25
COMPARATIVE_THRESHOLD_SCALE = 100.0


class FixedDomain(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["fixed"] = "fixed"
    min: float = 0.0
    max: float = 100.0

    @model_validator(mode="after")
    def _check_bounds(self) -> FixedDomain:
        if self.max <= self.min:
            raise ValueError("fixed domain max must be > min")
        return self


class AutoDomain(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["auto"] = "auto"


class ExponentialDomain(BaseModel):
    """Shrinks the empty space past the longest bar as the data grows.

    Small maxima keep ``base_buffer`` of the axis free so short bars still read
    as partial bars; past ``threshold_value`` the free share decays toward
    ``min_buffer``.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["dynamic"] = "dynamic"
    strategy: Literal["exponential"] = "exponential"
    base_buffer: float = Field(default=0.6, ge=0.0, lt=1.0)
    min_buffer: float = Field(default=0.1, ge=0.0, lt=1.0)
    decay_factor: float = Field(default=0.4, ge=0.0)
    threshold_value: float = Field(default=0.5, gt=0.0)
    safeguard_min: float | None = None


DomainPolicy = Annotated[
    Union[FixedDomain, AutoDomain, ExponentialDomain],
    Field(discriminator="type"),
]


@dataclass(frozen=True, slots=True)
class Domain:
    min: float
    max: float

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max}


def buffer_fraction(max_abs_value: float, policy: ExponentialDomain, *, comparative: bool) -> float:
    threshold = policy.threshold_value
    if comparative:
        threshold *= COMPARATIVE_THRESHOLD_SCALE
    if max_abs_value <= threshold:
        return policy.base_buffer
    excess = (max_abs_value - threshold) / threshold
    return policy.min_buffer + (policy.base_buffer - policy.min_buffer) * math.exp(
        -policy.decay_factor * excess
    )


def compute_domain(
    max_abs_value: float,
    policy: FixedDomain | AutoDomain | ExponentialDomain,
    *,
    comparative: bool = False,
) -> Domain | None:
    """Return the value-axis domain for ``policy``, or ``None`` to let the surface scale."""
    if isinstance(policy, FixedDomain):
        return Domain(min=policy.min, max=policy.max)
    if isinstance(policy, AutoDomain):
        return None

    value = abs(float(max_abs_value)) if math.isfinite(max_abs_value) else 0.0
    buffer = buffer_fraction(value, policy, comparative=comparative)
    bar_fraction = max(1.0 - buffer, MIN_BAR_FRACTION)
    domain_max = value / bar_fraction
    if comparative:
        return Domain(min=-domain_max, max=domain_max)
    domain_min = policy.safeguard_min if policy.safeguard_min is not None else 0.0
    return Domain(min=domain_min, max=domain_max)


def max_abs_value(
    series: Iterable[Iterable[float | None]],
    *,
    floor: float = MIN_AXIS_RANGE,
) -> float:
    values = [
        float(value)
        for values in series
        for value in values
        if value is not None
    ]
    arr = np.abs(np.asarray(values, dtype=float))
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return float(floor)
    return float(max(arr.max(), floor))
