from __future__ import annotations

import logging
import math
from functools import reduce
from types import MappingProxyType
from typing import Mapping, Sequence

from litigation_analytics.records import AggregateRecord

LOGGER = logging.getLogger(__name__)

ANY_CATEGORY = "any"


def safe_divide(numerator: float, denominator: float) -> float:
    """``numerator / denominator``, or 0.0 when the denominator is not positive."""
    if not math.isfinite(denominator) or denominator <= 0:
        return 0.0
    result = numerator / denominator
    return result if math.isfinite(result) else 0.0


def safe_percentage(numerator: float, denominator: float) -> float:
    return safe_divide(numerator, denominator) * 100.0


def select_base_record(
    records: Sequence[AggregateRecord],
    *,
    any_category: str = ANY_CATEGORY,
) -> AggregateRecord | None:
    """Pick the unconditional (``any`` trial category) record used as the denominator.

    Without one, the first record stands in. That record is conditioned on a trial
    category, so ratios built on it are skewed; the fallback is kept for
    compatibility and reported as a warning.
    """
    if not records:
        return None
    for record in records:
        if record.trial_category == any_category:
            return record
    fallback = records[0]
    LOGGER.warning(
        "No %r trial-category record among %d record(s); falling back to %r "
        "(court=%s judge=%s charge=%s)",
        any_category,
        len(records),
        fallback.trial_category,
        fallback.court_id,
        fallback.judge_id,
        fallback.charge_id,
    )
    return fallback


def _keep_first(
    acc: Mapping[str, AggregateRecord],
    record: AggregateRecord,
) -> Mapping[str, AggregateRecord]:
    if record.trial_category in acc:
        LOGGER.debug("Ignoring duplicate %r record", record.trial_category)
        return acc
    return MappingProxyType({**acc, record.trial_category: record})


def records_by_category(records: Sequence[AggregateRecord]) -> Mapping[str, AggregateRecord]:
    """Index records by trial category; the first record of each category wins."""
    return reduce(_keep_first, records, MappingProxyType({}))


def counter_or_zero(record: AggregateRecord | None, name: str | None) -> float:
    if record is None or not name:
        return 0.0
    return record.counter(name)
