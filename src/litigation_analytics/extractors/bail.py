from __future__ import annotations

import logging
from typing import Sequence

from litigation_analytics.config import AppConfig
from litigation_analytics.extractors.base import (
    counter_or_zero,
    safe_divide,
    safe_percentage,
    select_base_record,
)
from litigation_analytics.extractors.sentences import bucket_distribution
from litigation_analytics.records import AggregateRecord
from litigation_analytics.series import BailSeries

LOGGER = logging.getLogger(__name__)


def extract_bail(
    records: Sequence[AggregateRecord],
    config: AppConfig,
    *,
    emit_empty_types: bool | None = None,
) -> list[BailSeries]:
    """Bail decision shares; only types with a bucket ladder carry ``buckets``."""
    base = select_base_record(records, any_category=config.records.any_category)
    if base is None:
        LOGGER.warning("No aggregate records; bail decisions are empty")
        return []

    keep_empty = config.bail.emit_empty_types if emit_empty_types is None else emit_empty_types
    decisions = sum(base.counter(bail_type.count_field) for bail_type in config.bail.types)

    series: list[BailSeries] = []
    for bail_type in config.bail.types:
        count = base.counter(bail_type.count_field)
        if count <= 0 and not keep_empty:
            continue
        buckets = (
            bucket_distribution(base, bail_type.buckets, count)
            if bail_type.buckets is not None
            else None
        )
        series.append(
            BailSeries(
                type=bail_type.type,
                count=count,
                percentage=safe_percentage(count, decisions),
                average_cost=safe_divide(counter_or_zero(base, bail_type.cost_field), count),
                buckets=buckets,
            )
        )
    return series
