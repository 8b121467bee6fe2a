from __future__ import annotations

import logging
from typing import Sequence

from litigation_analytics.config import AppConfig, BucketField
from litigation_analytics.extractors.base import (
    counter_or_zero,
    safe_divide,
    safe_percentage,
    select_base_record,
)
from litigation_analytics.records import AggregateRecord
from litigation_analytics.series import Bucket, SentenceSeries

LOGGER = logging.getLogger(__name__)


def bucket_distribution(
    record: AggregateRecord,
    buckets: Sequence[BucketField],
    kind_count: float,
) -> tuple[Bucket, ...]:
    """Copy bucket counts off ``record``; percentages are shares of ``kind_count``."""
    distribution = []
    for bucket in buckets:
        count = record.counter(bucket.field)
        distribution.append(
            Bucket(
                label=bucket.label,
                count=count,
                percentage=safe_percentage(count, kind_count),
            )
        )
    return tuple(distribution)


def extract_sentences(
    records: Sequence[AggregateRecord],
    config: AppConfig,
    *,
    emit_empty_kinds: bool | None = None,
) -> list[SentenceSeries]:
    base = select_base_record(records, any_category=config.records.any_category)
    if base is None:
        LOGGER.warning("No aggregate records; sentences are empty")
        return []

    keep_empty = config.sentences.emit_empty_kinds if emit_empty_kinds is None else emit_empty_kinds
    series: list[SentenceSeries] = []
    for kind in config.sentences.kinds:
        count = base.counter(kind.count_field)
        if count <= 0 and not keep_empty:
            continue
        series.append(
            SentenceSeries(
                type=kind.type,
                percentage=safe_percentage(count, base.total_cases),
                average_days=safe_divide(counter_or_zero(base, kind.days_field), count),
                average_cost=safe_divide(counter_or_zero(base, kind.total_field), count),
                count=count,
                buckets=bucket_distribution(base, kind.buckets, count),
            )
        )
    return series
