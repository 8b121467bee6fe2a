from __future__ import annotations

import logging
from typing import Sequence

from litigation_analytics.config import AppConfig
from litigation_analytics.extractors.base import (
    counter_or_zero,
    records_by_category,
    safe_divide,
    select_base_record,
)
from litigation_analytics.records import AggregateRecord
from litigation_analytics.series import DispositionSeries, TrialTypeValues

LOGGER = logging.getLogger(__name__)


def extract_dispositions(
    records: Sequence[AggregateRecord],
    config: AppConfig,
) -> list[DispositionSeries]:
    """Disposition shares of all cases, with per-trial-type breakdowns.

    ``ratio`` is the share of all cases that ended with a disposition.
    ``trial_type_breakdown`` is the share of bench (or jury, or non-trial)
    cases that ended that way, each normalized by its own trial-type total.
    """
    categories = config.records
    base = select_base_record(records, any_category=categories.any_category)
    if base is None:
        LOGGER.warning("No aggregate records; dispositions are empty")
        return []

    by_category = records_by_category(records)
    bench_record = by_category.get(categories.bench_category)
    jury_record = by_category.get(categories.jury_category)
    no_trial_record = by_category.get(categories.no_trial_category)

    total = base.total_cases
    if total <= 0:
        LOGGER.warning("Base record has no cases; disposition ratios are zero")

    bench_total = bench_record.total_cases if bench_record else 0.0
    jury_total = jury_record.total_cases if jury_record else 0.0
    none_total = (
        no_trial_record.total_cases if no_trial_record else total - bench_total - jury_total
    )

    series: list[DispositionSeries] = []
    for entry in config.dispositions.labels:
        count = base.counter(entry.field)
        bench = counter_or_zero(bench_record, entry.field)
        jury = counter_or_zero(jury_record, entry.field)
        none = (
            no_trial_record.counter(entry.field) if no_trial_record else count - bench - jury
        )
        series.append(
            DispositionSeries(
                type=entry.label,
                ratio=safe_divide(count, total),
                count=count,
                trial_type_counts=TrialTypeValues(bench=bench, jury=jury, none=none),
                trial_type_breakdown=TrialTypeValues(
                    bench=safe_divide(bench, bench_total),
                    jury=safe_divide(jury, jury_total),
                    none=safe_divide(none, none_total),
                ),
            )
        )
    return series
