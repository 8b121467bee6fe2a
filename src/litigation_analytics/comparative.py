"""Subject-versus-baseline ratios for extracted series.

Every ratio follows one rule: ``subject / baseline`` when both sides are finite
and strictly positive, otherwise ``1.0`` ("same as baseline"). Entries pair by
their exact ``type`` key; a subject entry without a baseline partner keeps its
counts and gets neutral ratios.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterable, Sequence, TypeVar

from litigation_analytics.series import (
    BailSeries,
    Bucket,
    ComparativeRatios,
    DispositionSeries,
    MotionSeries,
    SearchResults,
    SentenceSeries,
    TrialTypeValues,
)

NEUTRAL_RATIO = 1.0

_Keyed = TypeVar("_Keyed", DispositionSeries, SentenceSeries, BailSeries, MotionSeries)


def neutral_ratio(subject: float | None, baseline: float | None) -> float:
    if subject is None or baseline is None:
        return NEUTRAL_RATIO
    if not (math.isfinite(subject) and math.isfinite(baseline)):
        return NEUTRAL_RATIO
    if subject <= 0 or baseline <= 0:
        return NEUTRAL_RATIO
    return subject / baseline


def _index_by_type(items: Iterable[_Keyed]) -> dict[str, _Keyed]:
    index: dict[str, _Keyed] = {}
    for item in items:
        index.setdefault(item.type, item)
    return index


def compare_trial_types(
    subject: TrialTypeValues,
    baseline: TrialTypeValues | None,
) -> TrialTypeValues:
    if baseline is None:
        return TrialTypeValues(bench=NEUTRAL_RATIO, jury=NEUTRAL_RATIO, none=NEUTRAL_RATIO)
    return TrialTypeValues(
        bench=neutral_ratio(subject.bench, baseline.bench),
        jury=neutral_ratio(subject.jury, baseline.jury),
        none=neutral_ratio(subject.none, baseline.none),
    )


def compare_buckets(
    subject: Sequence[Bucket] | None,
    baseline: Sequence[Bucket] | None,
) -> tuple[Bucket, ...] | None:
    """Bucket-by-bucket percentage ratios matched by label; counts are kept."""
    if subject is None:
        return None
    baseline_by_label: dict[str, Bucket] = {}
    for bucket in baseline or ():
        baseline_by_label.setdefault(bucket.label, bucket)
    compared = []
    for bucket in subject:
        partner = baseline_by_label.get(bucket.label)
        ratio = neutral_ratio(bucket.percentage, partner.percentage) if partner else NEUTRAL_RATIO
        compared.append(replace(bucket, percentage=ratio))
    return tuple(compared)


def compare_dispositions(
    subject: Sequence[DispositionSeries],
    baseline: Sequence[DispositionSeries],
) -> list[DispositionSeries]:
    baseline_by_type = _index_by_type(baseline)
    compared = []
    for item in subject:
        partner = baseline_by_type.get(item.type)
        compared.append(
            replace(
                item,
                ratio=neutral_ratio(item.ratio, partner.ratio) if partner else NEUTRAL_RATIO,
                trial_type_breakdown=compare_trial_types(
                    item.trial_type_breakdown,
                    partner.trial_type_breakdown if partner else None,
                ),
            )
        )
    return compared


def compare_sentences(
    subject: Sequence[SentenceSeries],
    baseline: Sequence[SentenceSeries],
) -> list[SentenceSeries]:
    baseline_by_type = _index_by_type(baseline)
    compared = []
    for item in subject:
        partner = baseline_by_type.get(item.type)
        compared.append(
            replace(
                item,
                percentage=neutral_ratio(item.percentage, partner.percentage if partner else None),
                average_days=neutral_ratio(
                    item.average_days, partner.average_days if partner else None
                ),
                average_cost=neutral_ratio(
                    item.average_cost, partner.average_cost if partner else None
                ),
                buckets=compare_buckets(item.buckets, partner.buckets if partner else None) or (),
            )
        )
    return compared


def compare_bail(
    subject: Sequence[BailSeries],
    baseline: Sequence[BailSeries],
) -> list[BailSeries]:
    baseline_by_type = _index_by_type(baseline)
    compared = []
    for item in subject:
        partner = baseline_by_type.get(item.type)
        compared.append(
            replace(
                item,
                percentage=neutral_ratio(item.percentage, partner.percentage if partner else None),
                average_cost=neutral_ratio(
                    item.average_cost, partner.average_cost if partner else None
                ),
                buckets=compare_buckets(item.buckets, partner.buckets if partner else None),
            )
        )
    return compared


def motion_comparative_ratios(
    subject: MotionSeries,
    baseline: MotionSeries | None,
) -> ComparativeRatios:
    """Granted-rate ratios: each side's granted/(granted+denied), then subject/baseline."""
    if baseline is None:
        return ComparativeRatios()
    return ComparativeRatios(
        overall=neutral_ratio(subject.status.granted_rate, baseline.status.granted_rate),
        prosecution=neutral_ratio(
            subject.party_filed.granted_rate, baseline.party_filed.granted_rate
        ),
        defense=neutral_ratio(subject.defense.granted_rate, baseline.defense.granted_rate),
    )


def compare_motions(
    subject: Sequence[MotionSeries],
    baseline: Sequence[MotionSeries],
) -> list[MotionSeries]:
    baseline_by_type = _index_by_type(baseline)
    return [
        replace(
            item,
            comparative_ratios=motion_comparative_ratios(item, baseline_by_type.get(item.type)),
        )
        for item in subject
    ]


def compare_results(subject: SearchResults, baseline: SearchResults) -> SearchResults:
    return replace(
        subject,
        dispositions=tuple(compare_dispositions(subject.dispositions, baseline.dispositions)),
        sentences=tuple(compare_sentences(subject.sentences, baseline.sentences)),
        bail=tuple(compare_bail(subject.bail, baseline.bail)),
        motions=tuple(compare_motions(subject.motions, baseline.motions)),
    )
