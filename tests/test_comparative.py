from __future__ import annotations

import math

import pytest

from litigation_analytics.comparative import (
    compare_bail,
    compare_dispositions,
    compare_motions,
    compare_results,
    compare_sentences,
    neutral_ratio,
)
from litigation_analytics.series import (
    BailSeries,
    Bucket,
    ComparativeRatios,
    DispositionSeries,
    MotionSeries,
    OutcomeCounts,
    SearchResults,
    SentenceSeries,
    TrialTypeValues,
)


@pytest.mark.parametrize(
    ("subject", "baseline", "expected"),
    [
        (0.3, 0.15, 2.0),
        (0.1, 0.4, 0.25),
        (0.0, 0.4, 1.0),
        (0.3, 0.0, 1.0),
        (-0.2, 0.4, 1.0),
        (None, 0.4, 1.0),
        (math.nan, 0.4, 1.0),
        (0.4, math.inf, 1.0),
    ],
)
def test_neutral_ratio(subject, baseline, expected) -> None:
    assert neutral_ratio(subject, baseline) == pytest.approx(expected)


def test_compare_dispositions_divides_ratio_and_breakdown_but_keeps_counts() -> None:
    subject = [
        DispositionSeries(
            type="Guilty",
            ratio=0.3,
            count=30,
            trial_type_breakdown=TrialTypeValues(bench=0.4, jury=0.0, none=0.2),
            trial_type_counts=TrialTypeValues(bench=8, jury=0, none=16),
        )
    ]
    baseline = [
        DispositionSeries(
            type="Guilty",
            ratio=0.15,
            count=1500,
            trial_type_breakdown=TrialTypeValues(bench=0.2, jury=0.5, none=0.4),
        )
    ]

    (guilty,) = compare_dispositions(subject, baseline)

    assert guilty.ratio == pytest.approx(2.0)
    assert guilty.trial_type_breakdown.bench == pytest.approx(2.0)
    assert guilty.trial_type_breakdown.jury == 1.0
    assert guilty.trial_type_breakdown.none == pytest.approx(0.5)
    assert guilty.count == 30
    assert guilty.trial_type_counts == TrialTypeValues(bench=8, jury=0, none=16)


def test_compare_dispositions_unmatched_entry_is_neutral_not_dropped() -> None:
    subject = [
        DispositionSeries(type="CWOF", ratio=0.3, count=3),
        DispositionSeries(
            type="Guilty",
            ratio=0.2,
            count=2,
            trial_type_breakdown=TrialTypeValues(bench=0.5, jury=0.5, none=0.5),
        ),
    ]
    baseline = [DispositionSeries(type="Guilty", ratio=0.1, count=10)]

    compared = compare_dispositions(subject, baseline)

    assert [item.type for item in compared] == ["CWOF", "Guilty"]
    assert compared[0].ratio == 1.0
    assert compared[0].trial_type_breakdown == TrialTypeValues(bench=1.0, jury=1.0, none=1.0)
    assert compared[1].ratio == pytest.approx(2.0)
    assert compared[1].trial_type_breakdown.bench == 1.0


def test_compare_sentences_matches_buckets_by_label() -> None:
    subject = [
        SentenceSeries(
            type="Fine",
            percentage=20.0,
            average_days=0.0,
            average_cost=300.0,
            count=40,
            buckets=(Bucket("$50", 10, 25.0), Bucket("$100", 30, 75.0), Bucket("$9", 0, 0.0)),
        )
    ]
    baseline = [
        SentenceSeries(
            type="Fine",
            percentage=10.0,
            average_days=0.0,
            average_cost=200.0,
            count=400,
            buckets=(Bucket("$100", 200, 50.0), Bucket("$50", 200, 50.0)),
        )
    ]

    (fine,) = compare_sentences(subject, baseline)

    assert fine.percentage == pytest.approx(2.0)
    assert fine.average_cost == pytest.approx(1.5)
    assert fine.average_days == 1.0
    assert fine.count == 40
    assert [bucket.label for bucket in fine.buckets] == ["$50", "$100", "$9"]
    assert fine.buckets[0].percentage == pytest.approx(0.5)
    assert fine.buckets[0].count == 10
    assert fine.buckets[1].percentage == pytest.approx(1.5)
    assert fine.buckets[2].percentage == 1.0


def test_compare_bail_handles_missing_buckets() -> None:
    subject = [
        BailSeries(
            type="Cash Bail",
            count=60,
            percentage=60.0,
            average_cost=2000.0,
            buckets=(Bucket("$500", 15, 25.0),),
        ),
        BailSeries(type="Denied", count=10, percentage=10.0, average_cost=0.0),
    ]
    baseline = [
        BailSeries(
            type="Cash Bail",
            count=600,
            percentage=30.0,
            average_cost=1000.0,
            buckets=(Bucket("$500", 50, 50.0),),
        ),
        BailSeries(type="Denied", count=50, percentage=5.0, average_cost=0.0),
    ]

    cash, denied = compare_bail(subject, baseline)

    assert cash.percentage == pytest.approx(2.0)
    assert cash.average_cost == pytest.approx(2.0)
    assert cash.buckets[0].percentage == pytest.approx(0.5)
    assert denied.percentage == pytest.approx(2.0)
    assert denied.average_cost == 1.0
    assert denied.buckets is None


def test_compare_motions_uses_granted_rate_per_side() -> None:
    subject = [
        MotionSeries(
            type="dismiss",
            count=16,
            status=OutcomeCounts(granted=5, denied=11),
            party_filed=OutcomeCounts(granted=4, denied=6),
        )
    ]
    baseline = [
        MotionSeries(
            type="dismiss",
            count=100,
            status=OutcomeCounts(granted=25, denied=75),
            party_filed=OutcomeCounts(granted=20, denied=20),
        )
    ]

    (dismiss,) = compare_motions(subject, baseline)

    ratios = dismiss.comparative_ratios
    assert ratios.overall == pytest.approx((5 / 16) / 0.25)
    assert ratios.prosecution == pytest.approx(0.4 / 0.5)
    assert ratios.defense == pytest.approx((1 / 6) / (5 / 60))
    assert dismiss.status == subject[0].status
    assert dismiss.count == 16


def test_compare_motions_without_baseline_partner_is_neutral() -> None:
    subject = [MotionSeries(type="travel", count=3, status=OutcomeCounts(granted=3))]

    (travel,) = compare_motions(subject, [])

    assert travel.comparative_ratios == ComparativeRatios(overall=1.0, prosecution=1.0, defense=1.0)
    assert travel.to_dict()["comparativeRatios"]["overall"] == 1.0


def test_compare_results_against_itself_is_identity_or_neutral() -> None:
    results = SearchResults(
        dispositions=(DispositionSeries(type="Guilty", ratio=0.3, count=30),),
        sentences=(
            SentenceSeries(type="Fee", percentage=0.0, average_days=0.0, average_cost=0.0, count=0),
        ),
        motions=(
            MotionSeries(
                type="dismiss",
                count=4,
                status=OutcomeCounts(granted=1, denied=3),
                party_filed=OutcomeCounts(granted=1, denied=1),
            ),
        ),
        total_cases=100,
    )

    compared = compare_results(results, results)

    assert compared.dispositions[0].ratio == pytest.approx(1.0)
    assert compared.sentences[0].percentage == 1.0
    assert compared.motions[0].comparative_ratios.overall == pytest.approx(1.0)
    assert compared.motions[0].comparative_ratios.defense == 1.0
    assert compared.total_cases == 100
