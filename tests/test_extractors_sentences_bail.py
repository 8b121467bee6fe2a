from __future__ import annotations

import pytest

from litigation_analytics.config import AppConfig
from litigation_analytics.extractors.bail import extract_bail
from litigation_analytics.extractors.sentences import extract_sentences
from litigation_analytics.records import records_from_rows


def _sentence_records():
    return records_from_rows(
        [
            {
                "trial_category": "any",
                "total_cases": 200,
                "fine_count": 40,
                "total_fine": 8000,
                "fine_50": 10,
                "fine_100": 30,
                "probation_count": 20,
                "total_probation_days": 3650,
                "probation_1": 5,
                "probation_24_plus": 15,
            },
            {"trial_category": "bench_trial", "total_cases": 50, "fine_count": 35},
        ],
        AppConfig(),
    )


def _bail_records():
    return records_from_rows(
        [
            {
                "trial_category": "any",
                "total_cases": 500,
                "free_bail": 30,
                "cost_bail": 60,
                "denied_bail": 10,
                "total_bail_cost": 120000,
                "bail_500": 15,
                "bail_50000_plus": 3,
            }
        ],
        AppConfig(),
    )


def _by_type(series):
    return {item.type: item for item in series}


def test_extract_sentences_percentages_and_averages() -> None:
    series = _by_type(extract_sentences(_sentence_records(), AppConfig()))

    fine = series["Fine"]
    assert fine.count == 40.0
    assert fine.percentage == pytest.approx(20.0)
    assert fine.average_cost == pytest.approx(200.0)
    assert fine.average_days == 0.0

    probation = series["Probation"]
    assert probation.percentage == pytest.approx(10.0)
    assert probation.average_days == pytest.approx(182.5)
    assert probation.average_cost == 0.0


def test_extract_sentences_bucket_percentages_are_shares_of_kind_count() -> None:
    fine = _by_type(extract_sentences(_sentence_records(), AppConfig()))["Fine"]
    buckets = {bucket.label: bucket for bucket in fine.buckets}

    assert buckets["$50"].count == 10.0
    assert buckets["$50"].percentage == pytest.approx(25.0)
    assert buckets["$100"].percentage == pytest.approx(75.0)
    assert buckets["$5,000+"].count == 0.0
    assert sum(bucket.count for bucket in fine.buckets) == fine.count

    probation = _by_type(extract_sentences(_sentence_records(), AppConfig()))["Probation"]
    assert [bucket.label for bucket in probation.buckets][:2] == ["1 month", "2 months"]
    assert probation.buckets[-1].label == "24+ months"
    assert probation.buckets[-1].percentage == pytest.approx(75.0)


def test_extract_sentences_emits_fixed_kind_list_by_default() -> None:
    series = extract_sentences(_sentence_records(), AppConfig())

    assert [item.type for item in series] == [
        "Fine",
        "Fee",
        "Probation",
        "Incarceration",
        "License Suspension",
    ]
    fee = series[1]
    assert fee.count == 0.0
    assert fee.percentage == 0.0
    assert fee.average_cost == 0.0
    assert all(bucket.percentage == 0.0 for bucket in fee.buckets)


def test_extract_sentences_can_filter_empty_kinds() -> None:
    series = extract_sentences(_sentence_records(), AppConfig(), emit_empty_kinds=False)

    assert [item.type for item in series] == ["Fine", "Probation"]


def test_extract_sentences_empty_input() -> None:
    assert extract_sentences([], AppConfig()) == []


def test_sentence_to_dict_uses_sentence_buckets_key() -> None:
    fine = extract_sentences(_sentence_records(), AppConfig())[0]

    payload = fine.to_dict()

    assert payload["averageCost"] == pytest.approx(200.0)
    assert payload["sentenceBuckets"][0] == {"label": "$50", "count": 10.0, "percentage": 25.0}


def test_extract_bail_shares_of_all_bail_decisions() -> None:
    series = _by_type(extract_bail(_bail_records(), AppConfig()))

    assert series["Personal Recognizance"].percentage == pytest.approx(30.0)
    assert series["Cash Bail"].percentage == pytest.approx(60.0)
    assert series["Denied"].percentage == pytest.approx(10.0)
    assert sum(item.percentage for item in series.values()) == pytest.approx(100.0)


def test_extract_bail_cash_bail_cost_and_buckets() -> None:
    series = _by_type(extract_bail(_bail_records(), AppConfig()))

    cash = series["Cash Bail"]
    assert cash.average_cost == pytest.approx(2000.0)
    buckets = {bucket.label: bucket for bucket in cash.buckets}
    assert buckets["$500"].percentage == pytest.approx(25.0)
    assert buckets["$50,000+"].percentage == pytest.approx(5.0)

    assert series["Personal Recognizance"].buckets is None
    assert series["Personal Recognizance"].average_cost == 0.0


def test_bail_to_dict_emits_amount_keyed_buckets_only_for_cash_bail() -> None:
    series = _by_type(extract_bail(_bail_records(), AppConfig()))

    cash_payload = series["Cash Bail"].to_dict()
    assert cash_payload["bailBuckets"][0]["amount"] == "$500"
    assert "bailBuckets" not in series["Denied"].to_dict()


def test_extract_bail_without_decisions_has_zero_percentages() -> None:
    records = records_from_rows([{"trial_category": "any", "total_cases": 10}], AppConfig())

    series = extract_bail(records, AppConfig())

    assert [item.type for item in series] == ["Personal Recognizance", "Cash Bail", "Denied"]
    assert all(item.percentage == 0.0 for item in series)
    assert extract_bail(records, AppConfig(), emit_empty_types=False) == []


def test_extract_bail_empty_input() -> None:
    assert extract_bail([], AppConfig()) == []
