from __future__ import annotations

import pytest

from litigation_analytics.config import AppConfig
from litigation_analytics.extractors.motions import (
    canonical_motion_order,
    extract_motions,
    row_outcomes,
)
from litigation_analytics.extractors.results import extract_search_results
from litigation_analytics.records import MotionOutcomeRecord, records_from_rows


def _motion_rows() -> list[MotionOutcomeRecord]:
    return [
        MotionOutcomeRecord(
            motion_id="dismiss",
            party="commonwealth",
            accepted=4,
            denied=2,
            no_action=1,
            unknown=3,
        ),
        MotionOutcomeRecord(
            motion_id="dismiss",
            party="defendant",
            accepted=1,
            denied=3,
            unknown=2,
        ),
        MotionOutcomeRecord(motion_id="discovery", party="Commonwealth", accepted=2, unknown=3),
        MotionOutcomeRecord(motion_id="zeta", party="defendant", accepted=1),
        MotionOutcomeRecord(motion_id="alpha", party="defendant", accepted=1),
    ]


def _by_type(series):
    return {item.type: item for item in series}


def test_row_outcomes_counts_unknown_as_denied_only_when_asked() -> None:
    row = MotionOutcomeRecord(motion_id="x", accepted=1, denied=1, advisement=1, unknown=2)

    assert row_outcomes(row, unknown_as_denied=True).to_dict() == {
        "granted": 1.0,
        "denied": 4.0,
        "other": 0.0,
    }
    assert row_outcomes(row, unknown_as_denied=False).to_dict() == {
        "granted": 1.0,
        "denied": 2.0,
        "other": 2.0,
    }


def test_extract_motions_groups_by_motion_and_party() -> None:
    series = _by_type(extract_motions(_motion_rows(), AppConfig()))

    dismiss = series["dismiss"]
    assert dismiss.count == 16.0
    assert dismiss.status.granted == 5.0
    assert dismiss.status.denied == 11.0
    assert dismiss.status.other == 0.0
    assert dismiss.party_filed.granted == 4.0
    assert dismiss.party_filed.denied == 6.0
    assert dismiss.defense.granted == 1.0
    assert dismiss.defense.denied == 5.0


def test_extract_motions_matches_prosecution_party_case_insensitively() -> None:
    discovery = _by_type(extract_motions(_motion_rows(), AppConfig()))["discovery"]

    assert discovery.count == 5.0
    assert discovery.status.granted == 2.0
    assert discovery.status.denied == 0.0
    assert discovery.status.other == 3.0
    assert discovery.party_filed == discovery.status


def test_party_filed_never_exceeds_status() -> None:
    for item in extract_motions(_motion_rows(), AppConfig()):
        assert item.party_filed.granted <= item.status.granted
        assert item.party_filed.denied <= item.status.denied
        assert item.defense.granted >= 0
        assert item.defense.denied >= 0


def test_extract_motions_orders_configured_types_then_unlisted_alphabetically() -> None:
    config = AppConfig()

    series = extract_motions(_motion_rows(), config)

    configured = list(config.motions.display_names)
    assert [item.type for item in series] == configured + ["alpha", "zeta"]
    suppress = _by_type(series)["suppress"]
    assert suppress.count == 0.0
    assert suppress.status.granted_rate == 0.0


def test_extract_motions_can_drop_unlisted_types() -> None:
    config = AppConfig.model_validate({"motions": {"include_unlisted": False}})

    series = extract_motions(_motion_rows(), config)

    assert "zeta" not in {item.type for item in series}


def test_canonical_motion_order_is_stable() -> None:
    order = canonical_motion_order(["b", "a", "dismiss"], {"dismiss": "Dismiss", "suppress": "S"})

    assert order == ["dismiss", "suppress", "a", "b"]


def test_extract_motions_empty_input() -> None:
    assert extract_motions([], AppConfig()) == []


def test_motion_to_dict_uses_render_keys() -> None:
    dismiss = _by_type(extract_motions(_motion_rows(), AppConfig()))["dismiss"]

    payload = dismiss.to_dict()

    assert payload["partyFiled"] == {"granted": 4.0, "denied": 6.0, "other": 0.0}
    assert "comparativeRatios" not in payload


def test_extract_search_results_runs_every_extractor() -> None:
    records = records_from_rows(
        [{"trial_category": "any", "total_cases": 80, "guilty": 20, "fine_count": 8}],
        AppConfig(),
    )

    results = extract_search_results(records, _motion_rows(), AppConfig())

    assert results.total_cases == 80.0
    assert len(results.dispositions) == len(AppConfig().dispositions.labels)
    assert len(results.sentences) == 5
    assert len(results.bail) == 3
    assert results.motions[0].type == "dismiss"
    assert results.to_dict()["totalCases"] == 80.0
    assert results.dispositions[1].ratio == pytest.approx(0.25)


def test_extract_search_results_empty_input() -> None:
    results = extract_search_results([], [], AppConfig())

    assert results.dispositions == ()
    assert results.motions == ()
    assert results.total_cases == 0.0
