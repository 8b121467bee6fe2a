from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import reduce
from types import MappingProxyType
from typing import Collection, Mapping, Sequence

from litigation_analytics.config import AppConfig
from litigation_analytics.records import MotionOutcomeRecord
from litigation_analytics.series import MotionSeries, OutcomeCounts

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _MotionTally:
    count: float = 0.0
    status: OutcomeCounts = field(default_factory=OutcomeCounts)
    party_filed: OutcomeCounts = field(default_factory=OutcomeCounts)


def row_outcomes(row: MotionOutcomeRecord, *, unknown_as_denied: bool) -> OutcomeCounts:
    denied = row.denied + row.no_action + row.advisement
    if unknown_as_denied:
        denied += row.unknown
    return OutcomeCounts(
        granted=row.accepted,
        denied=denied,
        other=row.total - row.accepted - denied,
    )


def _tally_rows(
    rows: Sequence[MotionOutcomeRecord],
    *,
    unknown_as_denied: Collection[str],
    prosecution_parties: Collection[str],
) -> Mapping[str, _MotionTally]:
    def _fold(
        acc: Mapping[str, _MotionTally],
        row: MotionOutcomeRecord,
    ) -> Mapping[str, _MotionTally]:
        if not row.motion_id:
            LOGGER.debug("Skipping motion row without motion_id")
            return acc
        outcomes = row_outcomes(row, unknown_as_denied=row.motion_id in unknown_as_denied)
        is_prosecution = row.party.strip().lower() in prosecution_parties
        previous = acc.get(row.motion_id, _MotionTally())
        updated = _MotionTally(
            count=previous.count + row.total,
            status=previous.status + outcomes,
            party_filed=previous.party_filed + outcomes if is_prosecution else previous.party_filed,
        )
        return MappingProxyType({**acc, row.motion_id: updated})

    return reduce(_fold, rows, MappingProxyType({}))


def canonical_motion_order(
    motion_ids: Collection[str],
    display_names: Mapping[str, str],
    *,
    include_unlisted: bool = True,
) -> list[str]:
    """Configured motion ids in configured order, then unlisted ids alphabetically."""
    ordered = list(display_names)
    if include_unlisted:
        ordered.extend(sorted(set(motion_ids) - set(display_names)))
    return ordered


def extract_motions(
    motion_records: Sequence[MotionOutcomeRecord],
    config: AppConfig,
) -> list[MotionSeries]:
    """Group outcome rows by motion type onto a stable, configured axis.

    Every configured motion type is emitted (zero-filled when absent) so
    charts for different selections share the same categories.
    """
    if not motion_records:
        LOGGER.warning("No motion outcome records; motions are empty")
        return []

    motions_config = config.motions
    tallies = _tally_rows(
        motion_records,
        unknown_as_denied=frozenset(motions_config.unknown_as_denied),
        prosecution_parties=frozenset(
            party.strip().lower() for party in config.records.prosecution_parties
        ),
    )
    order = canonical_motion_order(
        tallies.keys(),
        motions_config.display_names,
        include_unlisted=motions_config.include_unlisted,
    )

    series: list[MotionSeries] = []
    for motion_id in order:
        tally = tallies.get(motion_id, _MotionTally())
        series.append(
            MotionSeries(
                type=motion_id,
                count=tally.count,
                status=tally.status,
                party_filed=tally.party_filed,
            )
        )
    return series
