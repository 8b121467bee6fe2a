from __future__ import annotations

import logging
from typing import Sequence

from litigation_analytics.config import AppConfig
from litigation_analytics.extractors.bail import extract_bail
from litigation_analytics.extractors.base import select_base_record
from litigation_analytics.extractors.dispositions import extract_dispositions
from litigation_analytics.extractors.motions import extract_motions
from litigation_analytics.extractors.sentences import extract_sentences
from litigation_analytics.records import AggregateRecord, MotionOutcomeRecord
from litigation_analytics.series import SearchResults

LOGGER = logging.getLogger(__name__)


def extract_search_results(
    records: Sequence[AggregateRecord],
    motion_records: Sequence[MotionOutcomeRecord],
    config: AppConfig,
) -> SearchResults:
    """Run every extractor over one fetched result set."""
    if not records:
        LOGGER.warning("Empty result set; returning empty search results")
        return SearchResults()

    base = select_base_record(records, any_category=config.records.any_category)
    return SearchResults(
        dispositions=tuple(extract_dispositions(records, config)),
        sentences=tuple(extract_sentences(records, config)),
        bail=tuple(extract_bail(records, config)),
        motions=tuple(extract_motions(motion_records, config)),
        total_cases=base.total_cases if base is not None else 0.0,
    )
