from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import pandas as pd

from litigation_analytics.config import AppConfig
from litigation_analytics.extractors.base import select_base_record
from litigation_analytics.io.read import (
    AGGREGATE_REQUIRED_COLUMNS,
    motions_from_frame,
    records_from_frame,
    validate_required_columns,
)
from litigation_analytics.records import AggregateRecord, MotionOutcomeRecord
from litigation_analytics.selectors import Selector

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FetchResult:
    records: tuple[AggregateRecord, ...] = ()
    motions: tuple[MotionOutcomeRecord, ...] = ()


class DataSource(Protocol):
    def fetch(self, selector: Selector) -> FetchResult: ...


@dataclass
class FrameDataSource:
    """In-memory source over an aggregate table and a motion-outcome table.

    Aggregate rows match the selector exactly (0 is the "any" row for a
    dimension, not a wildcard). Motion rows follow the ``specification_id`` of
    the selected ``any`` record, or of the first record when there is none.
    """

    aggregates: pd.DataFrame
    motions: pd.DataFrame = field(default_factory=pd.DataFrame)
    config: AppConfig = field(default_factory=AppConfig)

    def _matching_aggregates(self, selector: Selector) -> pd.DataFrame:
        df = validate_required_columns(self.aggregates, AGGREGATE_REQUIRED_COLUMNS)
        mask = (
            (pd.to_numeric(df["court_id"], errors="coerce").fillna(0) == selector.court_id)
            & (pd.to_numeric(df["judge_id"], errors="coerce").fillna(0) == selector.judge_id)
            & (pd.to_numeric(df["charge_id"], errors="coerce").fillna(0) == selector.charge_id)
        )
        return df.loc[mask]

    def _motions_for(self, specification_id: int) -> pd.DataFrame:
        if "specification_id" not in self.motions.columns:
            raise ValueError("Motion table missing column: specification_id")
        ids = pd.to_numeric(self.motions["specification_id"], errors="coerce")
        return self.motions.loc[ids == specification_id]

    def fetch(self, selector: Selector) -> FetchResult:
        matched = self._matching_aggregates(selector)
        records = records_from_frame(matched, self.config)
        if not records:
            LOGGER.warning(
                "No aggregate rows for court=%s judge=%s charge=%s",
                selector.court_id,
                selector.judge_id,
                selector.charge_id,
            )
            return FetchResult()

        base = select_base_record(records, any_category=self.config.records.any_category)
        specification_id = base.specification_id if base is not None else None
        if specification_id is None:
            LOGGER.warning("Selected record has no specification_id; motions are empty")
            return FetchResult(records=tuple(records))

        motions: list[MotionOutcomeRecord] = []
        if not self.motions.empty:
            motions = motions_from_frame(self._motions_for(specification_id))
        LOGGER.debug(
            "Fetched %d aggregate row(s) and %d motion row(s) for specification %s",
            len(records),
            len(motions),
            specification_id,
        )
        return FetchResult(records=tuple(records), motions=tuple(motions))
