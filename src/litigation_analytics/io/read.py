from __future__ import annotations

from pathlib import Path

import pandas as pd

from litigation_analytics.config import AppConfig
from litigation_analytics.records import (
    AggregateRecord,
    MotionOutcomeRecord,
    motions_from_rows,
    records_from_rows,
)

AGGREGATE_REQUIRED_COLUMNS = ["court_id", "judge_id", "charge_id", "trial_category"]
MOTION_REQUIRED_COLUMNS = ["motion_id", "party"]


def validate_required_columns(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    for column in columns:
        if column not in df.columns:
            raise ValueError(f"Input table missing column: {column}")
    return df


def load_table(path: Path) -> pd.DataFrame:
    if path.suffix == ".parquet":
        return pd.read_parquet(path)
    if path.suffix == ".csv":
        # utf-8-sig strips BOM-prefixed headers commonly found in exported CSV files.
        return pd.read_csv(path, encoding="utf-8-sig")
    if path.suffix == ".json":
        return pd.read_json(path, orient="records")
    raise ValueError(f"Unsupported table file type: {path.suffix}")


def _rows(df: pd.DataFrame) -> list[dict[str, object]]:
    # NaN cells become None so missing counters parse as 0.
    return df.astype(object).where(df.notna(), None).to_dict(orient="records")


def records_from_frame(df: pd.DataFrame, config: AppConfig) -> list[AggregateRecord]:
    """Parse an aggregate table; undeclared columns are ignored."""
    validate_required_columns(df, AGGREGATE_REQUIRED_COLUMNS)
    return records_from_rows(_rows(df), config)


def motions_from_frame(df: pd.DataFrame) -> list[MotionOutcomeRecord]:
    validate_required_columns(df, MOTION_REQUIRED_COLUMNS)
    return motions_from_rows(_rows(df))
