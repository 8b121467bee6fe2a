from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Literal, Mapping

if TYPE_CHECKING:
    from litigation_analytics.config import AppConfig

TrialCategory = Literal["bench_trial", "jury_trial", "any", "no_trial"]

MOTION_OUTCOME_FIELDS = ("accepted", "denied", "no_action", "advisement", "unknown")
DEFAULT_TOTAL_CASES_FIELDS = ("total_charges_disposed", "total_case_dispositions", "total_cases")


def _safe_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        candidate = float(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return 0.0
        try:
            candidate = float(stripped)
        except ValueError:
            return 0.0
    else:
        try:
            candidate = float(value)
        except (TypeError, ValueError):
            return 0.0
    return candidate if math.isfinite(candidate) else 0.0


def optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    parsed = _safe_number(value)
    return int(parsed)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    text = str(value)
    return text if text.strip() else None


@dataclass(frozen=True, slots=True)
class AggregateRecord:
    """One pre-aggregated row for a court/judge/charge/trial-category combination."""

    court_id: int
    judge_id: int
    charge_id: int
    trial_category: str
    total_cases: float
    counters: Mapping[str, float] = field(default_factory=dict)
    specification_id: int | None = None
    recent_cases: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "counters",
            MappingProxyType({str(key): float(value) for key, value in self.counters.items()}),
        )

    def counter(self, name: str) -> float:
        try:
            return self.counters[name]
        except KeyError:
            raise KeyError(f"Counter {name!r} was not declared for this record") from None

    @classmethod
    def from_row(
        cls,
        row: Mapping[str, Any],
        fields: Iterable[str],
        *,
        total_cases_fields: Iterable[str] = DEFAULT_TOTAL_CASES_FIELDS,
    ) -> AggregateRecord:
        total_cases = 0.0
        for name in total_cases_fields:
            if _optional_text(row.get(name)) is not None:
                total_cases = _safe_number(row[name])
                break
        return cls(
            court_id=optional_int(row.get("court_id")) or 0,
            judge_id=optional_int(row.get("judge_id")) or 0,
            charge_id=optional_int(row.get("charge_id")) or 0,
            trial_category=str(row.get("trial_category") or "any"),
            total_cases=total_cases,
            counters={name: _safe_number(row.get(name)) for name in fields},
            specification_id=optional_int(row.get("specification_id")),
            recent_cases=_optional_text(row.get("recent_cases")),
        )


@dataclass(frozen=True, slots=True)
class MotionOutcomeRecord:
    motion_id: str
    party: str = ""
    accepted: float = 0.0
    denied: float = 0.0
    no_action: float = 0.0
    advisement: float = 0.0
    unknown: float = 0.0
    specification_id: int | None = None

    @property
    def total(self) -> float:
        return self.accepted + self.denied + self.no_action + self.advisement + self.unknown

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> MotionOutcomeRecord:
        return cls(
            motion_id=str(row.get("motion_id") or ""),
            party=str(row.get("party") or ""),
            specification_id=optional_int(row.get("specification_id")),
            **{name: _safe_number(row.get(name)) for name in MOTION_OUTCOME_FIELDS},
        )


def declared_counter_fields(config: AppConfig) -> tuple[str, ...]:
    """Every counter field the extractor configuration tables read, in table order."""
    names: list[str] = [label.field for label in config.dispositions.labels]
    for kind in config.sentences.kinds:
        names.append(kind.count_field)
        names.extend(name for name in (kind.total_field, kind.days_field) if name)
        names.extend(bucket.field for bucket in kind.buckets)
    for bail_type in config.bail.types:
        names.append(bail_type.count_field)
        if bail_type.cost_field:
            names.append(bail_type.cost_field)
        names.extend(bucket.field for bucket in bail_type.buckets or [])
    return tuple(dict.fromkeys(names))


def records_from_rows(
    rows: Iterable[Mapping[str, Any]],
    config: AppConfig,
) -> list[AggregateRecord]:
    fields = declared_counter_fields(config)
    return [
        AggregateRecord.from_row(
            row,
            fields,
            total_cases_fields=config.records.total_cases_fields,
        )
        for row in rows
    ]


def motions_from_rows(rows: Iterable[Mapping[str, Any]]) -> list[MotionOutcomeRecord]:
    return [MotionOutcomeRecord.from_row(row) for row in rows]
