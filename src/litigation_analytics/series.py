"""Normalized, chart-ready series produced by the extractors.

Attribute names are snake_case; ``to_dict`` emits the camelCase payload the
rendering surface consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class TrialTypeValues:
    bench: float = 0.0
    jury: float = 0.0
    none: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {"bench": self.bench, "jury": self.jury, "none": self.none}


@dataclass(frozen=True, slots=True)
class Bucket:
    label: str
    count: float
    percentage: float = 0.0

    def to_dict(self, *, label_key: str = "label") -> dict[str, Any]:
        return {label_key: self.label, "count": self.count, "percentage": self.percentage}


@dataclass(frozen=True, slots=True)
class DispositionSeries:
    type: str
    ratio: float
    count: float
    trial_type_breakdown: TrialTypeValues = field(default_factory=TrialTypeValues)
    trial_type_counts: TrialTypeValues = field(default_factory=TrialTypeValues)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "ratio": self.ratio,
            "count": self.count,
            "trialTypeBreakdown": self.trial_type_breakdown.to_dict(),
            "trialTypeCounts": self.trial_type_counts.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class SentenceSeries:
    type: str
    percentage: float
    average_days: float
    average_cost: float
    count: float
    buckets: tuple[Bucket, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "percentage": self.percentage,
            "averageDays": self.average_days,
            "averageCost": self.average_cost,
            "count": self.count,
            "sentenceBuckets": [bucket.to_dict() for bucket in self.buckets],
        }


@dataclass(frozen=True, slots=True)
class BailSeries:
    type: str
    count: float
    percentage: float
    average_cost: float
    buckets: tuple[Bucket, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type,
            "count": self.count,
            "percentage": self.percentage,
            "averageCost": self.average_cost,
        }
        if self.buckets is not None:
            payload["bailBuckets"] = [bucket.to_dict(label_key="amount") for bucket in self.buckets]
        return payload


@dataclass(frozen=True, slots=True)
class OutcomeCounts:
    granted: float = 0.0
    denied: float = 0.0
    other: float = 0.0

    @property
    def decided(self) -> float:
        return self.granted + self.denied

    @property
    def granted_rate(self) -> float:
        """Share of decided motions that were granted; 0.0 with nothing decided."""
        decided = self.decided
        return self.granted / decided if decided > 0 else 0.0

    def __add__(self, other: OutcomeCounts) -> OutcomeCounts:
        return OutcomeCounts(
            granted=self.granted + other.granted,
            denied=self.denied + other.denied,
            other=self.other + other.other,
        )

    def __sub__(self, other: OutcomeCounts) -> OutcomeCounts:
        return OutcomeCounts(
            granted=self.granted - other.granted,
            denied=self.denied - other.denied,
            other=self.other - other.other,
        )

    def to_dict(self) -> dict[str, float]:
        return {"granted": self.granted, "denied": self.denied, "other": self.other}


@dataclass(frozen=True, slots=True)
class ComparativeRatios:
    overall: float = 1.0
    prosecution: float = 1.0
    defense: float = 1.0

    def for_party(self, party: str) -> float:
        if party == "prosecution":
            return self.prosecution
        if party == "defense":
            return self.defense
        return self.overall

    def to_dict(self) -> dict[str, float]:
        return {
            "overall": self.overall,
            "prosecution": self.prosecution,
            "defense": self.defense,
        }


@dataclass(frozen=True, slots=True)
class MotionSeries:
    type: str
    count: float
    status: OutcomeCounts = field(default_factory=OutcomeCounts)
    party_filed: OutcomeCounts = field(default_factory=OutcomeCounts)
    comparative_ratios: ComparativeRatios | None = None

    @property
    def defense(self) -> OutcomeCounts:
        # Derived on read so it cannot drift from status/party_filed.
        return self.status - self.party_filed

    def outcomes_for_party(self, party: str) -> OutcomeCounts:
        if party == "prosecution":
            return self.party_filed
        if party == "defense":
            return self.defense
        return self.status

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type,
            "count": self.count,
            "status": self.status.to_dict(),
            "partyFiled": self.party_filed.to_dict(),
        }
        if self.comparative_ratios is not None:
            payload["comparativeRatios"] = self.comparative_ratios.to_dict()
        return payload


@dataclass(frozen=True, slots=True)
class SearchResults:
    dispositions: tuple[DispositionSeries, ...] = ()
    sentences: tuple[SentenceSeries, ...] = ()
    bail: tuple[BailSeries, ...] = ()
    motions: tuple[MotionSeries, ...] = ()
    total_cases: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCases": self.total_cases,
            "dispositions": [item.to_dict() for item in self.dispositions],
            "sentences": [item.to_dict() for item in self.sentences],
            "bailDecisions": [item.to_dict() for item in self.bail],
            "motions": [item.to_dict() for item in self.motions],
        }
