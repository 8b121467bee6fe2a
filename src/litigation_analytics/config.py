from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from litigation_analytics.scaling.bar_scale import (
    AutoDomain,
    DomainPolicy,
    ExponentialDomain,
    FixedDomain,
)
from litigation_analytics.scaling.variability import VariabilityBand, default_variability_bands

MONEY_BUCKET_STEPS = [50, 100, 200, 300, 500, 1000, 2000, 3000, 4000, 5000]
MONTH_BUCKET_STEPS = [1, 2, 3, 4, 6, 8, 10, 12, 15, 18, 21, 24]
BAIL_BUCKET_STEPS = [500, 1000, 2000, 3000, 5000, 10000, 15000, 20000, 30000, 40000, 50000]


class BucketField(BaseModel):
    field: str
    label: str


def money_buckets(prefix: str, steps: list[int]) -> list[BucketField]:
    buckets = [BucketField(field=f"{prefix}{step}", label=f"${step:,}") for step in steps]
    buckets.append(BucketField(field=f"{prefix}{steps[-1]}_plus", label=f"${steps[-1]:,}+"))
    return buckets


def month_buckets(prefix: str, steps: list[int]) -> list[BucketField]:
    buckets = [
        BucketField(field=f"{prefix}{step}", label=f"{step} month" + ("" if step == 1 else "s"))
        for step in steps
    ]
    buckets.append(BucketField(field=f"{prefix}{steps[-1]}_plus", label=f"{steps[-1]}+ months"))
    return buckets


class RecordsConfig(BaseModel):
    total_cases_fields: list[str] = Field(
        default_factory=lambda: [
            "total_charges_disposed",
            "total_case_dispositions",
            "total_cases",
        ],
        min_length=1,
    )
    prosecution_parties: list[str] = Field(default_factory=lambda: ["commonwealth"])
    any_category: str = "any"
    bench_category: str = "bench_trial"
    jury_category: str = "jury_trial"
    no_trial_category: str = "no_trial"


class DispositionLabel(BaseModel):
    field: str
    label: str


def _default_disposition_labels() -> list[DispositionLabel]:
    return [
        DispositionLabel(field=field, label=label)
        for field, label in (
            ("aquittals", "Acquittal"),
            ("guilty", "Guilty"),
            ("guilty_plea", "Guilty Plea"),
            ("guilty_file", "Guilty File"),
            ("dismissals", "Dismissal"),
            ("conditional_dismissals", "Conditional Dismissal"),
            ("dismissed_lack_of_prosecution", "DLOP"),
            ("no_probable_cause", "No Probable Cause"),
            ("nolle_prosequis", "Nolle Prosequi"),
            ("cwof", "CWOF"),
            ("not_responsible", "Not Responsible"),
            ("responsible", "Responsible"),
        )
    ]


class DispositionsConfig(BaseModel):
    labels: list[DispositionLabel] = Field(default_factory=_default_disposition_labels)


class SentenceKindConfig(BaseModel):
    type: str
    count_field: str
    total_field: str | None = None
    days_field: str | None = None
    buckets: list[BucketField] = Field(default_factory=list)


def _default_sentence_kinds() -> list[SentenceKindConfig]:
    return [
        SentenceKindConfig(
            type="Fine",
            count_field="fine_count",
            total_field="total_fine",
            buckets=money_buckets("fine_", MONEY_BUCKET_STEPS),
        ),
        SentenceKindConfig(
            type="Fee",
            count_field="fee_count",
            total_field="total_fee",
            buckets=money_buckets("fee_", MONEY_BUCKET_STEPS),
        ),
        SentenceKindConfig(
            type="Probation",
            count_field="probation_count",
            days_field="total_probation_days",
            buckets=month_buckets("probation_", MONTH_BUCKET_STEPS),
        ),
        SentenceKindConfig(
            type="Incarceration",
            count_field="hoc_count",
            days_field="total_hoc_days",
            buckets=month_buckets("hoc_", MONTH_BUCKET_STEPS),
        ),
        SentenceKindConfig(
            type="License Suspension",
            count_field="license_lost_count",
            days_field="total_license_lost_days",
            buckets=month_buckets("license_lost_", MONTH_BUCKET_STEPS),
        ),
    ]


class SentencesConfig(BaseModel):
    kinds: list[SentenceKindConfig] = Field(default_factory=_default_sentence_kinds)
    emit_empty_kinds: bool = True


class BailTypeConfig(BaseModel):
    type: str
    count_field: str
    cost_field: str | None = None
    buckets: list[BucketField] | None = None


def _default_bail_types() -> list[BailTypeConfig]:
    return [
        BailTypeConfig(type="Personal Recognizance", count_field="free_bail"),
        BailTypeConfig(
            type="Cash Bail",
            count_field="cost_bail",
            cost_field="total_bail_cost",
            buckets=money_buckets("bail_", BAIL_BUCKET_STEPS),
        ),
        BailTypeConfig(type="Denied", count_field="denied_bail"),
    ]


class BailConfig(BaseModel):
    types: list[BailTypeConfig] = Field(default_factory=_default_bail_types)
    emit_empty_types: bool = True


def _default_motion_display_names() -> dict[str, str]:
    return {
        "dismiss": "Dismiss",
        "suppress": "Suppress",
        "discovery": "Discovery",
        "bail": "Revoke Bail (58b)",
        "dangerousness": "Dangerousness (58a)",
        "continue": "Continue",
        "funds": "Funds",
        "sequester": "Sequester",
        "speedy": "Speedy Trial",
        "bill of particulars": "Bill of Particulars",
        "amend charge": "Amend Charge",
        "protect": "Protective",
        "uncharged conduct": "Uncharged Conduct",
        "nolle prosequi": "Nolle Prosequi",
        "withdraw": "Withdraw",
        "obtain": "Obtain",
        "travel": "Travel",
        "third party records": "Third Party Records",
        "virtual": "Virtual",
        "record-seal": "Record Seal",
        "record-medical": "Record Medical",
        "record-criminal": "Record Criminal",
        "other": "Other",
    }


class MotionsConfig(BaseModel):
    display_names: dict[str, str] = Field(default_factory=_default_motion_display_names)
    unknown_as_denied: list[str] = Field(default_factory=lambda: ["dismiss", "suppress"])
    include_unlisted: bool = True
    collapsed_limit: int = Field(default=8, ge=1)
    hide_other_outcome: bool = True


def _comparative_domain() -> ExponentialDomain:
    return ExponentialDomain(
        base_buffer=0.6,
        min_buffer=0.1,
        decay_factor=0.4,
        threshold_value=0.5,
    )


class TabDomainConfig(BaseModel):
    objective: DomainPolicy = Field(default_factory=AutoDomain)
    comparative: DomainPolicy = Field(default_factory=_comparative_domain)

    def for_mode(self, view_mode: str) -> FixedDomain | AutoDomain | ExponentialDomain:
        return self.comparative if view_mode == "comparative" else self.objective


class ChartsConfig(BaseModel):
    dispositions: TabDomainConfig = Field(
        default_factory=lambda: TabDomainConfig(objective=FixedDomain(min=0.0, max=100.0))
    )
    sentences: TabDomainConfig = Field(default_factory=TabDomainConfig)
    bail: TabDomainConfig = Field(
        default_factory=lambda: TabDomainConfig(objective=FixedDomain(min=0.0, max=100.0))
    )
    motions: TabDomainConfig = Field(default_factory=TabDomainConfig)

    def for_tab(self, tab: str) -> TabDomainConfig:
        return getattr(self, tab)


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    records: RecordsConfig = Field(default_factory=RecordsConfig)
    dispositions: DispositionsConfig = Field(default_factory=DispositionsConfig)
    sentences: SentencesConfig = Field(default_factory=SentencesConfig)
    bail: BailConfig = Field(default_factory=BailConfig)
    motions: MotionsConfig = Field(default_factory=MotionsConfig)
    charts: ChartsConfig = Field(default_factory=ChartsConfig)
    variability: dict[str, VariabilityBand] = Field(default_factory=default_variability_bands)
    log_level: str = "INFO"


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def load_config(path: Path | None = None) -> AppConfig:
    if path is None:
        config = AppConfig()
    else:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        config = AppConfig.model_validate(data)

    config.log_level = os.getenv("LITIGATION_ANALYTICS_LOG_LEVEL") or config.log_level
    return config
