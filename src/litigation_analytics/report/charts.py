"""Chart payloads for the four results tabs.

Each builder turns one ``SearchResults`` into labels plus datasets and attaches
the value-axis domain for the tab's configured policy. In comparative mode the
datasets carry ratios already mapped to signed percent offsets, so the domain
is computed over exactly the values that get drawn.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from litigation_analytics.config import AppConfig
from litigation_analytics.scaling.bar_scale import Domain, compute_domain, max_abs_value
from litigation_analytics.scaling.formatting import to_relative_percents
from litigation_analytics.series import MotionSeries, SearchResults

VIEW_MODES = ("objective", "comparative")
TABS = ("dispositions", "sentences", "bail", "motions")
TRIAL_TYPE_FILTERS = ("all", "bench", "jury", "none")
DISPLAY_MODES = ("frequency", "severity")
PARTY_FILTERS = ("all", "prosecution", "defense")
MOTION_STACK = "outcomes"


@dataclass(frozen=True, slots=True)
class ChartDataset:
    label: str
    data: tuple[float | None, ...]
    stack: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"label": self.label, "data": list(self.data)}
        if self.stack is not None:
            payload["stack"] = self.stack
        return payload


@dataclass(frozen=True, slots=True)
class ChartData:
    labels: tuple[str, ...] = ()
    datasets: tuple[ChartDataset, ...] = ()
    domain: Domain | None = None
    x_axis_label: str = ""
    view_mode: str = "objective"
    layout: str = "horizontal"
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.labels or not self.datasets

    def to_dict(self) -> dict[str, Any]:
        return {
            "labels": list(self.labels),
            "datasets": [dataset.to_dict() for dataset in self.datasets],
            "domain": self.domain.to_dict() if self.domain is not None else None,
            "xAxisLabel": self.x_axis_label,
            "viewMode": self.view_mode,
            "layout": self.layout,
            "metadata": dict(self.metadata),
        }


def _check_choice(name: str, value: str, allowed: Sequence[str]) -> None:
    if value not in allowed:
        raise ValueError(f"Unsupported {name}: {value!r} (expected one of {', '.join(allowed)})")


def _finalize(
    tab: str,
    labels: Sequence[str],
    datasets: Sequence[ChartDataset],
    config: AppConfig,
    *,
    view_mode: str,
    x_axis_label: str,
    layout: str = "horizontal",
    metadata: dict[str, Any] | None = None,
) -> ChartData:
    comparative = view_mode == "comparative"
    if not labels or not datasets:
        return ChartData(x_axis_label=x_axis_label, view_mode=view_mode, layout=layout)

    if comparative:
        datasets = [
            ChartDataset(
                label=dataset.label,
                data=tuple(to_relative_percents(dataset.data)),
                stack=dataset.stack,
            )
            for dataset in datasets
        ]
    policy = config.charts.for_tab(tab).for_mode(view_mode)
    domain = compute_domain(
        max_abs_value(dataset.data for dataset in datasets),
        policy,
        comparative=comparative,
    )
    return ChartData(
        labels=tuple(labels),
        datasets=tuple(datasets),
        domain=domain,
        x_axis_label=x_axis_label,
        view_mode=view_mode,
        layout=layout,
        metadata=metadata or {},
    )


def dispositions_chart(
    results: SearchResults,
    config: AppConfig,
    *,
    view_mode: str = "objective",
    trial_type: str = "all",
) -> ChartData:
    _check_choice("view mode", view_mode, VIEW_MODES)
    _check_choice("trial type", trial_type, TRIAL_TYPE_FILTERS)
    scale = 100.0 if view_mode == "objective" else 1.0
    if trial_type == "all":
        values = [item.ratio * scale for item in results.dispositions]
    else:
        values = [
            getattr(item.trial_type_breakdown, trial_type) * scale
            for item in results.dispositions
        ]
    return _finalize(
        "dispositions",
        [item.type for item in results.dispositions],
        [ChartDataset(label="", data=tuple(values))],
        config,
        view_mode=view_mode,
        x_axis_label=(
            "Disposition % Compared to Avg"
            if view_mode == "comparative"
            else "Percentage of Total Charges"
        ),
    )


def sentences_chart(
    results: SearchResults,
    config: AppConfig,
    *,
    view_mode: str = "objective",
    mode: str = "frequency",
    sentence_type: str | None = None,
) -> ChartData:
    _check_choice("view mode", view_mode, VIEW_MODES)
    _check_choice("sentence mode", mode, DISPLAY_MODES)
    comparative = view_mode == "comparative"

    if mode == "frequency":
        ordered = sorted(results.sentences, key=lambda item: item.percentage, reverse=True)
        return _finalize(
            "sentences",
            [item.type for item in ordered],
            [
                ChartDataset(
                    label="Sentence Frequency",
                    data=tuple(item.percentage for item in ordered),
                )
            ],
            config,
            view_mode=view_mode,
            x_axis_label="Relative to Average" if comparative else "Percentage",
        )

    kind_type = sentence_type or (results.sentences[0].type if results.sentences else "")
    kind = next((item for item in results.sentences if item.type == kind_type), None)
    buckets = kind.buckets if kind is not None else ()
    return _finalize(
        "sentences",
        [bucket.label for bucket in buckets],
        [ChartDataset(label=kind_type, data=tuple(bucket.percentage for bucket in buckets))],
        config,
        view_mode=view_mode,
        x_axis_label=(
            f"{kind_type} Percentage Relative to Average"
            if comparative
            else f"Percent of {kind_type} Sentences"
        ),
        layout="vertical",
        metadata={"sentenceType": kind_type},
    )


def bail_chart(
    results: SearchResults,
    config: AppConfig,
    *,
    view_mode: str = "objective",
    mode: str = "frequency",
    cash_bail_type: str = "Cash Bail",
) -> ChartData:
    _check_choice("view mode", view_mode, VIEW_MODES)
    _check_choice("bail mode", mode, DISPLAY_MODES)
    comparative = view_mode == "comparative"

    if mode == "frequency":
        return _finalize(
            "bail",
            [item.type for item in results.bail],
            [ChartDataset(label="", data=tuple(item.percentage for item in results.bail))],
            config,
            view_mode=view_mode,
            x_axis_label=(
                "Bail Decision Ratio Relative to Average" if comparative else "Percent of Cases"
            ),
        )

    cash_bail = next((item for item in results.bail if item.type == cash_bail_type), None)
    buckets = cash_bail.buckets if cash_bail is not None and cash_bail.buckets else ()
    return _finalize(
        "bail",
        [bucket.label for bucket in buckets],
        [ChartDataset(label="", data=tuple(bucket.percentage for bucket in buckets))],
        config,
        view_mode=view_mode,
        x_axis_label=(
            "Bail Percentage Relative to Average" if comparative else "Percent of Cash Bail Cases"
        ),
        layout="vertical",
    )


def motion_label(motion_id: str, display_names: dict[str, str]) -> str:
    if motion_id in display_names:
        return display_names[motion_id]
    return motion_id[:1].upper() + motion_id[1:]


def _objective_motion_datasets(
    motions: Sequence[MotionSeries],
    party: str,
    *,
    include_other: bool,
) -> list[ChartDataset]:
    # Defense counts are a difference of sums and can dip below zero on dirty rows.
    outcomes = [item.outcomes_for_party(party) for item in motions]
    clamp = party == "defense"

    def _values(attribute: str) -> tuple[float, ...]:
        values = [getattr(outcome, attribute) for outcome in outcomes]
        return tuple(max(value, 0.0) for value in values) if clamp else tuple(values)

    datasets = [
        ChartDataset(label="Granted", data=_values("granted"), stack=MOTION_STACK),
        ChartDataset(label="Denied", data=_values("denied"), stack=MOTION_STACK),
    ]
    if include_other:
        datasets.append(ChartDataset(label="Other", data=_values("other"), stack=MOTION_STACK))
    return datasets


def motions_chart(
    results: SearchResults,
    config: AppConfig,
    *,
    view_mode: str = "objective",
    party: str = "all",
    expanded: bool = False,
) -> ChartData:
    _check_choice("view mode", view_mode, VIEW_MODES)
    _check_choice("party filter", party, PARTY_FILTERS)
    motions_config = config.motions
    shown = list(results.motions)
    if not expanded:
        shown = shown[: motions_config.collapsed_limit]
    labels = [motion_label(item.type, motions_config.display_names) for item in shown]

    if view_mode == "comparative":
        datasets = [
            ChartDataset(
                label="",
                data=tuple(
                    item.comparative_ratios.for_party(party)
                    if item.comparative_ratios is not None
                    else 1.0
                    for item in shown
                ),
            )
        ]
        x_axis_label = "Ratio of Motions Granted Relative to Average"
    else:
        datasets = _objective_motion_datasets(
            shown,
            party,
            include_other=not motions_config.hide_other_outcome,
        )
        x_axis_label = "Number of Motions"

    return _finalize(
        "motions",
        labels,
        datasets,
        config,
        view_mode=view_mode,
        x_axis_label=x_axis_label,
        metadata={
            "expanded": expanded,
            "hiddenCount": len(results.motions) - len(shown),
            "party": party,
        },
    )


def build_chart(
    results: SearchResults,
    config: AppConfig,
    tab: str,
    *,
    view_mode: str = "objective",
    trial_type: str = "all",
    sentence_mode: str = "frequency",
    sentence_type: str | None = None,
    bail_mode: str = "frequency",
    party: str = "all",
    expanded: bool = False,
) -> ChartData:
    _check_choice("tab", tab, TABS)
    if tab == "dispositions":
        return dispositions_chart(results, config, view_mode=view_mode, trial_type=trial_type)
    if tab == "sentences":
        return sentences_chart(
            results,
            config,
            view_mode=view_mode,
            mode=sentence_mode,
            sentence_type=sentence_type,
        )
    if tab == "bail":
        return bail_chart(results, config, view_mode=view_mode, mode=bail_mode)
    return motions_chart(results, config, view_mode=view_mode, party=party, expanded=expanded)
