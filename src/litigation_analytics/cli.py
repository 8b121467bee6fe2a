from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

import pandas as pd
import typer

from litigation_analytics.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from litigation_analytics.io.read import load_table
from litigation_analytics.io.source import FrameDataSource
from litigation_analytics.io.write import dump_payload, write_payload
from litigation_analytics.logging import configure_logging
from litigation_analytics.pipeline.build_results import ResultsBundle, build_results
from litigation_analytics.report.charts import build_chart
from litigation_analytics.scaling.variability import (
    describe_variability,
    resolve_display_type,
    variability_count,
)
from litigation_analytics.selection_codec import decode_selections, encode_selections
from litigation_analytics.selectors import Selector, selector_from_selections

app = typer.Typer(no_args_is_help=True, add_completion=False)


class TabName(str, Enum):
    dispositions = "dispositions"
    sentences = "sentences"
    bail = "bail"
    motions = "motions"


class ViewModeName(str, Enum):
    objective = "objective"
    comparative = "comparative"


def _load_app_config(config_path: Path | None) -> AppConfig:
    if config_path is None and DEFAULT_CONFIG_PATH.exists():
        config_path = DEFAULT_CONFIG_PATH
    return load_config(config_path)


def _load_source(aggregates: Path, motions: Path | None, cfg: AppConfig) -> FrameDataSource:
    try:
        aggregate_frame = load_table(aggregates)
        motion_frame = load_table(motions) if motions is not None else pd.DataFrame()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return FrameDataSource(aggregates=aggregate_frame, motions=motion_frame, config=cfg)


def _resolve_selector(
    court: int,
    judge: int,
    charge: int,
    selections: str | None,
) -> Selector:
    if selections is None:
        return Selector(court_id=court, judge_id=judge, charge_id=charge)
    decoded = decode_selections(selections)
    if all(selection is None for selection in decoded):
        raise typer.BadParameter("--selections did not decode to any selection")
    return selector_from_selections(decoded)


def _build_bundle(
    aggregates: Path,
    motions: Path | None,
    config: Path | None,
    court: int,
    judge: int,
    charge: int,
    selections: str | None,
) -> tuple[ResultsBundle, AppConfig]:
    cfg = _load_app_config(config)
    configure_logging(cfg.log_level)
    source = _load_source(aggregates, motions, cfg)
    selector = _resolve_selector(court, judge, charge, selections)
    try:
        return build_results(source, selector, cfg), cfg
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _emit(payload: object, out: Path | None) -> None:
    if out is None:
        typer.echo(dump_payload(payload))
        return
    write_payload(payload, out)
    typer.echo(f"Wrote: {out}")


@app.command()
def results(
    aggregates: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
    motions: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    court: int = typer.Option(0, min=0),
    judge: int = typer.Option(0, min=0),
    charge: int = typer.Option(0, min=0),
    selections: str | None = typer.Option(
        None,
        help="Encoded selections token; overrides --court/--judge/--charge.",
    ),
    out: Path | None = typer.Option(None, resolve_path=True),
) -> None:
    """Extract a selection, its baseline and the comparative ratios as JSON."""
    bundle, _ = _build_bundle(aggregates, motions, config, court, judge, charge, selections)
    _emit(bundle.to_dict(), out)


@app.command()
def chart(
    aggregates: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
    motions: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    court: int = typer.Option(0, min=0),
    judge: int = typer.Option(0, min=0),
    charge: int = typer.Option(0, min=0),
    selections: str | None = typer.Option(None),
    tab: TabName = typer.Option(TabName.dispositions),
    view_mode: ViewModeName = typer.Option(ViewModeName.objective),
    trial_type: str = typer.Option("all", help="all, bench, jury or none."),
    sentence_mode: str = typer.Option("frequency", help="frequency or severity."),
    sentence_type: str | None = typer.Option(None),
    bail_mode: str = typer.Option("frequency", help="frequency or severity."),
    party: str = typer.Option("all", help="all, prosecution or defense."),
    expanded: bool = typer.Option(False, help="Show every motion type."),
    out: Path | None = typer.Option(None, resolve_path=True),
) -> None:
    """Render one tab's chart payload, with its variability indicator."""
    bundle, cfg = _build_bundle(aggregates, motions, config, court, judge, charge, selections)
    results_for_mode = (
        bundle.comparative if view_mode is ViewModeName.comparative else bundle.subject
    )
    try:
        chart_data = build_chart(
            results_for_mode,
            cfg,
            tab.value,
            view_mode=view_mode.value,
            trial_type=trial_type,
            sentence_mode=sentence_mode,
            sentence_type=sentence_type,
            bail_mode=bail_mode,
            party=party,
            expanded=expanded,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    display_type = resolve_display_type(
        tab.value,
        trial_type=trial_type,
        sentence_mode=sentence_mode,
        sentence_type=chart_data.metadata.get("sentenceType", sentence_type),
        bail_mode=bail_mode,
    )
    count = variability_count(
        bundle.subject,
        tab.value,
        trial_type=trial_type,
        sentence_mode=sentence_mode,
        sentence_type=chart_data.metadata.get("sentenceType", sentence_type),
        bail_mode=bail_mode,
    )
    payload = {
        "chart": chart_data.to_dict(),
        "variability": describe_variability(count, display_type, cfg.variability).to_dict(),
    }
    _emit(payload, out)


@app.command("encode-selections")
def encode_selections_command(
    selections_json: str = typer.Argument(
        ...,
        help='JSON list such as \'[{"type": "Judges", "value": {"id": 7, "name": "Doe"}}]\'.',
    ),
) -> None:
    """Encode selections JSON into a URL-safe token."""
    try:
        selections = json.loads(selections_json)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid selections JSON: {exc}") from exc
    if not isinstance(selections, list):
        raise typer.BadParameter("Selections JSON must be a list")
    typer.echo(encode_selections(selections))


@app.command("decode-selections")
def decode_selections_command(token: str = typer.Argument(...)) -> None:
    """Decode a selections token; malformed tokens print two nulls."""
    decoded = decode_selections(token)
    typer.echo(
        dump_payload(
            [selection.to_dict() if selection is not None else None for selection in decoded]
        )
    )


if __name__ == "__main__":
    app()
