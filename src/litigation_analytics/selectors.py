from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from litigation_analytics.records import optional_int
from litigation_analytics.selection_codec import Selection

LOGGER = logging.getLogger(__name__)

GLOBAL_TITLE = "Global"
TITLE_SEPARATOR = " | "

SELECTION_TYPE_FIELDS: dict[str, str] = {
    "Judges": "judge_id",
    "Courts": "court_id",
    "Charges": "charge_id",
    "Charge Groups": "charge_id",
}


@dataclass(frozen=True, slots=True)
class Selector:
    """Court/judge/charge filter; 0 means "any" for each dimension."""

    court_id: int = 0
    judge_id: int = 0
    charge_id: int = 0

    @property
    def is_global(self) -> bool:
        return self.court_id == 0 and self.judge_id == 0 and self.charge_id == 0

    def to_dict(self) -> dict[str, int]:
        return {
            "courtId": self.court_id,
            "judgeId": self.judge_id,
            "chargeId": self.charge_id,
        }


def selector_from_selections(selections: Iterable[Selection | None]) -> Selector:
    """Fold decoded search selections into a selector; later selections override earlier ones."""
    ids: dict[str, int] = {"court_id": 0, "judge_id": 0, "charge_id": 0}
    for selection in selections:
        if selection is None:
            continue
        field = SELECTION_TYPE_FIELDS.get(selection.type)
        if field is None:
            LOGGER.debug("Ignoring selection of unknown type %r", selection.type)
            continue
        ids[field] = optional_int(selection.value.id) or 0
    return Selector(**ids)


def baseline_selector(selector: Selector) -> Selector:
    """Reference population a selection is compared against.

    A charge-only (or charge-free) selection compares against everything; a
    judge or court narrowed to a charge compares against that charge statewide.
    """
    if selector.charge_id == 0:
        return Selector()
    if selector.judge_id == 0 and selector.court_id == 0:
        return Selector()
    return Selector(charge_id=selector.charge_id)


def format_selector_title(
    selector: Selector,
    names: Mapping[str, Mapping[int, str]] | None = None,
) -> str:
    """Human-readable title: "Global", or the judge, court and charge names joined by " | ".

    ``names`` maps ``"judges"``, ``"courts"`` and ``"charges"`` to id -> name
    lookups; missing names fall back to placeholders.
    """
    if selector.is_global:
        return GLOBAL_TITLE
    lookup = names or {}
    segments: list[str] = []
    if selector.judge_id != 0:
        segments.append(lookup.get("judges", {}).get(selector.judge_id, "Unknown Judge"))
    if selector.court_id != 0:
        segments.append(lookup.get("courts", {}).get(selector.court_id, "Unknown Court"))
    if selector.charge_id != 0:
        segments.append(
            lookup.get("charges", {}).get(selector.charge_id, f"Charge #{selector.charge_id}")
        )
    return TITLE_SEPARATOR.join(segments)
