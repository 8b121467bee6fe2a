"""URL-safe token for the (primary, secondary) filter selections.

Tokens are base64 of compact UTF-8 JSON with ``+``/``/`` swapped for ``-``/``_``
and padding removed, so they can sit in a query string unescaped.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping
from urllib.parse import parse_qs, urlencode

LOGGER = logging.getLogger(__name__)

SELECTIONS_PARAM = "selections"
SELECTION_SLOTS = 2


@dataclass(frozen=True, slots=True)
class SelectionValue:
    id: Any
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True, slots=True)
class Selection:
    type: str
    value: SelectionValue

    @classmethod
    def from_mapping(cls, data: Any) -> Selection | None:
        """Build a selection from decoded JSON, or ``None`` when the shape is wrong."""
        if not isinstance(data, Mapping):
            return None
        selection_type = data.get("type")
        value = data.get("value")
        if not selection_type or not isinstance(value, Mapping) or "id" not in value:
            return None
        name = value.get("name")
        return cls(
            type=str(selection_type),
            value=SelectionValue(id=value["id"], name=None if name is None else str(name)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "value": self.value.to_dict()}


def _project(selection: Selection | Mapping[str, Any] | None) -> dict[str, Any] | None:
    if selection is None:
        return None
    if isinstance(selection, Selection):
        return selection.to_dict()
    parsed = Selection.from_mapping(selection)
    return parsed.to_dict() if parsed is not None else None


def encode_selections(selections: Iterable[Selection | Mapping[str, Any] | None]) -> str:
    """Serialize the non-empty selections into a URL-safe token."""
    payload = [item for item in (_project(selection) for selection in selections) if item]
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return encoded.replace("+", "-").replace("/", "_").rstrip("=")


def _empty() -> list[Selection | None]:
    return [None] * SELECTION_SLOTS


def decode_selections(token: str | None) -> list[Selection | None]:
    """Inverse of ``encode_selections``; any malformed token decodes to empty slots.

    The result always has exactly two entries.
    """
    if not token or not isinstance(token, str):
        return _empty()
    standard = token.strip().replace("-", "+").replace("_", "/")
    standard += "=" * (-len(standard) % 4)
    try:
        raw = base64.b64decode(standard.encode("ascii"), validate=True)
        payload = json.loads(raw.decode("utf-8"))
    except (ValueError, binascii.Error, UnicodeError, TypeError, RecursionError) as exc:
        LOGGER.debug("Ignoring malformed selections token: %s", exc)
        return _empty()

    if not isinstance(payload, list):
        LOGGER.debug("Ignoring selections token with non-list payload")
        return _empty()

    decoded: list[Selection | None] = [
        Selection.from_mapping(item) for item in payload[:SELECTION_SLOTS]
    ]
    decoded.extend([None] * (SELECTION_SLOTS - len(decoded)))
    return decoded


def selections_query(selections: Iterable[Selection | Mapping[str, Any] | None]) -> str:
    return urlencode({SELECTIONS_PARAM: encode_selections(selections)})


def selections_from_query(query: str) -> list[Selection | None]:
    values = parse_qs(query.lstrip("?")).get(SELECTIONS_PARAM)
    return decode_selections(values[0] if values else None)
