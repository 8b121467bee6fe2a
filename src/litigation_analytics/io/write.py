from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def dump_payload(data: Any) -> str:
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)


def write_payload(data: Any, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_payload(data), encoding="utf-8")
    return path
