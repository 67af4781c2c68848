# tests/helpers.py

from __future__ import annotations

import json
from pathlib import Path


def read_document(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def write_document(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
