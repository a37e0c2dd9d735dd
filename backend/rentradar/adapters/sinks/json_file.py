# rentradar/adapters/sinks/json_file.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from ...schemas import ListingRecord


def write_listings(path: str | Path, records: Sequence[ListingRecord]) -> Path:
    """Indented JSON array, UTF-8, trailing newline. Parent dirs are created."""
    out = Path(path).resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    rows = [r.model_dump(mode="json") for r in records]
    out.write_text(json.dumps(rows, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return out
