from __future__ import annotations

import os

from .chart import LayoutMode
from .roster import PARTS, Part, parse_count, parse_row_count

# Defaults mirror the counts a typical mixed choir starts from.
DEFAULT_COUNTS = {
    Part.soprano: 9,
    Part.alto: 10,
    Part.tenor: 5,
    Part.bass: 5,
}
DEFAULT_ROWS = 3
DEFAULT_MODE = LayoutMode.auto

ENV_PREFIX = "CHOIR_SEATING_"


def parse_mode(value: object, default: LayoutMode = DEFAULT_MODE) -> LayoutMode:
    try:
        return LayoutMode(str(value).strip().lower())
    except ValueError:
        return default


def default_counts() -> dict[Part, int]:
    out = {}
    for p in PARTS:
        raw = os.environ.get(f"{ENV_PREFIX}{p.name.upper()}")
        out[p] = DEFAULT_COUNTS[p] if raw is None else parse_count(raw)
    return out


def default_rows() -> int:
    raw = os.environ.get(f"{ENV_PREFIX}ROWS")
    return DEFAULT_ROWS if raw is None else parse_row_count(raw)


def default_mode() -> LayoutMode:
    raw = os.environ.get(f"{ENV_PREFIX}MODE")
    return DEFAULT_MODE if raw is None else parse_mode(raw)
