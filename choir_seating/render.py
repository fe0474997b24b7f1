from __future__ import annotations

from typing import Optional

from .chart import StageChart
from .roster import Member, Part

PART_COLORS = {
    Part.soprano: "#ffe0e6",
    Part.alto: "#e0ffe3",
    Part.tenor: "#e0f0ff",
    Part.bass: "#fff5cc",
}
EMPTY_COLOR = "#f0f0f0"

SLOT_WIDTH = 110


def row_offset(row_index: int, row_length: int, max_row_length: int, slot_width: float = SLOT_WIDTH) -> float:
    # Odd rows shift right by half a slot.
    total = max(max_row_length, 1) * slot_width
    current = row_length * slot_width
    indent = (row_index % 2) * (slot_width / 2)
    return max((total - current) / 2 + indent, 0)


def row_offsets(chart: StageChart, slot_width: float = SLOT_WIDTH) -> list[float]:
    return [row_offset(i, len(r), chart.row_length, slot_width) for i, r in enumerate(chart.rows)]


def _cell(member: Optional[Member], width: int) -> str:
    if member is None:
        return ".".center(width)
    t = member.label
    if len(t) > width:
        t = t[: max(0, width - 1)] + "…"
    return t.center(width)


def render_ascii(chart: StageChart, *, cell_width: int = 6) -> str:
    cell_width = max(3, int(cell_width))
    if not chart.row_count:
        return "(empty)"

    # Terminal cells are cell_width + 1 wide; scale the pixel offset to that.
    offsets = row_offsets(chart, slot_width=cell_width + 1)
    lines = []
    for r, row in enumerate(chart.rows):
        cells = " ".join(_cell(m, cell_width) for m in row)
        lines.append(f"R{r}".ljust(4) + " " * int(offsets[r]) + cells)
    return "\n".join(lines)
