from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence

from .roster import Member, Part, Roster

logger = logging.getLogger(__name__)


class StageChartError(Exception):
    pass


class LayoutError(StageChartError):
    pass


class SlotAddressError(StageChartError):
    pass


class LayoutMode(str, Enum):
    auto = "auto"
    condition1 = "condition1"  # rows 1-2 sopranos/altos, row 3 tenors/basses
    condition2 = "condition2"  # rows 1-3 sopranos/altos, row 4 tenors/basses

    @property
    def min_rows(self) -> int:
        return _MIN_ROWS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_MIN_ROWS = {LayoutMode.auto: 1, LayoutMode.condition1: 3, LayoutMode.condition2: 4}
_DESCRIPTIONS = {
    LayoutMode.auto: "All parts in order, spread round-robin over every row",
    LayoutMode.condition1: "Rows 1-2 = Soprano/Alto, row 3 = Tenor/Bass",
    LayoutMode.condition2: "Rows 1-3 = Soprano/Alto, row 4 = Tenor/Bass",
}

Cell = Optional[Member]


@dataclass(frozen=True)
class Slot:
    row: int
    index: int


def _round_robin(rows: list[list[Member]], members: Iterable[Member], targets: Sequence[int]) -> None:
    for pos, m in enumerate(members):
        rows[targets[pos % len(targets)]].append(m)


def distribute(roster: Roster, row_count: int, mode: LayoutMode) -> list[list[Member]]:
    """
    Spread the roster over ``row_count`` raw rows according to ``mode``.

    Within each group of target rows, member ``p`` of the group's
    concatenated source goes to the group's ``p % k``-th row.
    """
    mode = LayoutMode(mode)
    if row_count < 1:
        raise LayoutError("row_count must be a positive integer")
    if row_count < mode.min_rows:
        raise LayoutError(f"layout {mode.value!r} requires at least {mode.min_rows} rows")

    rows: list[list[Member]] = [[] for _ in range(row_count)]
    upper = roster.concat(Part.soprano, Part.alto)
    lower = roster.concat(Part.tenor, Part.bass)
    if mode is LayoutMode.condition1:
        _round_robin(rows, upper, [0, 1])
        _round_robin(rows, lower, [2])
    elif mode is LayoutMode.condition2:
        _round_robin(rows, upper, [0, 1, 2])
        _round_robin(rows, lower, [3])
    else:
        _round_robin(rows, upper + lower, list(range(row_count)))
    return rows


def balance_rows(rows: Sequence[Sequence[Cell]]) -> list[list[Cell]]:
    """
    Pad every row to the longest row's length. The shorter side of the
    padding goes left, so an odd gap leaves the extra empty slot on the right.
    """
    if not rows:
        return []
    max_len = max(len(r) for r in rows)
    out: list[list[Cell]] = []
    for r in rows:
        trimmed = list(r[:max_len])
        diff = max_len - len(trimmed)
        pad_left = diff // 2
        pad_right = diff - pad_left
        out.append([None] * pad_left + trimmed + [None] * pad_right)
    return out


class StageChart:
    """
    Immutable rectangular grid of slots. ``swap`` returns a new chart and
    leaves this one untouched.
    """

    def __init__(self, rows: Sequence[Sequence[Cell]]):
        frozen = tuple(tuple(r) for r in rows)
        if frozen and any(len(r) != len(frozen[0]) for r in frozen):
            raise StageChartError("all rows must have the same length")
        self._rows = frozen

    @property
    def rows(self) -> tuple[tuple[Cell, ...], ...]:
        return self._rows

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def row_length(self) -> int:
        return len(self._rows[0]) if self._rows else 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StageChart):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"StageChart({self.row_count}x{self.row_length})"

    def _validate_slot(self, slot: Slot) -> None:
        if not (0 <= slot.row < self.row_count and 0 <= slot.index < self.row_length):
            raise SlotAddressError(f"slot out of bounds: row={slot.row}, index={slot.index}")

    def get(self, row: int, index: int) -> Cell:
        slot = Slot(row, index)
        self._validate_slot(slot)
        return self._rows[row][index]

    def is_empty(self, row: int, index: int) -> bool:
        return self.get(row, index) is None

    @property
    def occupied_count(self) -> int:
        return sum(1 for r in self._rows for m in r if m is not None)

    def find(self, label: str) -> Optional[Slot]:
        for r, row in enumerate(self._rows):
            for i, m in enumerate(row):
                if m is not None and m.label == label:
                    return Slot(r, i)
        return None

    def swap(self, a: Slot, b: Slot) -> "StageChart":
        self._validate_slot(a)
        self._validate_slot(b)
        if a == b:
            return self

        rows = list(self._rows)
        first = self._rows[a.row][a.index]
        second = self._rows[b.row][b.index]
        row_a = list(rows[a.row])
        row_a[a.index] = second
        if a.row == b.row:
            row_a[b.index] = first
            rows[a.row] = tuple(row_a)
        else:
            row_b = list(rows[b.row])
            row_b[b.index] = first
            rows[a.row] = tuple(row_a)
            rows[b.row] = tuple(row_b)
        return StageChart(rows)

    def to_dict(self) -> dict:
        return {
            "rows": self.row_count,
            "row_length": self.row_length,
            "chart": [[m.to_dict() if m is not None else None for m in r] for r in self._rows],
        }


def generate_chart(roster: Roster, row_count: int, mode: LayoutMode = LayoutMode.auto) -> StageChart:
    raw = distribute(roster, row_count, mode)
    chart = StageChart(balance_rows(raw))
    logger.debug("generated %r from %d members (mode=%s)", chart, roster.total, LayoutMode(mode).value)
    return chart
