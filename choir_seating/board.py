"""
Seating board (state container)
===============================
Holds the one current ``StageChart`` together with the configuration it is
generated from. Every mutation goes through ``regenerate`` or ``swap`` and
replaces the chart with a complete new value, so readers only ever see the
chart from before or after an event.

Front ends (CLI, HTTP, a drag-and-drop UI) call these two operations and can
``subscribe`` to be told about each replacement; they never own the chart.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from .chart import LayoutMode, Slot, StageChart, StageChartError, generate_chart
from .config import default_counts, default_mode, default_rows, parse_mode
from .roster import PARTS, Part, Roster, build_roster, coerce_part, parse_count, parse_row_count

logger = logging.getLogger(__name__)

Listener = Callable[[StageChart], None]


@dataclass(frozen=True)
class SeatingConfig:
    counts: Mapping[Part, int] = field(default_factory=default_counts)
    rows: int = field(default_factory=default_rows)
    mode: LayoutMode = field(default_factory=default_mode)

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", LayoutMode(self.mode))

    @classmethod
    def from_raw(
        cls,
        counts: Optional[Mapping[object, object]] = None,
        rows: object = None,
        mode: object = None,
        *,
        base: Optional["SeatingConfig"] = None,
    ) -> "SeatingConfig":
        """Build a config from unvalidated input, keeping ``base`` values for anything omitted."""
        base = base or cls()
        merged = dict(base.counts)
        for k, v in (counts or {}).items():
            merged[coerce_part(k)] = parse_count(v)
        return cls(
            counts={p: merged.get(p, 0) for p in PARTS},
            rows=base.rows if rows is None else parse_row_count(rows),
            mode=base.mode if mode is None else parse_mode(mode, default=base.mode),
        )

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> dict:
        return {
            "counts": {p.value: self.counts.get(p, 0) for p in PARTS},
            "rows": self.rows,
            "mode": self.mode.value,
            "total": self.total,
        }


class SeatingBoard:
    def __init__(self, config: Optional[SeatingConfig] = None, *, id_factory: Optional[Callable[[], str]] = None):
        self._lock = threading.RLock()
        self._config = config or SeatingConfig()
        self._id_factory = id_factory
        self._chart = StageChart([])
        self._roster: Optional[Roster] = None
        self._listeners: list[Listener] = []

    @property
    def config(self) -> SeatingConfig:
        return self._config

    @property
    def chart(self) -> StageChart:
        return self._chart

    @property
    def roster(self) -> Optional[Roster]:
        return self._roster

    def configure(
        self,
        counts: Optional[Mapping[object, object]] = None,
        rows: object = None,
        mode: object = None,
    ) -> SeatingConfig:
        with self._lock:
            self._config = SeatingConfig.from_raw(counts, rows, mode, base=self._config)
            return self._config

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, chart: StageChart) -> None:
        self._chart = chart
        for listener in list(self._listeners):
            try:
                listener(chart)
            except Exception:  # noqa: BLE001 - the chart is already replaced; keep notifying
                logger.exception("seating listener %r failed", listener)

    def regenerate(self) -> StageChart:
        with self._lock:
            cfg = self._config
            roster = build_roster(cfg.counts, id_factory=self._id_factory)
            try:
                chart = generate_chart(roster, cfg.rows, cfg.mode)
            except StageChartError as e:
                logger.warning("regenerate rejected: %s", e)
                raise
            self._roster = roster
            logger.info("regenerated %r (mode=%s, members=%d)", chart, cfg.mode.value, roster.total)
            self._publish(chart)
            return chart

    def swap(self, origin: Slot, destination: Slot) -> StageChart:
        with self._lock:
            try:
                chart = self._chart.swap(origin, destination)
            except StageChartError as e:
                logger.warning("swap rejected: %s", e)
                raise
            if chart is self._chart:
                return chart
            logger.info("swapped R%dS%d <-> R%dS%d", origin.row, origin.index, destination.row, destination.index)
            self._publish(chart)
            return chart
