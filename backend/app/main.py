from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from choir_seating.board import SeatingBoard
from choir_seating.chart import LayoutMode, Slot, StageChart, StageChartError
from choir_seating.render import EMPTY_COLOR, PART_COLORS, row_offsets

from .schemas import (
    LayoutConfigOut,
    LayoutConfigUpdate,
    LayoutOut,
    MemberOut,
    ModeOut,
    RowOut,
    SwapRequest,
)
from .state import get_board, init_board

logger = logging.getLogger(__name__)

app = FastAPI(title="Choir Stage Seating API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup() -> None:
    try:
        init_board()
    except StageChartError as e:
        # Bad env defaults; start with an empty chart and let the client reconfigure.
        logger.warning("initial layout not generated: %s", e)


def _layout(board: SeatingBoard, chart: Optional[StageChart] = None) -> LayoutOut:
    chart = chart if chart is not None else board.chart
    cfg = board.config
    offsets = row_offsets(chart)
    rows = []
    for r, row in enumerate(chart.rows):
        slots = [
            None
            if m is None
            else MemberOut(id=m.id, label=m.label, part=m.part, color=PART_COLORS[m.part])
            for m in row
        ]
        rows.append(RowOut(index=r, offset=offsets[r], slots=slots))
    return LayoutOut(
        config=LayoutConfigOut(**cfg.to_dict()),
        row_length=chart.row_length,
        occupied=chart.occupied_count,
        empty_color=EMPTY_COLOR,
        rows=rows,
    )


def _apply_config(board: SeatingBoard, payload: LayoutConfigUpdate) -> None:
    board.configure(
        counts=payload.counts.provided(),
        rows=payload.rows,
        mode=payload.mode.value if payload.mode is not None else None,
    )


@app.get("/health")
def health() -> dict:
    return {"ok": True}


@app.get("/modes", response_model=list[ModeOut])
def list_modes() -> list[ModeOut]:
    return [ModeOut(value=m, description=m.description, min_rows=m.min_rows) for m in LayoutMode]


@app.get("/layout", response_model=LayoutOut)
def get_layout(board: SeatingBoard = Depends(get_board)) -> LayoutOut:
    return _layout(board)


@app.put("/layout/config", response_model=LayoutConfigOut)
def update_config(payload: LayoutConfigUpdate, board: SeatingBoard = Depends(get_board)) -> LayoutConfigOut:
    _apply_config(board, payload)
    return LayoutConfigOut(**board.config.to_dict())


@app.post("/layout/regenerate", response_model=LayoutOut)
def regenerate(
    payload: Optional[LayoutConfigUpdate] = None,
    board: SeatingBoard = Depends(get_board),
) -> LayoutOut:
    if payload is not None:
        _apply_config(board, payload)
    try:
        chart = board.regenerate()
    except StageChartError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _layout(board, chart)


@app.post("/layout/swap", response_model=LayoutOut)
def swap(payload: SwapRequest, board: SeatingBoard = Depends(get_board)) -> LayoutOut:
    origin = Slot(payload.origin.row, payload.origin.index)
    destination = Slot(payload.destination.row, payload.destination.index)
    try:
        chart = board.swap(origin, destination)
    except StageChartError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _layout(board, chart)
