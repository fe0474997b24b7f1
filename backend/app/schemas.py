from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field

from choir_seating.chart import LayoutMode
from choir_seating.roster import Part

# Counts arrive as free-form text from number inputs; normalization happens in the core.
RawCount = Union[int, float, str, None]


class PartCounts(BaseModel):
    soprano: RawCount = None
    alto: RawCount = None
    tenor: RawCount = None
    bass: RawCount = None

    def provided(self) -> dict[str, RawCount]:
        return {k: v for k, v in self.model_dump().items() if v is not None}


class LayoutConfigUpdate(BaseModel):
    counts: PartCounts = Field(default_factory=PartCounts)
    rows: Union[int, float, str, None] = None
    mode: Optional[LayoutMode] = None


class SlotAddress(BaseModel):
    row: int
    index: int


class SwapRequest(BaseModel):
    origin: SlotAddress
    destination: SlotAddress


class MemberOut(BaseModel):
    id: str
    label: str
    part: Part
    color: str


class RowOut(BaseModel):
    index: int
    offset: float
    slots: list[Optional[MemberOut]]


class LayoutConfigOut(BaseModel):
    counts: dict[str, int]
    rows: int
    mode: LayoutMode
    total: int


class LayoutOut(BaseModel):
    config: LayoutConfigOut
    row_length: int
    occupied: int
    empty_color: str
    rows: list[RowOut]


class ModeOut(BaseModel):
    value: LayoutMode
    description: str
    min_rows: int
