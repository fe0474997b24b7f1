from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Mapping, Optional


class Part(str, Enum):
    soprano = "Soprano"
    alto = "Alto"
    tenor = "Tenor"
    bass = "Bass"

    @property
    def initial(self) -> str:
        return self.value[0]


PARTS: tuple[Part, ...] = (Part.soprano, Part.alto, Part.tenor, Part.bass)


@dataclass(frozen=True)
class Member:
    id: str
    label: str
    part: Part

    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label, "part": self.part.value}


def _new_id() -> str:
    return str(uuid.uuid4())


def parse_count(value: object) -> int:
    """
    Normalize a free-form member count. Non-numeric, fractional or negative
    input counts as zero.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return int(value) if value.is_integer() and value > 0 else 0
    try:
        n = int(str(value).strip())
    except ValueError:
        return 0
    return max(n, 0)


def parse_row_count(value: object) -> int:
    if isinstance(value, bool) or value is None:
        return 1
    if isinstance(value, float):
        return max(int(value), 1) if value.is_integer() else 1
    try:
        n = value if isinstance(value, int) else int(str(value).strip())
    except ValueError:
        return 1
    return max(n, 1)


def coerce_part(value: object) -> Part:
    if isinstance(value, Part):
        return value
    key = str(value).strip().lower()
    for p in PARTS:
        if p.name == key:
            return p
    raise KeyError(f"unknown part: {value!r}")


class Roster:
    """
    Members generated for one configuration, grouped by part in the fixed
    Soprano, Alto, Tenor, Bass order.
    """

    def __init__(self, members: Mapping[Part, tuple[Member, ...]]):
        self._members = {p: tuple(members.get(p, ())) for p in PARTS}

    def __getitem__(self, part: Part) -> tuple[Member, ...]:
        return self._members[part]

    def __iter__(self) -> Iterator[Member]:
        for p in PARTS:
            yield from self._members[p]

    def __len__(self) -> int:
        return self.total

    @property
    def total(self) -> int:
        return sum(len(v) for v in self._members.values())

    def counts(self) -> dict[Part, int]:
        return {p: len(v) for p, v in self._members.items()}

    def concat(self, *parts: Part) -> list[Member]:
        out: list[Member] = []
        for p in parts:
            out.extend(self._members[p])
        return out


def build_roster(
    counts: Mapping[object, object],
    *,
    id_factory: Optional[Callable[[], str]] = None,
) -> Roster:
    make_id = id_factory or _new_id
    normalized = {coerce_part(k): parse_count(v) for k, v in counts.items()}
    members: dict[Part, tuple[Member, ...]] = {}
    for part in PARTS:
        n = normalized.get(part, 0)
        members[part] = tuple(Member(id=make_id(), label=f"{part.initial}{i}", part=part) for i in range(n))
    return Roster(members)
