from __future__ import annotations

from choir_seating.board import SeatingBoard

# One board per process; nothing is written to disk.
_board = SeatingBoard()


def init_board() -> None:
    _board.regenerate()


def get_board() -> SeatingBoard:
    return _board
