from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path

from .board import SeatingBoard, SeatingConfig
from .chart import LayoutMode, Slot, StageChartError
from .config import default_counts, default_mode, default_rows
from .render import render_ascii, row_offsets
from .roster import PARTS, parse_count, parse_row_count


def _add_common_args(p: argparse.ArgumentParser) -> None:
    defaults = default_counts()
    for part in PARTS:
        p.add_argument(
            f"--{part.name}",
            default=str(defaults[part]),
            help=f"Number of {part.value} members (default: {defaults[part]})",
        )
    p.add_argument("--rows", default=str(default_rows()), help="Number of rows (clamped to >= 1)")
    p.add_argument(
        "--mode",
        choices=[m.value for m in LayoutMode],
        default=default_mode().value,
        help="Layout mode",
    )
    p.add_argument(
        "--swap",
        nargs=4,
        type=int,
        action="append",
        default=[],
        metavar=("ROW1", "IDX1", "ROW2", "IDX2"),
        help="Swap two slots after generating (repeatable, applied in order)",
    )


def _build_board(args: argparse.Namespace) -> SeatingBoard:
    config = SeatingConfig(
        counts={p: parse_count(getattr(args, p.name)) for p in PARTS},
        rows=parse_row_count(args.rows),
        mode=LayoutMode(args.mode),
    )
    board = SeatingBoard(config)
    board.regenerate()
    for r1, i1, r2, i2 in args.swap:
        board.swap(Slot(r1, i1), Slot(r2, i2))
    return board


def cmd_show(args: argparse.Namespace) -> int:
    board = _build_board(args)
    if args.format == "json":
        data = {
            "config": board.config.to_dict(),
            **board.chart.to_dict(),
            "offsets": row_offsets(board.chart),
        }
        print(json.dumps(data, indent=2))
    else:
        print(render_ascii(board.chart, cell_width=args.width))
        print(f"Total members: {board.config.total}")
    return 0


def cmd_export_csv(args: argparse.Namespace) -> int:
    board = _build_board(args)
    out = Path(args.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["row", "index", "label", "part"])
        for r, row in enumerate(board.chart.rows):
            for i, m in enumerate(row):
                if m is not None:
                    w.writerow([r, i, m.label, m.part.value])
    print(f"Exported {board.chart.occupied_count} assigned slots to {out}")
    return 0


def cmd_modes(args: argparse.Namespace) -> int:
    for m in LayoutMode:
        print(f"{m.value:<12} (min rows {m.min_rows})  {m.description}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="choir_seating", description="Choir stage seating layout (CLI).")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_show = sub.add_parser("show", help="Generate a layout and print it")
    _add_common_args(p_show)
    p_show.add_argument("--width", type=int, default=6, help="Cell width for display")
    p_show.add_argument("--format", choices=["ascii", "json"], default="ascii")
    p_show.set_defaults(func=cmd_show)

    p_export = sub.add_parser("export-csv", help="Generate a layout and export assigned slots to CSV")
    _add_common_args(p_export)
    p_export.add_argument("--output", required=True)
    p_export.set_defaults(func=cmd_export_csv)

    p_modes = sub.add_parser("modes", help="List layout modes")
    p_modes.set_defaults(func=cmd_modes)

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        return int(args.func(args))
    except StageChartError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
