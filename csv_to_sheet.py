#!/usr/bin/env python3
"""
Render a CSV file as a spreadsheet-style HTML grid.

Usage:
    python csv_to_sheet.py input.csv [output.html]

Options via env vars:
    SHEET_TITLE="My Sheet"
    CELL_W=140      (px)
    CELL_H=28       (px)
    FREEZE_ROWS=1   (top rows to freeze; the column-letter row counts as one)
    FREEZE_COLS=1   (left columns to freeze; the row-number column counts as one)
"""

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from racepoints.schemas import SheetOptions
from racepoints.sheet import write_sheet


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render a CSV file as an HTML sheet")
    parser.add_argument("input", help="CSV file to render")
    parser.add_argument(
        "output",
        nargs="?",
        default=None,
        help="HTML file to write (default: <input>.sheet.html)",
    )
    args = parser.parse_args(argv)

    input_path = Path(args.input).resolve()
    output_path = Path(args.output).resolve() if args.output else None

    try:
        options = SheetOptions.from_env(default_title=input_path.name)
        written = write_sheet(input_path, output_path, options)
    except ValidationError as e:
        print(f"❌ Invalid sheet settings:\n{e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print(f"Wrote: {written}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
