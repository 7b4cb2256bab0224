"""Command-line interface for protkit."""

from __future__ import annotations

import argparse
import sys

from .batch import mz_table
from .mass import InvalidChargeError, UnknownTokenError, calculate_mz, calculate_mz_range
from .utils import setup_project


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="protkit",
        description="Proteomics helpers: peptide m/z calculation, batch m/z tables, project setup.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    mz = subparsers.add_parser("mz", help="Calculate m/z for one peptide.")
    mz.add_argument("sequence", help='Peptide sequence, e.g. "AC(UniMod:4)EFAGFQK".')
    charge = mz.add_mutually_exclusive_group()
    charge.add_argument("-z", "--charge", type=int, default=2, help="Charge state (default: 2).")
    charge.add_argument(
        "--charges",
        type=int,
        nargs=2,
        metavar=("MIN", "MAX"),
        help="Inclusive charge range; prints one line per charge state.",
    )
    mz.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unknown residues or UniMod ids instead of ignoring them.",
    )

    table = subparsers.add_parser("table", help="Calculate m/z for a peptide spreadsheet.")
    table.add_argument("config", help="Path to the YAML config file.")

    init = subparsers.add_parser("init", help="Create data/, res/, doc/ and pub/ folders.")
    init.add_argument("base_dir", nargs="?", default=".", help="Project root (default: .).")

    return parser


def _print_result(result) -> None:
    print(f"charge={result.charge}\tmz={result.mz:.6f}\tpeptide_mass={result.peptide_mass:.6f}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "mz":
        try:
            if args.charges is not None:
                results = calculate_mz_range(args.sequence, tuple(args.charges), strict=args.strict)
            else:
                results = [calculate_mz(args.sequence, args.charge, strict=args.strict)]
        except (InvalidChargeError, UnknownTokenError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

        for result in results:
            _print_result(result)

    elif args.command == "table":
        mz_table(args.config)

    elif args.command == "init":
        setup_project(args.base_dir)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
