"""CLI entry point for the fund calculator."""

from __future__ import annotations

import argparse
from dataclasses import replace
import sys

from .engine import run_projection
from .report import render_csv, render_report, render_summary, render_table, write_report
from .schema import Configuration, SchemaError, default_configuration, load_scenario
from .validate import check_scenario_sanity, validate_scenario


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fund savings plan calculator with German fund taxation")
    parser.add_argument("scenario", nargs="?", help="Path to scenario JSON file (default: built-in scenario)")
    parser.add_argument("-o", "--output", help="Output path (default: stdout for table/csv, report.html for html)")
    parser.add_argument("--format", choices=["table", "csv", "html"], default="table", help="Output format")
    parser.add_argument("--years", type=int, help="Override the number of simulated years")
    parser.add_argument("--validate", action="store_true", help="Validate the scenario only")
    parser.add_argument("--summary", action="store_true", help="Print text summary to stdout")
    return parser


def _print_validation(errors: list[str], warnings: list[str]) -> None:
    for warning in warnings:
        print(f"WARNING: {warning}")
    for error in errors:
        print(f"ERROR: {error}", file=sys.stderr)


def _load(args: argparse.Namespace) -> Configuration:
    config = default_configuration() if args.scenario is None else load_scenario(args.scenario)
    if args.years is not None:
        config = replace(config, duration_years=args.years)
    return config


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = _load(args)
    except (SchemaError, OSError, ValueError) as exc:
        print(f"Failed to load scenario: {exc}", file=sys.stderr)
        return 2

    validation = validate_scenario(config)
    sanity = check_scenario_sanity(config)
    _print_validation(validation.errors, validation.warnings + sanity.warnings)
    if not validation.is_valid:
        return 1

    if args.validate:
        print("Scenario is valid.")
        return 0

    result = run_projection(config)

    if args.format == "html":
        output = args.output or "report.html"
        write_report(output, render_report(config, result, scenario_path=args.scenario))
        print(f"Wrote report to {output}")
    else:
        content = render_csv(result) if args.format == "csv" else render_table(result)
        if args.output:
            write_report(args.output, content)
            print(f"Wrote {args.format} to {args.output}")
        else:
            sys.stdout.write(content)

    if args.summary:
        print(render_summary(result))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
