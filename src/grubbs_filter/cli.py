"""Command line interface for the Grubbs filter."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable

import pandas as pd

from .batch import rolling_filter
from .critical_values import ConfidenceLevel
from .engine import GrubbsFilter
from .models import GrubbsConfig, InvalidSampleCount


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reject outliers with Grubbs' test and average the rest")
    parser.add_argument("values", nargs="*", type=float, help="Sample values to filter")
    parser.add_argument("--csv", help="CSV file to read samples from")
    parser.add_argument("--column", help="Column of the CSV file holding the samples")
    parser.add_argument("--window", type=int, help="Rolling window size for CSV input")
    parser.add_argument(
        "--confidence",
        default="80",
        help="Confidence level: 99, 95, 90 or 80 (default 80)",
    )
    parser.add_argument("--details", action="store_true", help="Print rejected and kept samples")
    parser.add_argument("--output", help="Output file for JSON results")
    parser.add_argument("--verbose", action="store_true", help="Log every rejection")
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.csv and not args.column:
        parser.error("--column must be provided when using --csv")
    if args.csv and args.values:
        parser.error("pass either sample values or --csv, not both")
    if not args.csv and not args.values:
        parser.error("no samples given")
    if args.window is not None and not args.csv:
        parser.error("--window requires --csv")
    try:
        args.confidence = ConfidenceLevel.parse(args.confidence)
    except ValueError as exc:
        parser.error(str(exc))
    return args


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    grubbs = GrubbsFilter(GrubbsConfig(confidence=args.confidence))
    try:
        if args.csv:
            samples = pd.read_csv(args.csv)[args.column]
            if args.window is not None:
                # one output per CSV row, windows holding NaN stay NaN
                filtered = rolling_filter(samples, args.window, args.confidence)
                payload = [None if pd.isna(v) else round(float(v), 6) for v in filtered]
            else:
                payload = _filter_once(grubbs, samples.dropna().to_numpy(), args.details)
        else:
            payload = _filter_once(grubbs, args.values, args.details)
    except InvalidSampleCount as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    text = json.dumps(payload, indent=2)
    if args.output:
        Path(args.output).write_text(text)
    else:
        print(text)
    return 0


def _filter_once(grubbs: GrubbsFilter, samples, details: bool):
    result = grubbs.analyze(samples)
    if details:
        return result.to_json()
    return round(result.value, 6)


if __name__ == "__main__":
    raise SystemExit(main())
