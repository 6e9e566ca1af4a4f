"""
Command line entry point: ``ibex-parser``.

Parses every raw export of a directory and prints the kept records,
one per line, to stdout. Diagnostics go to stderr through logging.

Usage::

    ibex-parser downloads/
    ibex-parser downloads/ SANTANDER --target-date 06/02/2024
    ibex-parser downloads/ --config run.yaml --output-dir outputs/ --output-format parquet
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from ibex_parser.batch import run_batch
from ibex_parser.config import RunConfig, load_config
from ibex_parser.exceptions import IbexParserError
from ibex_parser.export import export_records

log = logging.getLogger("ibex_parser")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ibex-parser",
        description=(
            "Parse stock prices of the Ibex 35 from raw text copies of the "
            "BME price table and print them as ';'-separated records."
        ),
    )
    parser.add_argument("path", help="Directory to search for text data files.")
    parser.add_argument(
        "filter", nargs="*", help="Only print records containing one of these strings."
    )
    parser.add_argument("--file-stem", help="Prefix of the data file names (default: data_ibex).")
    parser.add_argument("--file-ext", help="Extension of the data files (default: csv).")
    parser.add_argument("--target-date", help="Target day, e.g. 23 or 23/01/2023.")
    parser.add_argument("--config", help="YAML run configuration.")
    parser.add_argument("--output-dir", help="Also export the run as tables to this directory.")
    parser.add_argument("--output-format", choices=["csv", "parquet"])
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def _resolve_config(args: argparse.Namespace) -> RunConfig:
    """Merge the YAML config (if any) with command line overrides."""
    config = load_config(args.config) if args.config else RunConfig()
    overrides: dict[str, object] = {}
    if args.filter:
        overrides["stock_filter"] = list(args.filter)
    if args.file_stem is not None:
        overrides["file_stem"] = args.file_stem
    if args.file_ext is not None:
        overrides["file_ext"] = args.file_ext
    if args.target_date is not None:
        overrides["target_date"] = args.target_date

    output = config.output
    if args.output_dir is not None or args.output_format is not None:
        output = output.model_copy(update={
            k: v for k, v in (
                ("output_dir", args.output_dir),
                ("output_format", args.output_format),
            ) if v is not None
        })
    overrides["output"] = output
    return config.model_copy(update=overrides)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        config = _resolve_config(args)
    except (IbexParserError, ValidationError, OSError) as exc:
        log.error("Invalid configuration %s: %s", args.config, exc)
        return 1

    try:
        outcomes = run_batch(args.path, config)
    except OSError as exc:
        log.error("Cannot scan %s: %s", args.path, exc)
        return 1

    for outcome in outcomes:
        if outcome.status == "ok":
            for record in outcome.records:
                print(record)
        elif outcome.status == "no_data":
            print(f"File {outcome.file} doesn't contain valid data.")
        elif outcome.status == "error":
            print(f"File {outcome.file} skipped: {outcome.reason}", file=sys.stderr)

    if config.output.output_dir:
        try:
            written = export_records(
                outcomes,
                config.output.output_dir,
                config.output.output_format,
                config.parser,
            )
        except IbexParserError as exc:
            log.error("Export failed: %s", exc)
            return 1
        log.info("Wrote %d table(s)", len(written))

    return 0


if __name__ == "__main__":
    sys.exit(main())
