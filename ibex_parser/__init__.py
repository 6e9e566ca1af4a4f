"""
ibex-parser: parse raw text copies of the Ibex 35 price table.

Public API surface:

- ``IbexParser`` -- stateful parser. ``parse_file()`` extracts one file
  and drops records whose time stamp was already seen by the same
  instance; ``filter_file()`` additionally keeps only records matching
  a list of substrings.

- ``discover(path, ...)`` -- list the raw export files of a directory
  in snapshot order.

- ``run_batch(directory, ...)`` -- discover and parse a whole directory,
  reporting per-file outcomes instead of failing.

- ``export_records(outcomes, output_dir, ...)`` -- write a batch run as
  ``index`` / ``stocks`` tables (CSV or Parquet).
"""

from __future__ import annotations

from ibex_parser.batch import FileOutcome, run_batch
from ibex_parser.config import ParserConfig, RunConfig, load_config, save_config
from ibex_parser.discover import discover
from ibex_parser.export import export_records
from ibex_parser.parser import IbexParser, extract_stocks, filter_records
from ibex_parser.records import Record

__all__ = [
    "IbexParser",
    "ParserConfig",
    "RunConfig",
    "Record",
    "FileOutcome",
    "discover",
    "extract_stocks",
    "filter_records",
    "run_batch",
    "export_records",
    "load_config",
    "save_config",
]
