"""
Batch driver: parse every discovered file of a directory in order.

Per-file failures never abort the run. Each file gets a FileOutcome:

- ``ok``:      parsed; ``records`` holds the new (possibly empty) batch.
- ``skipped``: smaller than ``RunConfig.min_bytes``, never opened.
- ``no_data``: too few lines to be a real export.
- ``error``:   unreadable or undecodable file, or malformed row;
               ``reason`` says which.

An empty ``ok`` batch (everything already seen, or another day) is a
valid result and distinct from ``no_data``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from ibex_parser.config import RunConfig
from ibex_parser.discover import discover
from ibex_parser.exceptions import FileDecodeError, MalformedRowError
from ibex_parser.parser import IbexParser
from ibex_parser.records import Record

logger = logging.getLogger(__name__)

OutcomeStatus = Literal["ok", "skipped", "no_data", "error"]


@dataclass
class FileOutcome:
    """Result of processing one file of a batch."""

    file: str
    status: OutcomeStatus
    records: list[Record] = field(default_factory=list)
    reason: str | None = None


def process_file(
    parser: IbexParser,
    path: Path,
    run_config: RunConfig,
) -> FileOutcome:
    """Parse and filter a single file, capturing per-file failures."""
    name = path.name
    try:
        size = path.stat().st_size
        if size < run_config.min_bytes:
            logger.info("SKIP %s (%d bytes < %d)", name, size, run_config.min_bytes)
            return FileOutcome(
                file=name,
                status="skipped",
                reason=f"smaller than {run_config.min_bytes} bytes",
            )
        records = parser.filter_file(path, run_config.stock_filter)
    except (OSError, FileDecodeError) as exc:
        logger.warning("Cannot read %s: %s", name, exc)
        return FileOutcome(file=name, status="error", reason=f"unreadable: {exc}")
    except MalformedRowError as exc:
        logger.warning("Malformed row in %s: %s", name, exc)
        return FileOutcome(file=name, status="error", reason=f"malformed row: {exc}")

    if records is None:
        return FileOutcome(file=name, status="no_data", reason="no usable data")
    return FileOutcome(file=name, status="ok", records=records)


def run_batch(
    directory: str | Path,
    run_config: RunConfig | None = None,
    parser: IbexParser | None = None,
) -> list[FileOutcome]:
    """Discover and process the files of *directory* sequentially.

    Args:
        directory: Directory holding the raw exports.
        run_config: Run settings. Defaults to ``RunConfig()``.
        parser: Parser to reuse (and whose ledger keeps accumulating).
            A new one is built from *run_config* when ``None``.

    Returns:
        One FileOutcome per discovered file, in processing order.

    Raises:
        OSError: If *directory* itself cannot be listed.
    """
    run_config = run_config or RunConfig()
    if parser is None:
        parser = IbexParser(run_config.parser, target_date=run_config.target_date)

    directory = Path(directory)
    files = discover(directory, run_config.file_stem, run_config.file_ext)

    outcomes: list[FileOutcome] = []
    for name in files:
        outcomes.append(process_file(parser, directory / name, run_config))

    kept = sum(len(o.records) for o in outcomes)
    logger.info(
        "Batch complete: %d file(s), %d record(s) kept", len(outcomes), kept
    )
    return outcomes
