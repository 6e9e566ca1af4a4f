"""
Zone classification, row extraction and the target-day gate.

Line zones of a raw export (zero-based line numbers, default layout)::

    0 .. 10    header      skipped, except line 6
    6          index line  extracted with index_columns
    11 .. n-6  stock zone  extracted with stock_columns
    n-5 .. n-1 trailer     never visited

The index line is recognised before the header check, so it is
extracted wherever it falls relative to ``header_skip``.

When a target day is set, the date of the first extracted row decides
for the whole file: a different day stops extraction, which yields an
empty batch for that file.
"""

from __future__ import annotations

import enum
import logging

from ibex_parser.config import ParserConfig
from ibex_parser.exceptions import MalformedRowError
from ibex_parser.records import Record, RecordKind

logger = logging.getLogger(__name__)

_DATE_SEPARATOR = "/"
_FIELD_SEPARATOR = "\t"


class Zone(enum.Enum):
    HEADER = "header"
    INDEX = "index"
    STOCK = "stock"
    TRAILER = "trailer"


def extract_day(date: str) -> str:
    """Reduce ``"23/01/2023"`` (or ``"23"``) to the day, ``"23"``."""
    return date.split(_DATE_SEPARATOR, 1)[0]


def classify_line(i: int, config: ParserConfig, trailer_boundary: int) -> Zone:
    """Label line *i* by position."""
    if i == config.index_line:
        return Zone.INDEX
    if i < config.header_skip:
        return Zone.HEADER
    if i < trailer_boundary:
        return Zone.STOCK
    return Zone.TRAILER


def _field(raw_row: list[str], column: int, line_number: int | None) -> str:
    if column >= len(raw_row):
        raise MalformedRowError(
            f"Line {line_number} has {len(raw_row)} fields, "
            f"no field at column {column}",
            line_number=line_number,
            column=column,
        )
    return raw_row[column]


def extract_row(
    line: str,
    columns: list[int],
    kind: RecordKind = "stock",
    delimiter: str = ";",
    line_number: int | None = None,
) -> Record:
    """Project the tab fields of *line* at *columns* into a Record.

    Raises:
        MalformedRowError: If any column index has no field in the line.
    """
    raw_row = line.split(_FIELD_SEPARATOR)
    fields = tuple(_field(raw_row, col, line_number) for col in columns)
    return Record(fields=fields, kind=kind, delimiter=delimiter)


def extract_records(
    lines: list[str],
    config: ParserConfig,
    target_date: str | None = None,
) -> list[Record]:
    """Run the zone state machine over *lines*.

    Args:
        lines: All lines of one file.
        config: The file layout.
        target_date: Day-only target (already normalized), or ``None``
            to disable the date gate.

    Returns:
        The index record first (when reached), then stock records in
        file order.

    Raises:
        MalformedRowError: If a row lacks a configured field.
    """
    trailer_boundary = len(lines) - config.trailer_skip
    records: list[Record] = []
    date_checked = target_date is None

    for i, line in enumerate(lines):
        zone = classify_line(i, config, trailer_boundary)
        if zone is Zone.HEADER:
            continue
        if zone is Zone.TRAILER:
            break

        if not date_checked:
            raw_row = line.split(_FIELD_SEPARATOR)
            day = extract_day(_field(raw_row, config.date_column, i))
            if day != target_date:
                logger.info(
                    "File day %s does not match target day %s, skipping the rest",
                    day, target_date,
                )
                break
            date_checked = True

        if zone is Zone.INDEX:
            records.append(
                extract_row(line, config.index_columns, "index", config.delimiter, i)
            )
        else:
            records.append(
                extract_row(line, config.stock_columns, "stock", config.delimiter, i)
            )

    return records
