"""
IbexParser: the stateful parser facade.

Pipeline for one file::

    read_lines -> extract_records (+ date gate) -> seed ledger -> ledger.admit
                                                                  -> filter_records

``parse_file()`` runs everything but the final filter; ``filter_file()``
adds it. The parser owns two pieces of state that outlive a single
call: the target day and the timestamp ledger. Files must therefore be
fed in chronological order.

Example::

    parser = IbexParser(target_date="06/02/2024")
    for name in discover(Path("downloads")):
        records = parser.filter_file(Path("downloads") / name, ["SANTANDER"])
        if records is None:
            continue
        for record in records:
            print(record)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ibex_parser.config import ParserConfig
from ibex_parser.exceptions import InsufficientDataError
from ibex_parser.extract import extract_day, extract_records
from ibex_parser.ledger import TimestampLedger
from ibex_parser.loader import read_lines
from ibex_parser.records import Record

logger = logging.getLogger(__name__)


def extract_stocks(records: Iterable[Record]) -> list[str]:
    """Return the name of every record, in order.

    Seeds the ledger from the data itself, so changes in the index
    membership need no configuration change.
    """
    return [record.name for record in records]


def filter_records(records: list[Record], filters: Iterable[str]) -> list[Record]:
    """Keep records whose rendered string contains any of *filters*.

    An empty filter returns *records* unchanged.
    """
    filters = list(filters)
    if not filters:
        return records
    kept: list[Record] = []
    for record in records:
        rendered = record.render()
        if any(f in rendered for f in filters):
            kept.append(record)
    return kept


class IbexParser:
    """Parser for raw text exports of the Ibex 35 price table.

    Attributes:
        config: File layout (fixed for the lifetime of the parser).
        ledger: Timestamp ledger shared by every call on this instance.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        target_date: str | None = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.ledger = TimestampLedger(
            timestamp_column=self.config.timestamp_column,
            close_marker=self.config.close_marker,
        )
        self._target_date: str | None = None
        self.target_date = target_date

    def __repr__(self) -> str:
        return (
            f"IbexParser(target_date={self._target_date!r}, "
            f"tracked_stocks={len(self.ledger)})"
        )

    @property
    def target_date(self) -> str | None:
        """Target day as a bare day-of-month string, or ``None``."""
        return self._target_date

    @target_date.setter
    def target_date(self, date: str | None) -> None:
        # Month and year, if given, are discarded
        self._target_date = extract_day(date) if date is not None else None
        if self._target_date is not None:
            logger.info("Target day set to %s", self._target_date)

    def parse_file(self, path: str | Path) -> list[Record] | None:
        """Parse one file and drop records whose time stamp was already seen.

        Returns:
            The new records in file order (possibly empty), or ``None``
            when the file holds no usable data.

        Raises:
            OSError: If the file is missing or unreadable.
            MalformedRowError: If a row lacks a configured field.
        """
        path = Path(path)
        try:
            lines = read_lines(path, self.config)
        except InsufficientDataError as exc:
            logger.info("No usable data in %s: %s", path.name, exc)
            return None

        records = extract_records(lines, self.config, self._target_date)
        self.ledger.seed(extract_stocks(records))
        kept = self.ledger.admit(records)
        logger.info(
            "Parsed %s: %d rows extracted, %d new", path.name, len(records), len(kept)
        )
        return kept

    def filter_file(self, path: str | Path, filters: Iterable[str]) -> list[Record] | None:
        """Parse one file like ``parse_file()`` and keep matching records.

        With an empty *filters* this is the same as ``parse_file()``.
        """
        records = self.parse_file(path)
        if records is None:
            return None
        return filter_records(records, filters)
