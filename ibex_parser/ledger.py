"""
Timestamp ledger: cross-file duplicate suppression.

The ledger maps a stock name to the last time stamp emitted for it.
It lives as long as its parser, so a sequence of periodic snapshots of
the same trading day can be merged into one non-redundant series: a
record is kept only when its time stamp differs from the stored one.

Encoding: ``"15:19:51"`` -> ``151951``. A time stamp that does not parse
as an integer encodes as ``0``.

Sentinels:
- ``UNSET`` (-1): seeded value, differs from any real time stamp.
- ``CLOSED`` (0): the session-close marker was seen for the stock.

Admission uses inequality, not ordering. An older time stamp than the
stored one is admitted again and overwrites the stored value.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ibex_parser.exceptions import MalformedRowError
from ibex_parser.records import Record

logger = logging.getLogger(__name__)

UNSET = -1
CLOSED = 0


def encode_timestamp(timestamp: str) -> int:
    """Encode ``"HH:MM:SS"`` as an integer; unparsable values give 0."""
    try:
        return int(timestamp.replace(":", ""))
    except ValueError:
        return 0


class TimestampLedger:
    """Per-stock last-seen time stamps, mutated in place by ``admit()``.

    Attributes:
        timestamp_column: Field of a record holding its time stamp.
        close_marker: Time stamp value meaning the session is closed.
    """

    def __init__(self, timestamp_column: int = 2, close_marker: str = "Cierre") -> None:
        self.timestamp_column = timestamp_column
        self.close_marker = close_marker
        self._table: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def get(self, name: str) -> int | None:
        return self._table.get(name)

    def snapshot(self) -> dict[str, int]:
        """Return a copy of the current table."""
        return dict(self._table)

    def seed(self, names: Iterable[str]) -> bool:
        """Initialize every name to ``UNSET``.

        Only done while the ledger is empty and *names* is non-empty;
        later calls leave the table untouched.

        Returns:
            ``True`` if the ledger was seeded by this call.
        """
        names = list(names)
        if self._table or not names:
            return False
        for name in names:
            self._table[name] = UNSET
        logger.debug("Timestamp ledger seeded with %d names", len(self._table))
        return True

    def admit(self, records: list[Record]) -> list[Record]:
        """Return the records whose time stamp changed, in order.

        Records carrying the close marker are dropped and mark their
        stock ``CLOSED``. Names missing from the ledger are inserted.

        Raises:
            MalformedRowError: If a record has no time stamp field.
        """
        kept: list[Record] = []
        for record in records:
            if self.timestamp_column >= len(record.fields):
                raise MalformedRowError(
                    f"Record {record.render()!r} has no time stamp at "
                    f"field {self.timestamp_column}",
                    column=self.timestamp_column,
                )
            raw_ts = record.fields[self.timestamp_column]
            name = record.name

            if raw_ts == self.close_marker:
                self._table[name] = CLOSED
                continue

            current = encode_timestamp(raw_ts)
            if self._table.get(name, UNSET) != current:
                kept.append(record)
                self._table[name] = current

        logger.debug(
            "Ledger kept %d of %d records", len(kept), len(records)
        )
        return kept
