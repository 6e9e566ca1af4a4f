"""
Record type shared by the extraction, ledger and export stages.

A record keeps its fields as an ordered tuple and is rendered to the
delimiter-joined string only at the output boundary. That string is the
wire format, e.g.::

    B.SANTANDER;06/02/2024;15:19:51;3,7420;12.825.738;47.876,71
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

RecordKind = Literal["index", "stock"]


@dataclass(frozen=True)
class Record:
    """One extracted row.

    Attributes:
        fields: Field values in column-template order.
        kind: ``"index"`` for the aggregate index line, ``"stock"`` for
            a constituent line.
        delimiter: Separator used by ``render()``.
    """

    fields: tuple[str, ...]
    kind: RecordKind = "stock"
    delimiter: str = ";"

    @property
    def name(self) -> str:
        return self.fields[0]

    def render(self) -> str:
        return self.delimiter.join(self.fields)

    def __str__(self) -> str:
        return self.render()
