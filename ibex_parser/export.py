"""
Tabular exporter for ibex-parser.

Turns the records of a batch run into two tables and writes them to an
output directory in CSV or Parquet:

  index.{format}   -- one row per kept index record
  stocks.{format}  -- one row per kept stock record

Every row carries a ``source_file`` column naming the snapshot it came
from. Values are written as the strings found in the export (Spanish
number formatting is left untouched).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import pandas as pd

from ibex_parser.batch import FileOutcome
from ibex_parser.config import ParserConfig
from ibex_parser.exceptions import ExportError

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "parquet"}

# Column names for the bundled BME layout. They only apply when the
# template width matches; other layouts set ParserConfig.index_labels
# and ParserConfig.stock_labels.
DEFAULT_INDEX_LABELS = ["name", "date", "time", "price"]
DEFAULT_STOCK_LABELS = ["name", "date", "time", "price", "volume", "value"]


def _labels(explicit: list[str] | None, default: list[str], width: int) -> list[str]:
    if explicit is not None:
        return list(explicit)
    if len(default) == width:
        return list(default)
    return [f"col_{i}" for i in range(width)]


def records_to_frames(
    outcomes: list[FileOutcome],
    config: ParserConfig | None = None,
) -> dict[str, pd.DataFrame]:
    """Build the ``index`` and ``stocks`` tables from batch outcomes.

    Only ``ok`` outcomes contribute rows. Row order follows the batch.

    Returns:
        Dict mapping table name -> DataFrame (all value columns as str).
    """
    config = config or ParserConfig()
    index_cols = _labels(config.index_labels, DEFAULT_INDEX_LABELS, len(config.index_columns))
    stock_cols = _labels(config.stock_labels, DEFAULT_STOCK_LABELS, len(config.stock_columns))

    index_rows: list[list[str]] = []
    stock_rows: list[list[str]] = []
    for outcome in outcomes:
        if outcome.status != "ok":
            continue
        for record in outcome.records:
            row = [*record.fields, outcome.file]
            if record.kind == "index":
                index_rows.append(row)
            else:
                stock_rows.append(row)

    return {
        "index": pd.DataFrame(index_rows, columns=[*index_cols, "source_file"], dtype=str),
        "stocks": pd.DataFrame(stock_rows, columns=[*stock_cols, "source_file"], dtype=str),
    }


def _write_dataframe(
    df: pd.DataFrame,
    path: Path,
    output_format: str,
) -> None:
    """Write one table of a run (``index`` or ``stocks``) to *path*.

    Cells stay the strings copied from the web page, so CSV keeps the
    Spanish decimal commas and Parquet stores every column as string.

    Raises:
        ExportError: If pandas or pyarrow cannot write the file.
    """
    try:
        if output_format == "csv":
            df.to_csv(path, index=False, encoding="utf-8")
        else:  # parquet
            df.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(
            f"Failed to write {path.name} as {output_format}: {exc}"
        ) from exc


def export_records(
    outcomes: list[FileOutcome],
    output_dir: str | Path,
    output_format: Literal["csv", "parquet"] = "csv",
    config: ParserConfig | None = None,
) -> list[str]:
    """Write the ``index`` and ``stocks`` tables of a batch run.

    The output directory is created if it does not exist.

    Returns:
        List of file paths (as strings) that were written.

    Raises:
        ExportError: If *output_format* is unsupported, *output_dir*
            cannot be created, or a write fails.
    """
    if output_format not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )

    out = Path(output_dir)
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ExportError(f"Cannot create output directory {out}: {exc}") from exc

    written: list[str] = []
    for table_name, df in records_to_frames(outcomes, config).items():
        file_path = out / f"{table_name}.{output_format}"
        _write_dataframe(df, file_path, output_format)
        written.append(str(file_path))
        logger.info(
            "Exported table '%s' -> %s (%d rows)",
            table_name,
            file_path.name,
            len(df),
        )

    return written
