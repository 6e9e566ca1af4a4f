"""
Configuration models and YAML I/O for ibex-parser.

Key models:
- ParserConfig: Layout of a raw export (line zones, column templates,
  fixed field offsets, delimiter, session-close marker).
- OutputConfig: Optional tabular export settings.
- RunConfig: Top-level config for a batch run (target day, stock
  filter, discovery filters, byte-size gate, parser + output).

Key functions:
- load_config(path) -> RunConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

The defaults describe the table published on the BME web page for the
Ibex 35, saved as plain text with tab-separated cells.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, NonNegativeInt, model_validator

from ibex_parser.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class ParserConfig(BaseModel):
    """Layout of a raw text export.

    Line zones are zero-based line numbers. Column templates are
    zero-based tab-field offsets, emitted in the listed order.
    """

    header_skip: NonNegativeInt = Field(
        11, description="Lines before the stock zone (index_line excepted)"
    )
    index_line: NonNegativeInt = Field(
        6, description="Line carrying the aggregate data of the index"
    )
    trailer_skip: NonNegativeInt = Field(
        5, description="Lines at the end of the file that are never parsed"
    )
    index_columns: list[NonNegativeInt] = Field(
        default_factory=lambda: [0, 5, 6, 1],
        description=(
            "Fields kept for the index line. What each offset holds depends "
            "on the export layout (name, date, time, price in the BME table)"
        ),
    )
    stock_columns: list[NonNegativeInt] = Field(
        default_factory=lambda: [0, 7, 8, 1, 5, 6],
        description=(
            "Fields kept for a stock line. What each offset holds depends on "
            "the export layout (name, date, time, price, volume, value in the "
            "BME table)"
        ),
    )
    min_lines: NonNegativeInt = Field(
        51, description="Files with fewer lines contain no usable data"
    )
    date_column: NonNegativeInt = Field(
        5, description="Raw field holding the date checked against the target day"
    )
    timestamp_column: NonNegativeInt = Field(
        2, description="Field of the extracted record holding the time stamp"
    )
    delimiter: str = Field(";", min_length=1, description="Output field separator")
    close_marker: str = Field(
        "Cierre", description="Time stamp value meaning the session is closed"
    )
    encoding: str = "utf-8-sig"
    # Column names for the tabular export only
    index_labels: list[str] | None = None
    stock_labels: list[str] | None = None

    @model_validator(mode="after")
    def _check_templates(self) -> ParserConfig:
        """Validate the column templates against the fixed offsets."""
        if not self.index_columns or not self.stock_columns:
            raise ValueError("index_columns and stock_columns must not be empty.")
        shortest = min(len(self.index_columns), len(self.stock_columns))
        if self.timestamp_column >= shortest:
            raise ValueError(
                f"timestamp_column={self.timestamp_column} is out of range for "
                f"records with {shortest} fields."
            )
        for labels, columns, name in (
            (self.index_labels, self.index_columns, "index"),
            (self.stock_labels, self.stock_columns, "stock"),
        ):
            if labels is not None and len(labels) != len(columns):
                raise ValueError(
                    f"{name}_labels has {len(labels)} entries but "
                    f"{name}_columns has {len(columns)}."
                )
        return self


class OutputConfig(BaseModel):
    """Tabular export settings. No export happens without an output_dir."""

    output_dir: str | None = Field(None, description="Directory for exported tables")
    output_format: Literal["csv", "parquet"] = Field("csv", description="Output format")


class RunConfig(BaseModel):
    """Top-level configuration for a batch run over a directory."""

    target_date: str | None = Field(
        None, description="Target day, e.g. '23' or '23/01/2023' (day is kept)"
    )
    stock_filter: list[str] = Field(
        default_factory=list, description="Substrings selecting the records to keep"
    )
    file_stem: str = Field("data_ibex", description="Prefix of the data file names")
    file_ext: str = Field("csv", description="Extension of the data files")
    min_bytes: NonNegativeInt = Field(
        560, description="Files smaller than this are skipped before parsing"
    )
    parser: ParserConfig = Field(default_factory=ParserConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def load_config(path: str | Path) -> RunConfig:
    """Load the run settings for a directory of Ibex 35 snapshots.

    Every key is optional; a file holding only ``stock_filter: [BBVA]``
    keeps the BME layout defaults for everything else.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return RunConfig.model_validate(raw)


def save_config(config: RunConfig, path: str | Path) -> None:
    """Write *config* as YAML, parser layout included.

    The dump lists every field, so the file doubles as a template for
    describing a different export layout.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# ibex-parser run configuration (BME Ibex 35 price table layout)\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)
