"""
Raw line loader for ibex-parser.

Reads a whole export file and splits it into lines. A file shorter
than ``ParserConfig.min_lines`` is not a real export (an empty page
copy, a partial download, ...) and is rejected wholesale.

Lines are split on ``\\n`` only (an optional ``\\r`` before it is
dropped). Zones are positional, so form feeds or other Unicode line
separators copied from the web page must stay inside their line.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ibex_parser.config import ParserConfig
from ibex_parser.exceptions import FileDecodeError, InsufficientDataError

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split *text* on ``\\n``; no empty element after a final newline."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_lines(path: str | Path, config: ParserConfig) -> list[str]:
    """Read *path* and return its lines without line terminators.

    Raises:
        OSError: If the file is missing or unreadable.
        FileDecodeError: If the file is not valid ``config.encoding`` text.
        InsufficientDataError: If the file has fewer than
            ``config.min_lines`` lines.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding=config.encoding)
    except UnicodeDecodeError as exc:
        raise FileDecodeError(
            f"{path.name} is not valid {config.encoding} text: {exc}"
        ) from exc
    lines = split_lines(text)

    if len(lines) < config.min_lines:
        raise InsufficientDataError(
            f"{path.name} has {len(lines)} lines, at least "
            f"{config.min_lines} are expected."
        )

    logger.debug("Read %d lines from %s", len(lines), path)
    return lines
