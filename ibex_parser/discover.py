"""
Discovery of raw export files in a directory.

Browsers name repeated downloads of the same page ``data_ibex.csv``,
``data_ibex(1).csv``, ``data_ibex(2).csv``, ... The files are returned
in that order, which is the order the snapshots were taken in and the
order the timestamp ledger needs.

Only names are filtered; file contents are not inspected.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_STEM = "data_ibex"
DEFAULT_EXTENSION = "csv"

# Trailing "(N)" added by browsers to repeated downloads
_COPY_NUMBER = re.compile(r"\((\d+)\)$")


def snapshot_sort_key(path: Path) -> tuple[int, str]:
    """Sort key: copy number (0 when absent), then name."""
    match = _COPY_NUMBER.search(path.stem)
    number = int(match.group(1)) if match else 0
    return number, path.name


def discover(
    path: str | Path,
    stem_filter: str | None = None,
    extension: str | None = None,
) -> list[str]:
    """List the data files of a directory (non-recursive).

    Args:
        path: Directory to scan.
        stem_filter: Required prefix of the file stem. Defaults to
            ``"data_ibex"``.
        extension: Required extension, without the dot. Defaults to
            ``"csv"``. Files without an extension never match.

    Returns:
        File names (stem + extension) in snapshot order.

    Raises:
        OSError: If *path* cannot be listed.
    """
    stem_filter = DEFAULT_STEM if stem_filter is None else stem_filter
    extension = DEFAULT_EXTENSION if extension is None else extension

    found: list[Path] = []
    for entry in Path(path).iterdir():
        if not entry.is_file():
            continue
        if not entry.suffix:
            continue
        if entry.suffix[1:] == extension and entry.stem.startswith(stem_filter):
            found.append(entry)

    found.sort(key=snapshot_sort_key)
    logger.info(
        "Discovered %d file(s) in %s (stem=%r, ext=%r)",
        len(found), path, stem_filter, extension,
    )
    return [entry.name for entry in found]
