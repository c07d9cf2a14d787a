"""File-level ingestion: source detection, CSV reading, row normalization.

The whole batch is attributed to sources up front, so a single file with an
unknown name aborts the run before any file is read. Records are returned in
file-then-row order.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from os import PathLike
from pathlib import Path

from .formats import AccountFormatCatalog
from .logging_setup import get_logger
from .models import AccountFormat, CanonicalTransaction
from .normalizers import RowNormalizer

_logger = get_logger("ledger_normalizer.ingest")


def discover_input_files(directory: str | PathLike[str], pattern: str = "*.csv") -> list[Path]:
    """Return files in ``directory`` matching ``pattern``, sorted by name."""

    return sorted(p for p in Path(directory).glob(pattern) if p.is_file())


def read_csv_rows(path: str | PathLike[str]) -> Iterator[dict[str, str]]:
    """Yield header-keyed rows from a CSV file.

    ``utf-8-sig`` drops the byte-order mark some bank exports prepend to the
    first header. Extra unnamed cells (``DictReader``'s ``None`` key) are
    dropped.
    """

    with open(path, encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            yield {k.strip(): (v if v is not None else "") for k, v in row.items() if k is not None}


def _normalize_file(
    path: Path, source_key: str, fmt: AccountFormat, normalizer: RowNormalizer
) -> list[CanonicalTransaction]:
    out: list[CanonicalTransaction] = []
    skipped = 0
    for line_no, row in enumerate(read_csv_rows(path), start=2):
        txn = normalizer.normalize(row, fmt, source_key)
        if txn is None:
            skipped += 1
            _logger.debug("skipped noise row at %s:%d", path.name, line_no)
            continue
        out.append(txn)
    _logger.info(
        "normalized %d rows from %s (source=%s, skipped=%d)",
        len(out),
        path.name,
        source_key,
        skipped,
    )
    return out


def ingest(
    file_paths: Iterable[str | PathLike[str]],
    catalog: AccountFormatCatalog,
    *,
    normalizer: RowNormalizer | None = None,
) -> list[CanonicalTransaction]:
    """Normalize every row of every file into one ordered list.

    Raises
    ------
    ConfigurationError
        When any file name matches no catalog key. Raised before any file is
        read, so no partial result is produced.
    DateFormatError
        When a non-skipped row carries an unparseable date.
    """

    norm = normalizer or RowNormalizer()
    paths = [Path(p) for p in file_paths]
    resolved = [(p, *catalog.lookup(p)) for p in paths]

    rows: list[CanonicalTransaction] = []
    for path, source_key, fmt in resolved:
        rows.extend(_normalize_file(path, source_key, fmt, norm))
    return rows


__all__ = ["discover_input_files", "ingest", "read_csv_rows"]
