"""CSV reading and writing with encoding detection and field normalization."""

import csv
import io
import logging
import re
from pathlib import Path
from typing import Iterable

log = logging.getLogger(__name__)

# Matches any sequence of whitespace (including Unicode whitespace like U+2006)
_WHITESPACE_RE = re.compile(r'\s+')

# First-year player draft entries in IBW rankings
FYPD_MARKER = 'fypd'


def detect_encoding(path: Path) -> str:
    """Detect file encoding by checking for BOM bytes.

    Args:
        path: Path to the CSV file.

    Returns:
        Encoding string suitable for open().
    """
    with open(path, 'rb') as f:
        bom = f.read(2)
    if bom == b'\xff\xfe':
        return 'utf-16-le'
    return 'utf-8-sig'


def normalize_whitespace(value: str) -> str:
    """Collapse whitespace runs into a single space and strip the ends."""
    return _WHITESPACE_RE.sub(' ', value).strip()


def read_csv(
    path: str | Path,
    header: bool = True,
    delimiter: str = ',',
) -> list:
    """Read records from a CSV file.

    With a header row every record is a dict keyed by the (normalized)
    header names. Without one, every record is a list addressed by column
    index. Cell values are whitespace-normalized and blank lines skipped.

    Args:
        path: Path to the CSV file.
        header: Whether the first row holds column names.
        delimiter: Field delimiter.

    Returns:
        List of dict or list records.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file contains no data rows.
    """
    path = Path(path)
    encoding = detect_encoding(path)

    with open(path, 'r', encoding=encoding, newline='') as f:
        content = f.read()

    # Strip BOM if present
    content = content.lstrip('\ufeff')

    rows = [
        [normalize_whitespace(cell) for cell in row]
        for row in csv.reader(io.StringIO(content), delimiter=delimiter)
    ]
    rows = [row for row in rows if any(row)]

    if header:
        if not rows:
            raise ValueError(f"CSV file {path} is empty or has no header row.")
        columns, rows = rows[0], rows[1:]
        records = [
            {col: (row[i] if i < len(row) else None) for i, col in enumerate(columns)}
            for row in rows
        ]
    else:
        records = rows

    if not records:
        raise ValueError(f"CSV file {path} is empty or contains no valid data.")

    log.info("%d records read from %s", len(records), path)
    return records


def filter_fypd(rows: list) -> list:
    """Drop IBW rows marked as first-year player draft (FYPD) entries."""
    def is_fypd(row) -> bool:
        values = row.values() if isinstance(row, dict) else row
        return any(v and FYPD_MARKER in str(v).lower() for v in values)

    kept = [row for row in rows if not is_fypd(row)]
    removed = len(rows) - len(kept)
    if removed:
        log.info("Filtered out %d FYPD entries", removed)
    return kept


def write_csv(rows: Iterable[dict], path: str | Path, columns: list[str]) -> int:
    """Write dict rows to a UTF-8 CSV file.

    Every row must carry every column; missing values are written as
    empty strings.

    Args:
        rows: Rows to write.
        path: Output path; parent directories are created.
        columns: Column order for the header and rows.

    Returns:
        Number of rows written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction='ignore')
        writer.writeheader()
        for row in rows:
            writer.writerow({col: '' if row.get(col) is None else row[col] for col in columns})
            count += 1
    return count
