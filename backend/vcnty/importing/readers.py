# backend/vcnty/importing/readers.py
import csv
import io
import math
from datetime import date, datetime

import pandas as pd
import structlog

from vcnty.config import settings
from vcnty.errors import FileReadError, FileTooLargeError, UnsupportedFileError

logger = structlog.get_logger(__name__)

ALLOWED_EXTENSIONS = (".csv", ".xlsx")


def check_upload(filename: str, size: int, max_bytes: int | None = None) -> None:
    """Reject wrong extensions and oversized files before any parsing happens."""
    max_bytes = settings.MAX_UPLOAD_BYTES if max_bytes is None else max_bytes
    name = (filename or "").lower()
    if not name.endswith(ALLOWED_EXTENSIONS):
        raise UnsupportedFileError(filename)
    if size > max_bytes:
        raise FileTooLargeError(size, max_bytes)


def _cell_text(x) -> str:
    """Spreadsheet cell -> the string a seller would see in the cell."""
    if x is None:
        return ""
    if isinstance(x, float):
        if math.isnan(x):
            return ""
        if x.is_integer():
            return str(int(x))
    if isinstance(x, (datetime, date)):
        return x.isoformat()
    return str(x)


def _to_records(df: pd.DataFrame) -> list[list[tuple[str, str]]]:
    """
    Grid read with header=None -> raw rows as (header, value) pairs in column
    order. Pairs instead of dicts so a repeated header keeps every column.
    """
    if not len(df):
        return []
    df = df.map(_cell_text)
    headers = list(df.iloc[0])
    rows = []
    for values in df.iloc[1:].itertuples(index=False):
        # rows that are nothing but separators / empty cells
        if all(v.strip() == "" for v in values):
            continue
        rows.append(list(zip(headers, values)))
    return rows


def read_csv_rows(data: bytes) -> list[list[tuple[str, str]]]:
    text = data.decode("utf-8-sig")
    # width of the header row; pandas skips empty lines, csv.reader yields [] for them
    n_headers = len(next((r for r in csv.reader(io.StringIO(text)) if r), []))

    df = pd.read_csv(
        io.StringIO(text),
        header=None,
        index_col=False,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
        # extra cells beyond the header row are dropped, the row itself is kept
        on_bad_lines=lambda line: line[:n_headers],
    )
    return _to_records(df)


def read_xlsx_rows(data: bytes) -> list[list[tuple[str, str]]]:
    # first worksheet only; header=None keeps repeated header cells as-is
    df = pd.read_excel(io.BytesIO(data), sheet_name=0, header=None, dtype=object)
    return _to_records(df)


def read_upload(filename: str, data: bytes, max_bytes: int | None = None) -> list[list[tuple[str, str]]]:
    """
    Parse an uploaded CSV/XLSX into raw rows: (original header, cell text) pairs.
    """
    check_upload(filename, len(data), max_bytes=max_bytes)
    try:
        if filename.lower().endswith(".csv"):
            rows = read_csv_rows(data)
        else:
            rows = read_xlsx_rows(data)
    except pd.errors.EmptyDataError:
        rows = []
    except Exception as e:
        logger.warning("import_file_unreadable", filename=filename, error=str(e))
        raise FileReadError(f"Failed to read file: {e}") from e

    logger.info("import_file_parsed", filename=filename, size=len(data), rows=len(rows))
    return rows
