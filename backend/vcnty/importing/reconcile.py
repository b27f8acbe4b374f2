# backend/vcnty/importing/reconcile.py
from .synonyms import HEADER_ALIASES, TARGET_SCHEMA
from .utils import norm_header

_CANONICAL = {norm_header(k): k for k in TARGET_SCHEMA}


def _cells(row):
    """A raw row is either a dict or (header, value) pairs; pairs allow repeated headers."""
    return row.items() if isinstance(row, dict) else row


def resolve_header(header: str) -> str | None:
    """Canonical key for one source header, or None when the column is ignored."""
    k = norm_header(header)
    if k in _CANONICAL:
        return _CANONICAL[k]
    return HEADER_ALIASES.get(k)


def build_header_map(rows: list) -> dict[str, str | None]:
    """
    original header -> canonical key (None = dropped).

    Headers are read from the first row only; CSV/XLSX rows all share it.
    """
    if not rows:
        return {}
    return {h: resolve_header(h) for h, _ in _cells(rows[0])}


def map_headers(rows: list, header_map: dict[str, str | None] | None = None) -> list[dict]:
    if not rows:
        return []
    if header_map is None:
        header_map = build_header_map(rows)

    out = []
    for row in rows:
        new_row = {}
        # later columns win when two columns land on the same key,
        # including a header repeated verbatim
        for h, v in _cells(row):
            key = header_map.get(h)
            if key:
                new_row[key] = v
        out.append(new_row)
    return out


def ignored_columns(header_map: dict[str, str | None]) -> list[str]:
    # blank header cells (trailing delimiters) are not worth reporting
    return [str(h) for h, k in header_map.items() if k is None and str(h).strip()]
