# backend/vcnty/importing/utils.py
import math
import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NON_PRICE = re.compile(r"[^0-9.]")
_NON_DIGIT = re.compile(r"[^0-9]")
_FORMULA_PREFIX = re.compile(r"^[=+\-@]+")
_NUMBER_PREFIX = re.compile(r"\d*\.?\d*")


def norm_header(h: str) -> str:
    return _NON_ALNUM.sub("", str(h).lower())


def is_blank(x) -> bool:
    if x is None:
        return True
    if isinstance(x, float) and math.isnan(x):
        return True
    return str(x).strip() == ""


def sanitize(x, default: str = "") -> str:
    """
    Trim a free-text cell, drop one pair of wrapping double quotes and any
    leading =, +, -, @ so the value can't be re-opened as a spreadsheet formula.
    """
    if is_blank(x):
        x = default
    s = str(x).strip()
    if len(s) >= 2 and s.startswith('"') and s.endswith('"'):
        s = s[1:-1].strip()
    return _FORMULA_PREFIX.sub("", s)


def parse_price(x):
    """
    Return (price, ok).

    A missing or empty cell is a valid 0; a cell holding only spaces is not.
    Currency symbols and other noise are stripped ("$12.50 USD" -> 12.5); a
    minus sign ahead of the first digit marks the value as negative, which is
    rejected. Rejected values come back as 0.0.
    """
    if x is None or (isinstance(x, float) and math.isnan(x)) or str(x) == "":
        return 0.0, True
    raw = str(x).strip()

    first = re.search(r"[0-9.]", raw)
    if first is None:
        return 0.0, False
    if "-" in raw[:first.start()]:
        return 0.0, False

    # leading numeric run only, so "12.5.3" reads as 12.5
    s = _NUMBER_PREFIX.match(_NON_PRICE.sub("", raw)).group(0)
    if s in ("", "."):
        return 0.0, False
    value = float(s)
    if math.isinf(value):
        return 0.0, False
    return value, True


def parse_stock(x) -> int:
    if is_blank(x):
        return 0
    s = _NON_DIGIT.sub("", str(x))
    return int(s) if s else 0


def parse_tags(x) -> list[str]:
    if is_blank(x):
        return []
    return [t.strip() for t in str(x).split(",") if t.strip()]


def normalize_status(x) -> str:
    if is_blank(x):
        return "AVAILABLE"
    raw = str(x)
    if raw.lower() == "published":
        return "AVAILABLE"
    # no trimming, no check against the known statuses
    return raw.upper()

