"""EDTF date parsing.

Deterministic, rule-based parsing of Extended Date/Time Format strings
(a practical subset of Level 0 and Level 1) into canonical DateValue objects.
Parsing never fails: input no rule recognizes is returned with its raw text
and unspecified precision.
"""

import re
from datetime import datetime
from typing import Optional

from crosswalk.hub.models import DatePrecision, DateQualifier, DateType, DateValue


# Loose timestamps: "2024-12-13T22:43:14", "2024-12-13 22:43:14.123+0100"
TIMESTAMP_RE = re.compile(
    r'^(\d{4})-(\d{2})-(\d{2})[T ](\d{2}):(\d{2}):(\d{2})(\.\d+)?(Z|[+-]\d{2}:?\d{2})?$'
)
INTERVAL_RE = re.compile(r'^(.+)/(.+)$')
FULL_DATE_RE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})([~?%])?$')
YEAR_MONTH_RE = re.compile(r'^(\d{4})-(\d{2})([~?%])?$')
YEAR_RE = re.compile(r'^(\d{4})([~?%])?$')
DECADE_RE = re.compile(r'^(\d{3})[Xx]$|^(\d{3})\ds$')
CENTURY_RE = re.compile(r'^(\d{2})[Xx]{2}$')
BARE_YEAR_RE = re.compile(r'^\d+$')

QUALIFIERS = {
    "~": DateQualifier.APPROXIMATE,
    "?": DateQualifier.UNCERTAIN,
    "%": DateQualifier.BOTH,
}


def parse_qualifier(marker: Optional[str]) -> DateQualifier:
    return QUALIFIERS.get(marker or "", DateQualifier.NONE)


def _parse_rfc3339(text: str) -> Optional[datetime]:
    # fromisoformat accepts a trailing "Z" only on Python 3.11+
    if "T" not in text:
        return None
    candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        return None
    return parsed if parsed.tzinfo is not None else None


def parse_edtf(raw: Optional[str], date_type: DateType = DateType.UNSPECIFIED) -> DateValue:
    r"""Parse an EDTF string into a DateValue.

    Args:
        raw: Date string from a source record
        date_type: Semantic role recorded on the result

    Returns:
        DateValue with components, precision and qualifier. Unrecognized
        input keeps `raw` with UNSPECIFIED precision.

    Rules (applied in order, first match wins):
        1. RFC3339 timestamp (with offset) -> TIME
        2. Loose timestamp: T or space separator, optional fraction/offset -> TIME
        3. Interval: ^(.+)/(.+)$ -> both halves parsed recursively, is_range
        4. Full date: ^YYYY-MM-DD[~?%]$ -> DAY
        5. Year-month: ^YYYY-MM[~?%]$ -> MONTH
        6. Year: ^YYYY[~?%]$ -> YEAR
        7. Decade: ^YYYX$ or ^YYYYs$ (last digit dropped) -> DECADE
        8. Century: ^YYXX$ -> CENTURY
        9. Bare integer year between 1 and 2999 -> YEAR
    """
    text = (raw or "").strip()
    if not text:
        return DateValue(type=date_type, raw="")

    result = DateValue(type=date_type, raw=text)

    # Rule 1: RFC3339 timestamp (e.g., "2024-12-13T22:43:14+00:00")
    stamp = _parse_rfc3339(text)
    if stamp is not None:
        result.year, result.month, result.day = stamp.year, stamp.month, stamp.day
        result.precision = DatePrecision.TIME
        return result

    # Rule 2: Loosely delimited timestamp (e.g., "2024-12-13 22:43:14")
    match = TIMESTAMP_RE.match(text)
    if match:
        year, month, day = (int(g) for g in match.group(1, 2, 3))
        if _valid_day(year, month, day):
            result.year, result.month, result.day = year, month, day
            result.precision = DatePrecision.TIME
            return result

    # Rule 3: Interval (e.g., "1978/1980-05")
    match = INTERVAL_RE.match(text)
    if match:
        start = parse_edtf(match.group(1), date_type)
        end = parse_edtf(match.group(2), date_type)
        result.year, result.month, result.day = start.year, start.month, start.day
        result.precision = start.precision
        result.qualifier = start.qualifier
        result.end_year, result.end_month, result.end_day = end.year, end.month, end.day
        result.is_range = True
        return result

    # Rule 4: Full date (e.g., "1978-03-15", "1978-03-15?")
    match = FULL_DATE_RE.match(text)
    if match:
        result.year, result.month, result.day = (int(g) for g in match.group(1, 2, 3))
        result.precision = DatePrecision.DAY
        result.qualifier = parse_qualifier(match.group(4))
        return result

    # Rule 5: Year-month (e.g., "1978-03")
    match = YEAR_MONTH_RE.match(text)
    if match:
        result.year, result.month = int(match.group(1)), int(match.group(2))
        result.precision = DatePrecision.MONTH
        result.qualifier = parse_qualifier(match.group(3))
        return result

    # Rule 6: Year (e.g., "1978", "1978~")
    match = YEAR_RE.match(text)
    if match:
        result.year = int(match.group(1))
        result.precision = DatePrecision.YEAR
        result.qualifier = parse_qualifier(match.group(2))
        return result

    # Rule 7: Decade (e.g., "197X", "1970s", "1975s")
    match = DECADE_RE.match(text)
    if match:
        result.year = int(match.group(1) or match.group(2)) * 10
        result.precision = DatePrecision.DECADE
        return result

    # Rule 8: Century (e.g., "19XX")
    match = CENTURY_RE.match(text)
    if match:
        result.year = int(match.group(1)) * 100
        result.precision = DatePrecision.CENTURY
        return result

    # Rule 9: Bare integer year (e.g., "800")
    if BARE_YEAR_RE.match(text):
        year = int(text)
        if 0 < year < 3000:
            result.year = year
            result.precision = DatePrecision.YEAR
            return result

    return result


def _valid_day(year: int, month: int, day: int) -> bool:
    try:
        datetime(year, month, day)
    except ValueError:
        return False
    return True
