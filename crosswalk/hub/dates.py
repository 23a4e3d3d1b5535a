"""Rendering of canonical DateValue objects."""

from typing import Callable, Optional

from crosswalk.hub.models import DatePrecision, DateQualifier, DateValue


QUALIFIER_MARKERS = {
    DateQualifier.APPROXIMATE: "~",
    DateQualifier.UNCERTAIN: "?",
    DateQualifier.BOTH: "%",
}


def _render(date: DateValue, year_fmt: str, decade: Callable[[int], str], century: Callable[[int], str]) -> str:
    year = date.year
    precision = date.precision
    if precision == DatePrecision.DECADE:
        result = decade(year)
    elif precision == DatePrecision.CENTURY:
        result = century(year)
    elif precision == DatePrecision.MONTH:
        result = f"{year:{year_fmt}}-{date.month or 0:02d}"
    elif precision in (DatePrecision.DAY, DatePrecision.TIME):
        result = f"{year:{year_fmt}}-{date.month or 0:02d}-{date.day or 0:02d}"
    else:
        result = f"{year:{year_fmt}}"

    if date.is_range and date.end_year:
        if precision == DatePrecision.MONTH:
            end = f"{date.end_year:{year_fmt}}-{date.end_month or 0:02d}"
        elif precision == DatePrecision.DAY:
            end = f"{date.end_year:{year_fmt}}-{date.end_month or 0:02d}-{date.end_day or 0:02d}"
        else:
            end = f"{date.end_year:{year_fmt}}"
        result = f"{result}/{end}"

    return result + QUALIFIER_MARKERS.get(date.qualifier, "")


def format_date(date: Optional[DateValue]) -> str:
    """Human-oriented rendering: "1970s", "20th century", "1978-03"."""
    if date is None or not date.year:
        return ""
    return _render(
        date,
        "d",
        decade=lambda y: f"{y // 10}0s",
        century=lambda y: f"{y // 100 + 1}th century",
    )


def format_edtf(date: Optional[DateValue]) -> str:
    """EDTF rendering: zero-padded years, "197X" decades, "19XX" centuries."""
    if date is None or not date.year:
        return ""
    return _render(
        date,
        "04d",
        decade=lambda y: f"{y // 10}X",
        century=lambda y: f"{y // 100}XX",
    )


def date_string(date: DateValue) -> str:
    """The raw source text when present, otherwise format_date."""
    return date.raw or format_date(date)
