"""Built-in parsers.

A parser is a pure function `fn(text, options) -> value` applied to a field's
string form before routing. Options come from the field annotation
(`delimiter`, `date_format`, `date_type`).
"""

import re
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel

from crosswalk.convert.registry import FunctionRegistry
from crosswalk.helpers.edtf import parse_edtf
from crosswalk.helpers.html import normalize_whitespace, strip_html
from crosswalk.helpers.nameparse import parse_name
from crosswalk.helpers.relators import normalize_role
from crosswalk.hub.models import DateType, lookup_label


ParserFunc = Callable[[str, Dict[str, Any]], Any]

YEAR_RE = re.compile(r'\b(1[0-9]{3}|20[0-9]{2})\b')
DOI_RE = re.compile(r'10\.\d{4,}(?:\.\d+)*/\S+')
ORCID_RE = re.compile(r'^\d{4}-\d{4}-\d{4}-\d{3}[\dX]$')

DOI_PREFIXES = (
    "https://doi.org/", "http://doi.org/",
    "https://dx.doi.org/", "http://dx.doi.org/",
    "doi:", "DOI:",
)
ISBN_PREFIXES = ("ISBN-13:", "ISBN-10:", "ISBN:", "isbn:")
ORCID_PREFIXES = (
    "https://orcid.org/", "http://orcid.org/", "orcid.org/", "ORCID:", "orcid:",
)

ISO8601_FORMATS = ["%Y-%m-%dT%H:%M:%S", "%Y-%m-%d", "%Y-%m", "%Y"]


class PersonName(BaseModel):
    """Name split by the bibtex_name / csl_name parsers."""

    given: str = ""
    family: str = ""
    suffix: str = ""
    literal: str = ""

    @property
    def display(self) -> str:
        if self.literal:
            return self.literal
        if self.family and self.given:
            return f"{self.family}, {self.given}"
        return self.family or self.given


def strip_prefixes(text: str, prefixes) -> str:
    for prefix in prefixes:
        if text.startswith(prefix):
            text = text[len(prefix):]
    return text


def parse_passthrough(text: str, options: Dict[str, Any]) -> str:
    return text


def parse_strip_html(text: str, options: Dict[str, Any]) -> str:
    return strip_html(text)


def parse_normalize_whitespace(text: str, options: Dict[str, Any]) -> str:
    return normalize_whitespace(text)


def parse_year(text: str, options: Dict[str, Any]) -> str:
    """First plausible four-digit year (1000-2099); the input if none."""
    match = YEAR_RE.search(text)
    return match.group(1) if match else text


def parse_iso8601_datetime(text: str) -> Optional[datetime]:
    text = text.strip()
    try:
        return datetime.fromisoformat(text[:-1] + "+00:00" if text.endswith("Z") else text)
    except ValueError:
        pass
    for fmt in ISO8601_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_iso8601(text: str, options: Dict[str, Any]) -> str:
    """Normalize to YYYY-MM-DD; honours a `date_format` strptime pattern."""
    text = text.strip()
    fmt = options.get("date_format")
    if fmt:
        try:
            return datetime.strptime(text, fmt).strftime("%Y-%m-%d")
        except ValueError:
            pass
    parsed = parse_iso8601_datetime(text)
    return parsed.strftime("%Y-%m-%d") if parsed else text


def parse_edtf_value(text: str, options: Dict[str, Any]):
    date_type = lookup_label(DateType, options.get("date_type"), DateType.UNSPECIFIED)
    return parse_edtf(text, date_type)


def parse_split(text: str, options: Dict[str, Any]) -> list:
    delimiter = options.get("delimiter") or ","
    return [part.strip() for part in text.split(delimiter) if part.strip()]


def parse_doi(text: str, options: Dict[str, Any]) -> str:
    text = strip_prefixes(text.strip(), DOI_PREFIXES)
    match = DOI_RE.search(text)
    return match.group(0) if match else text


def parse_isbn(text: str, options: Dict[str, Any]) -> str:
    text = strip_prefixes(text.strip(), ISBN_PREFIXES).strip()
    cleaned = text.replace("-", "").replace(" ", "")
    if len(cleaned) in (10, 13):
        return cleaned
    return text


def parse_orcid(text: str, options: Dict[str, Any]) -> str:
    text = strip_prefixes(text.strip(), ORCID_PREFIXES).strip()
    if ORCID_RE.match(text):
        return text
    digits = re.sub(r'[^\dX]', '', text.upper())
    if len(digits) == 16:
        return "-".join(digits[i:i + 4] for i in range(0, 16, 4))
    return text


def parse_url(text: str, options: Dict[str, Any]) -> str:
    text = text.strip()
    if not text.startswith(("http://", "https://")) and "." in text:
        return "https://" + text
    return text


def parse_bibtex_name(text: str, options: Dict[str, Any]) -> PersonName:
    """Split "Last, First[, Suffix]" or "First Last" into a PersonName."""
    text = text.strip()
    if not text:
        return PersonName()

    if "," in text:
        family, _, given = text.partition(",")
        given, _, suffix = given.partition(",")
        return PersonName(given=given.strip(), family=family.strip(), suffix=suffix.strip())

    parts = text.split()
    if len(parts) == 1:
        return PersonName(family=parts[0])
    return PersonName(given=" ".join(parts[:-1]), family=parts[-1])


def parse_csl_name(text: str, options: Dict[str, Any]) -> PersonName:
    return parse_bibtex_name(text, options)


def parse_full_name(text: str, options: Dict[str, Any]):
    return parse_name(text)


def parse_relator(text: str, options: Dict[str, Any]) -> str:
    return normalize_role(text)


def parse_lowercase(text: str, options: Dict[str, Any]) -> str:
    return text.lower()


def parse_uppercase(text: str, options: Dict[str, Any]) -> str:
    return text.upper()


def parse_trim(text: str, options: Dict[str, Any]) -> str:
    return text.strip()


class ParserRegistry(FunctionRegistry[ParserFunc]):
    """Registry of named parsers."""

    kind = "parser"

    def register_defaults(self) -> None:
        for name, fn in DEFAULT_PARSERS.items():
            self.register(name, fn)

    def parse(self, name: str, text: str, options: Optional[Dict[str, Any]] = None) -> Any:
        """Apply a named parser.

        Raises:
            StructuralError: when no parser is registered under `name`
        """
        fn = self.require(name)
        return fn(text, options or {})


DEFAULT_PARSERS: Dict[str, ParserFunc] = {
    "passthrough": parse_passthrough,
    "strip_html": parse_strip_html,
    "normalize_whitespace": parse_normalize_whitespace,
    "year": parse_year,
    "iso8601": parse_iso8601,
    "edtf": parse_edtf_value,
    "split": parse_split,
    "doi": parse_doi,
    "isbn": parse_isbn,
    "orcid": parse_orcid,
    "url": parse_url,
    "bibtex_name": parse_bibtex_name,
    "csl_name": parse_csl_name,
    "name": parse_full_name,
    "relator": parse_relator,
    "lowercase": parse_lowercase,
    "uppercase": parse_uppercase,
    "trim": parse_trim,
}
