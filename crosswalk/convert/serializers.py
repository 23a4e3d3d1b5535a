"""Built-in serializers: canonical values back to strings for output formats."""

import re
from datetime import date, datetime
from typing import Any, Callable, Dict, Optional

from crosswalk.convert.parsers import PersonName, YEAR_RE, parse_iso8601_datetime
from crosswalk.convert.registry import FunctionRegistry
from crosswalk.hub.dates import format_edtf
from crosswalk.hub.models import DateValue, ParsedName


SerializerFunc = Callable[[Any, Dict[str, Any]], str]

ORCID_RE = re.compile(r'^\d{4}-\d{4}-\d{4}-\d{3}[\dX]$')


def serialize_passthrough(value: Any, options: Dict[str, Any]) -> str:
    return "" if value is None else str(value)


def serialize_year(value: Any, options: Dict[str, Any]) -> str:
    if value is None:
        return ""
    if isinstance(value, DateValue):
        return str(value.year) if value.year else value.raw
    if isinstance(value, (date, datetime)):
        return f"{value.year:04d}"
    if isinstance(value, str):
        match = YEAR_RE.search(value)
        return match.group(1) if match else value
    return str(value)


def serialize_iso8601(value: Any, options: Dict[str, Any]) -> str:
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, DateValue):
        return format_edtf(value) if value.year else value.raw
    if isinstance(value, str):
        parsed = parse_iso8601_datetime(value)
        return parsed.strftime("%Y-%m-%d") if parsed else value
    return str(value)


def serialize_edtf(value: Any, options: Dict[str, Any]) -> str:
    """DateValues render by precision; anything else as ISO 8601."""
    if isinstance(value, DateValue):
        return format_edtf(value) or value.raw
    return serialize_iso8601(value, options)


def serialize_join(value: Any, options: Dict[str, Any]) -> str:
    delimiter = options.get("delimiter") or ", "
    if isinstance(value, (list, tuple)):
        return delimiter.join(str(item) for item in value)
    return serialize_passthrough(value, options)


def _name_parts(value: Any):
    if isinstance(value, PersonName):
        return value.literal, value.given, value.family, value.suffix
    if isinstance(value, ParsedName):
        return "", value.given, value.family, value.suffix
    if isinstance(value, dict):
        return (
            value.get("literal", ""), value.get("given", ""),
            value.get("family", ""), value.get("suffix", ""),
        )
    return None


def serialize_bibtex_name(value: Any, options: Dict[str, Any]) -> str:
    """Format a name as "Family, Given[, Suffix]"."""
    if value is None:
        return ""
    parts = _name_parts(value)
    if parts is None:
        return str(value)
    literal, given, family, suffix = parts
    if literal:
        return literal
    if not given:
        return family or ""
    if suffix:
        return f"{family}, {given}, {suffix}"
    return f"{family}, {given}"


def serialize_csl_name(value: Any, options: Dict[str, Any]) -> str:
    return serialize_bibtex_name(value, options)


def serialize_doi_url(value: Any, options: Dict[str, Any]) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    if text.startswith("http"):
        return text
    for prefix in ("doi:", "DOI:"):
        if text.startswith(prefix):
            text = text[len(prefix):].strip()
    return f"https://doi.org/{text}" if text.startswith("10.") else text


def serialize_orcid_url(value: Any, options: Dict[str, Any]) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    if text.startswith("http"):
        return text
    for prefix in ("orcid:", "ORCID:"):
        if text.startswith(prefix):
            text = text[len(prefix):].strip()
    return f"https://orcid.org/{text}" if ORCID_RE.match(text.upper()) else text


class SerializerRegistry(FunctionRegistry[SerializerFunc]):
    """Registry of named serializers."""

    kind = "serializer"

    def register_defaults(self) -> None:
        for name, fn in DEFAULT_SERIALIZERS.items():
            self.register(name, fn)

    def serialize(self, name: str, value: Any, options: Optional[Dict[str, Any]] = None) -> str:
        """Apply a named serializer.

        Raises:
            StructuralError: when no serializer is registered under `name`
        """
        fn = self.require(name)
        return fn(value, options or {})


DEFAULT_SERIALIZERS: Dict[str, SerializerFunc] = {
    "passthrough": serialize_passthrough,
    "year": serialize_year,
    "iso8601": serialize_iso8601,
    "edtf": serialize_edtf,
    "join": serialize_join,
    "bibtex_name": serialize_bibtex_name,
    "csl_name": serialize_csl_name,
    "doi_url": serialize_doi_url,
    "orcid_url": serialize_orcid_url,
}
