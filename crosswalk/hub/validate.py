"""Record-level validation of canonical records.

Field validators check one source value while it is converted; this module
checks a finished CanonicalRecord as a whole:

- required slots (title, identifiers, contributors, dates), per options
- identifier formats (DOI, ORCID, ISSN, ISBN), including contributor ORCIDs
- contributors carry a name or a parsed name
- dates carry a year or raw text; year, month and day are in range
- extra keys that look like they belong in a canonical slot (warnings)

Usage:
    from crosswalk.hub.validate import RecordValidationOptions, validate_record

    result = validate_record(record, RecordValidationOptions.strict())
    if not result.is_valid:
        print(result.error_message())
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Set

from pydantic import BaseModel, Field

from crosswalk.convert.exceptions import ValidationError
from crosswalk.hub.identifiers import DOI_RE, ISSN_RE, ORCID_RE, normalize_identifier
from crosswalk.hub.models import CanonicalRecord, Contributor, DateValue, Identifier, IdentifierType


MIN_YEAR = 1000

# Normalized extra keys and the advice attached to them
PROMOTION_CANDIDATES: Dict[str, str] = {
    "volume": "route to publication.volume",
    "issue": "route to publication.issue",
    "pages": "route to publication.pages",
    "first_page": "route to publication.pages",
    "last_page": "route to publication.pages",
    "edition": "route to publication.edition",
    "series": "route to relations with relation_type in_series",
    "citation": "no canonical slot for a preferred citation yet",
    "funding": "no canonical slot for funding yet",
    "funder": "no canonical slot for funding yet",
    "grant": "no canonical slot for funding yet",
    "conference": "no canonical slot for conference details yet",
    "event": "no canonical slot for event details yet",
    "geo_location": "no canonical slot for geographic coverage yet",
    "spatial_coverage": "no canonical slot for geographic coverage yet",
    "temporal_coverage": "no canonical slot for temporal coverage yet",
}


class RecordValidationOptions(BaseModel):
    """Which checks validate_record runs."""

    require_title: bool = Field(True, description="Title must be non-blank")
    require_identifier: bool = Field(False, description="At least one identifier")
    require_contributor: bool = Field(False, description="At least one contributor")
    require_date: bool = Field(False, description="At least one date")
    strict_extras: bool = Field(True, description="Warn about extra keys that belong in canonical slots")
    validate_identifier_formats: bool = Field(True, description="Check DOI/ORCID/ISSN/ISBN formats")
    validate_dates: bool = Field(True, description="Check date components and year range")

    @classmethod
    def strict(cls) -> "RecordValidationOptions":
        """Every slot required, every check on."""
        return cls(require_identifier=True, require_contributor=True, require_date=True)


@dataclass
class RecordValidation:
    """Errors and warnings from one validate_record call, in check order."""

    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def error_message(self) -> str:
        """Combined message, or '' when the record is valid."""
        if self.is_valid:
            return ""
        return "validation failed: " + "; ".join(str(e) for e in self.errors)


def validate_record(
    record: CanonicalRecord,
    options: Optional[RecordValidationOptions] = None,
) -> RecordValidation:
    """Validate a converted record.

    Args:
        record: Record to check
        options: Checks to run; defaults to RecordValidationOptions()

    Returns:
        RecordValidation whose errors and warnings are ValidationErrors with
        dotted/indexed field paths such as "contributors[0].identifiers[1].value"
    """
    options = options or RecordValidationOptions()
    result = RecordValidation()

    if options.require_title and not record.title.strip():
        result.errors.append(ValidationError("title", record.title, "required", "title is required"))
    required_lists = [
        (options.require_identifier, "identifiers", record.identifiers, "identifier"),
        (options.require_contributor, "contributors", record.contributors, "contributor"),
        (options.require_date, "dates", record.dates, "date"),
    ]
    for enabled, name, values, noun in required_lists:
        if enabled and not values:
            result.errors.append(ValidationError(name, values, "required", f"at least one {noun} is required"))

    if options.validate_identifier_formats:
        for i, identifier in enumerate(record.identifiers):
            result.errors.extend(check_identifier(identifier, f"identifiers[{i}]"))

    for i, contributor in enumerate(record.contributors):
        result.errors.extend(check_contributor(contributor, f"contributors[{i}]"))

    if options.validate_dates:
        for i, value in enumerate(record.dates):
            result.errors.extend(check_date(value, f"dates[{i}]"))

    if options.strict_extras:
        result.warnings.extend(check_extra_keys(record.extra))

    return result


def check_identifier(identifier: Identifier, path: str) -> List[ValidationError]:
    field_path = f"{path}.value"
    raw = identifier.value
    if not raw.strip():
        return [ValidationError(field_path, raw, "required", "identifier value is required")]

    value = normalize_identifier(raw, identifier.type)
    if identifier.type == IdentifierType.DOI and not DOI_RE.match(value):
        message = f"invalid DOI format: {raw} (expected 10.XXXX/...)"
    elif identifier.type == IdentifierType.ORCID and not ORCID_RE.match(value):
        message = f"invalid ORCID format: {raw} (expected XXXX-XXXX-XXXX-XXXX)"
    elif identifier.type == IdentifierType.ISSN and not ISSN_RE.match(_hyphenate_issn(value)):
        message = f"invalid ISSN format: {raw} (expected XXXX-XXXX)"
    elif identifier.type == IdentifierType.ISBN and len(value.replace("-", "").replace(" ", "")) not in (10, 13):
        message = f"invalid ISBN format: {raw} (expected 10 or 13 digits)"
    else:
        return []
    return [ValidationError(field_path, raw, "invalid_format", message)]


def _hyphenate_issn(value: str) -> str:
    compact = value.replace("-", "")
    return f"{compact[:4]}-{compact[4:]}" if len(compact) == 8 else value


def check_contributor(contributor: Contributor, path: str) -> List[ValidationError]:
    errors: List[ValidationError] = []
    parsed = contributor.parsed_name
    has_parsed = parsed is not None and bool(parsed.family.strip() or parsed.given.strip())
    if not contributor.name.strip() and not has_parsed:
        errors.append(ValidationError(path, contributor.name, "required", "contributor must have name or parsed_name"))
    for i, identifier in enumerate(contributor.identifiers):
        errors.extend(check_identifier(identifier, f"{path}.identifiers[{i}]"))
    return errors


def check_date(value: DateValue, path: str) -> List[ValidationError]:
    if not value.year:
        if not value.raw.strip():
            return [ValidationError(path, value.raw, "required", "date must have year or raw value")]
        return []

    errors: List[ValidationError] = []
    max_year = date.today().year + 10
    if value.year < MIN_YEAR or value.year > max_year:
        errors.append(ValidationError(
            f"{path}.year", value.year, "out_of_range",
            f"year {value.year} is outside reasonable range ({MIN_YEAR}-{max_year})",
        ))
    if value.month and not 1 <= value.month <= 12:
        errors.append(ValidationError(
            f"{path}.month", value.month, "out_of_range", f"month {value.month} is invalid (must be 1-12)",
        ))
    if value.day and not 1 <= value.day <= 31:
        errors.append(ValidationError(
            f"{path}.day", value.day, "out_of_range", f"day {value.day} is invalid (must be 1-31)",
        ))
    return errors


def check_extra_keys(extra: Dict[str, Any]) -> List[ValidationError]:
    """Warnings for extra keys that have a canonical home or are not machine names."""
    warnings: List[ValidationError] = []
    for key in sorted(extra):
        normalized = key.lower().replace("-", "_")
        advice = PROMOTION_CANDIDATES.get(normalized)
        if advice:
            warnings.append(ValidationError(f"extra.{key}", extra[key], "promotion_candidate", advice))
        if " " in key:
            warnings.append(ValidationError(
                f"extra.{key}", extra[key], "invalid_key",
                "extra keys should be machine names (no spaces); use snake_case",
            ))
    return warnings


def json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return "unknown"


def extra_type_conflicts(records: Iterable[CanonicalRecord]) -> Dict[str, List[str]]:
    """Extra keys whose JSON value type differs between records.

    Useful when aggregating records from several sources.

    Returns:
        {key: sorted list of the types seen} for keys with more than one type
    """
    seen: Dict[str, Set[str]] = {}
    for record in records:
        for key, value in record.extra.items():
            seen.setdefault(key, set()).add(json_type(value))
    return {key: sorted(types) for key, types in seen.items() if len(types) > 1}
