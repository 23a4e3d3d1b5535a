"""Built-in validators.

A validator is `fn(value, options) -> None` that raises ValidationError when
the value is invalid. Every validator except `required` accepts an empty or
absent value, so validators compose freely with optional fields.
"""

import functools
import re
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from crosswalk.convert.exceptions import (
    CrosswalkError, FieldConversionError, StructuralError, ValidationError,
)
from crosswalk.convert.parsers import parse_iso8601_datetime
from crosswalk.convert.registry import FunctionRegistry
from crosswalk.hub.models import DateValue


ValidatorFunc = Callable[[Any, Dict[str, Any]], None]

DOI_RE = re.compile(r'^10\.\d{4,}(?:\.\d+)*/\S+$')
ISSN_RE = re.compile(r'^\d{4}-\d{3}[\dX]$')
ORCID_RE = re.compile(r'^\d{4}-\d{4}-\d{4}-\d{3}[\dX]$')
URL_RE = re.compile(r'^https?://\S+$')
EMAIL_RE = re.compile(r'^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$')
EDTF_RE = re.compile(r'^[\dX\-/~?%\[\]{}.,:T+Z]+$')
YEAR_RE = re.compile(r'\b(\d{4})\b')


def per_item(fn: ValidatorFunc) -> ValidatorFunc:
    """Apply a scalar validator to each item when the value is a list."""
    @functools.wraps(fn)
    def wrapper(value: Any, options: Dict[str, Any]) -> None:
        if isinstance(value, (list, tuple)):
            for item in value:
                fn(item, options)
            return
        fn(value, options)
    return wrapper


def _fail(value: Any, options: Dict[str, Any], rule: str, message: str) -> ValidationError:
    return ValidationError(options.get("field_name", ""), value, rule, message)


def _text(value: Any) -> str:
    """String form of a scalar value; '' for anything else."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, DateValue):
        return value.raw.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def validate_required(value: Any, options: Dict[str, Any]) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise _fail(value, options, "required", "value is required")
    if isinstance(value, (list, tuple, dict)) and not value:
        raise _fail(value, options, "required", "at least one value is required")


def validate_doi(value: Any, options: Dict[str, Any]) -> None:
    text = _text(value)
    if not text:
        return
    for prefix in ("https://doi.org/", "http://doi.org/", "https://dx.doi.org/",
                   "http://dx.doi.org/", "doi:", "DOI:"):
        if text.startswith(prefix):
            text = text[len(prefix):]
    if not DOI_RE.match(text):
        raise _fail(value, options, "doi", "invalid DOI format")


def isbn10_valid(isbn: str) -> bool:
    """Weighted mod-11 checksum; the final character may be X (10)."""
    if not isbn[:9].isdigit():
        return False
    check = isbn[9].upper()
    if check != "X" and not check.isdigit():
        return False
    total = sum(int(d) * (10 - i) for i, d in enumerate(isbn[:9]))
    total += 10 if check == "X" else int(check)
    return total % 11 == 0


def isbn13_valid(isbn: str) -> bool:
    """Alternating 1/3 weights, mod-10 checksum."""
    if not isbn.isdigit():
        return False
    total = sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(isbn))
    return total % 10 == 0


def validate_isbn(value: Any, options: Dict[str, Any]) -> None:
    text = _text(value)
    if not text:
        return
    for prefix in ("ISBN:", "isbn:"):
        if text.startswith(prefix):
            text = text[len(prefix):]
    cleaned = text.replace("-", "").replace(" ", "").strip()

    if len(cleaned) == 10:
        if not isbn10_valid(cleaned):
            raise _fail(value, options, "isbn", "ISBN-10 checksum invalid")
    elif len(cleaned) == 13:
        if not isbn13_valid(cleaned):
            raise _fail(value, options, "isbn", "ISBN-13 checksum invalid")
    else:
        raise _fail(value, options, "isbn", "ISBN must be 10 or 13 digits")


def validate_issn(value: Any, options: Dict[str, Any]) -> None:
    text = _text(value)
    if not text:
        return
    for prefix in ("ISSN:", "issn:"):
        if text.startswith(prefix):
            text = text[len(prefix):]
    text = text.strip().upper()
    if not ISSN_RE.match(text):
        raise _fail(value, options, "issn", "ISSN must be in format XXXX-XXXX")

    digits = text.replace("-", "")
    total = sum(int(d) * (8 - i) for i, d in enumerate(digits[:7]))
    check = 10 if digits[7] == "X" else int(digits[7])
    if (total + check) % 11 != 0:
        raise _fail(value, options, "issn", "ISSN checksum invalid")


def orcid_check_digit(base_digits: str) -> str:
    """ISO 7064 MOD 11-2 check character for the first 15 ORCID digits."""
    total = 0
    for d in base_digits:
        total = (total + int(d)) * 2
    result = (12 - total % 11) % 11
    return "X" if result == 10 else str(result)


def validate_orcid(value: Any, options: Dict[str, Any]) -> None:
    text = _text(value)
    if not text:
        return
    for prefix in ("https://orcid.org/", "http://orcid.org/", "orcid:"):
        if text.startswith(prefix):
            text = text[len(prefix):]
    text = text.strip().upper()
    if not ORCID_RE.match(text):
        raise _fail(value, options, "orcid", "ORCID must be in format 0000-0000-0000-000X")

    digits = text.replace("-", "")
    if orcid_check_digit(digits[:15]) != digits[15]:
        raise _fail(value, options, "orcid", "ORCID checksum invalid")


def validate_url(value: Any, options: Dict[str, Any]) -> None:
    text = _text(value)
    if text and not URL_RE.match(text):
        raise _fail(value, options, "url", "invalid URL format")


def validate_email(value: Any, options: Dict[str, Any]) -> None:
    text = _text(value)
    if text and not EMAIL_RE.match(text):
        raise _fail(value, options, "email", "invalid email format")


def validate_iso8601(value: Any, options: Dict[str, Any]) -> None:
    text = _text(value)
    if text and parse_iso8601_datetime(text) is None:
        raise _fail(value, options, "iso8601", "invalid ISO 8601 date format")


def validate_edtf(value: Any, options: Dict[str, Any]) -> None:
    text = _text(value)
    if text and not EDTF_RE.match(text):
        raise _fail(value, options, "edtf", "invalid EDTF format")


def validate_year_range(value: Any, options: Dict[str, Any]) -> None:
    """Year (or first four-digit run) within [min_value or 1000, max_value or now+10]."""
    text = _text(value)
    if not text:
        return
    match = YEAR_RE.search(text)
    if not match:
        return
    year = int(match.group(1))
    min_year = int(options.get("min_value") or 1000)
    max_year = int(options.get("max_value") or date.today().year + 10)
    if year < min_year or year > max_year:
        raise _fail(value, options, "year_range", f"year must be between {min_year} and {max_year}")


def validate_pattern(value: Any, options: Dict[str, Any]) -> None:
    pattern = options.get("pattern")
    text = _text(value)
    if not pattern or not text:
        return
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise StructuralError(f"invalid pattern {pattern!r}: {e}") from e
    if not compiled.search(text):
        raise _fail(value, options, "pattern", f"value does not match pattern {pattern!r}")


def validate_length(value: Any, options: Dict[str, Any]) -> None:
    if not isinstance(value, str) or not value:
        return
    min_length = options.get("min_length")
    max_length = options.get("max_length")
    if min_length and len(value) < min_length:
        raise _fail(value, options, "length", f"length must be at least {min_length}")
    if max_length and len(value) > max_length:
        raise _fail(value, options, "length", f"length must be at most {max_length}")


def validate_range(value: Any, options: Dict[str, Any]) -> None:
    if isinstance(value, bool):
        return
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(_text(value))
        except ValueError:
            return
    min_value = options.get("min_value")
    max_value = options.get("max_value")
    if min_value is not None and number < min_value:
        raise _fail(value, options, "range", f"value must be at least {min_value}")
    if max_value is not None and number > max_value:
        raise _fail(value, options, "range", f"value must be at most {max_value}")


def validate_count(value: Any, options: Dict[str, Any]) -> None:
    if not isinstance(value, (list, tuple)) or not value:
        return
    min_count = options.get("min_count")
    max_count = options.get("max_count")
    if min_count and len(value) < min_count:
        raise _fail(value, options, "count", f"must have at least {min_count} items")
    if max_count and len(value) > max_count:
        raise _fail(value, options, "count", f"must have at most {max_count} items")


class ValidatorRegistry(FunctionRegistry[ValidatorFunc]):
    """Registry of named validators."""

    kind = "validator"

    def register_defaults(self) -> None:
        for name, fn in DEFAULT_VALIDATORS.items():
            self.register(name, fn)

    def validate(self, name: str, value: Any, options: Optional[Dict[str, Any]] = None) -> None:
        """Apply a named validator.

        Raises:
            StructuralError: when no validator is registered under `name`
            ValidationError: when the value fails the rule
        """
        fn = self.require(name)
        fn(value, options or {})

    def validate_all(
        self,
        names: str,
        value: Any,
        options: Optional[Dict[str, Any]] = None,
    ) -> List[CrosswalkError]:
        """Run every rule in a comma-separated list, without short-circuiting.

        Returns:
            Errors in rule order; unknown rule names contribute a StructuralError
            and any other exception a validator raises is wrapped in a
            FieldConversionError for `options["field_name"]`
        """
        errors: List[CrosswalkError] = []
        for name in (names or "").split(","):
            name = name.strip()
            if not name:
                continue
            try:
                self.validate(name, value, options)
            except CrosswalkError as e:
                errors.append(e)
            except Exception as e:
                field_name = (options or {}).get("field_name", "")
                errors.append(FieldConversionError(field_name, f"validator {name!r} failed: {e}", cause=e))
        return errors


DEFAULT_VALIDATORS: Dict[str, ValidatorFunc] = {
    "required": validate_required,
    "doi": per_item(validate_doi),
    "isbn": per_item(validate_isbn),
    "issn": per_item(validate_issn),
    "orcid": per_item(validate_orcid),
    "url": per_item(validate_url),
    "email": per_item(validate_email),
    "iso8601": per_item(validate_iso8601),
    "edtf": per_item(validate_edtf),
    "year_range": per_item(validate_year_range),
    "pattern": per_item(validate_pattern),
    "length": per_item(validate_length),
    "range": per_item(validate_range),
    "count": validate_count,
}
