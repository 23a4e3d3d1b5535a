"""Tests for record-level validation."""

from crosswalk.convert.exceptions import ValidationError
from crosswalk.hub.models import (
    CanonicalRecord, Contributor, DateValue, Identifier, IdentifierType, ParsedName,
)
from crosswalk.hub.validate import (
    RecordValidationOptions, extra_type_conflicts, validate_record,
)


def rules(errors):
    return [(e.field, e.rule) for e in errors]


class TestRequiredSlots:
    """Title and the optional required lists."""

    def test_title_required_by_default(self):
        """A blank title is the only default requirement."""
        result = validate_record(CanonicalRecord(title="  "))
        assert not result.is_valid
        assert rules(result.errors) == [("title", "required")]

    def test_minimal_record_valid(self):
        """A titled record with nothing else passes the default options."""
        result = validate_record(CanonicalRecord(title="T"))
        assert result.is_valid
        assert result.error_message() == ""

    def test_strict_requires_lists(self):
        """Strict options require identifiers, contributors and dates."""
        result = validate_record(CanonicalRecord(title="T"), RecordValidationOptions.strict())
        assert rules(result.errors) == [
            ("identifiers", "required"),
            ("contributors", "required"),
            ("dates", "required"),
        ]

    def test_title_check_can_be_disabled(self):
        """require_title=False accepts an untitled record."""
        options = RecordValidationOptions(require_title=False)
        assert validate_record(CanonicalRecord(), options).is_valid

    def test_errors_are_validation_errors(self):
        """Record errors reuse the field-level ValidationError type."""
        result = validate_record(CanonicalRecord())
        error = result.errors[0]
        assert isinstance(error, ValidationError)
        assert str(error) == "title: required: title is required"
        assert result.error_message() == "validation failed: title: required: title is required"


class TestIdentifierFormats:
    """Identifier format checks."""

    def _check(self, id_type, value):
        record = CanonicalRecord(title="T", identifiers=[Identifier(type=id_type, value=value)])
        return validate_record(record).errors

    def test_valid_identifiers(self):
        """Well-formed values pass, including prefixed DOIs and unhyphenated ISSNs."""
        assert self._check(IdentifierType.DOI, "https://doi.org/10.1000/xyz") == []
        assert self._check(IdentifierType.ORCID, "0000-0002-1825-009X") == []
        assert self._check(IdentifierType.ISSN, "03785955") == []
        assert self._check(IdentifierType.ISBN, "978-0-306-40615-7") == []

    def test_bad_doi(self):
        """A DOI without the 10.NNNN/ prefix is rejected."""
        errors = self._check(IdentifierType.DOI, "not-a-doi")
        assert rules(errors) == [("identifiers[0].value", "invalid_format")]
        assert "invalid DOI format" in errors[0].message

    def test_bad_orcid_and_isbn(self):
        """Malformed ORCIDs and ISBNs of the wrong length are rejected."""
        assert rules(self._check(IdentifierType.ORCID, "0000-0002-1825")) == [
            ("identifiers[0].value", "invalid_format"),
        ]
        assert rules(self._check(IdentifierType.ISBN, "12345")) == [
            ("identifiers[0].value", "invalid_format"),
        ]

    def test_blank_value(self):
        """A blank identifier value is required."""
        assert rules(self._check(IdentifierType.LOCAL, " ")) == [("identifiers[0].value", "required")]

    def test_other_types_not_checked(self):
        """Types without a format rule are accepted as-is."""
        assert self._check(IdentifierType.LOCAL, "anything at all") == []

    def test_format_check_can_be_disabled(self):
        """validate_identifier_formats=False skips the check."""
        record = CanonicalRecord(title="T", identifiers=[Identifier(type=IdentifierType.DOI, value="bad")])
        options = RecordValidationOptions(validate_identifier_formats=False)
        assert validate_record(record, options).is_valid


class TestContributors:
    """Contributor names and identifiers."""

    def test_nameless_contributor(self):
        """A contributor needs a name or a parsed name."""
        record = CanonicalRecord(title="T", contributors=[Contributor(name="A"), Contributor()])
        assert rules(validate_record(record).errors) == [("contributors[1]", "required")]

    def test_parsed_name_is_enough(self):
        """A parsed family name stands in for the display name."""
        record = CanonicalRecord(title="T", contributors=[Contributor(parsed_name=ParsedName(family="Smith"))])
        assert validate_record(record).is_valid

    def test_nested_orcid_path(self):
        """Contributor identifier errors carry the nested path."""
        contributor = Contributor(name="A", identifiers=[
            Identifier(type=IdentifierType.ORCID, value="0000-0002-1825-0097"),
            Identifier(type=IdentifierType.ORCID, value="bad"),
        ])
        record = CanonicalRecord(title="T", contributors=[contributor])
        assert rules(validate_record(record).errors) == [
            ("contributors[0].identifiers[1].value", "invalid_format"),
        ]


class TestDates:
    """Date components and ranges."""

    def _errors(self, value):
        return validate_record(CanonicalRecord(title="T", dates=[value])).errors

    def test_raw_only_date_valid(self):
        """Unparsed dates keep their raw text and pass."""
        assert self._errors(DateValue(raw="circa the reign of Anne")) == []

    def test_empty_date(self):
        """A date with neither year nor raw text is required."""
        assert rules(self._errors(DateValue())) == [("dates[0]", "required")]

    def test_year_out_of_range(self):
        """Years before 1000 or far in the future are rejected."""
        assert rules(self._errors(DateValue(year=999))) == [("dates[0].year", "out_of_range")]
        assert rules(self._errors(DateValue(year=9999))) == [("dates[0].year", "out_of_range")]

    def test_bad_month_and_day(self):
        """Month and day must be in calendar range."""
        assert rules(self._errors(DateValue(year=2000, month=13, day=32))) == [
            ("dates[0].month", "out_of_range"),
            ("dates[0].day", "out_of_range"),
        ]

    def test_date_check_can_be_disabled(self):
        """validate_dates=False skips component checks."""
        record = CanonicalRecord(title="T", dates=[DateValue(year=5)])
        assert validate_record(record, RecordValidationOptions(validate_dates=False)).is_valid


class TestExtraWarnings:
    """Warnings about extra keys."""

    def test_promotion_candidates(self):
        """Keys with a canonical home warn but do not fail the record."""
        record = CanonicalRecord(title="T", extra={"Volume": "3", "funding": "NSF", "shelf": "A1"})
        result = validate_record(record)
        assert result.is_valid
        assert result.has_warnings
        assert rules(result.warnings) == [
            ("extra.Volume", "promotion_candidate"),
            ("extra.funding", "promotion_candidate"),
        ]
        assert result.warnings[0].message == "route to publication.volume"

    def test_key_with_spaces(self):
        """Keys that are not machine names warn."""
        record = CanonicalRecord(title="T", extra={"shelf mark": "A1"})
        assert rules(validate_record(record).warnings) == [("extra.shelf mark", "invalid_key")]

    def test_warnings_can_be_disabled(self):
        """strict_extras=False skips extra key checks."""
        record = CanonicalRecord(title="T", extra={"volume": "3"})
        result = validate_record(record, RecordValidationOptions(strict_extras=False))
        assert not result.has_warnings


def test_extra_type_conflicts():
    """Keys whose value type differs across records are reported with sorted types."""
    records = [
        CanonicalRecord(extra={"pages": 12, "note": "a", "flag": True}),
        CanonicalRecord(extra={"pages": "12-20", "note": "b"}),
        CanonicalRecord(extra={"flag": None}),
    ]
    assert extra_type_conflicts(records) == {
        "pages": ["number", "string"],
        "flag": ["bool", "null"],
    }
