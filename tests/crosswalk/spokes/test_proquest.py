"""Tests for the ProQuest ETD schema and its embargo computed field."""

import pytest

from crosswalk import build_converter
from crosswalk.convert import Converter
from crosswalk.hub.models import CanonicalRecord, DatePrecision, DateType
from crosswalk.hub.record import get_date
from crosswalk.spokes.proquest import (
    Author, Submission, compute_embargo_date, embargo_from_code, explicit_embargo,
)


@pytest.fixture
def converter():
    return build_converter()


def submission(**kwargs) -> Submission:
    data = {"title": "A Thesis", "author": Author(given="Grace", family="Hopper")}
    data.update(kwargs)
    return Submission(**data)


class TestEmbargoFromCode:
    """Embargo codes relative to the accept date."""

    @pytest.mark.parametrize("code,expected", [
        (1, "2024-07-13"),
        (2, "2025-01-09"),
        (3, "2026-01-04"),
    ])
    def test_codes(self, code, expected):
        """Codes 1/2/3 add 6/12/24 thirty-day months."""
        assert embargo_from_code(code, "01/15/2024") == expected

    def test_no_embargo(self):
        """Code 0 means no embargo."""
        assert embargo_from_code(0, "01/15/2024") == ""

    def test_alternate_accept_formats(self):
        """ISO and slashed ISO accept dates are understood."""
        assert embargo_from_code(1, "2024-01-15") == "2024-07-13"
        assert embargo_from_code(1, "2024/01/15") == "2024-07-13"

    def test_missing_or_bad_accept_date(self):
        """Without a usable accept date there is no embargo."""
        assert embargo_from_code(1, "") == ""
        assert embargo_from_code(1, "someday") == ""

    def test_unknown_code(self):
        """Unknown codes give no embargo."""
        assert embargo_from_code(4, "01/15/2024") == ""


class TestExplicitEmbargo:
    """Repository-supplied release dates."""

    @pytest.mark.parametrize("text", ["2025-03-01", "03/01/2025", "March 1, 2025", "Mar 1, 2025", "2025/03/01"])
    def test_formats_normalized(self, text):
        """Known formats normalize to YYYY-MM-DD."""
        assert explicit_embargo(text) == "2025-03-01"

    def test_unrecognized_kept(self):
        """Unrecognized text is kept as given."""
        assert explicit_embargo("after graduation") == "after graduation"


class TestComputeEmbargoDate:
    """The computed field hook."""

    def test_adds_available_date(self):
        """The embargo end is appended as an available DAY date."""
        record = CanonicalRecord()
        compute_embargo_date(submission(embargo_code=1, accept_date="01/15/2024"), record)
        date = get_date(record, DateType.AVAILABLE)
        assert date.raw == "2024-07-13"
        assert (date.year, date.month, date.day) == (2024, 7, 13)
        assert date.precision == DatePrecision.DAY

    def test_explicit_date_wins(self):
        """A repository embargo date overrides the code."""
        record = CanonicalRecord()
        compute_embargo_date(submission(
            embargo_code=1, accept_date="01/15/2024", repository_embargo_date="Jan 1, 2030",
        ), record)
        assert record.dates[0].raw == "2030-01-01"

    def test_unparseable_explicit_kept_raw(self):
        """Unrecognized explicit dates are kept raw without components."""
        record = CanonicalRecord()
        compute_embargo_date(submission(repository_embargo_date="indefinite"), record)
        assert record.dates[0].raw == "indefinite"
        assert record.dates[0].year is None

    def test_no_embargo_no_date(self):
        """No embargo leaves the dates untouched."""
        record = CanonicalRecord()
        compute_embargo_date(submission(accept_date="01/15/2024"), record)
        assert record.dates == []


class TestSubmissionConversion:
    """End-to-end ProQuest conversion."""

    def test_people_and_degree(self, converter):
        """Author, advisors and degree details land in their slots."""
        record = converter.to_hub(submission(
            advisors=[Author(given="Alan", family="Turing", orcid="0000-0002-1825-0097")],
            degree_name="Ph.D.",
            department="Computer Science",
            institution="Lehigh University",
        )).record
        author, advisor = record.contributors
        assert author.name == "Hopper, Grace"
        assert author.role_code == "aut"
        assert advisor.role_code == "ths"
        assert advisor.identifiers[0].value == "0000-0002-1825-0097"
        assert record.degree_info.degree_name == "Ph.D."
        assert record.degree_info.department == "Computer Science"

    def test_embargo_after_routing(self, converter):
        """The hook runs after accepted date routing."""
        record = converter.to_hub(submission(accept_date="01/15/2024", embargo_code=2)).record
        assert [d.type for d in record.dates] == [DateType.ACCEPTED, DateType.AVAILABLE]
        assert record.dates[0].raw == "2024-01-15"
        assert record.dates[1].raw == "2025-01-09"
        assert record.extra["embargo_code"] == 2
        assert "embargo_code" in record.extra_descriptions

    def test_unset_embargo_code_not_in_extra(self, converter):
        """An embargo code the source never set is not written."""
        record = converter.to_hub(submission()).record
        assert record.extra == {}
        assert record.extra_descriptions == {}

    def test_explicit_zero_embargo_code_kept(self, converter):
        """An explicitly supplied 0 is a present value."""
        record = converter.to_hub(Submission.model_validate(
            {"title": "T", "author": {"family": "Hopper"}, "embargo_code": 0},
        )).record
        assert record.extra == {"embargo_code": 0}
        assert [d.type for d in record.dates] == []

    def test_plain_converter_runs_no_hook(self):
        """Without seeded hooks no embargo date is added."""
        record = Converter().to_hub(submission(accept_date="01/15/2024", embargo_code=2)).record
        assert [d.type for d in record.dates] == [DateType.ACCEPTED]

    def test_missing_author_reported(self, converter):
        """The author is required."""
        result = converter.to_hub(Submission(title="T"))
        assert [e.field for e in result.errors] == ["author"]
