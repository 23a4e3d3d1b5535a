"""Tests for routing values into canonical record slots."""

from enum import IntEnum

import pytest

from crosswalk.convert.annotations import FieldHandle, HubField, enum_targets
from crosswalk.convert.parsers import PersonName
from crosswalk.convert.router import TargetRouter, build_contributor, to_text
from crosswalk.helpers.edtf import parse_edtf
from crosswalk.hub.models import (
    CanonicalRecord, ContributorType, DatePrecision, DateType, IdentifierType,
    ParsedName, RelationType, ResourceTypeValue, SubjectVocabulary,
)


@enum_targets(JOURNAL_ARTICLE="article")
class WorkKind(IntEnum):
    NONE = 0
    JOURNAL_ARTICLE = 1
    BOOK = 2
    ODDITY = 3


class Form(IntEnum):
    UNSPECIFIED = 0
    BOOK = 1


def handle(name: str, enum_cls=None, **kwargs) -> FieldHandle:
    return FieldHandle(name=name, annotation=HubField(**kwargs), enum_cls=enum_cls)


@pytest.fixture
def router():
    return TargetRouter()


@pytest.fixture
def record():
    return CanonicalRecord()


class TestScalarTargets:
    """Single-valued string slots."""

    def test_title(self, router, record):
        """Scalars are trimmed and written."""
        assert router.route(record, "  A Title ", handle("t", target="title"))
        assert record.title == "A Title"

    def test_empty_not_written(self, router, record):
        """Whitespace-only values report nothing written."""
        assert not router.route(record, "   ", handle("t", target="title"))
        assert record.title == ""

    def test_list_joined(self, router, record):
        """A list routed to a scalar joins with '; '."""
        router.route(record, ["en", "fr"], handle("lang", target="language"))
        assert record.language == "en; fr"

    def test_text_list(self, router, record):
        """alt_title and notes get one entry per item."""
        router.route(record, ["One", "", "Two"], handle("n", target="notes"))
        assert record.notes == ["One", "Two"]


class TestResourceType:
    """Enum table then literal vocabulary match."""

    def test_enum_table(self, router, record):
        """Registered enum members map through the table."""
        assert router.route(record, 1, handle("kind", enum_cls=WorkKind, target="resource_type"))
        assert record.resource_type.type == ResourceTypeValue.ARTICLE
        assert record.resource_type.original == "JOURNAL_ARTICLE"

    def test_enum_member_name_fallback(self, router, record):
        """Unregistered members match the vocabulary by member name."""
        assert router.route(record, 2, handle("kind", enum_cls=WorkKind, target="resource_type"))
        assert record.resource_type.type == ResourceTypeValue.BOOK

    def test_literal(self, router, record):
        """Plain strings match vocabulary values."""
        assert router.route(record, "Dataset", handle("rt", target="resource_type"))
        assert record.resource_type.type == ResourceTypeValue.DATASET
        assert record.resource_type.original == "Dataset"

    def test_unmatched_not_written(self, router, record):
        """Unknown types are dropped and reported as not written."""
        assert not router.route(record, 3, handle("kind", enum_cls=WorkKind, target="resource_type"))
        assert record.resource_type is None

    def test_unspecified_member_not_written(self, router, record):
        """A zero member named UNSPECIFIED leaves resource_type unset."""
        assert not router.route(record, 0, handle("kind", enum_cls=Form, target="resource_type"))
        assert record.resource_type is None

    def test_unspecified_text_not_written(self, router, record):
        """The literal label 'unspecified' is not a resource type."""
        assert not router.route(record, "Unspecified", handle("rt", target="resource_type"))
        assert record.resource_type is None


class TestRepeatedTargets:
    """Dates, identifiers, subjects, relations and rights."""

    def test_dates_parsed_with_type(self, router, record):
        """Strings are parsed as EDTF with the annotated type."""
        router.route(record, ["1978", "1980-05"], handle("d", target="dates", date_type="issued"))
        assert [d.type for d in record.dates] == [DateType.ISSUED, DateType.ISSUED]
        assert record.dates[1].precision == DatePrecision.MONTH

    def test_parsed_date_retyped(self, router, record):
        """Already parsed DateValues take the annotation's type."""
        router.route(record, parse_edtf("2001"), handle("d", target="dates", date_type="DATE_TYPE_CREATED"))
        assert record.dates[0].type == DateType.CREATED
        assert record.dates[0].year == 2001

    def test_identifiers(self, router, record):
        """Identifiers get the annotated type."""
        router.route(record, "10.1000/x", handle("doi", target="identifiers", identifier_type="doi"))
        assert record.identifiers[0].type == IdentifierType.DOI
        assert record.identifiers[0].value == "10.1000/x"

    def test_identifier_type_detected(self, router, record):
        """Without an annotated type, the type is detected and the value normalized."""
        assert router.route(record, ["https://doi.org/10.1000/x", "local-7"], handle("ids", target="identifiers"))
        assert [(i.type, i.value) for i in record.identifiers] == [
            (IdentifierType.DOI, "10.1000/x"),
            (IdentifierType.UNSPECIFIED, "local-7"),
        ]

    def test_subjects_and_genres(self, router, record):
        """Subjects and genres get the annotated vocabulary."""
        router.route(record, ["Physics"], handle("s", target="subjects", subject_vocabulary="lcsh"))
        router.route(record, "Poetry", handle("g", target="genres"))
        assert record.subjects[0].vocabulary == SubjectVocabulary.LCSH
        assert record.genres[0].vocabulary == SubjectVocabulary.UNSPECIFIED

    def test_relations(self, router, record):
        """Relations record the target title and type."""
        router.route(record, "Lecture Notes", handle("series", target="relations", relation_type="in_series"))
        assert record.relations[0].type == RelationType.IN_SERIES
        assert record.relations[0].target_title == "Lecture Notes"

    def test_relation_label_normalized(self, router, record):
        """Source spellings of relation labels resolve; unknown labels become OTHER."""
        router.route(record, "Collected Works", handle("host", target="relations", relation_type="isPartOf"))
        router.route(record, "Sequel", handle("seq", target="relations", relation_type="sequel_to"))
        assert [r.type for r in record.relations] == [RelationType.PART_OF, RelationType.OTHER]

    def test_rights(self, router, record):
        """Rights URIs are labelled."""
        router.route(record, "http://rightsstatements.org/vocab/InC/1.0/", handle("r", target="rights"))
        assert record.rights[0].statement == "In Copyright"


class TestNestedAndExtra:
    """Dotted targets and the extra fallback."""

    def test_nested_parent_allocated(self, router, record):
        """The parent model is created on first write and reused."""
        router.route(record, "PhD", handle("deg", target="degree_info.degree_name"))
        router.route(record, "Lehigh", handle("inst", target="degree_info.institution"))
        assert record.degree_info.degree_name == "PhD"
        assert record.degree_info.institution == "Lehigh"

    def test_nested_empty_not_allocated(self, router, record):
        """An empty value does not allocate the parent."""
        assert not router.route(record, "", handle("vol", target="publication.volume"))
        assert record.publication is None

    def test_unknown_nested_to_extra(self, router, record):
        """Unknown nested paths are kept in extra under the full path."""
        router.route(record, "x", handle("f", target="funding.award"))
        assert record.extra == {"funding.award": "x"}

    def test_extra_with_description(self, router, record):
        """Extra values are keyed by field name with the description."""
        router.route(record, 7, handle("code", target="extra", description="A code"))
        assert record.extra == {"code": 7}
        assert record.extra_descriptions == {"code": "A code"}

    def test_unknown_target_to_extra(self, router, record):
        """Unknown flat targets fall back to extra."""
        assert router.route(record, "v", handle("odd", target="nonexistent"))
        assert record.extra["odd"] == "v"


class TestContributors:
    """Building contributors from routed items."""

    def test_string_name(self, router, record):
        """Bare names become display names with role and code."""
        router.route(record, "Ada Lovelace", handle(
            "a", target="contributors", role="author", contributor_type="person",
        ))
        contributor = record.contributors[0]
        assert contributor.name == "Ada Lovelace"
        assert contributor.role == "author"
        assert contributor.role_code == "aut"
        assert contributor.type == ContributorType.PERSON

    def test_person_name(self):
        """PersonName parts build a parsed name and display form."""
        contributor = build_contributor(PersonName(given="Ada", family="Lovelace"), HubField(role="editor"))
        assert contributor.name == "Lovelace, Ada"
        assert contributor.parsed_name.normalized == "Lovelace, Ada"
        assert contributor.role_code == "edt"

    def test_dict_with_orcid_and_affiliation(self):
        """Nested sub-fields are read by name."""
        contributor = build_contributor(
            {"given": "Marie", "family": "Curie", "orcid": "0000-0002-1825-0097", "affiliation": "Sorbonne"},
            HubField(role="author"),
        )
        assert contributor.name == "Curie, Marie"
        assert contributor.identifiers[0].type == IdentifierType.ORCID
        assert contributor.affiliations == ["Sorbonne"]

    def test_parsed_name(self):
        """ParsedName keeps its full name."""
        contributor = build_contributor(ParsedName(full_name="M. Curie", family="Curie"), HubField())
        assert contributor.name == "M. Curie"

    def test_unknown_role_has_no_code(self):
        """Roles without a relator code keep an empty code."""
        assert build_contributor("X", HubField(role="wizard")).role_code == ""

    def test_empty_item_skipped(self, router, record):
        """Items with no name at all are dropped."""
        assert not router.route(record, [{}, ""], handle("a", target="contributors"))
        assert record.contributors == []


class TestToText:
    """String forms of routed values."""

    def test_values(self):
        """Booleans, numbers, dates and lists."""
        assert to_text(True) == "true"
        assert to_text(3) == "3"
        assert to_text(parse_edtf("1978")) == "1978"
        assert to_text(["a", " ", "b"]) == "a; b"
        assert to_text(None) == ""
