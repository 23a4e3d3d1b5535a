"""Tests for the Drupal node schema."""

import pytest

from crosswalk import build_converter
from crosswalk.hub.models import DatePrecision, DateQualifier, ResourceTypeValue, SubjectVocabulary
from crosswalk.spokes import SPOKES, get_spoke, spoke_names
from crosswalk.spokes.drupal import Node


@pytest.fixture
def converter():
    return build_converter()


class TestTitlePriority:
    """Truncated title versus full title."""

    def test_full_title_wins(self, converter):
        """field_full_title outranks title."""
        record = converter.to_hub(Node(title="A Very Long Ti", field_full_title="A Very Long Title")).record
        assert record.title == "A Very Long Title"

    def test_falls_back_to_title(self, converter):
        """An empty full title never blocks title."""
        record = converter.to_hub(Node(title="Short", field_full_title="")).record
        assert record.title == "Short"


class TestNodeConversion:
    """Remaining Drupal fields."""

    def test_fields(self, converter):
        """Dates, agents, vocabularies and unmapped fields."""
        record = converter.to_hub(Node(
            nid=42,
            title="T",
            field_edtf_date_issued="1985~",
            field_linked_agent=["Ada Lovelace"],
            field_resource_type="Image",
            field_genre=["Photographs"],
            field_subject=["Bridges"],
            field_description="<p>Black &amp; white</p>",
        )).record
        assert record.dates[0].qualifier == DateQualifier.APPROXIMATE
        assert record.dates[0].precision == DatePrecision.YEAR
        assert record.contributors[0].name == "Ada Lovelace"
        assert record.contributors[0].parsed_name.family == "Lovelace"
        assert record.resource_type.type == ResourceTypeValue.IMAGE
        assert record.genres[0].value == "Photographs"
        assert record.subjects[0].vocabulary == SubjectVocabulary.LCSH
        assert record.description == "Black & white"
        assert record.extra == {"nid": 42}

    def test_bad_edtf_reported(self, converter):
        """Unparseable EDTF is flagged but kept raw."""
        result = converter.to_hub(Node(title="T", field_edtf_date_created="sometime"))
        assert [e.field for e in result.errors] == ["field_edtf_date_created"]
        assert result.record.dates[0].raw == "sometime"

    def test_unset_nid_not_preserved(self, converter):
        """A nid left at its default is not copied into extra."""
        assert converter.to_hub(Node(title="T")).record.extra == {}


class TestSpokeRegistry:
    """Looking up schemas by name."""

    def test_names(self):
        """All spokes are listed."""
        assert spoke_names() == ["bibtex", "drupal", "proquest"]
        assert get_spoke("Drupal") is Node
        assert set(SPOKES) == set(spoke_names())

    def test_unknown(self):
        """Unknown names raise KeyError listing the choices."""
        with pytest.raises(KeyError):
            get_spoke("marc")
