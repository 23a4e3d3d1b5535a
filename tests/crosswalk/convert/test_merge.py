"""Tests for priority-based merging of aliased fields."""

from crosswalk.convert.annotations import FieldHandle, HubField
from crosswalk.convert.merge import PriorityMerger, claim_key
from crosswalk.hub.models import CanonicalRecord


def title_field(name: str, priority=None) -> FieldHandle:
    return FieldHandle(name=name, annotation=HubField(target="title", priority=priority))


class TestClaimKey:
    """Slot identity."""

    def test_plain_target(self):
        """Without a selector the key is the target."""
        assert claim_key(HubField(target="title")) == "title"

    def test_sub_selector(self):
        """Sub-selectors distinguish slots of one target."""
        assert claim_key(HubField(target="dates", date_type="issued")) == "dates/issued"
        assert claim_key(HubField(target="dates", date_type="created")) == "dates/created"


class TestPriorityMerger:
    """Claim and overwrite rules."""

    def test_higher_priority_overwrites(self):
        """A strictly higher priority replaces the earlier value."""
        record, merger = CanonicalRecord(), PriorityMerger()
        assert merger.offer(record, "Short", title_field("a", 1))
        assert merger.offer(record, "Long", title_field("b", 2))
        assert record.title == "Long"
        assert merger.claims == {"title": 2}

    def test_lower_priority_skipped(self):
        """A lower priority never overwrites."""
        record, merger = CanonicalRecord(), PriorityMerger()
        merger.offer(record, "Long", title_field("b", 2))
        assert not merger.offer(record, "Short", title_field("a", 1))
        assert record.title == "Long"

    def test_equal_priority_keeps_first(self):
        """Ties keep the earlier value."""
        record, merger = CanonicalRecord(), PriorityMerger()
        merger.offer(record, "First", title_field("a", 1))
        assert not merger.offer(record, "Second", title_field("b", 1))
        assert record.title == "First"

    def test_empty_value_does_not_claim(self):
        """A(1, 'Short Title'), B(5, ''), C(3, 'Full Title') ends with C."""
        record, merger = CanonicalRecord(), PriorityMerger()
        merger.offer(record, "Short Title", title_field("a", 1))
        assert not merger.offer(record, "", title_field("b", 5))
        assert merger.claims["title"] == 1
        merger.offer(record, "Full Title", title_field("c", 3))
        assert record.title == "Full Title"
        assert merger.claims["title"] == 3

    def test_default_priority_zero(self):
        """Unset priority counts as zero."""
        record, merger = CanonicalRecord(), PriorityMerger()
        merger.offer(record, "Zero", title_field("a"))
        assert merger.claims == {"title": 0}
        assert merger.offer(record, "One", title_field("b", 1))

    def test_explicit_priority_argument(self):
        """An explicit priority overrides the annotation."""
        record, merger = CanonicalRecord(), PriorityMerger()
        merger.offer(record, "A", title_field("a", 5))
        assert merger.offer(record, "B", title_field("b", 1), priority=9)
        assert record.title == "B"

    def test_distinct_sub_targets_independent(self):
        """Different date types do not contend."""
        record, merger = CanonicalRecord(), PriorityMerger()
        issued = FieldHandle("i", HubField(target="dates", date_type="issued", priority=5))
        created = FieldHandle("c", HubField(target="dates", date_type="created", priority=1))
        assert merger.offer(record, "2001", issued)
        assert merger.offer(record, "1999", created)
        assert len(record.dates) == 2
