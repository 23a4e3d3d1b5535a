"""Tests for MARC relator normalization."""

from crosswalk.helpers.relators import (
    is_creator_role, lookup_relator, normalize_role, relator_code_from_uri, relator_label,
)


class TestLookupRelator:
    """Role label / code / URI resolution."""

    def test_code(self):
        """Codes resolve to themselves, case-insensitively."""
        assert lookup_relator("AUT") == "aut"

    def test_label(self):
        """MARC labels resolve to codes."""
        assert lookup_relator("Thesis advisor") == "ths"

    def test_alias(self):
        """Common aliases resolve to codes."""
        assert lookup_relator("editors") == "edt"

    def test_curie_and_uri(self):
        """Both relators:xxx and id.loc.gov URIs resolve."""
        assert lookup_relator("relators:ctb") == "ctb"
        assert lookup_relator("http://id.loc.gov/vocabulary/relators/aut") == "aut"

    def test_unknown(self):
        """Unknown and empty roles give None."""
        assert lookup_relator("wizard") is None
        assert lookup_relator("") is None
        assert lookup_relator(None) is None


class TestRelatorHelpers:
    """Label rendering and role normalization."""

    def test_relator_label(self):
        """Codes render as labels; unknown input comes back as given."""
        assert relator_label("relators:aut") == "Author"
        assert relator_label("zzz") == "zzz"

    def test_code_from_uri_passthrough(self):
        """Plain strings are returned unchanged."""
        assert relator_code_from_uri("author") == "author"

    def test_normalize_role_unknown_trimmed(self):
        """Unknown roles are trimmed but otherwise kept."""
        assert normalize_role(" Author ") == "aut"
        assert normalize_role(" Wizard ") == "Wizard"

    def test_is_creator_role(self):
        """Authors are creators; contributors are not."""
        assert is_creator_role("author")
        assert not is_creator_role("contributor")
