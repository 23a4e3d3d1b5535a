"""Helpers for metadata values: EDTF dates, names, MARC relators, HTML."""

from crosswalk.helpers.edtf import parse_edtf
from crosswalk.helpers.nameparse import parse_name, split_names
from crosswalk.helpers.relators import normalize_role, relator_label

__all__ = [
    "parse_edtf",
    "parse_name",
    "split_names",
    "normalize_role",
    "relator_label",
]
