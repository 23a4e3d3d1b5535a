"""Identifier type detection, normalization and resolver URIs.

Detection runs an ordered series of checks on the trimmed value; the first
match wins:

    DOI -> Handle -> ORCID -> UUID -> ISBN -> ISSN -> URL -> arXiv

so "10.1000/x" is a DOI rather than a Handle, and "https://doi.org/..." is a
DOI rather than a URL.
"""

import re
from typing import Dict

from crosswalk.hub.models import Identifier, IdentifierType


DOI_RE = re.compile(r'^10\.\d{4,}/\S+$')
HANDLE_RE = re.compile(r'^\d+\.\d+/\S+$')
ORCID_RE = re.compile(r'^\d{4}-\d{4}-\d{4}-\d{3}[\dX]$')
ISBN_RE = re.compile(r'^(?:\d{10}|\d{13}|\d{1,5}-\d{1,7}-\d{1,7}-[\dX])$')
ISBN_DIGITS_RE = re.compile(r'^\d{10}$|^\d{13}$')
ISSN_RE = re.compile(r'^\d{4}-\d{3}[\dX]$')
UUID_RE = re.compile(r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$')

RESOLVERS: Dict[IdentifierType, str] = {
    IdentifierType.DOI: "https://doi.org/",
    IdentifierType.HANDLE: "https://hdl.handle.net/",
    IdentifierType.ORCID: "https://orcid.org/",
    IdentifierType.PMID: "https://pubmed.ncbi.nlm.nih.gov/",
    IdentifierType.PMCID: "https://www.ncbi.nlm.nih.gov/pmc/articles/",
    IdentifierType.ARXIV: "https://arxiv.org/abs/",
}

# Prefixes stripped by normalize_identifier, per type
STRIP_PREFIXES: Dict[IdentifierType, tuple] = {
    IdentifierType.DOI: ("https://doi.org/", "http://doi.org/", "doi:", "DOI:"),
    IdentifierType.HANDLE: ("https://hdl.handle.net/", "http://hdl.handle.net/", "hdl:"),
    IdentifierType.ORCID: ("https://orcid.org/", "http://orcid.org/"),
}


def detect_identifier_type(value: str) -> IdentifierType:
    """Guess the type of an identifier from its value.

    Args:
        value: Identifier text, with or without resolver prefix

    Returns:
        Detected type, or UNSPECIFIED when nothing matches
    """
    value = (value or "").strip()

    # DOI (bare, resolver URL, or doi: prefix)
    if value.startswith("10.") and DOI_RE.match(value):
        return IdentifierType.DOI
    if value.startswith(("https://doi.org/", "http://doi.org/", "doi:")):
        return IdentifierType.DOI

    # Handle
    if HANDLE_RE.match(value):
        return IdentifierType.HANDLE
    if value.startswith(("https://hdl.handle.net/", "http://hdl.handle.net/")):
        return IdentifierType.HANDLE

    # ORCID
    if ORCID_RE.match(value) or value.startswith("https://orcid.org/"):
        return IdentifierType.ORCID

    if UUID_RE.match(value):
        return IdentifierType.UUID

    # ISBN: 10 or 13 characters once hyphens are removed
    cleaned = value.replace("-", "")
    if len(cleaned) in (10, 13) and (ISBN_RE.match(value) or ISBN_DIGITS_RE.match(cleaned)):
        return IdentifierType.ISBN

    if ISSN_RE.match(value):
        return IdentifierType.ISSN

    if value.startswith(("http://", "https://")):
        # arxiv.org URLs are checked after this and so stay URLs
        return IdentifierType.URL

    if value.startswith("arXiv:") or "arxiv.org" in value:
        return IdentifierType.ARXIV

    return IdentifierType.UNSPECIFIED


def normalize_identifier(value: str, id_type: IdentifierType) -> str:
    """Strip resolver prefixes (DOI, Handle, ORCID); upper-case ISBN/ISSN."""
    value = (value or "").strip()
    for prefix in STRIP_PREFIXES.get(id_type, ()):
        if value.startswith(prefix):
            value = value[len(prefix):]
    if id_type in (IdentifierType.ISBN, IdentifierType.ISSN):
        return value.upper()
    return value


def new_identifier(value: str, id_type: IdentifierType = IdentifierType.UNSPECIFIED) -> Identifier:
    """Identifier with its value normalized, detecting the type when unspecified."""
    if id_type == IdentifierType.UNSPECIFIED:
        id_type = detect_identifier_type(value)
    return Identifier(type=id_type, value=normalize_identifier(value, id_type))


def identifier_uri(identifier: Identifier) -> str:
    """Resolvable URI for an identifier, or its bare value when there is no resolver."""
    resolver = RESOLVERS.get(identifier.type)
    if resolver is None:
        return identifier.value
    return resolver + identifier.value
