"""Relation type normalization and inverses."""

from typing import Dict

from crosswalk.hub.models import Relation, RelationType, lookup_label


# Symmetric pairs: each side is the other's inverse
INVERSE_PAIRS = [
    (RelationType.MEMBER_OF, RelationType.HAS_MEMBER),
    (RelationType.PART_OF, RelationType.HAS_PART),
    (RelationType.VERSION_OF, RelationType.HAS_VERSION),
    (RelationType.REPLACES, RelationType.IS_REPLACED_BY),
    (RelationType.FORMAT_OF, RelationType.HAS_FORMAT),
    (RelationType.REFERENCES, RelationType.IS_CITED_BY),
    (RelationType.DERIVED_FROM, RelationType.SOURCE_OF),
    (RelationType.BASED_ON, RelationType.IS_BASIS_FOR),
    (RelationType.SUPPLEMENTS, RelationType.IS_SUPPLEMENT_TO),
    (RelationType.DOCUMENTS, RelationType.IS_DOCUMENTED_BY),
    (RelationType.DESCRIBES, RelationType.IS_DESCRIBED_BY),
    (RelationType.SERIES_OF, RelationType.IN_SERIES),
]

INVERSES: Dict[RelationType, RelationType] = {}
for _a, _b in INVERSE_PAIRS:
    INVERSES[_a] = _b
    INVERSES[_b] = _a
# One-way: the inverse of IS_CITED_BY stays REFERENCES
INVERSES[RelationType.CITES] = RelationType.IS_CITED_BY

# Source spellings (lower-cased, '-' and ' ' as '_') that are not member values
RELATION_ALIASES: Dict[str, RelationType] = {
    "memberof": RelationType.MEMBER_OF,
    "ismemberof": RelationType.MEMBER_OF,
    "is_member_of": RelationType.MEMBER_OF,
    "hasmember": RelationType.HAS_MEMBER,
    "partof": RelationType.PART_OF,
    "ispartof": RelationType.PART_OF,
    "is_part_of": RelationType.PART_OF,
    "haspart": RelationType.HAS_PART,
    "cited_by": RelationType.IS_CITED_BY,
    "iscitedby": RelationType.IS_CITED_BY,
    "versionof": RelationType.VERSION_OF,
    "hasversion": RelationType.HAS_VERSION,
    "replaced_by": RelationType.IS_REPLACED_BY,
    "isreplacedby": RelationType.IS_REPLACED_BY,
    "relatedto": RelationType.RELATED_TO,
    "related": RelationType.RELATED_TO,
    "derivedfrom": RelationType.DERIVED_FROM,
    "sourceof": RelationType.SOURCE_OF,
    "series": RelationType.IN_SERIES,
    "inseries": RelationType.IN_SERIES,
}


def relation_inverse(rel_type: RelationType) -> RelationType:
    """Inverse relation type; types without one are returned unchanged."""
    return INVERSES.get(rel_type, rel_type)


def normalize_relation_type(value: str) -> RelationType:
    """
    Map a relation label from a source record to the vocabulary.

    Accepts member values and names ("part_of", "PART_OF"), wire names
    ("RELATION_TYPE_PART_OF") and common source spellings ("isPartOf",
    "is-part-of"). Empty input is UNSPECIFIED; anything else unknown is OTHER.
    """
    key = (value or "").strip().lower().replace("-", "_").replace(" ", "_")
    if not key:
        return RelationType.UNSPECIFIED
    if key in RELATION_ALIASES:
        return RELATION_ALIASES[key]
    resolved = lookup_label(RelationType, key, RelationType.OTHER)
    return RelationType.OTHER if resolved == RelationType.UNSPECIFIED else resolved


def new_relation(rel_type: RelationType, target_title: str, target_uri: str = "") -> Relation:
    return Relation(type=rel_type, target_title=target_title.strip(), target_uri=target_uri.strip())
