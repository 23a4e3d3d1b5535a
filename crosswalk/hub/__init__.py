"""Hub module - the canonical record every format converts through.

- models: CanonicalRecord and its component models and vocabularies
- dates: EDTF / human rendering of DateValue
- record: accessor helpers (dates, identifiers, extra)
- identifiers: identifier type detection, normalization and URIs
- relations: relation type normalization and inverses
- validate: record-level validation
- vocab: rights statement labels
"""

from crosswalk.hub.dates import format_date, format_edtf
from crosswalk.hub.identifiers import (
    detect_identifier_type,
    identifier_uri,
    new_identifier,
    normalize_identifier,
)
from crosswalk.hub.models import (
    CanonicalRecord,
    Contributor,
    ContributorType,
    DatePrecision,
    DateQualifier,
    DateType,
    DateValue,
    DegreeInfo,
    Identifier,
    IdentifierType,
    ParsedName,
    PublicationDetails,
    Relation,
    RelationType,
    ResourceType,
    ResourceTypeValue,
    Rights,
    Subject,
    SubjectVocabulary,
    lookup_label,
)
from crosswalk.hub.relations import new_relation, normalize_relation_type, relation_inverse
from crosswalk.hub.validate import RecordValidation, RecordValidationOptions, validate_record

__all__ = [
    "CanonicalRecord",
    "Contributor",
    "ContributorType",
    "DatePrecision",
    "DateQualifier",
    "DateType",
    "DateValue",
    "DegreeInfo",
    "Identifier",
    "IdentifierType",
    "ParsedName",
    "PublicationDetails",
    "Relation",
    "RelationType",
    "ResourceType",
    "ResourceTypeValue",
    "Rights",
    "Subject",
    "SubjectVocabulary",
    "lookup_label",
    "format_date",
    "format_edtf",
    "detect_identifier_type",
    "identifier_uri",
    "new_identifier",
    "normalize_identifier",
    "new_relation",
    "normalize_relation_type",
    "relation_inverse",
    "RecordValidation",
    "RecordValidationOptions",
    "validate_record",
]
