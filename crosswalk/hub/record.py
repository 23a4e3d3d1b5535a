"""Accessors for reading and writing CanonicalRecord fields."""

import base64
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel

from crosswalk.hub.models import (
    CanonicalRecord, Contributor, DateType, DateValue, Identifier,
    IdentifierType, Relation, RelationType, Subject, SubjectVocabulary,
)


PRIMARY_DATE_ORDER = [
    DateType.ISSUED,
    DateType.PUBLISHED,
    DateType.CREATED,
    DateType.CAPTURED,
    DateType.COPYRIGHT,
]

AUTHOR_ROLES = {"author", "creator", "aut", "cre"}


def get_date(record: CanonicalRecord, date_type: DateType) -> Optional[DateValue]:
    return next((d for d in record.dates if d.type == date_type), None)


def get_dates(record: CanonicalRecord, date_type: DateType) -> List[DateValue]:
    return [d for d in record.dates if d.type == date_type]


def primary_date(record: CanonicalRecord) -> Optional[DateValue]:
    """The most appropriate date for display: issued, published, created, ...

    Falls back to the first date of any type.
    """
    for date_type in PRIMARY_DATE_ORDER:
        date = get_date(record, date_type)
        if date is not None:
            return date
    return record.dates[0] if record.dates else None


def get_identifier(record: CanonicalRecord, id_type: IdentifierType) -> Optional[Identifier]:
    return next((i for i in record.identifiers if i.type == id_type), None)


def get_contributors_by_role(record: CanonicalRecord, role: str) -> List[Contributor]:
    return [c for c in record.contributors if c.role == role]


def get_authors(record: CanonicalRecord) -> List[Contributor]:
    return [
        c for c in record.contributors
        if c.role in AUTHOR_ROLES or c.role_code in AUTHOR_ROLES
    ]


def get_subjects_by_vocab(record: CanonicalRecord, vocab: SubjectVocabulary) -> List[Subject]:
    return [s for s in record.subjects if s.vocabulary == vocab]


def get_relations_by_type(record: CanonicalRecord, rel_type: RelationType) -> List[Relation]:
    return [r for r in record.relations if r.type == rel_type]


def to_extra_value(value: Any) -> Any:
    """Convert a value to the JSON-compatible form stored in Extra.

    Models are dumped, bytes are base64-encoded, enums become their values,
    containers are converted recursively, and any other object is stringified.
    """
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {str(k): to_extra_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_extra_value(v) for v in value]
    return str(value)


def set_extra(record: CanonicalRecord, key: str, value: Any, description: str = "") -> None:
    record.extra[key] = to_extra_value(value)
    if description:
        record.extra_descriptions[key] = description


def get_extra(record: CanonicalRecord, key: str, default: Any = None) -> Any:
    return record.extra.get(key, default)


def get_extra_string(record: CanonicalRecord, key: str) -> str:
    value = record.extra.get(key)
    return value if isinstance(value, str) else ""
