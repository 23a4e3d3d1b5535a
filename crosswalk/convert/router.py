"""Target routing: writes a coerced (and parsed) field value into the
canonical record slot named by the field's annotation.

`TargetRouter.route` reports whether anything was actually written, which the
priority merger relies on to decide whether a field claimed its slot.
"""

import json
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

from crosswalk.convert.annotations import FieldHandle, HubField, enum_target
from crosswalk.convert.coercion import enum_ordinal
from crosswalk.convert.parsers import PersonName
from crosswalk.helpers.edtf import parse_edtf
from crosswalk.helpers.nameparse import inverted
from crosswalk.helpers.relators import lookup_relator
from crosswalk.hub.dates import format_edtf
from crosswalk.hub.models import (
    CanonicalRecord, Contributor, ContributorType, DateType, DateValue,
    DegreeInfo, Identifier, IdentifierType, ParsedName, PublicationDetails,
    ResourceType, ResourceTypeValue, Subject, SubjectVocabulary, lookup_label,
)
from crosswalk.hub.identifiers import new_identifier
from crosswalk.hub.record import set_extra
from crosswalk.hub.relations import new_relation, normalize_relation_type
from crosswalk.hub.vocab import rights_from_value
from crosswalk.utils.logger import LoggerManager


logger = LoggerManager.get_logger(__name__)

SCALAR_TARGETS = {"title", "abstract", "description", "publisher", "place_published", "language"}
TEXT_LIST_TARGETS = {"alt_title", "notes"}
SUBJECT_TARGETS = {"subjects", "genres"}

NESTED_MODELS: Dict[str, Type[BaseModel]] = {
    "degree_info": DegreeInfo,
    "publication": PublicationDetails,
}


def to_text(value: Any) -> str:
    """String form of a routed value ('' for nothing)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, DateValue):
        return value.raw or format_edtf(value)
    if isinstance(value, PersonName):
        return value.display
    if isinstance(value, ParsedName):
        return value.full_name or value.normalized
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    if isinstance(value, (list, tuple)):
        return "; ".join(t for t in (to_text(v).strip() for v in value) if t)
    if isinstance(value, dict):
        return json.dumps(value, default=str)
    return str(value)


def as_items(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class TargetRouter:
    """Mutates a CanonicalRecord in place from one field value.

    Supported targets:
        title, abstract, description, publisher, place_published, language
            last non-empty write wins
        alt_title, notes
            one entry per non-empty item
        resource_type
            enum value table, then literal vocabulary match
        contributors, dates, identifiers, subjects, genres, relations, rights
            one entry per item, sub-type taken from the annotation
        degree_info.<field>, publication.<field>
            parent allocated on first write
        extra, unknown targets
            stored in extra keyed by field name (dotted path for unknown
            nested roots)
    """

    def route(self, record: CanonicalRecord, value: Any, handle: FieldHandle) -> bool:
        """Write `value` into the slot named by `handle`'s annotation.

        Args:
            record: Record being built
            value: Coerced, parsed field value
            handle: Source field handle (name, annotation, enum class)

        Returns:
            True when a value was written
        """
        annotation = handle.annotation or HubField()
        target = annotation.target

        if "." in target:
            return self._route_nested(record, value, handle, target)

        if target in SCALAR_TARGETS:
            return self._route_scalar(record, value, target)
        if target in TEXT_LIST_TARGETS:
            return self._route_text_list(getattr(record, target), value)
        if target == "resource_type":
            return self._route_resource_type(record, value, handle)
        if target == "contributors":
            return self._route_contributors(record, value, annotation)
        if target == "dates":
            return self._route_dates(record, value, annotation)
        if target == "identifiers":
            return self._route_identifiers(record, value, annotation)
        if target in SUBJECT_TARGETS:
            return self._route_subjects(getattr(record, target), value, annotation)
        if target == "relations":
            return self._route_relations(record, value, annotation)
        if target == "rights":
            return self._route_rights(record, value)

        if target and target != "extra":
            logger.debug(
                f"Unknown target '{target}', storing '{handle.name}' in extra",
                extra={"extra_data": {"field": handle.name, "target": target}},
            )
        return self._route_extra(record, handle.name, value, annotation.description)

    def _route_scalar(self, record: CanonicalRecord, value: Any, target: str) -> bool:
        text = to_text(value).strip()
        if not text:
            return False
        setattr(record, target, text)
        return True

    def _route_text_list(self, bucket: List[str], value: Any) -> bool:
        written = False
        for item in as_items(value):
            text = to_text(item).strip()
            if text:
                bucket.append(text)
                written = True
        return written

    def _route_resource_type(self, record: CanonicalRecord, value: Any, handle: FieldHandle) -> bool:
        enum_cls = handle.enum_cls
        original = to_text(value).strip()

        if enum_cls is not None and isinstance(value, int) and not isinstance(value, bool):
            name = enum_target(enum_cls, value)
            member = next((m for m in enum_cls if enum_ordinal(m) == value), None)
            original = member.name if member is not None else original
            if name:
                resolved = lookup_label(ResourceTypeValue, name, None)
                if resolved is not None:
                    return self._set_resource_type(record, resolved, original, handle)

        resolved = lookup_label(ResourceTypeValue, original, None)
        if resolved is None:
            logger.warning(
                f"Unrecognized resource type '{original}' on '{handle.name}'",
                extra={"extra_data": {"field": handle.name, "value": original}},
            )
            return False
        return self._set_resource_type(record, resolved, original, handle)

    def _set_resource_type(
        self, record: CanonicalRecord, resolved: ResourceTypeValue, original: str, handle: FieldHandle,
    ) -> bool:
        # UNSPECIFIED is the vocabulary's zero value, never a real type
        if resolved == ResourceTypeValue.UNSPECIFIED:
            logger.debug(
                f"Unspecified resource type on '{handle.name}' not written",
                extra={"extra_data": {"field": handle.name, "value": original}},
            )
            return False
        record.resource_type = ResourceType(type=resolved, original=original)
        return True

    def _route_contributors(self, record: CanonicalRecord, value: Any, annotation: HubField) -> bool:
        written = False
        for item in as_items(value):
            contributor = build_contributor(item, annotation)
            if contributor is None:
                continue
            record.contributors.append(contributor)
            written = True
        return written

    def _route_dates(self, record: CanonicalRecord, value: Any, annotation: HubField) -> bool:
        date_type = lookup_label(DateType, annotation.date_type, DateType.UNSPECIFIED)
        written = False
        for item in as_items(value):
            if isinstance(item, DateValue):
                date = item.model_copy(update={"type": date_type})
            else:
                text = to_text(item).strip()
                if not text:
                    continue
                date = parse_edtf(text, date_type)
            record.dates.append(date)
            written = True
        return written

    def _route_identifiers(self, record: CanonicalRecord, value: Any, annotation: HubField) -> bool:
        id_type = lookup_label(IdentifierType, annotation.identifier_type, IdentifierType.UNSPECIFIED)
        written = False
        for item in as_items(value):
            text = to_text(item).strip()
            if not text:
                continue
            if id_type == IdentifierType.UNSPECIFIED:
                record.identifiers.append(new_identifier(text))
            else:
                record.identifiers.append(Identifier(type=id_type, value=text))
            written = True
        return written

    def _route_subjects(self, bucket: List[Subject], value: Any, annotation: HubField) -> bool:
        vocab = lookup_label(SubjectVocabulary, annotation.subject_vocabulary, SubjectVocabulary.UNSPECIFIED)
        written = False
        for item in as_items(value):
            text = to_text(item).strip()
            if text:
                bucket.append(Subject(value=text, vocabulary=vocab))
                written = True
        return written

    def _route_relations(self, record: CanonicalRecord, value: Any, annotation: HubField) -> bool:
        rel_type = normalize_relation_type(annotation.relation_type)
        written = False
        for item in as_items(value):
            text = to_text(item).strip()
            if text:
                record.relations.append(new_relation(rel_type, text))
                written = True
        return written

    def _route_rights(self, record: CanonicalRecord, value: Any) -> bool:
        written = False
        for item in as_items(value):
            text = to_text(item).strip()
            if text:
                record.rights.append(rights_from_value(text))
                written = True
        return written

    def _route_nested(self, record: CanonicalRecord, value: Any, handle: FieldHandle, target: str) -> bool:
        root, leaf = target.split(".", 1)
        model_cls = NESTED_MODELS.get(root)
        if model_cls is None or leaf not in model_cls.model_fields:
            logger.debug(
                f"No canonical slot for '{target}', storing in extra",
                extra={"extra_data": {"field": handle.name, "target": target}},
            )
            description = handle.annotation.description if handle.annotation else ""
            return self._route_extra(record, target, value, description)

        text = to_text(value).strip()
        if not text:
            return False
        parent = getattr(record, root)
        if parent is None:
            parent = model_cls()
            setattr(record, root, parent)
        setattr(parent, leaf, text)
        return True

    def _route_extra(self, record: CanonicalRecord, key: str, value: Any, description: str) -> bool:
        if value is None or value == "" or value == [] or value == {}:
            return False
        set_extra(record, key, value, description)
        return True


def _read(item: Any, key: str) -> str:
    raw = item.get(key) if isinstance(item, dict) else getattr(item, key, None)
    return raw.strip() if isinstance(raw, str) else ""


def build_contributor(item: Any, annotation: HubField) -> Optional[Contributor]:
    """Build a Contributor from one routed item.

    Items may be a nested model or dict (name/given/family/suffix/orcid
    read by sub-field name), a PersonName or ParsedName, or a bare display
    name. Role and type come from the annotation. Returns None when neither
    a display name nor any name part is present.
    """
    name = ""
    parsed: Optional[ParsedName] = None
    identifiers: List[Identifier] = []
    affiliations: List[str] = []

    if isinstance(item, ParsedName):
        name = item.full_name
        parsed = item.model_copy()
    elif isinstance(item, PersonName):
        name = item.literal
        parsed = ParsedName(given=item.given, family=item.family, suffix=item.suffix)
    elif isinstance(item, (BaseModel, dict)):
        name = _read(item, "name")
        parts = {key: _read(item, key) for key in ("given", "family", "suffix")}
        if any(parts.values()):
            parsed = ParsedName(**parts)
        orcid = _read(item, "orcid")
        if orcid:
            identifiers.append(Identifier(type=IdentifierType.ORCID, value=orcid))
        affiliation = _read(item, "affiliation")
        if affiliation:
            affiliations.append(affiliation)
    elif isinstance(item, str):
        name = item.strip()
    elif item is not None:
        name = to_text(item).strip()

    if parsed is not None and not (parsed.given or parsed.family or parsed.suffix):
        parsed = None
    if parsed is not None and not parsed.normalized:
        parsed.normalized = inverted(parsed)

    if not name and parsed is not None:
        if parsed.family and parsed.given:
            name = f"{parsed.family}, {parsed.given}"
        else:
            name = parsed.family or parsed.given

    if not name and parsed is None:
        return None

    return Contributor(
        name=name,
        parsed_name=parsed,
        role=annotation.role,
        role_code=lookup_relator(annotation.role) or "",
        type=lookup_label(ContributorType, annotation.contributor_type, ContributorType.UNSPECIFIED),
        affiliations=affiliations,
        identifiers=identifiers,
    )
