"""Declarative field annotations for source schemas.

A source schema is a pydantic model whose fields carry a `HubField` through
`typing.Annotated`:

    class Entry(BaseModel):
        hub_message: ClassVar[HubMessage] = HubMessage(preserve_unmapped=True)

        title: Annotated[str, HubField(target="title", parser="strip_html")] = ""
        doi: Annotated[str, HubField(target="identifiers", identifier_type="doi",
                                     validators="doi")] = ""

Enum values map onto canonical names through `@enum_targets`. The resolver
functions here read these declarations back at conversion time.
"""

import inspect
import threading
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from pydantic import BaseModel

from crosswalk.convert.coercion import enum_ordinal
from crosswalk.convert.exceptions import StructuralError


RECORD_TARGET = "Record"

SUB_SELECTORS = (
    "date_type",
    "identifier_type",
    "role",
    "contributor_type",
    "subject_vocabulary",
    "relation_type",
)


@dataclass(frozen=True)
class HubField:
    """Per-field mapping onto the canonical record.

    Attributes:
        target: Canonical slot ("title", "dates", "degree_info.institution", ...)
        date_type / identifier_type / role / contributor_type /
            subject_vocabulary / relation_type: sub-target selectors
        parser: Registered parser name applied before routing
        validators: Comma-separated validator names
        pattern, min_length, max_length, min_value, max_value, min_count,
            max_count: validator options
        required: Record a conversion error when the field is absent
        description: Kept with values routed to extra
        delimiter, date_format: parser options
        priority: Participates in priority merge when set
    """

    target: str = ""
    date_type: str = ""
    identifier_type: str = ""
    role: str = ""
    contributor_type: str = ""
    subject_vocabulary: str = ""
    relation_type: str = ""
    parser: str = ""
    validators: str = ""
    pattern: str = ""
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    min_count: Optional[int] = None
    max_count: Optional[int] = None
    required: bool = False
    description: str = ""
    delimiter: str = ""
    date_format: str = ""
    priority: Optional[int] = None

    def sub_selector(self) -> str:
        """First non-empty sub-target selector, or ''."""
        for name in SUB_SELECTORS:
            value = getattr(self, name)
            if value:
                return value
        return ""

    def parser_options(self) -> Dict[str, Any]:
        return {
            "delimiter": self.delimiter,
            "date_format": self.date_format,
            "date_type": self.date_type,
        }

    def validator_options(self, field_name: str = "") -> Dict[str, Any]:
        return {
            "field_name": field_name,
            "pattern": self.pattern,
            "min_length": self.min_length,
            "max_length": self.max_length,
            "min_value": self.min_value,
            "max_value": self.max_value,
            "min_count": self.min_count,
            "max_count": self.max_count,
        }


@dataclass(frozen=True)
class HubMessage:
    """Message-level annotation, attached as `hub_message: ClassVar[HubMessage]`."""

    target: str = RECORD_TARGET
    preserve_unmapped: bool = False
    full_name: str = ""


@dataclass(frozen=True)
class FieldHandle:
    """A source field as seen by the engine."""

    name: str
    annotation: Optional[HubField]
    declared_type: Any = None
    enum_cls: Optional[Type[Enum]] = None

    @property
    def mapped(self) -> bool:
        return self.annotation is not None and bool(self.annotation.target)

    @property
    def target(self) -> str:
        return self.annotation.target if self.annotation else ""


# (enum class, ordinal) -> canonical name
_ENUM_TARGETS: Dict[Tuple[type, int], str] = {}
_ENUM_LOCK = threading.RLock()


def enum_targets(**member_targets: str):
    """Class decorator mapping enum members onto canonical names.

        @enum_targets(ARTICLE="article", BOOK="book")
        class EntryType(IntEnum):
            ...
    """
    def decorator(enum_cls):
        with _ENUM_LOCK:
            for member_name, target in member_targets.items():
                member = enum_cls[member_name]
                _ENUM_TARGETS[(enum_cls, enum_ordinal(member))] = target
        return enum_cls
    return decorator


def enum_target(enum_cls: type, ordinal: int) -> Optional[str]:
    """Canonical name registered for an enum value, or None."""
    with _ENUM_LOCK:
        return _ENUM_TARGETS.get((enum_cls, ordinal))


def _model_class(model: Union[BaseModel, Type[BaseModel]]) -> Type[BaseModel]:
    return model if inspect.isclass(model) else type(model)


def get_message_annotation(model: Union[BaseModel, Type[BaseModel]]) -> Optional[HubMessage]:
    annotation = getattr(_model_class(model), "hub_message", None)
    return annotation if isinstance(annotation, HubMessage) else None


def check_message_target(model: Union[BaseModel, Type[BaseModel]]) -> None:
    """Raise StructuralError unless the model targets Record (or nothing)."""
    annotation = get_message_annotation(model)
    if annotation is not None and annotation.target not in ("", RECORD_TARGET):
        raise StructuralError.target_mismatch(schema_full_name(model), annotation.target)


def schema_full_name(model: Union[BaseModel, Type[BaseModel], str]) -> str:
    """Schema identity: HubMessage.full_name, or module.QualifiedName."""
    if isinstance(model, str):
        return model
    cls = _model_class(model)
    annotation = get_message_annotation(cls)
    if annotation is not None and annotation.full_name:
        return annotation.full_name
    return f"{cls.__module__}.{cls.__qualname__}"


def find_enum_class(declared_type: Any) -> Optional[Type[Enum]]:
    """Enum class inside a declared type (Optional[E], List[E], ...), if any."""
    if inspect.isclass(declared_type) and issubclass(declared_type, Enum):
        return declared_type
    for arg in typing.get_args(declared_type):
        found = find_enum_class(arg)
        if found is not None:
            return found
    return None


def _field_annotation(field_info) -> Optional[HubField]:
    for item in field_info.metadata:
        if isinstance(item, HubField):
            return item
    return None


def get_field_annotation(model: Union[BaseModel, Type[BaseModel]], name: str) -> Optional[HubField]:
    field_info = _model_class(model).model_fields.get(name)
    if field_info is None:
        return None
    return _field_annotation(field_info)


def resolve_fields(model: Union[BaseModel, Type[BaseModel]]) -> List[FieldHandle]:
    """Handles for every field of a model, in declaration order."""
    handles = []
    for name, field_info in _model_class(model).model_fields.items():
        handles.append(FieldHandle(
            name=name,
            annotation=_field_annotation(field_info),
            declared_type=field_info.annotation,
            enum_cls=find_enum_class(field_info.annotation),
        ))
    return handles


def mapped_fields(model: Union[BaseModel, Type[BaseModel]]) -> List[FieldHandle]:
    return [h for h in resolve_fields(model) if h.mapped]


def unmapped_fields(model: Union[BaseModel, Type[BaseModel]]) -> List[FieldHandle]:
    return [h for h in resolve_fields(model) if not h.mapped]
