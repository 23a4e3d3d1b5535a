"""Convert module - annotation-driven conversion of source schemas to the hub.

This module provides the conversion pipeline:
- annotations: HubField / HubMessage declarations and their resolvers
- parsers, validators, serializers: named function registries
- router: writes values into CanonicalRecord slots
- merge: priority merge for fields aliasing one slot
- computed: cross-field hooks run after routing
- converter: Converter.to_hub orchestration

Usage:
    from crosswalk.convert import Converter

    converter = Converter()
    result = converter.to_hub(entry)
    result.record, result.errors
"""

from crosswalk.convert.annotations import (
    FieldHandle,
    HubField,
    HubMessage,
    enum_target,
    enum_targets,
    get_field_annotation,
    get_message_annotation,
    mapped_fields,
    resolve_fields,
    schema_full_name,
    unmapped_fields,
)
from crosswalk.convert.coercion import coerce_value, field_value, has_value
from crosswalk.convert.computed import ComputedFieldRegistry
from crosswalk.convert.converter import ConversionResult, Converter
from crosswalk.convert.exceptions import (
    CrosswalkError,
    FieldConversionError,
    StructuralError,
    ValidationError,
)
from crosswalk.convert.merge import PriorityMerger
from crosswalk.convert.parsers import ParserRegistry, PersonName
from crosswalk.convert.router import TargetRouter
from crosswalk.convert.serializers import SerializerRegistry
from crosswalk.convert.validators import ValidatorRegistry

__all__ = [
    # Annotations
    "FieldHandle",
    "HubField",
    "HubMessage",
    "enum_target",
    "enum_targets",
    "get_field_annotation",
    "get_message_annotation",
    "mapped_fields",
    "resolve_fields",
    "schema_full_name",
    "unmapped_fields",
    # Engine
    "Converter",
    "ConversionResult",
    "TargetRouter",
    "PriorityMerger",
    "coerce_value",
    "field_value",
    "has_value",
    # Registries
    "ParserRegistry",
    "ValidatorRegistry",
    "SerializerRegistry",
    "ComputedFieldRegistry",
    "PersonName",
    # Errors
    "CrosswalkError",
    "StructuralError",
    "FieldConversionError",
    "ValidationError",
]
