"""Conversion orchestrator: source schema instance -> CanonicalRecord.

For each field of the source model:
    resolve annotation -> presence check -> coerce -> parse -> validate -> route

then run the computed field hooks for the source schema. Field-level problems
are collected on the ConversionResult and never stop the remaining fields;
only a message-level target mismatch aborts the conversion.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import BaseModel

from crosswalk.convert.annotations import (
    FieldHandle, check_message_target, get_message_annotation, resolve_fields,
    schema_full_name,
)
from crosswalk.convert.coercion import coerce_value, field_value
from crosswalk.convert.computed import ComputedFieldRegistry
from crosswalk.convert.exceptions import (
    CrosswalkError, FieldConversionError, ValidationError,
)
from crosswalk.convert.merge import PriorityMerger
from crosswalk.convert.parsers import ParserRegistry
from crosswalk.convert.router import TargetRouter
from crosswalk.convert.serializers import SerializerRegistry
from crosswalk.convert.validators import ValidatorRegistry
from crosswalk.hub.models import CanonicalRecord
from crosswalk.hub.record import set_extra
from crosswalk.utils.logger import LoggerManager


logger = LoggerManager.get_logger(__name__)

COMPUTED_FIELD = "_computed"


@dataclass
class ConversionResult:
    """Record produced by one conversion plus its non-fatal errors, in order."""

    record: CanonicalRecord
    errors: List[CrosswalkError] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        """Messages of the advisory validation errors."""
        return [str(e) for e in self.errors if isinstance(e, ValidationError)]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def error_messages(self) -> List[str]:
        return [str(e) for e in self.errors]


class Converter:
    """Converts annotated source models into canonical records.

    Registries are injected so independent configurations never share state;
    when omitted, fresh registries with the built-in functions are created.
    The computed field registry starts empty unless one is supplied.
    """

    def __init__(
        self,
        parsers: Optional[ParserRegistry] = None,
        validators: Optional[ValidatorRegistry] = None,
        serializers: Optional[SerializerRegistry] = None,
        computed_fields: Optional[ComputedFieldRegistry] = None,
        router: Optional[TargetRouter] = None,
    ):
        self.parsers = parsers if parsers is not None else ParserRegistry()
        self.validators = validators if validators is not None else ValidatorRegistry()
        self.serializers = serializers if serializers is not None else SerializerRegistry()
        self.computed_fields = computed_fields if computed_fields is not None else ComputedFieldRegistry()
        self.router = router or TargetRouter()

    def to_hub(self, source: BaseModel) -> ConversionResult:
        """Convert one source model instance.

        Args:
            source: Instance of an annotated source schema

        Returns:
            ConversionResult with the record and collected errors

        Raises:
            StructuralError: when the schema's HubMessage targets something other than Record
        """
        check_message_target(source)
        message = get_message_annotation(source)
        preserve_unmapped = bool(message and message.preserve_unmapped)
        schema = schema_full_name(source)

        result = ConversionResult(record=CanonicalRecord())
        merger = PriorityMerger(self.router)

        for handle in resolve_fields(source):
            present, raw = field_value(source, handle.name)
            if not handle.mapped:
                if preserve_unmapped and present:
                    set_extra(result.record, handle.name, coerce_value(raw))
                continue
            self._process_field(result, merger, handle, present, raw)

        for error in self.computed_fields.apply(source, result.record):
            result.errors.append(FieldConversionError.from_exception(COMPUTED_FIELD, error))

        if result.errors:
            logger.info(
                f"Converted {schema} with {len(result.errors)} error(s)",
                extra={"extra_data": {"schema": schema, "errors": result.error_messages()}},
            )
        return result

    def _process_field(
        self,
        result: ConversionResult,
        merger: PriorityMerger,
        handle: FieldHandle,
        present: bool,
        raw: Any,
    ) -> None:
        annotation = handle.annotation
        if not present:
            if annotation.required:
                self._record_error(result, FieldConversionError.required_missing(handle.name))
            return

        value = coerce_value(raw)

        if annotation.parser:
            try:
                value = self._parse(annotation.parser, value, annotation.parser_options())
            except Exception as e:
                self._record_error(result, FieldConversionError.from_exception(handle.name, e))
                return

        if annotation.validators:
            options = annotation.validator_options(handle.name)
            for error in self.validators.validate_all(annotation.validators, value, options):
                if isinstance(error, ValidationError):
                    self._record_error(result, error if error.field else error.with_field(handle.name))
                elif isinstance(error, FieldConversionError) and error.field:
                    self._record_error(result, error)
                else:
                    self._record_error(result, FieldConversionError.from_exception(handle.name, error))

        if annotation.priority is not None:
            written = merger.offer(result.record, value, handle)
        else:
            written = self.router.route(result.record, value, handle)

        logger.debug(
            f"{handle.name} -> {annotation.target} ({'written' if written else 'skipped'})",
            extra={"extra_data": {"field": handle.name, "target": annotation.target}},
        )

    def _parse(self, name: str, value: Any, options: dict) -> Any:
        """Apply a parser to a scalar, or to each item of a list.

        Nested models pass through unchanged; list results from a parser
        applied per item are flattened.
        """
        if isinstance(value, list):
            parsed = []
            for item in value:
                result = self._parse(name, item, options)
                if isinstance(result, list) and not isinstance(item, list):
                    parsed.extend(result)
                else:
                    parsed.append(result)
            return parsed
        if isinstance(value, (BaseModel, dict)):
            return value
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        return self.parsers.parse(name, str(value), options)

    def _record_error(self, result: ConversionResult, error: CrosswalkError) -> None:
        level = logger.debug if isinstance(error, ValidationError) else logger.warning
        level(str(error), extra={"extra_data": {"error": type(error).__name__}})
        result.errors.append(error)
