"""Computed field hooks.

Some canonical values depend on more than one source field (an embargo end
date derived from an embargo code and an acceptance date). Such logic is
registered as a hook keyed by source schema identity and runs after every
ordinary field has been routed, so hooks see the populated record.
"""

import threading
from typing import Callable, Dict, List, Type, Union

from pydantic import BaseModel

from crosswalk.convert.annotations import schema_full_name
from crosswalk.hub.models import CanonicalRecord
from crosswalk.utils.logger import LoggerManager


logger = LoggerManager.get_logger(__name__)

ComputedFieldFunc = Callable[[BaseModel, CanonicalRecord], None]
SchemaRef = Union[str, Type[BaseModel]]


class ComputedFieldRegistry:
    """Hooks keyed by schema full name, kept in registration order."""

    def __init__(self):
        self._lock = threading.RLock()
        self._funcs: Dict[str, List[ComputedFieldFunc]] = {}

    def register(self, schema: SchemaRef, fn: ComputedFieldFunc) -> None:
        """Add a hook for a schema (full name or model class)."""
        with self._lock:
            self._funcs.setdefault(schema_full_name(schema), []).append(fn)

    def get(self, schema: SchemaRef) -> List[ComputedFieldFunc]:
        with self._lock:
            return list(self._funcs.get(schema_full_name(schema), []))

    def apply(self, source: BaseModel, record: CanonicalRecord) -> List[Exception]:
        """Run every hook for the exact schema of `source`.

        Hook failures are collected and returned; later hooks still run.
        """
        errors: List[Exception] = []
        full_name = schema_full_name(source)
        for fn in self.get(full_name):
            try:
                fn(source, record)
            except Exception as e:
                logger.warning(
                    f"Computed field hook {getattr(fn, '__name__', fn)!s} failed for {full_name}: {e}",
                    extra={"extra_data": {"schema": full_name}},
                    exc_info=True,
                )
                errors.append(e)
        return errors

    def has_computed_fields(self, schema: SchemaRef) -> bool:
        with self._lock:
            return bool(self._funcs.get(schema_full_name(schema)))

    def registered_types(self) -> List[str]:
        with self._lock:
            return sorted(name for name, funcs in self._funcs.items() if funcs)
