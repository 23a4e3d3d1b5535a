"""Value coercion for source model fields.

Turns a field value into the generic form the engine works with. Coercion
never fails; presence is checked with `field_value` before it is invoked.
"""

from enum import Enum
from typing import Any, Mapping, Tuple

from pydantic import BaseModel


def has_value(value: Any) -> bool:
    """Whether a value set on a field counts as present.

    None, empty strings/bytes and empty lists/dicts are absent. Zero, False
    and enum members are present.
    """
    if value is None:
        return False
    if isinstance(value, Enum):
        return True
    if isinstance(value, (str, bytes, bytearray, list, tuple, set, dict)):
        return len(value) > 0
    return True


def field_value(source: BaseModel, name: str) -> Tuple[bool, Any]:
    """Presence and raw value of a model field.

    A field the caller never set (left at its model default) is absent,
    whatever the default is. A set field is present when `has_value` holds.
    """
    if name not in source.model_fields_set:
        return False, None
    value = getattr(source, name, None)
    return has_value(value), value


def enum_ordinal(member: Enum) -> int:
    """Integer ordinal of an enum member.

    Int-valued enums use their value; other enums use declaration order.
    """
    value = member.value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return list(type(member)).index(member)


def coerce_value(value: Any) -> Any:
    """Convert a field value to its generic form.

    - bool, int, float, str, bytes: unchanged
    - Enum members: integer ordinal
    - pydantic models: unchanged (handled by the router)
    - lists, tuples, sets: list of coerced items
    - mappings: dict with string keys and coerced values
    """
    if isinstance(value, Enum):
        return enum_ordinal(value)
    if value is None or isinstance(value, (bool, int, float, str, bytes)):
        return value
    if isinstance(value, BaseModel):
        return value
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, (list, tuple, set)):
        return [coerce_value(item) for item in value]
    if isinstance(value, Mapping):
        return {str(k): coerce_value(v) for k, v in value.items()}
    return value
