"""crosswalk - annotation-driven bibliographic metadata conversion.

Source schemas ("spokes") are pydantic models whose fields declare where
their values belong in the canonical hub record. `build_converter` returns a
Converter with fresh registries and every spoke's computed fields seeded.
"""

from crosswalk.convert import ComputedFieldRegistry, Converter, ConversionResult
from crosswalk.spokes import register_computed_fields

__version__ = "0.1.0"


def build_converter() -> Converter:
    computed = ComputedFieldRegistry()
    register_computed_fields(computed)
    return Converter(computed_fields=computed)


__all__ = ["Converter", "ConversionResult", "build_converter", "__version__"]
