"""Spokes - annotated source schemas that convert into the hub record.

- bibtex: BibTeX entry (enum-mapped entry types, unmapped fields kept)
- proquest: ProQuest ETD submission with its embargo computed field
- drupal: Drupal node with priority-aliased titles

Usage:
    from crosswalk.spokes import get_spoke

    entry = get_spoke("bibtex").model_validate(data)
"""

from typing import Dict, List, Type

from pydantic import BaseModel

from crosswalk.convert.computed import ComputedFieldRegistry
from crosswalk.spokes.bibtex import Entry, EntryType
from crosswalk.spokes.drupal import Node
from crosswalk.spokes.proquest import Author, Submission, compute_embargo_date

SPOKES: Dict[str, Type[BaseModel]] = {
    "bibtex": Entry,
    "drupal": Node,
    "proquest": Submission,
}


def get_spoke(name: str) -> Type[BaseModel]:
    """Source schema registered under `name`.

    Raises:
        KeyError: when no spoke has that name
    """
    try:
        return SPOKES[name.lower()]
    except KeyError:
        raise KeyError(f"Unknown spoke '{name}'. Available: {', '.join(sorted(SPOKES))}") from None


def spoke_names() -> List[str]:
    return sorted(SPOKES)


def register_computed_fields(registry: ComputedFieldRegistry) -> None:
    """Seed a registry with every spoke's computed field hooks."""
    registry.register(Submission, compute_embargo_date)


__all__ = [
    "SPOKES",
    "get_spoke",
    "spoke_names",
    "register_computed_fields",
    "Entry",
    "EntryType",
    "Node",
    "Submission",
    "Author",
]
