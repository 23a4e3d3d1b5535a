"""Personal name parsing.

Handles both "Last, First Middle[, Suffix]" and "First Middle [prefix] Last
[Suffix]" forms. Results are canonical ParsedName models.
"""

import re
from typing import List, Optional, Tuple

from crosswalk.hub.models import ParsedName


# Checked in order; longer forms come before their abbreviations
SUFFIXES = [
    "Jr.", "Jr", "Sr.", "Sr", "III", "II", "IV", "V",
    "PhD", "Ph.D.", "MD", "M.D.", "Esq.", "Esq",
]

# Nobiliary particles that belong to the family name
NAME_PREFIXES = {
    "van", "von", "de", "del", "della", "di", "da", "le", "la", "du", "des",
    "den", "der", "het", "ter", "ten", "op", "mc", "mac", "o'", "d'", "al-",
    "el-", "ibn",
}

INVERTED_NAME_RE = re.compile(r'^([^,]+),\s*(.+)$')


def extract_suffix(name: str) -> Tuple[str, str]:
    """Split a trailing generational/academic suffix off a name."""
    for suffix in SUFFIXES:
        for sep in (", ", " "):
            if name.endswith(sep + suffix):
                return name[: -len(sep + suffix)], suffix
    return name, ""


def is_name_prefix(word: str) -> bool:
    lowered = word.lower()
    return lowered in NAME_PREFIXES or lowered + "'" in NAME_PREFIXES


def inverted(parsed: ParsedName) -> str:
    """Format as "Family, Given Middle Suffix"."""
    rest = " ".join(p for p in (parsed.given, parsed.middle, parsed.suffix) if p)
    if parsed.family and rest:
        return f"{parsed.family}, {rest}"
    return parsed.family or rest


def direct(parsed: ParsedName) -> str:
    """Format as "Given Middle Family Suffix"."""
    return " ".join(
        p for p in (parsed.given, parsed.middle, parsed.family, parsed.suffix) if p
    )


def parse_name(name: Optional[str]) -> Optional[ParsedName]:
    """Parse a personal name into its components.

    Args:
        name: Name in inverted ("Curie, Marie") or direct ("Marie Curie") form

    Returns:
        ParsedName, or None for empty input
    """
    name = (name or "").strip()
    if not name:
        return None

    result = ParsedName(full_name=name)

    match = INVERTED_NAME_RE.match(name)
    if match:
        result.family = match.group(1).strip()
        rest, result.suffix = extract_suffix(match.group(2).strip())
        # "Last, First, Jr." leaves a dangling comma on the given part
        parts = rest.replace(",", " ").split()
        if parts:
            result.given = parts[0]
        if len(parts) > 1:
            result.middle = " ".join(parts[1:])
    else:
        rest, result.suffix = extract_suffix(name)
        parts = rest.split()
        if not parts:
            return None
        if len(parts) == 1:
            result.family = parts[0]
        else:
            family_start = len(parts) - 1
            if family_start > 1 and is_name_prefix(parts[family_start - 1]):
                result.prefix = parts[family_start - 1]
                family_start -= 1
            result.family = " ".join(parts[family_start:])
            result.given = parts[0]
            if family_start > 1:
                result.middle = " ".join(parts[1:family_start])

    result.normalized = inverted(result)
    return result


def normalize_name(name: str) -> str:
    """Collapse whitespace and return the inverted form of a name."""
    name = " ".join((name or "").split())
    if not name:
        return ""
    parsed = parse_name(name)
    return inverted(parsed) if parsed else name


def split_names(names: str) -> List[str]:
    """Split a multi-name string on ';', ' and ' (when no commas), or '|'."""
    if not names:
        return []
    if ";" in names:
        parts = names.split(";")
    elif " and " in names and "," not in names:
        parts = names.split(" and ")
    elif "|" in names:
        parts = names.split("|")
    else:
        parts = [names]
    return [p.strip() for p in parts if p.strip()]
