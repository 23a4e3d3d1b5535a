"""Rights statement vocabularies and labels."""

from crosswalk.hub.models import Rights


# Standard rightsstatements.org codes
RIGHTS_STATEMENT_LABELS = {
    "InC": "In Copyright",
    "InC-OW-EU": "In Copyright - EU Orphan Work",
    "InC-EDU": "In Copyright - Educational Use Permitted",
    "InC-NC": "In Copyright - Non-Commercial Use Permitted",
    "InC-RUU": "In Copyright - Rights-holder(s) Unlocatable or Unidentifiable",
    "NoC-CR": "No Copyright - Contractual Restrictions",
    "NoC-NC": "No Copyright - Non-Commercial Use Only",
    "NoC-OKLR": "No Copyright - Other Known Legal Restrictions",
    "NoC-US": "No Copyright - United States",
    "CNE": "Copyright Not Evaluated",
    "UND": "Copyright Undetermined",
    "NKC": "No Known Copyright",
}


def is_uri(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def rights_statement_code(uri: str) -> str:
    """Extract "InC" from http://rightsstatements.org/vocab/InC/1.0/."""
    if "rightsstatements.org" not in uri:
        return ""
    parts = uri.rstrip("/").split("/")
    return parts[-2] if len(parts) >= 2 else ""


def label_for_rights_uri(uri: str) -> str:
    """Human-readable label for a rightsstatements.org or Creative Commons URI.

    Unrecognized URIs are returned unchanged.
    """
    label = RIGHTS_STATEMENT_LABELS.get(rights_statement_code(uri))
    if label:
        return label

    if "creativecommons.org" in uri:
        if "/zero/" in uri or "/publicdomain/" in uri:
            return "CC0 / Public Domain"
        if "/by" in uri:
            license_part = uri.split("/licenses/", 1)[-1].split("/", 1)[0]
            if license_part.startswith("by"):
                return "CC " + license_part.upper()
    return uri


def rights_from_value(value: str) -> Rights:
    """URIs become uri plus label; anything else is kept as the statement."""
    value = value.strip()
    if is_uri(value):
        return Rights(uri=value, statement=label_for_rights_uri(value))
    return Rights(statement=value)


def is_open_access(rights: Rights) -> bool:
    uri = rights.uri.lower()
    return (
        "creativecommons.org" in uri
        or "publicdomain" in uri
        or "nkc/1.0" in uri
    )
