"""MARC relator code normalization.

Accepts relator codes ("aut"), id.loc.gov URIs, "relators:xxx" CURIEs, or
plain English labels ("Thesis advisor") and maps them onto MARC codes.
"""

from typing import Optional


# Subset of the MARC relator list covering common scholarly roles
MARC_RELATORS = {
    # Primary creators
    'aut': 'Author',
    'cre': 'Creator',
    'edt': 'Editor',
    'com': 'Compiler',
    'trl': 'Translator',
    'ill': 'Illustrator',
    'pht': 'Photographer',
    'art': 'Artist',
    'cmp': 'Composer',

    # Contributors
    'ctb': 'Contributor',
    'aui': 'Author of introduction',
    'aft': 'Author of afterword',
    'ann': 'Annotator',
    'cmm': 'Commentator',
    'wpr': 'Writer of preface',
    'wam': 'Writer of accompanying material',

    # Thesis
    'ths': 'Thesis advisor',
    'dgs': 'Degree supervisor',
    'dgc': 'Degree committee member',
    'opn': 'Opponent',

    # Publishing
    'pbl': 'Publisher',
    'dst': 'Distributor',
    'bkd': 'Book designer',
    'bkp': 'Book producer',
    'prt': 'Printer',
    'tyg': 'Typographer',

    # Research
    'res': 'Researcher',
    'fnd': 'Funder',
    'spn': 'Sponsor',
    'his': 'Host institution',

    # Data and software
    'dtc': 'Data contributor',
    'dtm': 'Data manager',
    'prg': 'Programmer',

    # Performance
    'prf': 'Performer',
    'act': 'Actor',
    'nrt': 'Narrator',
    'sng': 'Singer',
    'cnd': 'Conductor',
    'drt': 'Director',
    'pro': 'Producer',

    # Organization
    'org': 'Originator',
    'isb': 'Issuing body',
    'cph': 'Copyright holder',
    'oth': 'Other',

    'col': 'Collector',
    'cur': 'Curator',
    'own': 'Owner',
    'dnr': 'Donor',
}

ROLE_ALIASES = {
    'author': 'aut',
    'authors': 'aut',
    'creator': 'cre',
    'creators': 'cre',
    'editor': 'edt',
    'editors': 'edt',
    'translator': 'trl',
    'contributor': 'ctb',
    'photographer': 'pht',
    'illustrator': 'ill',
    'advisor': 'ths',
    'thesis advisor': 'ths',
    'committee': 'dgc',
    'committee member': 'dgc',
    'publisher': 'pbl',
    'funder': 'fnd',
    'sponsor': 'spn',
}

CREATOR_CODES = {'aut', 'cre', 'edt', 'com', 'trl', 'ill', 'pht', 'art', 'cmp'}

_LABEL_TO_CODE = {label.lower(): code for code, label in MARC_RELATORS.items()}


def relator_code_from_uri(uri: str) -> str:
    """Extract the relator code from "relators:aut" or a full id.loc.gov URI."""
    if uri.startswith("relators:"):
        return uri[len("relators:"):]
    if "relators/" in uri:
        return uri.split("relators/", 1)[1].rstrip("/")
    return uri


def relator_label(code_or_uri: str) -> str:
    """Human-readable label for a relator code; unknown codes come back as given."""
    code = relator_code_from_uri(code_or_uri).lower()
    return MARC_RELATORS.get(code, code_or_uri)


def lookup_relator(role: Optional[str]) -> Optional[str]:
    """Return the MARC code for a role, or None when it is not recognized.

    Args:
        role: Relator code, URI, CURIE, or English label

    Returns:
        Lowercase three-letter MARC code, or None
    """
    if not role:
        return None
    role = role.strip()
    if not role:
        return None

    code = relator_code_from_uri(role).lower()
    if code in MARC_RELATORS:
        return code

    lowered = role.lower()
    if lowered in _LABEL_TO_CODE:
        return _LABEL_TO_CODE[lowered]
    return ROLE_ALIASES.get(lowered)


def normalize_role(role: Optional[str]) -> str:
    """Normalize a role to its MARC code, returning the trimmed input if unknown."""
    code = lookup_relator(role)
    if code:
        return code
    return (role or "").strip()


def is_creator_role(role: str) -> bool:
    return normalize_role(role) in CREATOR_CODES
