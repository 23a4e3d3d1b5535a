"""Canonical (Hub) record models.

Every source schema converts into a CanonicalRecord, and every writer reads
from one. Collections always default to empty lists so callers never have to
guard against None.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field


E = TypeVar("E", bound=Enum)

# Wire-name prefixes accepted in annotation labels ("DATE_TYPE_ISSUED")
LABEL_PREFIXES = {
    "DateType": "date_type_",
    "IdentifierType": "identifier_type_",
    "SubjectVocabulary": "subject_vocabulary_",
    "RelationType": "relation_type_",
    "ContributorType": "contributor_type_",
    "ResourceTypeValue": "resource_type_",
}


def lookup_label(enum_cls: Type[E], label: Optional[str], default: E) -> E:
    """Resolve an annotation label to a vocabulary member.

    Accepts the member value ("issued"), the member name ("ISSUED"), or the
    prefixed wire name ("DATE_TYPE_ISSUED"), case-insensitively.

    Args:
        enum_cls: Vocabulary enum class
        label: Label from an annotation (may be empty)
        default: Member returned when nothing matches

    Returns:
        Matching member, or default
    """
    if not label:
        return default
    key = label.strip().lower()
    prefix = LABEL_PREFIXES.get(enum_cls.__name__, "")
    if prefix and key.startswith(prefix):
        key = key[len(prefix):]
    for member in enum_cls:
        if member.value == key or member.name.lower() == key:
            return member
    return default


class DateType(str, Enum):
    """Semantic role of a date."""
    UNSPECIFIED = "unspecified"
    ISSUED = "issued"
    CREATED = "created"
    PUBLISHED = "published"
    CAPTURED = "captured"
    COPYRIGHT = "copyright"
    ACCEPTED = "accepted"
    SUBMITTED = "submitted"
    AVAILABLE = "available"
    MODIFIED = "modified"
    VALID = "valid"
    DEFENDED = "defended"
    OTHER = "other"


class DatePrecision(str, Enum):
    """Most specific date component that was parsed."""
    UNSPECIFIED = "unspecified"
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    DECADE = "decade"
    CENTURY = "century"
    TIME = "time"


class DateQualifier(str, Enum):
    """EDTF qualification of a date."""
    NONE = "none"
    APPROXIMATE = "approximate"  # ~
    UNCERTAIN = "uncertain"      # ?
    BOTH = "both"                # %


class IdentifierType(str, Enum):
    UNSPECIFIED = "unspecified"
    DOI = "doi"
    ISBN = "isbn"
    ISSN = "issn"
    ORCID = "orcid"
    HANDLE = "handle"
    URL = "url"
    URI = "uri"
    PMID = "pmid"
    PMCID = "pmcid"
    ARXIV = "arxiv"
    UUID = "uuid"
    LCCN = "lccn"
    OCLC = "oclc"
    LOCAL = "local"
    OTHER = "other"


class SubjectVocabulary(str, Enum):
    UNSPECIFIED = "unspecified"
    LCSH = "lcsh"
    MESH = "mesh"
    FAST = "fast"
    AAT = "aat"
    KEYWORDS = "keywords"
    LOCAL = "local"
    OTHER = "other"


class RelationType(str, Enum):
    UNSPECIFIED = "unspecified"
    MEMBER_OF = "member_of"
    HAS_MEMBER = "has_member"
    PART_OF = "part_of"
    HAS_PART = "has_part"
    IN_SERIES = "in_series"
    SERIES_OF = "series_of"
    VERSION_OF = "version_of"
    HAS_VERSION = "has_version"
    REPLACES = "replaces"
    IS_REPLACED_BY = "is_replaced_by"
    REFERENCES = "references"
    CITES = "cites"
    IS_CITED_BY = "is_cited_by"
    DERIVED_FROM = "derived_from"
    SOURCE_OF = "source_of"
    SUPPLEMENTS = "supplements"
    IS_SUPPLEMENT_TO = "is_supplement_to"
    FORMAT_OF = "format_of"
    HAS_FORMAT = "has_format"
    BASED_ON = "based_on"
    IS_BASIS_FOR = "is_basis_for"
    DOCUMENTS = "documents"
    IS_DOCUMENTED_BY = "is_documented_by"
    DESCRIBES = "describes"
    IS_DESCRIBED_BY = "is_described_by"
    RELATED_TO = "related_to"
    OTHER = "other"


class ContributorType(str, Enum):
    UNSPECIFIED = "unspecified"
    PERSON = "person"
    ORGANIZATION = "organization"


class ResourceTypeValue(str, Enum):
    """Canonical resource type vocabulary."""
    UNSPECIFIED = "unspecified"
    ARTICLE = "article"
    BOOK = "book"
    BOOK_CHAPTER = "book_chapter"
    CONFERENCE_PAPER = "conference_paper"
    DATASET = "dataset"
    DISSERTATION = "dissertation"
    THESIS = "thesis"
    IMAGE = "image"
    JOURNAL = "journal"
    REPORT = "report"
    TECHNICAL_REPORT = "technical_report"
    WORKING_PAPER = "working_paper"
    PREPRINT = "preprint"
    POSTER = "poster"
    PRESENTATION = "presentation"
    SOFTWARE = "software"
    VIDEO = "video"
    AUDIO = "audio"
    MAP = "map"
    MANUSCRIPT = "manuscript"
    PATENT = "patent"
    STANDARD = "standard"
    WEBPAGE = "webpage"
    COLLECTION = "collection"
    OTHER = "other"


class ParsedName(BaseModel):
    """Structured personal name."""

    given: str = ""
    family: str = ""
    middle: str = ""
    prefix: str = Field("", description="Nobiliary particle (van, de, ...)")
    suffix: str = Field("", description="Jr., III, PhD, ...")
    full_name: str = Field("", description="Name exactly as supplied")
    normalized: str = Field("", description="Inverted 'Family, Given Middle Suffix' form")


class Identifier(BaseModel):
    type: IdentifierType = IdentifierType.UNSPECIFIED
    value: str


class Contributor(BaseModel):
    """Person or organization credited on the record."""

    name: str = Field("", description="Display name")
    parsed_name: Optional[ParsedName] = None
    role: str = Field("", description="Role label from the source annotation")
    role_code: str = Field("", description="MARC relator code when the role is known")
    type: ContributorType = ContributorType.UNSPECIFIED
    affiliations: List[str] = Field(default_factory=list)
    identifiers: List[Identifier] = Field(default_factory=list)


class DateValue(BaseModel):
    """A parsed date, possibly a range, with precision and EDTF qualifier.

    Components are None when not present in the source string. The raw
    string is always kept so unparseable input is never lost.
    """

    type: DateType = DateType.UNSPECIFIED
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    end_year: Optional[int] = None
    end_month: Optional[int] = None
    end_day: Optional[int] = None
    precision: DatePrecision = DatePrecision.UNSPECIFIED
    qualifier: DateQualifier = DateQualifier.NONE
    is_range: bool = False
    raw: str = ""


class Subject(BaseModel):
    value: str
    vocabulary: SubjectVocabulary = SubjectVocabulary.UNSPECIFIED
    uri: str = ""
    source_id: str = ""


class Relation(BaseModel):
    type: RelationType = RelationType.UNSPECIFIED
    target_title: str = ""
    target_uri: str = ""
    source_id: str = ""


class Rights(BaseModel):
    uri: str = ""
    statement: str = ""


class ResourceType(BaseModel):
    type: ResourceTypeValue = ResourceTypeValue.UNSPECIFIED
    original: str = Field("", description="Source term the type was derived from")
    vocabulary: str = ""


class DegreeInfo(BaseModel):
    degree_name: str = ""
    degree_level: str = ""
    department: str = ""
    institution: str = ""


class PublicationDetails(BaseModel):
    """Host publication details (journal, volume, pages, ...)."""

    container_title: str = ""
    volume: str = ""
    issue: str = ""
    pages: str = ""
    edition: str = ""


class CanonicalRecord(BaseModel):
    """Canonical bibliographic record shared by all formats.

    Extra holds any value without a canonical slot. `extra_descriptions`
    keeps the source annotation's description for extra keys that had one.
    """

    title: str = ""
    alt_title: List[str] = Field(default_factory=list)
    abstract: str = ""
    description: str = ""
    contributors: List[Contributor] = Field(default_factory=list)
    dates: List[DateValue] = Field(default_factory=list)
    identifiers: List[Identifier] = Field(default_factory=list)
    subjects: List[Subject] = Field(default_factory=list)
    genres: List[Subject] = Field(default_factory=list)
    relations: List[Relation] = Field(default_factory=list)
    rights: List[Rights] = Field(default_factory=list)
    resource_type: Optional[ResourceType] = None
    degree_info: Optional[DegreeInfo] = None
    publication: Optional[PublicationDetails] = None
    publisher: str = ""
    place_published: str = ""
    language: str = ""
    notes: List[str] = Field(default_factory=list)
    extra: Dict[str, Any] = Field(default_factory=dict)
    extra_descriptions: Dict[str, str] = Field(default_factory=dict)
