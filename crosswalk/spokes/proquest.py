"""ProQuest ETD submission schema and its embargo computed field.

ProQuest delivers the embargo as a code relative to the acceptance date; the
repository may also carry an explicit release date. Neither maps onto a single
canonical slot, so the embargo end date is derived by `compute_embargo_date`
after ordinary routing and added as an `available` date.
"""

from datetime import datetime, timedelta
from typing import Annotated, ClassVar, List, Optional

from pydantic import BaseModel, Field

from crosswalk.convert.annotations import HubField, HubMessage
from crosswalk.hub.models import CanonicalRecord, DatePrecision, DateType, DateValue
from crosswalk.utils.logger import LoggerManager


logger = LoggerManager.get_logger(__name__)

FULL_NAME = "spoke.proquest.v1.Submission"

# embargo code -> months of thirty days
EMBARGO_MONTHS = {1: 6, 2: 12, 3: 24}

EMBARGO_DATE_FORMATS = ["%Y-%m-%d", "%m/%d/%Y", "%B %d, %Y", "%b %d, %Y", "%Y/%m/%d"]
ACCEPT_DATE_FORMATS = ["%m/%d/%Y", "%Y-%m-%d", "%Y/%m/%d"]


class Author(BaseModel):
    given: str = ""
    family: str = ""
    suffix: str = ""
    orcid: str = ""
    affiliation: str = ""
    email: str = ""


class Submission(BaseModel):
    """ETD submission as exported from ProQuest."""

    hub_message: ClassVar[HubMessage] = HubMessage(full_name=FULL_NAME)

    title: Annotated[str, HubField(target="title", parser="strip_html", required=True)] = ""
    author: Annotated[Optional[Author], HubField(
        target="contributors", role="author", contributor_type="person", required=True,
    )] = None
    advisors: Annotated[List[Author], HubField(
        target="contributors", role="thesis advisor", contributor_type="person",
    )] = Field(default_factory=list)
    committee_members: Annotated[List[Author], HubField(
        target="contributors", role="committee member", contributor_type="person",
    )] = Field(default_factory=list)

    abstract: Annotated[str, HubField(target="abstract", parser="strip_html")] = ""
    degree_name: Annotated[str, HubField(target="degree_info.degree_name")] = ""
    degree_level: Annotated[str, HubField(target="degree_info.degree_level")] = ""
    department: Annotated[str, HubField(target="degree_info.department")] = ""
    institution: Annotated[str, HubField(target="degree_info.institution")] = ""

    keywords: Annotated[List[str], HubField(
        target="subjects", subject_vocabulary="keywords",
    )] = Field(default_factory=list)
    categories: Annotated[List[str], HubField(
        target="subjects", subject_vocabulary="local",
    )] = Field(default_factory=list)
    language: Annotated[str, HubField(target="language")] = ""

    accept_date: Annotated[str, HubField(
        target="dates", date_type="accepted", parser="iso8601", date_format="%m/%d/%Y",
        validators="iso8601",
    )] = ""
    completion_year: Annotated[str, HubField(
        target="dates", date_type="created", parser="year", validators="year_range",
    )] = ""

    embargo_code: Annotated[int, HubField(
        target="extra", description="ProQuest embargo code (0 none, 1 six months, 2 one year, 3 two years)",
    )] = 0
    repository_embargo_date: str = ""


def _parse_date(text: str, formats: List[str]) -> Optional[datetime]:
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def embargo_from_code(code: int, accept_date: str) -> str:
    """Embargo end date (YYYY-MM-DD) from an embargo code and accept date.

    Returns '' for code 0, a missing or unparseable accept date, or an
    unknown code.
    """
    if code == 0:
        return ""
    if not accept_date:
        logger.warning(
            "Cannot compute embargo date: missing accept_date",
            extra={"extra_data": {"embargo_code": code}},
        )
        return ""

    accepted = _parse_date(accept_date.strip(), ACCEPT_DATE_FORMATS)
    if accepted is None:
        logger.warning(
            f"Invalid accept_date format: {accept_date}",
            extra={"extra_data": {"accept_date": accept_date}},
        )
        return ""

    months = EMBARGO_MONTHS.get(code)
    if months is None:
        logger.warning(
            f"Unknown embargo code: {code}",
            extra={"extra_data": {"embargo_code": code}},
        )
        return ""

    return (accepted + timedelta(days=months * 30)).strftime("%Y-%m-%d")


def explicit_embargo(text: str) -> str:
    """Normalize an explicit release date; unrecognized text is kept as is."""
    text = text.strip()
    if not text:
        return ""
    parsed = _parse_date(text, EMBARGO_DATE_FORMATS)
    return parsed.strftime("%Y-%m-%d") if parsed else text


def embargo_date(submission: Submission) -> str:
    """Explicit repository embargo date, else one computed from the code."""
    explicit = explicit_embargo(submission.repository_embargo_date)
    if explicit:
        return explicit
    return embargo_from_code(submission.embargo_code, submission.accept_date)


def compute_embargo_date(source: BaseModel, record: CanonicalRecord) -> None:
    """Add the embargo end date as an `available` date."""
    if not isinstance(source, Submission):
        return

    value = embargo_date(source)
    if not value:
        return

    parsed = _parse_date(value, ["%Y-%m-%d"])
    record.dates.append(DateValue(
        type=DateType.AVAILABLE,
        raw=value,
        year=parsed.year if parsed else None,
        month=parsed.month if parsed else None,
        day=parsed.day if parsed else None,
        precision=DatePrecision.DAY,
    ))
