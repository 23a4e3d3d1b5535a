"""BibTeX entry schema.

Field names follow the BibTeX field names; the reader that tokenizes .bib
text into these models lives outside this package.
"""

from enum import IntEnum
from typing import Annotated, ClassVar, List, Optional

from pydantic import BaseModel, Field

from crosswalk.convert.annotations import HubField, HubMessage, enum_targets


@enum_targets(
    ARTICLE="article",
    BOOK="book",
    INBOOK="book_chapter",
    INCOLLECTION="book_chapter",
    INPROCEEDINGS="conference_paper",
    PHDTHESIS="dissertation",
    MASTERSTHESIS="thesis",
    TECHREPORT="technical_report",
    UNPUBLISHED="manuscript",
)
class EntryType(IntEnum):
    UNSPECIFIED = 0
    ARTICLE = 1
    BOOK = 2
    INBOOK = 3
    INCOLLECTION = 4
    INPROCEEDINGS = 5
    PHDTHESIS = 6
    MASTERSTHESIS = 7
    TECHREPORT = 8
    UNPUBLISHED = 9
    MISC = 10


class Entry(BaseModel):
    """One BibTeX entry. Unannotated fields are kept in the record's extra."""

    hub_message: ClassVar[HubMessage] = HubMessage(
        preserve_unmapped=True,
        full_name="spoke.bibtex.v1.Entry",
    )

    citation_key: str = ""
    entry_type: Annotated[Optional[EntryType], HubField(target="resource_type")] = None

    title: Annotated[str, HubField(target="title", parser="strip_html", required=True)] = ""
    author: Annotated[List[str], HubField(
        target="contributors", parser="bibtex_name", role="author", contributor_type="person",
    )] = Field(default_factory=list)
    editor: Annotated[List[str], HubField(
        target="contributors", parser="bibtex_name", role="editor", contributor_type="person",
    )] = Field(default_factory=list)

    year: Annotated[str, HubField(
        target="dates", date_type="issued", parser="year", validators="year_range",
    )] = ""

    journal: Annotated[str, HubField(target="publication.container_title")] = ""
    volume: Annotated[str, HubField(target="publication.volume")] = ""
    number: Annotated[str, HubField(target="publication.issue")] = ""
    pages: Annotated[str, HubField(target="publication.pages")] = ""
    edition: Annotated[str, HubField(target="publication.edition")] = ""
    publisher: Annotated[str, HubField(target="publisher")] = ""
    address: Annotated[str, HubField(target="place_published")] = ""
    school: Annotated[str, HubField(target="degree_info.institution")] = ""
    series: Annotated[str, HubField(target="relations", relation_type="in_series")] = ""

    doi: Annotated[str, HubField(
        target="identifiers", identifier_type="doi", parser="doi", validators="doi",
    )] = ""
    isbn: Annotated[str, HubField(
        target="identifiers", identifier_type="isbn", parser="isbn", validators="isbn",
    )] = ""
    issn: Annotated[str, HubField(
        target="identifiers", identifier_type="issn", validators="issn",
    )] = ""
    url: Annotated[str, HubField(
        target="identifiers", identifier_type="url", parser="url", validators="url",
    )] = ""

    keywords: Annotated[str, HubField(
        target="subjects", subject_vocabulary="keywords", parser="split", delimiter=",",
    )] = ""
    abstract: Annotated[str, HubField(target="abstract", parser="strip_html")] = ""
    language: Annotated[str, HubField(target="language")] = ""
    note: Annotated[str, HubField(target="notes")] = ""
    copyright: Annotated[str, HubField(target="rights")] = ""
