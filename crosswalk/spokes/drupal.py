"""Drupal (Islandora) repository node schema.

`title` is truncated to 255 characters by Drupal, so repositories keep the
untruncated title in `field_full_title`. Both alias the canonical title and
the full title wins through priority merge whenever it is present.
"""

from typing import Annotated, ClassVar, List

from pydantic import BaseModel, Field

from crosswalk.convert.annotations import HubField, HubMessage


class Node(BaseModel):
    hub_message: ClassVar[HubMessage] = HubMessage(
        preserve_unmapped=True,
        full_name="spoke.drupal.v1.Node",
    )

    nid: int = 0
    title: Annotated[str, HubField(target="title", priority=0, required=True)] = ""
    field_full_title: Annotated[str, HubField(target="title", priority=1)] = ""
    field_alt_title: Annotated[List[str], HubField(target="alt_title")] = Field(default_factory=list)

    field_linked_agent: Annotated[List[str], HubField(
        target="contributors", parser="name", role="contributor",
    )] = Field(default_factory=list)
    field_edtf_date_issued: Annotated[str, HubField(
        target="dates", date_type="issued", parser="edtf", validators="edtf",
    )] = ""
    field_edtf_date_created: Annotated[str, HubField(
        target="dates", date_type="created", parser="edtf", validators="edtf",
    )] = ""

    field_abstract: Annotated[str, HubField(target="abstract", parser="strip_html")] = ""
    field_description: Annotated[str, HubField(target="description", parser="strip_html")] = ""
    field_resource_type: Annotated[str, HubField(target="resource_type", parser="lowercase")] = ""
    field_genre: Annotated[List[str], HubField(target="genres", subject_vocabulary="local")] = Field(default_factory=list)
    field_subject: Annotated[List[str], HubField(target="subjects", subject_vocabulary="lcsh")] = Field(default_factory=list)
    field_identifier: Annotated[List[str], HubField(
        target="identifiers", identifier_type="local",
    )] = Field(default_factory=list)
    field_language: Annotated[str, HubField(target="language")] = ""
    field_rights: Annotated[List[str], HubField(target="rights")] = Field(default_factory=list)
    field_member_of: Annotated[List[str], HubField(
        target="relations", relation_type="member_of",
    )] = Field(default_factory=list)
    field_note: Annotated[List[str], HubField(target="notes")] = Field(default_factory=list)
