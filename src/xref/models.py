"""Xref map models.

Field aliases mirror the keys written by the documentation generator so a
map can be read and written back without renaming anything.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from xref.comment_id import CommentId, parse_comment_id


class ReferenceRecord(BaseModel):
    """A single documented symbol in an xref map."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    uid: str | None = None
    name: str | None = None
    name_vb: str | None = Field(default=None, alias="name.vb")
    href: str | None = None
    comment_id: str | None = Field(default=None, alias="commentId")
    is_spec: str | None = Field(default=None, alias="isSpec")
    full_name: str | None = Field(default=None, alias="fullName")
    full_name_vb: str | None = Field(default=None, alias="fullName.vb")
    name_with_type: str | None = Field(default=None, alias="nameWithType")
    name_with_type_vb: str | None = Field(default=None, alias="nameWithType.vb")

    def parsed_comment_id(self) -> CommentId:
        return parse_comment_id(self.comment_id)

    def to_yaml_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ReferenceMap(BaseModel):
    """An ordered collection of references plus the generator's ``sorted`` flag."""

    sorted: bool = False
    references: list[ReferenceRecord] = Field(default_factory=list)

    def to_yaml_dict(self) -> dict[str, Any]:
        return {
            "sorted": self.sorted,
            "references": [reference.to_yaml_dict() for reference in self.references],
        }


__all__ = ["ReferenceMap", "ReferenceRecord"]
