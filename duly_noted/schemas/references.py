"""Pydantic schemas for the reference data exchanged between parse and generate.

These mirror the JSON files written to the intermediate directory:
- internalReferences.json: the serialized anchor/collection tree
- externalReferences.json: the external reference table
- <source file>.json: the per-file line records
"""

from pydantic import BaseModel, ConfigDict, Field


class Anchor(BaseModel):
    """A named reference point declared in a comment."""

    id: str = Field(..., description="Anchor name, unique among its collection's anchors")
    file: str = Field(..., description="Source file (relative to project root) declaring the anchor")
    line: int = Field(..., ge=0, description="0-based line index of the declaration")


class CollectionSchema(BaseModel):
    """Serialized form of a ReferenceCollection."""

    id: str = ""
    anchors: list[Anchor] = Field(default_factory=list)
    subcollections: list["CollectionSchema"] = Field(default_factory=list)


class QualifiedTag(BaseModel):
    """Flattened projection of an anchor used for link lookup."""

    model_config = ConfigDict(populate_by_name=True)

    anchor: str = Field(..., description="Qualified anchor id used as lookup key")
    path: str = Field(..., description="Source file declaring the anchor")
    link_stub: str = Field(..., alias="linkStub", description="Bare anchor id, used as URL fragment")


class ExternalReference(BaseModel):
    """Entry of the external reference table."""

    anchor: str = Field(..., min_length=1, description="Key matched against the first link tag segment")
    path: str = Field(..., description="URL template, '::' markers are filled from the remaining segments")


class CollectionReport(BaseModel):
    """Index entry listing the direct anchors of one collection."""

    name: str
    anchors: list[QualifiedTag] = Field(default_factory=list)


class LineRecord(BaseModel):
    """One source line split into code and comment text."""

    model_config = ConfigDict(populate_by_name=True)

    code: str | None = None
    comment: str | None = None
    long_comment: bool | None = Field(default=None, alias="longComment")

    def has_comment(self) -> bool:
        return isinstance(self.comment, str) and self.comment != ""

    def has_code(self) -> bool:
        return isinstance(self.code, str)


class SourceFileRecord(BaseModel):
    """Line records extracted from a single source file."""

    name: str = Field(..., description="Path relative to the project root, '/' separated")
    type: str = Field(default="", description="File extension without the dot")
    lines: list[LineRecord] = Field(default_factory=list)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)
