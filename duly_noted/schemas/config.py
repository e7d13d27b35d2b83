"""Pydantic schema for the duly-noted.yml configuration file.

Keys follow the camelCase names of the original duly-noted.json format;
snake_case field names are accepted too.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import (
    DEFAULT_ANCHOR_REGEXP,
    DEFAULT_COMMENT_REGEXP,
    DEFAULT_INDEX_FILES,
    DEFAULT_LINK_REGEXP,
    DEFAULT_LONG_COMMENT_CLOSE_REGEXP,
    DEFAULT_LONG_COMMENT_LINE_REGEXP,
    DEFAULT_LONG_COMMENT_OPEN_REGEXP,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SOURCE_PATTERNS,
    GeneratorType,
)
from .references import ExternalReference


def _validate_pattern(v: str, field_name: str, groups: int | None) -> str:
    """Compile a regular expression and check its capture group count.

    Args:
        v: Pattern source
        field_name: Name of the field for error messages
        groups: Required number of capture groups, or None for no requirement

    Returns:
        The unchanged pattern

    Raises:
        ValueError: If the pattern does not compile or has the wrong group count
    """
    try:
        compiled = re.compile(v)
    except re.error as e:
        raise ValueError(f"Invalid {field_name}: {e}") from e

    if groups is not None and compiled.groups != groups:
        raise ValueError(
            f"Invalid {field_name}: expected exactly {groups} capture group, "
            f"got {compiled.groups} in '{v}'"
        )
    return v


class MarkdownGeneratorOptions(BaseModel):
    """Options specific to the Markdown generator."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    html_anchors: bool = Field(
        default=True,
        alias="htmlAnchors",
        description="Emit inline <a> tags at anchor declarations"
    )
    github_markdown_anchors: bool = Field(
        default=False,
        alias="gitHubMarkdownAnchors",
        description="Prefix fragments with 'user-content-' like GitHub does"
    )


class DulyNotedConfig(BaseModel):
    """Schema for duly-noted.yml.

    This file is user-created and user-edited. Unknown keys are kept so
    older configs keep loading.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    project_name: str | None = Field(default=None, alias="projectName")

    # File filtering
    files: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SOURCE_PATTERNS),
        description="Glob patterns for source files to document"
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to skip"
    )

    # Output
    output_dir: str = Field(default=DEFAULT_OUTPUT_DIR, alias="outputDir")
    index_file: str | None = Field(
        default=None,
        alias="indexFile",
        description="Index file name inside outputDir (defaults per generator)"
    )
    generators: list[GeneratorType] = Field(
        default_factory=lambda: [GeneratorType.MARKDOWN]
    )
    leave_json_files: bool = Field(
        default=False,
        alias="leaveJSONFiles",
        description="Keep the intermediate JSON files after generating"
    )
    readme: str | None = Field(default=None, description="README merged into the index page")
    strict: bool = Field(
        default=False,
        description="Fail the run when any anchor or link diagnostic was reported"
    )

    # Tag patterns
    anchor_regexp: str = Field(default=DEFAULT_ANCHOR_REGEXP, alias="anchorRegExp")
    link_regexp: str = Field(default=DEFAULT_LINK_REGEXP, alias="linkRegExp")

    # Comment patterns
    comment_regexp: str = Field(default=DEFAULT_COMMENT_REGEXP, alias="commentRegExp")
    long_comment_open_regexp: str = Field(
        default=DEFAULT_LONG_COMMENT_OPEN_REGEXP, alias="longCommentOpenRegExp"
    )
    long_comment_line_regexp: str = Field(
        default=DEFAULT_LONG_COMMENT_LINE_REGEXP, alias="longCommentLineRegExp"
    )
    long_comment_close_regexp: str = Field(
        default=DEFAULT_LONG_COMMENT_CLOSE_REGEXP, alias="longCommentCloseRegExp"
    )

    external_references: list[ExternalReference] = Field(
        default_factory=list, alias="externalReferences"
    )
    markdown_generator_options: MarkdownGeneratorOptions = Field(
        default_factory=MarkdownGeneratorOptions, alias="markdownGeneratorOptions"
    )

    @field_validator("files", "exclude", "external_references", "generators", mode="before")
    @classmethod
    def normalize_list_fields(cls, v: Any) -> list[Any]:
        """Normalize None to empty list for list fields."""
        if v is None:
            return []
        return v

    @field_validator("anchor_regexp", "link_regexp")
    @classmethod
    def validate_tag_patterns(cls, v: str, info) -> str:
        """Tag patterns must capture exactly the tag text."""
        return _validate_pattern(v, info.field_name, groups=1)

    @field_validator("comment_regexp", "long_comment_line_regexp")
    @classmethod
    def validate_comment_patterns(cls, v: str, info) -> str:
        return _validate_pattern(v, info.field_name, groups=1)

    @field_validator("long_comment_open_regexp", "long_comment_close_regexp")
    @classmethod
    def validate_delimiter_patterns(cls, v: str, info) -> str:
        return _validate_pattern(v, info.field_name, groups=None)

    def index_file_for(self, generator: GeneratorType) -> str:
        """Index file name for a generator, honoring an explicit indexFile."""
        return self.index_file or DEFAULT_INDEX_FILES[generator]


def validate_config(data: dict[str, Any]) -> DulyNotedConfig:
    """Validate duly-noted.yml configuration data.

    Args:
        data: Raw YAML data from file

    Returns:
        Validated DulyNotedConfig model

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return DulyNotedConfig.model_validate(data)
