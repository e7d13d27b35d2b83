"""Pydantic models for duly-noted tool inputs."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import GeneratorType


def _validate_project_path(v: str) -> str:
    """Shared validator for project_path fields.

    Args:
        v: Project path string

    Returns:
        Validated absolute path string

    Raises:
        ValueError: If path contains traversal sequences, doesn't exist, or isn't a directory
    """
    if not v:
        raise ValueError("Project path cannot be empty")

    if '..' in Path(v).parts:
        raise ValueError(
            "Invalid project path: contains path traversal sequence '..'. "
            "Use absolute paths only."
        )

    path = Path(v)
    if not path.is_absolute():
        raise ValueError(
            f"Invalid project path: must be absolute path (e.g., '/home/user/project'). "
            f"Got relative path: '{v}'"
        )

    if not path.exists():
        raise ValueError(f"Project path does not exist: {v}")

    if not path.is_dir():
        raise ValueError(f"Project path is not a directory: {v}")

    return str(path.resolve())


def _validate_relative_path(v: str | None, field_name: str = "path") -> str | None:
    """Shared validator for paths that must stay inside the project."""
    if v is None:
        return v

    if '..' in Path(v).parts:
        raise ValueError(
            f"Invalid {field_name}: contains path traversal sequence '..'. "
            f"Use relative paths within project only"
        )

    if Path(v).is_absolute():
        raise ValueError(
            f"Invalid {field_name}: must be relative to project root, not absolute. "
            f"Got: '{v}'"
        )

    return Path(v).as_posix()


class _ProjectInput(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra='forbid'
    )

    project_path: str = Field(
        ...,
        description="Absolute path to project root directory (e.g., '/home/user/my-project')",
        min_length=1
    )

    @field_validator('project_path')
    @classmethod
    def validate_project_path(cls, v: str) -> str:
        return _validate_project_path(v)


class InitInput(_ProjectInput):
    """Input for writing a default duly-noted.yml."""

    project_name: str | None = Field(
        default=None,
        description="Project name shown on the index page (defaults to the directory name)"
    )
    output_dir: str | None = Field(
        default=None,
        description="Output directory relative to the project root (default: docs)",
        min_length=1
    )
    generators: list[GeneratorType] | None = Field(
        default=None,
        description="Generators to enable: html, markdown"
    )
    overwrite: bool = Field(
        default=False,
        description="Replace an existing config file"
    )

    @field_validator('output_dir')
    @classmethod
    def validate_output_dir(cls, v: str | None) -> str | None:
        return _validate_relative_path(v, field_name="output_dir")


class ParseInput(_ProjectInput):
    """Input for the parse phase."""

    strict: bool | None = Field(
        default=None,
        description="Fail on duplicate anchors or conflicts (defaults to the config's strict setting)"
    )


class GenerateInput(_ProjectInput):
    """Input for document generation."""

    generators: list[GeneratorType] | None = Field(
        default=None,
        description="Generators to run (defaults to the config's generators)"
    )
    parse_first: bool = Field(
        default=False,
        description="Run the parse phase before generating"
    )
    strict: bool | None = Field(
        default=None,
        description="Fail on unresolved links (defaults to the config's strict setting)"
    )


class ResolveInput(_ProjectInput):
    """Input for resolving tags in a text fragment against the parsed references."""

    text: str = Field(..., description="Text containing anchor and link tags")
    file_name: str = Field(
        default="",
        description="Project relative file the text belongs to, used for relative links"
    )
    generator: GeneratorType = Field(
        default=GeneratorType.MARKDOWN,
        description="Link syntax to produce: html or markdown"
    )

    @field_validator('file_name')
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        return _validate_relative_path(v, field_name="file_name") if v else v
