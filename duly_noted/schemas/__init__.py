"""Pydantic schemas for duly-noted configuration and persisted reference data."""

from .config import DulyNotedConfig, MarkdownGeneratorOptions, validate_config
from .references import (
    Anchor,
    CollectionReport,
    CollectionSchema,
    ExternalReference,
    LineRecord,
    QualifiedTag,
    SourceFileRecord,
)

__all__ = [
    "Anchor",
    "CollectionReport",
    "CollectionSchema",
    "DulyNotedConfig",
    "ExternalReference",
    "LineRecord",
    "MarkdownGeneratorOptions",
    "QualifiedTag",
    "SourceFileRecord",
    "validate_config",
]
