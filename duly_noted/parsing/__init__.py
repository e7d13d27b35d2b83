"""Parse phase: comment extraction and anchor tree construction."""

from .extractor import CommentExtractor
from .parser import (
    ParseResult,
    build_tree,
    discover_source_files,
    extract_file,
    get_parse_dir,
    parse_project,
)

__all__ = [
    "CommentExtractor",
    "ParseResult",
    "build_tree",
    "discover_source_files",
    "extract_file",
    "get_parse_dir",
    "parse_project",
]
