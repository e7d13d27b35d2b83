"""Core utilities for duly-noted.

This package contains focused modules for different utility categories:
- config: Configuration file management
- diagnostics: Collector for recoverable reference problems
- errors: Error types and formatting
- paths: Link prefixes and output locations
- patterns: Glob matching for source discovery
"""

# Configuration
from .config import find_config_file, get_config, load_config, save_config

# Diagnostics
from .diagnostics import Diagnostic, Diagnostics

# Error handling
from .errors import (
    ConfigError,
    DulyNotedError,
    OutputWriteError,
    ReferenceDataError,
    StrictModeError,
    handle_error,
)

# Path utilities
from .paths import (
    document_link_prefix,
    get_link_prefix,
    output_path,
    record_path,
    relative_name,
)

# Pattern matching
from .patterns import is_source_file, matches_pattern

__all__ = [
    "ConfigError",
    "Diagnostic",
    "Diagnostics",
    "DulyNotedError",
    "OutputWriteError",
    "ReferenceDataError",
    "StrictModeError",
    "document_link_prefix",
    "find_config_file",
    "get_config",
    "get_link_prefix",
    "handle_error",
    "is_source_file",
    "load_config",
    "matches_pattern",
    "output_path",
    "record_path",
    "relative_name",
    "save_config",
]
