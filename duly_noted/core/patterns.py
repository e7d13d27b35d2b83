"""Pattern matching utilities for source file selection.

This module provides utilities for matching file paths against glob patterns,
supporting patterns like **/ prefixes and /** suffixes.
"""

import fnmatch
from pathlib import Path


def matches_pattern(path: str, patterns: list[str]) -> bool:
    """Check if a path matches any of the glob patterns.

    Args:
        path: Relative path to check (string)
        patterns: List of glob patterns (e.g., ["**/node_modules", "src/**/*.ts"])

    Returns:
        True if any pattern matches
    """
    # Normalize path separators
    normalized_path = str(Path(path)).replace('\\', '/')

    for pattern in patterns:
        normalized_pattern = pattern.replace('\\', '/')

        # Handle **/ prefix (matches any depth)
        if normalized_pattern.startswith('**/'):
            pattern_suffix = normalized_pattern[3:]
            if fnmatch.fnmatch(normalized_path, '*/' + pattern_suffix) or \
               fnmatch.fnmatch(normalized_path, pattern_suffix):
                return True
            # Check if any trailing component run matches
            parts = normalized_path.split('/')
            for i in range(len(parts)):
                remaining = '/'.join(parts[i:])
                if fnmatch.fnmatch(remaining, pattern_suffix):
                    return True
        # Handle /** suffix (matches directory and contents)
        elif normalized_pattern.endswith('/**'):
            dir_pattern = normalized_pattern[:-3]
            if normalized_path.startswith(dir_pattern + '/') or normalized_path == dir_pattern:
                return True
        # Handle dir/**/name (zero or more directories in between)
        elif '/**/' in normalized_pattern:
            head, tail = normalized_pattern.split('/**/', 1)
            if fnmatch.fnmatch(normalized_path, f"{head}/{tail}") or \
               fnmatch.fnmatch(normalized_path, f"{head}/*/{tail}"):
                return True
        else:
            if fnmatch.fnmatch(normalized_path, normalized_pattern):
                return True

    return False


def is_source_file(path: str, include_patterns: list[str], exclude_patterns: list[str]) -> bool:
    """A file is documented when it matches an include pattern and no exclude pattern."""
    return matches_pattern(path, include_patterns) and not matches_pattern(path, exclude_patterns)
