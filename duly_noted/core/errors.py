"""Error types and formatting.

Resolution problems (duplicate anchors, unresolved links) are recoverable and
go to Diagnostics. The exceptions here are for structural problems that
abort a run.
"""

import re
import sys
from datetime import datetime


class DulyNotedError(Exception):
    """Base class for fatal duly-noted errors."""


class ConfigError(DulyNotedError):
    """The configuration file is unreadable or invalid."""


class ReferenceDataError(DulyNotedError):
    """Persisted reference data (tree, external table, line records) is missing or corrupt."""


class OutputWriteError(DulyNotedError):
    """A generated document could not be written."""


class StrictModeError(DulyNotedError):
    """Diagnostics were reported while running in strict mode."""


def handle_error(e: Exception, context: str = "", log_to_stderr: bool = True) -> str:
    """Consistent error formatting across all tools.

    Args:
        e: Exception that occurred
        context: Context where error occurred (e.g., tool name, operation)
        log_to_stderr: Whether to log error to stderr

    Returns:
        Formatted error message string with absolute paths removed
    """
    error_msg = f"Error: {type(e).__name__}"
    if context:
        error_msg += f" in {context}"

    error_str = str(e)
    # Remove Windows paths (C:\..., R:\...)
    error_str = re.sub(r'[A-Z]:\\[^\s]+', '[path]', error_str)
    # Remove Unix paths (/home/..., /usr/...)
    error_str = re.sub(r'/[\w/.-]+/[\w/.-]+', '[path]', error_str)

    error_msg += f": {error_str}"

    if log_to_stderr:
        timestamp = datetime.now().isoformat()
        print(f"[{timestamp}] {error_msg}", file=sys.stderr)

    return error_msg
