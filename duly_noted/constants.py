"""Constants and enums for duly-noted."""

from enum import Enum

# Marker replaced, left to right, by the segments of an external link tag
EXTERNAL_PLACEHOLDER = "::"

# Config file names, in lookup order
CONFIG_FILE_NAMES = ["duly-noted.yml", "duly-noted.json"]

# Intermediate files written by the parse phase
PARSE_DIR_NAME = ".duly-noted"
INTERNAL_REFERENCES_FILE = "internalReferences.json"
EXTERNAL_REFERENCES_FILE = "externalReferences.json"

# Default tag patterns (one capture group each)
DEFAULT_ANCHOR_REGEXP = r"(?<![\w!])!([\w-]+(?:[/.][\w-]+)*)"
DEFAULT_LINK_REGEXP = r"(?<![\w@])@([\w-]+(?:[/.][\w-]+)*)"

# Default comment patterns
DEFAULT_COMMENT_REGEXP = r"^\s*(?://|#)\s?(.*)$"
DEFAULT_LONG_COMMENT_OPEN_REGEXP = r"/\*\*?"
DEFAULT_LONG_COMMENT_LINE_REGEXP = r"^\s*\*?\s?(.*)$"
DEFAULT_LONG_COMMENT_CLOSE_REGEXP = r"\*/"

DEFAULT_OUTPUT_DIR = "docs"
DEFAULT_SOURCE_PATTERNS = [
    "**/*.py", "**/*.js", "**/*.ts", "**/*.go", "**/*.java", "**/*.c", "**/*.h",
    "**/*.cpp", "**/*.cs", "**/*.rb", "**/*.rs", "**/*.swift", "**/*.kt", "**/*.sh",
]

# Prefix GitHub adds to ids of user supplied anchors in rendered markdown
GITHUB_USER_CONTENT_PREFIX = "user-content-"

# Always excluded from source discovery
DEFAULT_EXCLUDE_PATTERNS = [
    "**/.git", "**/.git/**",
    "**/.svn", "**/.svn/**",
    "**/.hg", "**/.hg/**",
    "**/__pycache__", "**/__pycache__/**",
    "**/node_modules", "**/node_modules/**",
    "**/.venv", "**/.venv/**",
    "**/venv", "**/venv/**",
    "**/*.pyc",
    "**/.DS_Store",
    "duly-noted.yml",
    "duly-noted.json",
]


class GeneratorType(str, Enum):
    """Output generators."""
    HTML = "html"
    MARKDOWN = "markdown"


class Severity(str, Enum):
    """Diagnostic severities."""
    WARNING = "warning"
    ERROR = "error"


class DiagnosticKind(str, Enum):
    """Kinds of recoverable problems found while building or resolving references."""
    DUPLICATE_ANCHOR = "duplicate_anchor"
    COLLECTION_CONFLICT = "collection_conflict"
    UNRESOLVED_LINK = "unresolved_link"
    UNREADABLE_FILE = "unreadable_file"


# Output file extension and default index file per generator
GENERATOR_EXTENSIONS = {
    GeneratorType.HTML: ".html",
    GeneratorType.MARKDOWN: ".md",
}

DEFAULT_INDEX_FILES = {
    GeneratorType.HTML: "index.html",
    GeneratorType.MARKDOWN: "index.md",
}
