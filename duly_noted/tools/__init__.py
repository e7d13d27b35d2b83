"""Tool implementations exposed by the MCP server and the CLI."""

from .generate import dulynoted_generate
from .init import dulynoted_init
from .parse import dulynoted_parse
from .resolve import dulynoted_resolve

__all__ = [
    "dulynoted_generate",
    "dulynoted_init",
    "dulynoted_parse",
    "dulynoted_resolve",
]
