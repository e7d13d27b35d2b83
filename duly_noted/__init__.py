"""Duly Noted: documentation generated from anchor and link tags in source comments."""

from .references import (
    HtmlLinkSyntax,
    LinkResolver,
    MarkdownLinkSyntax,
    ReferenceCollection,
    TagScanner,
)

__version__ = "0.1.0"

__all__ = [
    "HtmlLinkSyntax",
    "LinkResolver",
    "MarkdownLinkSyntax",
    "ReferenceCollection",
    "TagScanner",
    "__version__",
]
