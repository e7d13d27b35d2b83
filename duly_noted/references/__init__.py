"""Reference resolution: the anchor tree, tag scanning and link resolution."""

from .collection import ReferenceCollection
from .resolver import (
    LinkResolver,
    fill_placeholders,
    load_external_references,
    save_external_references,
)
from .scanner import TagScanner
from .syntax import HtmlLinkSyntax, LinkSyntax, MarkdownLinkSyntax, slugify_anchor

__all__ = [
    "HtmlLinkSyntax",
    "LinkResolver",
    "LinkSyntax",
    "MarkdownLinkSyntax",
    "ReferenceCollection",
    "TagScanner",
    "fill_placeholders",
    "load_external_references",
    "save_external_references",
    "slugify_anchor",
]
