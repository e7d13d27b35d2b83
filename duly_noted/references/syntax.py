"""Link syntax of each output format.

The resolver decides where a tag points; these classes decide how the
resulting link, and the anchor at a declaration site, are written.
"""

import html
from dataclasses import dataclass
from typing import Protocol

from ..constants import GITHUB_USER_CONTENT_PREFIX, GeneratorType
from ..schemas.references import QualifiedTag


def slugify_anchor(tag: str) -> str:
    """Markdown fragment for a tag: lower-cased with '/' turned into '-'."""
    return tag.replace("/", "-").lower()


class LinkSyntax(Protocol):
    generator: GeneratorType
    extension: str

    def fragment(self, tag: str) -> str: ...

    def declare_anchor(self, tag: str) -> str | None: ...

    def internal_link(self, tag: str, href: str) -> str: ...

    def external_link(self, tag: str, url: str) -> str: ...

    def index_href(self, collection_name: str, tag: QualifiedTag) -> str: ...


@dataclass(frozen=True)
class HtmlLinkSyntax:
    """Comments are rendered from markdown, so links use markdown syntax."""

    generator: GeneratorType = GeneratorType.HTML
    extension: str = ".html"

    def fragment(self, tag: str) -> str:
        return tag

    def declare_anchor(self, tag: str) -> str:
        escaped = html.escape(tag)
        return f'<a name="{escaped}">&#187; {escaped}</a>'

    def internal_link(self, tag: str, href: str) -> str:
        return f"[{tag}]({href})"

    def external_link(self, tag: str, url: str) -> str:
        return f"[{tag}]({url})"

    def index_href(self, collection_name: str, tag: QualifiedTag) -> str:
        declared = "/".join(p for p in (collection_name, tag.link_stub) if p)
        return f"{tag.path}{self.extension}#{self.fragment(declared)}"


@dataclass(frozen=True)
class MarkdownLinkSyntax:
    """Plain markdown has no anchors; inline <a> tags are emitted when html_anchors is set."""

    html_anchors: bool = True
    github_markdown_anchors: bool = False
    generator: GeneratorType = GeneratorType.MARKDOWN
    extension: str = ".md"

    @classmethod
    def from_options(cls, options) -> "MarkdownLinkSyntax":
        return cls(
            html_anchors=options.html_anchors,
            github_markdown_anchors=options.github_markdown_anchors,
        )

    def fragment(self, tag: str) -> str:
        slug = slugify_anchor(tag)
        if self.github_markdown_anchors:
            return GITHUB_USER_CONTENT_PREFIX + slug
        return slug

    def declare_anchor(self, tag: str) -> str | None:
        if not self.html_anchors:
            return None
        slug = slugify_anchor(tag)
        return f'<a name="{slug}" id="{slug}" ></a>[🔗{tag}](#{self.fragment(tag)})'

    def internal_link(self, tag: str, href: str) -> str:
        return f"[{tag}]({href})"

    def external_link(self, tag: str, url: str) -> str:
        return f"[{tag}]({url})"

    def index_href(self, collection_name: str, tag: QualifiedTag) -> str:
        declared = "/".join(p for p in (collection_name, tag.link_stub) if p)
        return f"{tag.path}{self.extension}#{self.fragment(declared)}"
