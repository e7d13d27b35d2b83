"""HTML generator.

Consecutive comment lines and consecutive code lines are grouped into items
and rendered with the Jinja2 templates shipped in duly_noted/templates.
Comment items are markdown and go through markdown-it-py.
"""

from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape
from markdown_it import MarkdownIt

from ..constants import GeneratorType
from ..core.paths import document_link_prefix
from ..references.syntax import HtmlLinkSyntax
from ..schemas.references import SourceFileRecord
from .base import Generator

_markdown = MarkdownIt("commonmark")


def render_markdown(text: str | None) -> str:
    return _markdown.render(text or "")


def create_environment() -> Environment:
    env = Environment(
        loader=PackageLoader("duly_noted", "templates"),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["md"] = render_markdown
    return env


def group_items(record: SourceFileRecord) -> list[dict[str, Any]]:
    """Group a file's lines into alternating comment and code items.

    Blank lines extend the current item but never start one.
    """
    items: list[dict[str, Any]] = []

    for line in record.lines:
        if line.comment is not None:
            if items and items[-1]["type"] == "comment":
                items[-1]["content"] += "\n" + line.comment
            elif line.comment != "":
                items.append({
                    "type": "comment",
                    "content": line.comment,
                    "long_comment": bool(line.long_comment),
                })

        if line.code is not None:
            if items and items[-1]["type"] == "code":
                items[-1]["content"] += "\n" + line.code
            elif line.code.strip() != "":
                items.append({"type": "code", "content": line.code, "lang": record.type})

    for item in items:
        if item["type"] == "code":
            item["content"] = item["content"].rstrip("\n")
    return items


class HtmlGenerator(Generator):
    generator_type = GeneratorType.HTML

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        env = create_environment()
        self.template = env.get_template("stacked.html")
        self.index_template = env.get_template("index.html")

    def create_syntax(self) -> HtmlLinkSyntax:
        return HtmlLinkSyntax()

    def render_file(self, record: SourceFileRecord) -> str:
        return self.template.render(
            project=self.project_name,
            name=record.name,
            type=record.type,
            items=group_items(record),
            link_prefix=document_link_prefix(record.name),
            index_file=self.index_file,
        )

    def render_index(self, index_map: dict[str, Any]) -> str:
        return self.index_template.render(**index_map)
