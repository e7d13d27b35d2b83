"""Markdown generator.

Comments are written verbatim, runs of code lines are fenced with the
source file type as language.
"""

from typing import Any

from ..constants import GeneratorType
from ..references.syntax import MarkdownLinkSyntax
from ..schemas.references import SourceFileRecord
from .base import Generator

RULE = "------------------------------"


def _close_fence(output: list[str]) -> None:
    # Trailing blank code lines stay outside the fence
    while output and not output[-1].strip():
        output.pop()
    output.append("```")


class MarkdownGenerator(Generator):
    generator_type = GeneratorType.MARKDOWN

    def create_syntax(self) -> MarkdownLinkSyntax:
        return MarkdownLinkSyntax.from_options(self.config.markdown_generator_options)

    def render_file(self, record: SourceFileRecord) -> str:
        """Comments verbatim, code fenced.

        Blank lines extend an open code block but never open one.
        """
        output = []
        in_code_block = False

        for line in record.lines:
            if line.comment is not None:
                if in_code_block:
                    _close_fence(output)
                    in_code_block = False
                output.append(line.comment)

            if line.has_code():
                if in_code_block:
                    output.append(line.code)
                elif line.code.strip():
                    output.append("```" + record.type)
                    output.append(line.code)
                    in_code_block = True

        if in_code_block:
            _close_fence(output)

        return "\n".join(output) + "\n"

    def render_index(self, index_map: dict[str, Any]) -> str:
        md = [f"# {index_map['project']} documentation", "", "### Anchor Collections"]

        for collection in index_map["collections"]:
            md.append("")
            md.append(f"#### {collection['name'] or '/'}")
            for anchor in collection["anchors"]:
                md.append(f"* [{anchor['anchor']}]({anchor['path']})")

        md.extend(["", RULE, "", "### Documentation Files"])
        for entry in index_map["files"]:
            md.append(f"* [{entry['name']}]({entry['path']})")
        md.extend(["", RULE, ""])

        if index_map["readme"]:
            md.append(index_map["readme"])

        return "\n".join(md) + "\n"
