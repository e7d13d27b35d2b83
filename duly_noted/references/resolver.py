"""Resolution of link tags into external or internal hyperlinks.

For every link tag:
1. The first '/' segment is looked up in the external reference table; a
   match wins and its URL template is filled from the remaining segments.
2. Otherwise the whole tag is looked up among the flattened anchors.
3. Otherwise the tag is reported as unresolved and left untouched.
"""

import json
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ..constants import EXTERNAL_PLACEHOLDER, DiagnosticKind
from ..core.diagnostics import Diagnostics
from ..core.errors import ReferenceDataError
from ..core.paths import document_link_prefix
from ..schemas.references import ExternalReference, QualifiedTag
from .scanner import TagScanner
from .syntax import LinkSyntax

_external_table = TypeAdapter(list[ExternalReference])


def fill_placeholders(template: str, segments: list[str]) -> str:
    """Replace successive placeholder markers with segments, left to right."""
    for segment in segments:
        template = template.replace(EXTERNAL_PLACEHOLDER, segment, 1)
    return template


def load_external_references(path: Path) -> list[ExternalReference]:
    """Read a persisted externalReferences.json.

    Raises:
        ReferenceDataError: If the file is missing or malformed
    """
    try:
        return _external_table.validate_json(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ReferenceDataError(
            f"External reference table not found: {path.name}. Run the parse step first."
        ) from e
    except (OSError, ValidationError) as e:
        raise ReferenceDataError(f"Failed to read {path.name}: {e}") from e


def save_external_references(path: Path, references: list[ExternalReference]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps([r.model_dump() for r in references], indent=2), encoding="utf-8"
    )


class LinkResolver:
    """Rewrites tags in comments using one output format's link syntax."""

    def __init__(
        self,
        tags: list[QualifiedTag],
        external_references: list[ExternalReference],
        syntax: LinkSyntax,
        scanner: TagScanner,
        diagnostics: Diagnostics | None = None,
    ):
        self.syntax = syntax
        self.scanner = scanner
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.external_references = list(external_references)

        # First declaration wins for duplicate ids
        self._tags: dict[str, QualifiedTag] = {}
        for tag in tags:
            self._tags.setdefault(tag.anchor, tag)
        self._external: dict[str, ExternalReference] = {}
        for reference in self.external_references:
            self._external.setdefault(reference.anchor, reference)

    def find_external(self, raw_tag: str) -> str | None:
        """URL for a tag whose first segment names an external reference."""
        key, *segments = raw_tag.split("/")
        reference = self._external.get(key)
        if reference is None:
            return None
        return fill_placeholders(reference.path, segments)

    def find_internal(self, raw_tag: str) -> QualifiedTag | None:
        return self._tags.get(raw_tag)

    def resolve(
        self, raw_tag: str, file_name: str, line: int, document: str | None = None
    ) -> str | None:
        """Link text for a tag referenced from file_name, or None if unresolved.

        document is the output root relative name of the page the link ends up
        in, when it is not the page generated for file_name.
        """
        url = self.find_external(raw_tag)
        if url is not None:
            return self.syntax.external_link(raw_tag, url)

        target = self.find_internal(raw_tag)
        if target is not None:
            href = (
                document_link_prefix(document if document is not None else file_name)
                + target.path
                + self.syntax.extension
                + "#"
                + self.syntax.fragment(target.link_stub)
            )
            return self.syntax.internal_link(raw_tag, href)

        self.diagnostics.warning(
            DiagnosticKind.UNRESOLVED_LINK,
            f"link: {raw_tag} does not have a corresponding anchor, so link cannot be created",
            file_name, line,
        )
        return None

    def replace_anchors(self, comment: str) -> str:
        return self.scanner.replace_anchors(comment, self.syntax.declare_anchor)

    def replace_links(
        self, comment: str, file_name: str, line: int, document: str | None = None
    ) -> str:
        return self.scanner.replace_links(
            comment, lambda tag: self.resolve(tag, file_name, line, document)
        )

    def rewrite_comment(
        self, comment: str, file_name: str, line: int, document: str | None = None
    ) -> str:
        """Mark anchor declarations, then turn link tags into links."""
        return self.replace_links(self.replace_anchors(comment), file_name, line, document)
