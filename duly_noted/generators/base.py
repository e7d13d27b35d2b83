"""Shared generator shell.

A generator never scans sources itself: it inflates the persisted tree,
flattens it once (top-level view), rewrites every comment of every persisted
line record through the LinkResolver and hands the result to a format
specific renderer.
"""

import shutil
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import frontmatter
from pydantic import ValidationError

from ..constants import (
    EXTERNAL_REFERENCES_FILE,
    INTERNAL_REFERENCES_FILE,
    DiagnosticKind,
    GeneratorType,
)
from ..core.diagnostics import Diagnostics
from ..core.errors import OutputWriteError, ReferenceDataError
from ..core.paths import output_path
from ..parsing.parser import get_parse_dir
from ..references.collection import ReferenceCollection
from ..references.resolver import LinkResolver, load_external_references
from ..references.scanner import TagScanner
from ..references.syntax import LinkSyntax
from ..schemas.config import DulyNotedConfig
from ..schemas.references import SourceFileRecord

_REFERENCE_FILES = {INTERNAL_REFERENCES_FILE, EXTERNAL_REFERENCES_FILE}


class Generator(ABC):
    """Base class for output generators."""

    generator_type: GeneratorType

    def __init__(
        self,
        project_path: Path,
        config: DulyNotedConfig,
        diagnostics: Diagnostics | None = None,
    ):
        self.project_path = project_path
        self.config = config
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.output_dir = project_path / config.output_dir
        self.parse_dir = get_parse_dir(project_path, config)
        self.index_file = config.index_file_for(self.generator_type)

        self.tree = ReferenceCollection.load(self.parse_dir / INTERNAL_REFERENCES_FILE)
        self.tags = self.tree.get_all_tags()
        self.external_references = load_external_references(
            self.parse_dir / EXTERNAL_REFERENCES_FILE
        )
        self.syntax = self.create_syntax()
        self.resolver = LinkResolver(
            self.tags,
            self.external_references,
            self.syntax,
            TagScanner.from_config(config),
            self.diagnostics,
        )
        self.output_files: list[str] = []

    @abstractmethod
    def create_syntax(self) -> LinkSyntax:
        """Link syntax of this output format."""

    @abstractmethod
    def render_file(self, record: SourceFileRecord) -> str:
        """Render one rewritten source file."""

    @abstractmethod
    def render_index(self, index_map: dict[str, Any]) -> str:
        """Render the index page from the index map."""

    @property
    def project_name(self) -> str:
        return self.config.project_name or self.project_path.name

    def record_files(self) -> list[Path]:
        """Persisted line record files, sorted."""
        return sorted(
            p for p in self.parse_dir.rglob("*.json")
            if p.name not in _REFERENCE_FILES or p.parent != self.parse_dir
        )

    def load_record(self, path: Path) -> SourceFileRecord:
        """Read one persisted line record file.

        Raises:
            ReferenceDataError: If the file is unreadable or malformed
        """
        try:
            return SourceFileRecord.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            raise ReferenceDataError(
                f"Failed to read line records {path.relative_to(self.parse_dir)}: {e}"
            ) from e

    def rewrite_record(self, record: SourceFileRecord) -> SourceFileRecord:
        """Resolve anchors and links in every comment, in place."""
        for index, line in enumerate(record.lines):
            if line.has_comment():
                line.comment = self.resolver.rewrite_comment(line.comment, record.name, index)
        return record

    def write(self, path: Path, content: str) -> None:
        """Write a generated document.

        Raises:
            OutputWriteError: If the file or its directory cannot be written
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(f"Failed to write {path.name}: {e}") from e

    def process_file(self, record: SourceFileRecord) -> Path:
        self.rewrite_record(record)
        target = output_path(self.output_dir, record.name, self.syntax.extension)
        self.write(target, self.render_file(record))
        self.output_files.append(target.relative_to(self.output_dir).as_posix())
        return target

    def read_readme(self) -> str:
        """README text with frontmatter removed and tags resolved.

        A missing README is reported and yields an empty string.
        """
        if not self.config.readme:
            return ""

        readme_path = self.project_path / self.config.readme
        try:
            raw = readme_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.diagnostics.warning(
                DiagnosticKind.UNREADABLE_FILE, f"Failed to read README: {e}", self.config.readme
            )
            return ""

        post = frontmatter.loads(raw)
        # Diagnostics cite lines of the README file, frontmatter included
        first_line = raw[:raw.rfind(post.content)].count("\n") if post.content else 0

        lines = [
            self.resolver.rewrite_comment(
                line, self.config.readme, first_line + index, self.index_file
            )
            for index, line in enumerate(post.content.splitlines())
        ]
        return "\n".join(lines)

    def build_index_map(self, readme: str) -> dict[str, Any]:
        """Structured content of the index page."""
        collections = []
        for report in self.tree.get_tags_by_collection():
            collections.append({
                "name": report.name,
                "anchors": [
                    {
                        "anchor": tag.anchor,
                        "path": self.syntax.index_href(report.name, tag),
                        "link_stub": tag.link_stub,
                    }
                    for tag in report.anchors
                ],
            })

        return {
            "project": self.project_name,
            "collections": collections,
            "files": [{"name": name, "path": f"./{name}"} for name in self.output_files],
            "readme": readme,
        }

    def generate(self) -> dict[str, Any]:
        """Render every persisted file and the index page.

        Raises:
            ReferenceDataError: If a line record file is corrupt
            OutputWriteError: If a document cannot be written
        """
        print(f"Generating {self.generator_type.value} docs", file=sys.stderr)
        self.output_files = []

        for path in self.record_files():
            self.process_file(self.load_record(path))

        index_map = self.build_index_map(self.read_readme())
        index_path = self.output_dir / self.index_file
        self.write(index_path, self.render_index(index_map))

        return {
            "generator": self.generator_type.value,
            "output_dir": self.config.output_dir,
            "index": self.index_file,
            "files": list(self.output_files),
        }


def cleanup_parse_dir(project_path: Path, config: DulyNotedConfig) -> bool:
    """Remove the intermediate JSON files unless the config keeps them.

    Returns:
        True if the directory was removed
    """
    parse_dir = get_parse_dir(project_path, config)
    if config.leave_json_files or not parse_dir.exists():
        return False
    shutil.rmtree(parse_dir)
    return True
