"""Parse phase: read sources, build the anchor tree, persist the intermediates.

Produces, under <outputDir>/.duly-noted/:
- internalReferences.json: the anchor/collection tree
- externalReferences.json: the external reference table from the config
- <source file>.json: line records for each documented file
"""

import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

from ..constants import (
    DEFAULT_EXCLUDE_PATTERNS,
    EXTERNAL_REFERENCES_FILE,
    INTERNAL_REFERENCES_FILE,
    PARSE_DIR_NAME,
    DiagnosticKind,
)
from ..core.diagnostics import Diagnostics
from ..core.errors import OutputWriteError
from ..core.paths import record_path, relative_name
from ..core.patterns import is_source_file
from ..references.collection import ReferenceCollection
from ..references.resolver import save_external_references
from ..references.scanner import TagScanner
from ..schemas.config import DulyNotedConfig
from ..schemas.references import SourceFileRecord
from .extractor import CommentExtractor


def get_parse_dir(project_path: Path, config: DulyNotedConfig) -> Path:
    return project_path / config.output_dir / PARSE_DIR_NAME


@dataclass
class ParseResult:
    """Outcome of a parse run."""

    project_path: Path
    parse_dir: Path
    tree: ReferenceCollection
    files: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "parse_dir": str(self.parse_dir.relative_to(self.project_path)),
            "files_parsed": len(self.files),
            "files": self.files,
            "skipped": self.skipped,
            "anchors": self.tree.anchor_count(),
            "collections": [r.name for r in self.tree.get_tags_by_collection()],
        }


def discover_source_files(project_path: Path, config: DulyNotedConfig) -> list[Path]:
    """Source files to document, sorted by relative name.

    Anything inside the output directory is skipped.
    """
    output_prefix = PurePosixPath(config.output_dir).as_posix() + "/"
    exclude_patterns = DEFAULT_EXCLUDE_PATTERNS + config.exclude

    found = []
    for path in project_path.rglob("*"):
        if not path.is_file():
            continue
        name = relative_name(path, project_path)
        if name.startswith(output_prefix):
            continue
        if is_source_file(name, config.files, exclude_patterns):
            found.append(path)

    return sorted(found, key=lambda p: relative_name(p, project_path))


def extract_file(path: Path, name: str, extractor: CommentExtractor) -> SourceFileRecord:
    """Line records for one source file.

    Raises:
        OSError, UnicodeDecodeError: If the file cannot be read as UTF-8
    """
    text = path.read_text(encoding="utf-8")
    return SourceFileRecord(
        name=name,
        type=path.suffix.lstrip("."),
        lines=extractor.extract_lines(text),
    )


def build_tree(
    records: list[SourceFileRecord],
    scanner: TagScanner,
    diagnostics: Diagnostics,
) -> ReferenceCollection:
    """Scan every comment for anchor declarations, in file then line order."""
    tree = ReferenceCollection("")
    for record in records:
        for index, line in enumerate(record.lines):
            if line.has_comment():
                scanner.collect_anchors(line.comment, record.name, index, tree, diagnostics)
    return tree


def parse_project(
    project_path: Path,
    config: DulyNotedConfig,
    diagnostics: Diagnostics | None = None,
) -> ParseResult:
    """Run the parse phase and persist its output.

    Unreadable source files are reported and skipped.

    Raises:
        OutputWriteError: If the intermediate files cannot be written
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    extractor = CommentExtractor.from_config(config)
    scanner = TagScanner.from_config(config)

    records = []
    skipped = []
    for path in discover_source_files(project_path, config):
        name = relative_name(path, project_path)
        try:
            records.append(extract_file(path, name, extractor))
        except (OSError, UnicodeDecodeError) as e:
            diagnostics.warning(
                DiagnosticKind.UNREADABLE_FILE, f"Failed to read source file: {e}", name
            )
            skipped.append(name)

    print(f"Parsed {len(records)} source files", file=sys.stderr)

    tree = build_tree(records, scanner, diagnostics)
    parse_dir = get_parse_dir(project_path, config)

    try:
        if parse_dir.exists():
            shutil.rmtree(parse_dir)
        parse_dir.mkdir(parents=True)

        for record in records:
            target = record_path(parse_dir, record.name)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(record.to_json(), encoding="utf-8")

        tree.save(parse_dir / INTERNAL_REFERENCES_FILE)
        save_external_references(parse_dir / EXTERNAL_REFERENCES_FILE, config.external_references)
    except OSError as e:
        raise OutputWriteError(f"Failed to write parse output to {parse_dir}: {e}") from e

    return ParseResult(
        project_path=project_path,
        parse_dir=parse_dir,
        tree=tree,
        files=[r.name for r in records],
        skipped=skipped,
    )
