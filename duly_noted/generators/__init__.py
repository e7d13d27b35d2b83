"""Output generators."""

from pathlib import Path
from typing import Any

from ..constants import GeneratorType
from ..core.diagnostics import Diagnostics
from ..schemas.config import DulyNotedConfig
from .base import Generator, cleanup_parse_dir
from .html import HtmlGenerator
from .markdown import MarkdownGenerator

GENERATORS: dict[GeneratorType, type[Generator]] = {
    GeneratorType.HTML: HtmlGenerator,
    GeneratorType.MARKDOWN: MarkdownGenerator,
}


def create_generator(
    generator_type: GeneratorType,
    project_path: Path,
    config: DulyNotedConfig,
    diagnostics: Diagnostics | None = None,
) -> Generator:
    return GENERATORS[GeneratorType(generator_type)](project_path, config, diagnostics)


def generate_docs(
    project_path: Path,
    config: DulyNotedConfig,
    generators: list[GeneratorType] | None = None,
    diagnostics: Diagnostics | None = None,
) -> list[dict[str, Any]]:
    """Run each generator over the persisted parse output, then clean it up.

    Raises:
        ReferenceDataError: If the parse output is missing or corrupt
        OutputWriteError: If a document cannot be written
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    results = []
    for generator_type in generators or config.generators:
        generator = create_generator(generator_type, project_path, config, diagnostics)
        results.append(generator.generate())

    cleanup_parse_dir(project_path, config)
    return results


__all__ = [
    "GENERATORS",
    "Generator",
    "HtmlGenerator",
    "MarkdownGenerator",
    "cleanup_parse_dir",
    "create_generator",
    "generate_docs",
]
