"""Path helpers for generated documents."""

from pathlib import Path

# Stands for the output root as the first segment of a document path
OUTPUT_ROOT = "."


def get_link_prefix(file_name: str) -> str:
    """Relative ascent needed by links inside the document generated for file_name.

    file_name starts with the directory holding the documents, so every
    segment past the first two is one folder to climb: 'a/b/c.ts' gives
    '../' and 'a.ts' gives ''.
    """
    depth = len(file_name.split("/"))
    return "../" * max(0, depth - 2)


def document_link_prefix(document_name: str) -> str:
    """Link prefix for a document named relative to the output root."""
    return get_link_prefix(f"{OUTPUT_ROOT}/{document_name}")


def relative_name(file_path: Path, project_path: Path) -> str:
    """Project relative, '/' separated name of a source file."""
    return file_path.relative_to(project_path).as_posix()


def output_path(output_dir: Path, name: str, extension: str) -> Path:
    """Location of the generated document for a source file name."""
    return output_dir / f"{name}{extension}"


def record_path(parse_dir: Path, name: str) -> Path:
    """Location of the persisted line records for a source file name."""
    return parse_dir / f"{name}.json"
