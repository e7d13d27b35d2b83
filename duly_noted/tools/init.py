"""Config initialization tool."""

from pathlib import Path
from typing import Any

from ..constants import (
    DEFAULT_ANCHOR_REGEXP,
    DEFAULT_COMMENT_REGEXP,
    DEFAULT_LINK_REGEXP,
    DEFAULT_LONG_COMMENT_CLOSE_REGEXP,
    DEFAULT_LONG_COMMENT_LINE_REGEXP,
    DEFAULT_LONG_COMMENT_OPEN_REGEXP,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SOURCE_PATTERNS,
    GeneratorType,
)
from ..core import find_config_file, handle_error, save_config
from ..models import InitInput


def build_default_config(project_path: Path, params: InitInput) -> dict[str, Any]:
    """Default config mapping, in the camelCase file format."""
    readme = "README.md" if (project_path / "README.md").exists() else None
    generators = params.generators or [GeneratorType.MARKDOWN]

    return {
        "projectName": params.project_name or project_path.name,
        "files": list(DEFAULT_SOURCE_PATTERNS),
        "exclude": [],
        "outputDir": params.output_dir or DEFAULT_OUTPUT_DIR,
        "readme": readme,
        "generators": [GeneratorType(g).value for g in generators],
        "leaveJSONFiles": False,
        "strict": False,
        "anchorRegExp": DEFAULT_ANCHOR_REGEXP,
        "linkRegExp": DEFAULT_LINK_REGEXP,
        "commentRegExp": DEFAULT_COMMENT_REGEXP,
        "longCommentOpenRegExp": DEFAULT_LONG_COMMENT_OPEN_REGEXP,
        "longCommentLineRegExp": DEFAULT_LONG_COMMENT_LINE_REGEXP,
        "longCommentCloseRegExp": DEFAULT_LONG_COMMENT_CLOSE_REGEXP,
        "externalReferences": [],
        "markdownGeneratorOptions": {
            "htmlAnchors": True,
            "gitHubMarkdownAnchors": False,
        },
    }


async def dulynoted_init(params: InitInput) -> dict[str, Any]:
    """Write a default duly-noted.yml for a project.

    Args:
        params: InitInput with project_path and optional overrides

    Returns:
        dict with status and the config file written

    Key Behavior:
        - An existing config is left alone unless overwrite=True
        - README.md at the project root is picked up as the index README
    """
    try:
        project_path = Path(params.project_path)
        existing = find_config_file(project_path)

        if existing is not None and not params.overwrite:
            return {
                "status": "skipped",
                "message": f"{existing.name} already exists. Pass overwrite=True to replace it.",
                "config_file": existing.name,
            }

        config = build_default_config(project_path, params)
        if not save_config(project_path, config):
            return {
                "status": "error",
                "message": "Failed to write duly-noted.yml"
            }

        return {
            "status": "success",
            "config_file": "duly-noted.yml",
            "config": config,
        }

    except Exception as e:
        return {
            "status": "error",
            "message": handle_error(e, "dulynoted_init")
        }
