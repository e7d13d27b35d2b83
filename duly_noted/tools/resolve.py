"""Read-only tag resolution tool."""

from pathlib import Path
from typing import Any

from ..core import Diagnostics, get_config, handle_error
from ..generators import create_generator
from ..models import ResolveInput


async def dulynoted_resolve(params: ResolveInput) -> dict[str, Any]:
    """Resolve anchor and link tags in a text fragment.

    Uses the reference data persisted by dulynoted_parse and never writes
    anything. Useful to preview how a comment will be rendered.

    Args:
        params: ResolveInput with project_path, text, file_name and generator

    Returns:
        dict with the rewritten text, the tags found and diagnostics
    """
    try:
        project_path = Path(params.project_path)
        config = get_config(project_path)
        diagnostics = Diagnostics()

        generator = create_generator(params.generator, project_path, config, diagnostics)
        resolver = generator.resolver

        lines = params.text.splitlines()
        rewritten = [
            resolver.rewrite_comment(line, params.file_name, index)
            for index, line in enumerate(lines)
        ]

        return {
            "status": "success",
            "text": "\n".join(rewritten),
            "anchors": [t for line in lines for t in resolver.scanner.anchor_tags(line)],
            "links": [t for line in lines for t in resolver.scanner.link_tags(line)],
            "diagnostics": diagnostics.to_dict(),
        }

    except Exception as e:
        return {
            "status": "error",
            "message": handle_error(e, "dulynoted_resolve")
        }
