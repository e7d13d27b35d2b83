"""Parse phase tool."""

import asyncio
from pathlib import Path
from typing import Any

from ..core import Diagnostics, get_config, handle_error
from ..models import ParseInput
from ..parsing import parse_project


async def dulynoted_parse(params: ParseInput) -> dict[str, Any]:
    """Scan the project's sources for anchors and persist the reference data.

    Args:
        params: ParseInput with project_path

    Returns:
        dict with parsed files, anchor counts and diagnostics

    Error Handling:
        - Unreadable source files are reported as diagnostics and skipped
        - Invalid config or unwritable output returns an error status
        - In strict mode any diagnostic turns the result into an error
    """
    try:
        project_path = Path(params.project_path)
        config = get_config(project_path)
        diagnostics = Diagnostics()

        result = await asyncio.to_thread(parse_project, project_path, config, diagnostics)

        strict = config.strict if params.strict is None else params.strict
        diagnostics.raise_if_strict(strict)

        return {
            "status": "success",
            **result.to_dict(),
            "diagnostics": diagnostics.to_dict(),
        }

    except Exception as e:
        return {
            "status": "error",
            "message": handle_error(e, "dulynoted_parse")
        }
