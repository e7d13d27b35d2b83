"""Document generation tool."""

import asyncio
from pathlib import Path
from typing import Any

from ..core import Diagnostics, get_config, handle_error
from ..generators import generate_docs
from ..models import GenerateInput
from ..parsing import parse_project


def _run(project_path: Path, params: GenerateInput, diagnostics: Diagnostics) -> dict[str, Any]:
    config = get_config(project_path)

    parsed = None
    if params.parse_first:
        parsed = parse_project(project_path, config, diagnostics).to_dict()

    outputs = generate_docs(project_path, config, params.generators, diagnostics)

    strict = config.strict if params.strict is None else params.strict
    diagnostics.raise_if_strict(strict)

    return {
        "status": "success",
        "parse": parsed,
        "outputs": outputs,
    }


async def dulynoted_generate(params: GenerateInput) -> dict[str, Any]:
    """Generate HTML and/or Markdown documentation from the parsed references.

    Args:
        params: GenerateInput with project_path, generators and parse_first

    Returns:
        dict with generated files per generator and diagnostics

    Key Behavior:
        - Reads the intermediates written by dulynoted_parse (or parses first
          when parse_first=True)
        - Removes the intermediates afterwards unless leaveJSONFiles is set
        - Unresolved links are left as plain text and reported
    """
    diagnostics = Diagnostics()
    try:
        project_path = Path(params.project_path)
        result = await asyncio.to_thread(_run, project_path, params, diagnostics)
        result["diagnostics"] = diagnostics.to_dict()
        return result

    except Exception as e:
        return {
            "status": "error",
            "message": handle_error(e, "dulynoted_generate"),
            "diagnostics": diagnostics.to_dict(),
        }
