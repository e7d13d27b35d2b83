#!/usr/bin/env python3
"""
Duly Noted MCP Server

An MCP server that turns anchor and link tags embedded in source comments
into navigable documentation:
- Config initialization
- Parsing sources into an anchor/collection tree
- HTML and Markdown generation with resolved cross-file links
- Previewing tag resolution for a text fragment
"""

from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .constants import GeneratorType
from .models import GenerateInput, InitInput, ParseInput, ResolveInput
from .tools import dulynoted_generate, dulynoted_init, dulynoted_parse, dulynoted_resolve

# Initialize the MCP server
mcp = FastMCP("duly_noted")

# ============================================================================
# Register Tools
# ============================================================================

@mcp.tool(
    name="dulynoted_init",
    annotations=ToolAnnotations(
        title="Initialize Duly Noted Config",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False
    )
)
async def tool_dulynoted_init(
    project_path: str,
    project_name: str | None = None,
    output_dir: str | None = None,
    generators: list[str] | None = None,
    overwrite: bool = False
) -> dict[str, Any]:
    """Write a default duly-noted.yml for a project.

    An existing config is kept unless overwrite=True.
    """
    params = InitInput(
        project_path=project_path,
        project_name=project_name,
        output_dir=output_dir,
        generators=[GeneratorType(g) for g in generators] if generators else None,
        overwrite=overwrite
    )
    return await dulynoted_init(params)


@mcp.tool(
    name="dulynoted_parse",
    annotations=ToolAnnotations(
        title="Parse Anchors From Source Comments",
        readOnlyHint=False,  # writes the intermediate JSON files
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False
    )
)
async def tool_dulynoted_parse(
    project_path: str,
    strict: bool | None = None
) -> dict[str, Any]:
    """Scan source comments for anchor tags and persist the reference tree.

    Run before dulynoted_generate. Duplicate anchors and anchor/collection
    name conflicts are returned as diagnostics.
    """
    params = ParseInput(project_path=project_path, strict=strict)
    return await dulynoted_parse(params)


@mcp.tool(
    name="dulynoted_generate",
    annotations=ToolAnnotations(
        title="Generate Documentation",
        readOnlyHint=False,
        destructiveHint=False,  # only writes inside the output directory
        idempotentHint=True,
        openWorldHint=False
    )
)
async def tool_dulynoted_generate(
    project_path: str,
    generators: list[str] | None = None,
    parse_first: bool = False,
    strict: bool | None = None
) -> dict[str, Any]:
    """Generate HTML and/or Markdown docs with resolved links.

    generators: subset of ["html", "markdown"], defaults to the config.
    parse_first=True runs dulynoted_parse first.
    """
    params = GenerateInput(
        project_path=project_path,
        generators=[GeneratorType(g) for g in generators] if generators else None,
        parse_first=parse_first,
        strict=strict
    )
    return await dulynoted_generate(params)


@mcp.tool(
    name="dulynoted_resolve",
    annotations=ToolAnnotations(
        title="Resolve Tags (Read-Only)",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False
    )
)
async def tool_dulynoted_resolve(
    project_path: str,
    text: str,
    file_name: str = "",
    generator: str = "markdown"
) -> dict[str, Any]:
    """Preview how anchor and link tags in text resolve against the parsed references."""
    params = ResolveInput(
        project_path=project_path,
        text=text,
        file_name=file_name,
        generator=GeneratorType(generator)
    )
    return await dulynoted_resolve(params)


def main():
    """Entry point for the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
