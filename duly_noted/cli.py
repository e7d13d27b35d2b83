"""duly-noted command line."""

import argparse
import asyncio
import sys
from pathlib import Path

from .constants import GeneratorType
from .core import Diagnostics, DulyNotedError, get_config, handle_error
from .generators import generate_docs
from .models import InitInput
from .parsing import parse_project
from .tools import dulynoted_init


def _parse(project_path: Path, args, diagnostics: Diagnostics) -> None:
    config = get_config(project_path)
    result = parse_project(project_path, config, diagnostics)
    print(
        f"Found {result.tree.anchor_count()} anchors in {len(result.files)} files",
        file=sys.stderr,
    )
    diagnostics.raise_if_strict(args.strict or config.strict)


def _generate(project_path: Path, args, diagnostics: Diagnostics) -> None:
    config = get_config(project_path)
    generators = [GeneratorType(g) for g in args.generator] if args.generator else None
    for output in generate_docs(project_path, config, generators, diagnostics):
        print(
            f"Wrote {len(output['files'])} {output['generator']} files and "
            f"{output['output_dir']}/{output['index']}",
            file=sys.stderr,
        )
    diagnostics.raise_if_strict(args.strict or config.strict)


def _run(project_path: Path, args, diagnostics: Diagnostics) -> None:
    _parse(project_path, args, diagnostics)
    _generate(project_path, args, diagnostics)


def _init(project_path: Path, args, diagnostics: Diagnostics) -> None:
    result = asyncio.run(dulynoted_init(InitInput(
        project_path=str(project_path),
        project_name=args.name,
        output_dir=args.output_dir,
        overwrite=args.overwrite,
    )))
    if result["status"] == "error":
        raise DulyNotedError(result["message"])
    print(result.get("message") or f"Wrote {result['config_file']}", file=sys.stderr)


def _serve(project_path: Path, args, diagnostics: Diagnostics) -> None:
    from .server import main as serve

    serve()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="duly-noted",
        description="Generate documentation from anchor and link tags in source comments.",
    )
    parser.add_argument(
        "--project", "-p", default=".",
        help="Project root holding duly-noted.yml (default: current directory)",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Exit with an error when duplicate anchors or unresolved links are reported",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true",
        help="Do not print individual warnings",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    init = commands.add_parser("init", help="Write a default duly-noted.yml")
    init.add_argument("--name", help="Project name")
    init.add_argument("--output-dir", help="Output directory (default: docs)")
    init.add_argument("--overwrite", action="store_true", help="Replace an existing config")
    init.set_defaults(handler=_init)

    parse = commands.add_parser("parse", help="Scan sources and persist the anchor tree")
    parse.set_defaults(handler=_parse)

    for name, handler, help_text in (
        ("generate", _generate, "Generate docs from the persisted anchor tree"),
        ("run", _run, "Parse, then generate"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument(
            "--generator", "-g", action="append",
            choices=[g.value for g in GeneratorType],
            help="Generator to run, repeatable (default: from config)",
        )
        command.set_defaults(handler=handler)

    serve = commands.add_parser("serve", help="Start the MCP server on stdio")
    serve.set_defaults(handler=_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    project_path = Path(args.project).resolve()
    diagnostics = Diagnostics(quiet=args.quiet)

    try:
        args.handler(project_path, args, diagnostics)
    except DulyNotedError as e:
        handle_error(e, args.command)
        return 1

    if diagnostics.has_problems:
        print(
            f"{len(diagnostics.errors)} error(s), {len(diagnostics.warnings)} warning(s) reported",
            file=sys.stderr,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
