"""Command-line entry point for mural.

Usage::

    mural new blog
    cd blog && mural app article title:string body:string
    python -m mural app comment body:string --project-dir ./blog --dry-run
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from mural import __version__
from mural.config import Config, ConfigError
from mural.scaffolder import (
    FileSystemWriter,
    MemoryWriter,
    ProjectSpec,
    ScaffoldError,
    Scaffolder,
    ScaffoldResult,
    Writer,
)
from mural.utils import (
    print_error,
    print_file_table,
    print_next_steps,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mural",
        description="mural -- scaffold Koa + joiql-mongo projects and apps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  mural new blog\n"
            "  mural app article title:string body:string\n"
            "  mural app comment body:string --project-dir ./blog --dry-run\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new = subparsers.add_parser("new", help="Create a new project skeleton")
    new.add_argument("name", help="Project directory; its last component names the project")
    new.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be generated without writing anything",
    )

    app = subparsers.add_parser("app", help="Create an app inside the current project")
    app.add_argument("name", help="App name, e.g. article")
    app.add_argument(
        "attributes",
        nargs="*",
        metavar="name:type",
        help="Model fields, e.g. title:string body:string",
    )
    app.add_argument(
        "--project-dir",
        default=".",
        help="Project root containing package.json (default: current directory)",
    )
    app.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be generated without writing anything",
    )
    return parser


def _writer_for(root: Path, dry_run: bool) -> Writer:
    if not dry_run:
        return FileSystemWriter()
    # Mirror the real target so a dry run still reports conflicts.
    return MemoryWriter(existing=[root] if root.exists() else [])


def _report(result: ScaffoldResult, label: str, dry_run: bool) -> None:
    print_summary_table(
        {label: result.root.name, "Location": str(result.root), "Files": str(len(result.files))},
        title="mural",
    )
    print_file_table(result.root, [*result.directories, *result.files])
    if dry_run:
        print_warning("Dry run: nothing was written.")
        return
    print_success(f"Created {label.lower()} at {result.root}")
    print_next_steps(result.message)


def _run_new(args: argparse.Namespace, config: Config) -> None:
    spec = ProjectSpec.from_argument(args.name, Path.cwd())
    scaffolder = Scaffolder(_writer_for(spec.target_dir, args.dry_run), config)
    result = scaffolder.new_project(spec)
    _report(result, "Project", args.dry_run)


def _run_app(args: argparse.Namespace, config: Config) -> None:
    project_dir = Path(args.project_dir).resolve()
    root = project_dir / config.apps_dir / args.name
    scaffolder = Scaffolder(_writer_for(root, args.dry_run), config)
    result = scaffolder.new_app_from_tokens(args.name, args.attributes, project_dir)
    _report(result, "App", args.dry_run)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``mural`` and ``python -m mural``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
        if args.command == "new":
            _run_new(args, config)
        else:
            _run_app(args, config)
    except (ConfigError, ScaffoldError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
