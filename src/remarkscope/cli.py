"""CLI entry point — ``remarkscope load``."""

from __future__ import annotations

import argparse
import json
import sys
from collections import Counter
from pathlib import Path

from remarkscope import __version__
from remarkscope.config import Settings
from remarkscope.constants import OutputFormat
from remarkscope.logging_config import setup_logging
from remarkscope.remarks import (
    AnnotatedText,
    ConsoleProgress,
    LoadOptions,
    Remark,
    load_remarks_from_dir_sync,
)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"remarkscope {__version__}")
        return

    if args.command == "load":
        _run_load(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="remarkscope",
        description="Load LLVM optimization remarks (*.opt.yaml).",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    load = sub.add_parser(
        "load",
        help="Load remarks from a directory",
    )
    load.add_argument(
        "remarks_dir",
        type=str,
        help="Directory containing *.opt.yaml files",
    )
    load.add_argument(
        "--source-dir",
        default=None,
        help="Source tree remark paths are relative to "
        "(default: from settings)",
    )
    load.add_argument(
        "--external",
        action="store_true",
        help="Also load remarks located outside the source tree",
    )
    load.add_argument(
        "--filter",
        "-F",
        action="append",
        default=[],
        metavar="NAME",
        help="Ignore remarks with this name (repeatable)",
    )
    load.add_argument(
        "--toolchain-source-root",
        default=None,
        help="Local checkout used for /rustc/<commit>/ paths",
    )
    load.add_argument(
        "--format",
        "-f",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.SUMMARY.value,
        help="Output format (default: summary)",
    )
    load.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress and skipped documents",
    )

    return parser


def _load_options(
    args: argparse.Namespace, settings: Settings
) -> LoadOptions:
    """Command-line flags override settings."""
    base = settings.load_options()
    source_dir = (
        Path(args.source_dir) if args.source_dir else base.source_dir
    )
    root = (
        Path(args.toolchain_source_root)
        if args.toolchain_source_root
        else base.toolchain_source_root
    )
    return LoadOptions(
        include_external=args.external or base.include_external,
        source_dir=source_dir,
        excluded_names=base.excluded_names | frozenset(args.filter),
        toolchain_source_root=root,
    )


def _run_load(args: argparse.Namespace) -> None:
    """Execute the load command."""
    settings = Settings()
    setup_logging("DEBUG" if args.verbose else settings.log_level)
    options = _load_options(args, settings)

    try:
        remarks = load_remarks_from_dir_sync(
            Path(args.remarks_dir),
            options,
            ConsoleProgress() if args.verbose else None,
            max_concurrency=settings.load_max_concurrency,
        )
    except OSError as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)

    if args.format == OutputFormat.JSON:
        print(_format_json(remarks))
    else:
        print(_format_summary(remarks))


def _format_json(remarks: list[Remark]) -> str:
    return json.dumps(
        [r.model_dump(mode="json", by_alias=True) for r in remarks],
        indent=2,
    )


def _format_summary(remarks: list[Remark]) -> str:
    lines = []
    for remark in remarks:
        loc = remark.function.location
        where = f"{loc.file}:{loc.line}:{loc.column}" if loc else "?"
        message = "".join(
            f"[{p.text}]" if isinstance(p, AnnotatedText) else p.text
            for p in remark.message
        )
        lines.append(
            f"{where}: {remark.pass_name}/{remark.name} "
            f"in {remark.function.name}: {message}"
        )

    by_pass = Counter(r.pass_name for r in remarks)
    lines.append(f"\n{len(remarks)} remarks")
    for name, count in by_pass.most_common():
        lines.append(f"  {name}: {count}")
    return "\n".join(lines)
