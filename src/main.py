# src/main.py - v1
"""CLI entry point: merge and inspect commands.

Usage:
    pdffusion merge <file> <file> [...] [options]
    pdffusion inspect <file> [...]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pdffusion.version import __version__

if TYPE_CHECKING:
    from pdffusion.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    from pdffusion.config.settings import load_settings

    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        overrides = {"codec_backend": args.codec} if getattr(args, "codec", None) else {}
        settings = load_settings(**overrides)
    except Exception as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    _setup_logging(args.verbose, settings)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def cli() -> None:
    """Console-script wrapper."""
    sys.exit(main())


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="pdffusion",
        description=f"pdffusion v{__version__}: merge PDF files in the order you choose",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- merge ---
    p_merge = subparsers.add_parser(
        "merge", help="Merge PDF files in the given order",
    )
    p_merge.add_argument("files", type=Path, nargs="+", help="PDF files, in merge order")
    p_merge.add_argument(
        "-o", "--output", type=Path, default=Path("."),
        help="Output directory (default: current directory)",
    )
    p_merge.add_argument(
        "--sort-by-name", action="store_true",
        help="Sort files by name (natural order) before merging",
    )
    p_merge.add_argument(
        "--codec", choices=["pymupdf", "pypdf"], default=None,
        help="PDF backend (default: PDFFUSION_CODEC_BACKEND or pymupdf)",
    )
    p_merge.add_argument(
        "--overwrite", action="store_true",
        help="Overwrite an existing output file instead of numbering a new one",
    )
    p_merge.set_defaults(func=_cmd_merge)

    # --- inspect ---
    p_inspect = subparsers.add_parser(
        "inspect", help="Show size and page count of PDF files",
    )
    p_inspect.add_argument("files", type=Path, nargs="+", help="PDF files")
    p_inspect.add_argument(
        "--codec", choices=["pymupdf", "pypdf"], default=None,
        help="PDF backend (default: PDFFUSION_CODEC_BACKEND or pymupdf)",
    )
    p_inspect.set_defaults(func=_cmd_inspect)

    return parser


async def _cmd_merge(args: argparse.Namespace, settings: Settings) -> int:
    """Merge files into one PDF written to the output directory."""
    from pdffusion.core.models import FailureOutcome, FileHandle, SuccessOutcome
    from pdffusion.pipeline.session import MergeSession
    from pdffusion.storage.result_writer import LocalResultWriter

    missing = [p for p in args.files if not p.is_file()]
    if missing:
        for p in missing:
            logger.error("File not found: %s", p)
        return 1

    session = MergeSession.from_settings(settings)
    report = session.add_files(FileHandle.from_path(p) for p in args.files)
    for handle in report.rejected:
        logger.warning("Skipping %s: not a PDF file", handle.name)
    if report.notice:
        print(report.notice)

    if args.sort_by_name:
        session.sort_by_name()

    if not session.can_merge:
        print(session.view().message)
        return 1

    outcome = await session.run_merge()

    if isinstance(outcome, SuccessOutcome):
        result = outcome.result
        path = LocalResultWriter(args.output).write(result, overwrite=args.overwrite)
        view = session.view()
        print("\nMerge complete:")
        print(f"  Files merged: {result.source_count}")
        print(f"  Pages:        {result.page_count}")
        print(f"  Size:         {view.download.size_label}")  # type: ignore[union-attr]
        print(f"  Output:       {path}")
        session.reset()
        return 0

    print(session.view().message, file=sys.stderr)
    if isinstance(outcome, FailureOutcome) and outcome.failed_document_name:
        print(f"  Problem file: {outcome.failed_document_name}", file=sys.stderr)
    return 1


async def _cmd_inspect(args: argparse.Namespace, settings: Settings) -> int:
    """Print size and page count for each file."""
    from pdffusion.codec.codec_factory import create_codec
    from pdffusion.core.errors import DocumentLoadError
    from pdffusion.status.formatting import format_file_size

    codec = create_codec(settings.codec_backend)
    failures = 0

    for path in args.files:
        if not path.is_file():
            print(f"  {path.name:40s}  not found")
            failures += 1
            continue
        data = path.read_bytes()
        try:
            handle = codec.load(data)
        except DocumentLoadError as exc:
            print(f"  {path.name:40s}  {format_file_size(len(data)):>10s}  unreadable ({exc})")
            failures += 1
            continue
        try:
            pages = codec.page_count(handle)
        finally:
            codec.close(handle)
        print(f"  {path.name:40s}  {format_file_size(len(data)):>10s}  {pages} page(s)")

    return 1 if failures else 0


def _setup_logging(verbose: bool, settings: Settings) -> None:
    """Configure logging for CLI usage."""
    from pdffusion.logging.logger import setup_logging

    level = "DEBUG" if verbose else settings.log_level
    setup_logging(
        level=level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
