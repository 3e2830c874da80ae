"""Command-line interface for MediaWiki dump parsing."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence, TextIO

from wikidump.config import ParserOptions
from wikidump.errors import DumpReadError, MalformedDumpError
from wikidump.io import iter_rows, write_jsonl, write_parquet
from wikidump.log import setup_logging
from wikidump.models import Site
from wikidump.parser import DumpParser
from wikidump.profiles import PROFILES, get_profile

logger = logging.getLogger(__name__)

EXIT_READ_ERROR = 1
EXIT_MALFORMED = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wikidump",
        description="Parse a MediaWiki XML dump (plain or bzip2) into pages and revisions.",
    )
    parser.add_argument("dump", help="Path to the dump file")
    parser.add_argument(
        "--no-process-text",
        action="store_true",
        help="Keep revision text as raw wiki markup",
    )
    parser.add_argument(
        "--remove-newlines",
        action="store_true",
        help="Strip newline characters from revision text",
    )
    parser.add_argument(
        "--all-namespaces",
        action="store_true",
        help="Keep pages outside the article namespace",
    )
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default="english",
        help="Markup dialect profile",
    )
    parser.add_argument("--workers", type=int, default=1, help="Processes used to flatten markup")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument(
        "--format",
        choices=("text", "jsonl"),
        default="text",
        help="Output format written to stdout",
    )
    parser.add_argument(
        "--parquet",
        default=None,
        help="Also write revision rows to this parquet file",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Logging verbosity",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> ParserOptions:
    return ParserOptions(
        process_text=not args.no_process_text,
        remove_newlines=args.remove_newlines,
        exclude_pages=not args.all_namespaces,
        profile=get_profile(args.profile),
        workers=args.workers,
        show_progress=args.progress,
    )


def write_text(site: Site, out: TextIO) -> None:
    for page in site.pages:
        out.write(page.title + "\n")
        for revision in page.revisions:
            out.write("\t" + revision.text + "\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    parser = DumpParser(options_from_args(args))
    try:
        site = parser.parse_file(args.dump)
    except DumpReadError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_READ_ERROR
    except MalformedDumpError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_MALFORMED

    if args.format == "jsonl":
        write_jsonl(iter_rows(site), sys.stdout)
    else:
        write_text(site, sys.stdout)

    if args.parquet:
        logger.info("Writing parquet to %s", args.parquet)
        write_parquet(iter_rows(site), args.parquet)

    logger.info("Summary: site=%r pages=%d revisions=%d", site.name, len(site.pages), site.revision_count())
    return 0


if __name__ == "__main__":
    sys.exit(main())
