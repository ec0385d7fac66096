import argparse
import re
import sys
from pathlib import Path
from typing import List, Optional

from .core.exceptions import RootNotFoundError
from .core.models import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_EXCLUDE_WORDS,
    DEFAULT_INCLUDE_GLOBS,
    HANGUL_PATTERN,
    ScanConfig,
)
from .core.reporting import ReportWriter
from .core.scanner import LOG_PREFIX, DirectoryScanner, configure_logging


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def default_root() -> Path:
    """Directory of the running program, or the working directory when unknown."""
    if sys.argv and sys.argv[0]:
        program = Path(sys.argv[0]).resolve()
        if program.parent.is_dir():
            return program.parent
    return Path.cwd()


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hanguldetector",
        description="Find hard-coded Hangul string literals in a source tree and write a timestamped report.",
    )
    p.add_argument("path", type=Path, nargs="?", default=None, help="Directory to scan recursively (default: the program's directory).")
    p.add_argument("--out", type=Path, default=None, help="Report directory (default: current directory; used as fallback when missing).")
    p.add_argument("--include", default=",".join(DEFAULT_INCLUDE_GLOBS), help="File name glob(s) to scan, comma-separated.")
    p.add_argument("--exclude-words", default=",".join(DEFAULT_EXCLUDE_WORDS), help="Lines containing any of these substrings are skipped, comma-separated.")
    p.add_argument("--exclude-dirs", default=",".join(DEFAULT_EXCLUDE_DIRS), help="Directory names to skip, comma-separated.")
    p.add_argument("--pattern", default=HANGUL_PATTERN, help="Regular expression for the target characters.")
    p.add_argument("--workers", type=int, default=8, help="Number of worker threads for scanning.")
    p.add_argument("--max-file-size", type=int, default=None, help="Skip files larger than this many bytes.")
    p.add_argument("--no-sort", action="store_true", help="Write detections in discovery order instead of sorted by path and line.")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging output.")
    return p


def run(args: argparse.Namespace) -> int:
    try:
        target_pattern = re.compile(args.pattern)
    except re.error as exc:
        print(f"Invalid --pattern {args.pattern!r}: {exc}", file=sys.stderr)
        return 2

    root = args.path if args.path is not None else default_root()
    config = ScanConfig(
        root=root,
        include_globs=tuple(_split_csv(args.include)),
        exclude_words=tuple(_split_csv(args.exclude_words)),
        target_pattern=target_pattern,
        exclude_dirs=tuple(_split_csv(args.exclude_dirs)),
        max_file_size=args.max_file_size,
    )
    logger = configure_logging(verbose=args.verbose)

    scanner = DirectoryScanner(
        config,
        workers=args.workers,
        logger=logger,
        show_progress=not args.no_progress,
    )
    try:
        store = scanner.scan()
    except RootNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    report_path = ReportWriter(args.out, sort=not args.no_sort, logger=logger).write(store)
    logger.info("%s Complete.", LOG_PREFIX)
    print(report_path.as_posix())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
