"""
Command-line entry point.

    ctxgrep [options] SOURCE TARGET [TARGET ...]

Scans SOURCE (file, block device, or "-" for stdin) for any TARGET and
writes each match's surrounding chunks to stdout (or --output). Progress
and match lines go to stderr.

Exit codes: 0 success, 1 source could not be opened, 2 usage or
configuration error, 130 interrupted.
"""

from __future__ import annotations

import argparse
import sys
from contextlib import ExitStack
from typing import Optional, Sequence

from pydantic import ValidationError

from .config import ScanConfig
from .intake.validator import SourceOpenError
from .logs import init_logging
from .orchestration.runner import scan_path
from .pipeline.emitter import StreamSink
from .pipeline.patterns import PatternSet
from .pipeline.progress import ProgressReporter


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ctxgrep",
        description="Scan a byte stream for fixed targets and dump the chunks around each match.",
    )
    ap.add_argument("source", help="File or device to scan; '-' reads stdin.")
    ap.add_argument("targets", nargs="+", metavar="TARGET", help="Byte string(s) to look for.")
    ap.add_argument("--output", "-o", default=None, help="Write windows here instead of stdout.")
    ap.add_argument("--ring-capacity", type=int, default=None, help="Chunk slots in the ring (even; default 16).")
    ap.add_argument("--chunk-size", type=int, default=None, help="Bytes per chunk (default 4096).")
    ap.add_argument("--hex", action="store_true", help="Targets are hex strings, e.g. 7f454c46.")
    ap.add_argument(
        "--decompress",
        choices=("none", "gzip", "zstd", "auto"),
        default=None,
        help="Decompress the source before scanning (default none).",
    )
    ap.add_argument("--progress-interval", type=int, default=None, help="Bytes between progress lines (default 1 GiB).")
    ap.add_argument("--progress-bar", action="store_true", help="Show a tqdm byte counter on stderr.")
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ... (default INFO).")
    ap.add_argument("--log-file", default=None, help="Also log to this rotating file.")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    try:
        config = ScanConfig.from_env(
            ring_capacity=args.ring_capacity,
            chunk_size=args.chunk_size,
            decompress=args.decompress,
            progress_interval_bytes=args.progress_interval,
            log_level=args.log_level,
            log_file=args.log_file,
        )
    except ValidationError as e:
        print(f"ctxgrep: invalid configuration:\n{e}", file=sys.stderr)
        return 2

    logger = init_logging(config.log_level, config.log_file)

    try:
        patterns = PatternSet.from_strings(args.targets, as_hex=args.hex)
    except ValueError as e:
        logger.error("invalid target: %s", e)
        return 2

    if args.progress_bar:
        reporter = ProgressReporter.with_bar(logger, interval_bytes=config.progress_interval_bytes)
    else:
        reporter = ProgressReporter(logger, interval_bytes=config.progress_interval_bytes)

    with ExitStack() as stack:
        stack.callback(reporter.close)
        if args.output:
            try:
                out = stack.enter_context(open(args.output, "wb"))
            except OSError as e:
                logger.error("cannot open output %s: %s", args.output, e)
                return 1
        else:
            out = sys.stdout.buffer
        sink = StreamSink(out)

        try:
            scan_path(args.source, patterns, sink, config, reporter)
            sink.close()
        except SourceOpenError as e:
            logger.error("open file failed: %s", e)
            return 1
        except BrokenPipeError:
            # Downstream (e.g. `| head`) went away; nothing left to do.
            return 0
        except KeyboardInterrupt:
            logger.info("interrupted")
            sink.close()
            return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
