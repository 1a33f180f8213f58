#!/usr/bin/env python3
"""
Main CLI Entry Point - Definition Harvester
Harvests one job's slice of the word list per invocation

Usage:
    python main_cli.py 1
    python main_cli.py 3 --words-file words.txt --output-dir out --resume
"""

import argparse
import logging
import sys
from dataclasses import replace

from core.config import get_config, setup_logging
from core.errors import HarvestError, InvalidJobNumber
from core.models import validate_job_number
from harvesters.job_runner import JobRunner

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    """argparse type for a positive integer job number"""
    try:
        return validate_job_number(int(value))
    except (ValueError, InvalidJobNumber):
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Harvest word definitions for one job of the word list',
    )
    parser.add_argument('job_number', type=positive_int,
                        help='1-based job number selecting the slice of the word list')
    parser.add_argument('--words-file', help='Word list, one word per line')
    parser.add_argument('--output-dir', help='Directory for per-job output files')
    parser.add_argument('--job-size', type=positive_int, help='Words per job')
    parser.add_argument('--delay', type=float, metavar='SECONDS',
                        help='Pause before each request')
    parser.add_argument('--plain-text', action='store_true',
                        help='Store definition text instead of markup')
    parser.add_argument('--resume', action='store_true',
                        help="Keep the job's existing results and skip words already harvested")
    parser.add_argument('--no-progress', action='store_true',
                        help='Disable the progress bar')
    parser.add_argument('--log-level', help='Logging level (DEBUG, INFO, WARNING, ...)')
    return parser


def apply_overrides(config, args):
    """Command line options take precedence over file and environment settings"""
    overrides = {}
    if args.words_file:
        overrides['words_file'] = args.words_file
    if args.output_dir:
        overrides['output_dir'] = args.output_dir
    if args.job_size:
        overrides['job_size'] = args.job_size
    if args.delay is not None:
        overrides['delay_seconds'] = args.delay
    if args.plain_text:
        overrides['plain_text'] = True
    if args.log_level:
        overrides['log_level'] = args.log_level
    return replace(config, **overrides) if overrides else config


def main(argv=None):
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = apply_overrides(get_config(), args)
    except (ValueError, TypeError, OSError) as e:
        print(f"[ERROR] Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.log_file)

    runner = JobRunner.from_config(config, resume=args.resume, show_progress=not args.no_progress)
    try:
        summary = runner.run_job(args.job_number)
    except HarvestError as e:
        logger.error(f"Job {args.job_number} aborted: {e}")
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    finally:
        runner.fetcher.close()

    print(
        f"[OK] Job {summary.job_number}: recorded {summary.recorded} | "
        f"empty {summary.empty} | failed {summary.failed} | "
        f"skipped {summary.skipped} -> {summary.output_path}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
