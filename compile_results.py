#!/usr/bin/env python3
"""
Compile per-job harvest output into a single file, or report job progress.

Usage:
    python compile_results.py
    python compile_results.py --output-dir out --out compiled.json
    python compile_results.py --status
"""

import argparse
import logging
import re
import sys
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Tuple

from core.config import HarvestConfig, get_config, setup_logging
from core.errors import HarvestError
from core.models import Job
from harvesters.result_store import load_results, merge_result_files, write_results
from harvesters.word_source import WordSource

logger = logging.getLogger(__name__)


def find_job_outputs(config: HarvestConfig) -> List[Tuple[int, Path]]:
    """Existing job output files as ``(job_number, path)``, ordered by job number"""
    pattern = re.compile(
        "^" + re.escape(config.output_template).replace(re.escape("{job}"), r"(\d+)") + "$"
    )
    found = []
    output_dir = Path(config.output_dir)
    if not output_dir.is_dir():
        return found
    for path in output_dir.iterdir():
        match = pattern.match(path.name)
        if match and path.is_file():
            found.append((int(match.group(1)), path))
    return sorted(found)


def compile_outputs(config: HarvestConfig, out_path: Path) -> int:
    outputs = find_job_outputs(config)
    if not outputs:
        print(f"No job output files found in {config.output_dir}")
        return 0

    print(f"Reading {len(outputs)} job files ...")
    merged = merge_result_files(path for _, path in outputs)
    write_results(out_path, merged)
    print(f"loaded this many entries: {len(merged)}")
    print(f"Compiled results written to {out_path}")
    return len(merged)


def job_status(config: HarvestConfig) -> Dict[int, Tuple[int, int]]:
    """Map job number -> (recorded, slice size) for every job of the word list"""
    words = WordSource(config.words_file).load()
    outputs = dict(find_job_outputs(config))
    status = {}

    for number in range(1, Job.count_for(len(words), config.job_size) + 1):
        job_words = Job(number, config.job_size).select(words)
        recorded = 0
        if number in outputs:
            results = load_results(outputs[number])
            recorded = len(set(job_words) & set(results))
        status[number] = (recorded, len(job_words))
    return status


def print_status(config: HarvestConfig):
    status = job_status(config)
    total_recorded = sum(recorded for recorded, _ in status.values())
    total_words = sum(size for _, size in status.values())

    print("Definition Harvest Progress:")
    for number, (recorded, size) in status.items():
        marker = "[OK]" if recorded == size else ("[--]" if recorded == 0 else "[..]")
        print(f"  {marker} Job {number}: {recorded:,} of {size:,}")
    if total_words:
        print(f"  Total: {total_recorded:,} of {total_words:,} ({total_recorded/total_words*100:.1f}%)")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Compile harvested definitions')
    parser.add_argument('--output-dir', help='Directory holding per-job output files')
    parser.add_argument('--words-file', help='Word list used for the harvest')
    parser.add_argument('--out', help='Compiled output file')
    parser.add_argument('--status', action='store_true', help='Report per-job progress instead')
    args = parser.parse_args(argv)

    try:
        config = get_config()
        overrides = {}
        if args.output_dir:
            overrides['output_dir'] = args.output_dir
        if args.words_file:
            overrides['words_file'] = args.words_file
        if overrides:
            config = replace(config, **overrides)
    except (ValueError, TypeError, OSError) as e:
        print(f"[ERROR] Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level, config.log_file)

    try:
        if args.status:
            print_status(config)
        else:
            compile_outputs(config, Path(args.out) if args.out else config.compiled_path())
    except HarvestError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
