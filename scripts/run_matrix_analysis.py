#!/usr/bin/env python
"""Rotation matrix analysis — run a YAML job from the command line.

Usage
-----
    # Text report (progress line + histogram)
    python scripts/run_matrix_analysis.py scripts/jobs/three_voice_round.yaml

    # One detail block per snapshot scoring at least 5
    python scripts/run_matrix_analysis.py JOB.yaml --details --min-score 5

    # Machine-readable output
    python scripts/run_matrix_analysis.py JOB.yaml --json

    # Split the work: run the second of four shards, give up after 60 s
    python scripts/run_matrix_analysis.py JOB.yaml --shard 1/4 --timeout 60

Environment
-----------
    SET_CLASS_TABLE   Reference table used when --reference is not given.

Exit codes
----------
    0    — success
    1    — invalid job file or matrix
    2    — unknown set-class name
    130  — interrupted (Ctrl-C or --timeout)
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import os
import sys
import threading
from pathlib import Path

# Add project root to sys.path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv  # noqa: E402

load_dotenv()

from core.matrix_analysis.analyzer import AnalysisCancelledError  # noqa: E402
from core.matrix_analysis.jobs import build_analyzer, load_job  # noqa: E402
from core.matrix_analysis.report import format_summary  # noqa: E402
from core.matrix_analysis.types import AnalysisReport  # noqa: E402
from core.set_theory.dictionary import (  # noqa: E402
    SetClassNotFoundError,
    load_set_class_dictionary,
)

logger = logging.getLogger("run_matrix_analysis")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNKNOWN_SET_CLASS = 2
EXIT_INTERRUPTED = 130


def parse_shard(text: str) -> tuple[int, int]:
    """Parse ``INDEX/COUNT`` (0-based index) for --shard."""
    try:
        index_text, count_text = text.split("/", 1)
        index, count = int(index_text), int(count_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected INDEX/COUNT, got {text!r}") from exc
    if count < 1 or not 0 <= index < count:
        raise argparse.ArgumentTypeError(f"shard index must be in 0..{count - 1}, got {index}")
    return index, count


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Rotation matrix analysis of a YAML job")
    p.add_argument("job", metavar="JOB_YAML", help="Job file describing groups and search sets")
    p.add_argument(
        "--details",
        action="store_true",
        help="Print a detail block for every counted snapshot",
    )
    p.add_argument("--min-score", type=int, default=None, help="Override the job's minimum score")
    p.add_argument("--max-score", type=int, default=None, help="Override the job's maximum score")
    p.add_argument(
        "--reference",
        metavar="TABLE_TSV",
        default=os.getenv("SET_CLASS_TABLE"),
        help="Set-class reference table (default: $SET_CLASS_TABLE or the bundled table)",
    )
    p.add_argument(
        "--shard",
        type=parse_shard,
        default=(0, 1),
        metavar="INDEX/COUNT",
        help="Explore only one shard of the top-level rotations (default: 0/1)",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Cancel the run after this many seconds",
    )
    p.add_argument("--json", action="store_true", help="Print the report as JSON")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def report_to_dict(report: AnalysisReport, description: str) -> dict:
    return {
        "description": description,
        "histogram": {str(score): count for score, count in report.totals},
        "rotation_count": report.rotation_count,
        "maximum_rotations": report.maximum_rotations,
        "details": [dataclasses.asdict(detail) for detail in report.details],
    }


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        job = load_job(args.job)
        config = job.analyzer_config()
        overrides: dict = {}
        if args.details:
            overrides["report_details"] = True
        if args.min_score is not None:
            overrides["min_score"] = args.min_score
        if args.max_score is not None:
            overrides["max_score"] = args.max_score
        config = dataclasses.replace(config, **overrides)

        dictionary = load_set_class_dictionary(args.reference) if job.uses_names else None
        analyzer = build_analyzer(job, dictionary, config=config)
    except SetClassNotFoundError as exc:
        logger.error("%s", exc)
        return EXIT_UNKNOWN_SET_CLASS
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return EXIT_INVALID

    if job.description and not args.json:
        print(job.description)

    cancel = threading.Event()
    timer = threading.Timer(args.timeout, cancel.set) if args.timeout else None
    if timer is not None:
        timer.daemon = True
        timer.start()

    shard_index, shard_count = args.shard
    stream = None if args.json else sys.stdout
    try:
        report = analyzer.run(
            stream=stream,
            cancel=cancel,
            shard_index=shard_index,
            shard_count=shard_count,
        )
    except AnalysisCancelledError as exc:
        logger.warning("%s", exc)
        if args.json:
            print(json.dumps(report_to_dict(exc.report, job.description), indent=2))
        else:
            print()
            print(format_summary(exc.report.histogram), end="")
        return EXIT_INTERRUPTED
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return EXIT_INTERRUPTED
    except ValueError as exc:
        logger.error("%s", exc)
        return EXIT_INVALID
    finally:
        if timer is not None:
            timer.cancel()

    if args.json:
        print(json.dumps(report_to_dict(report, job.description), indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
