"""Console entry point for quizverify."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import RunnerConfig
from .errors import SessionInitError
from .quiz import run_quiz_scenario

logger = logging.getLogger(__name__)

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_SESSION_ERROR = 2

LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quizverify",
        description="Run the end-to-end quiz scenario against a browser.",
    )
    parser.add_argument("entry", nargs="?", default=None, help="quiz entry file or URL")
    parser.add_argument("--headed", action="store_true", help="show the browser window")
    parser.add_argument("--timeout", type=float, default=None, help="wait budget per condition (s)")
    parser.add_argument("--poll", type=float, default=None, help="poll interval (s)")
    parser.add_argument("--screenshots-dir", default=None)
    parser.add_argument("--no-screenshots", action="store_true")
    parser.add_argument("--report", type=Path, default=None, help="write the JSON result here")
    parser.add_argument("--log-level", choices=LOG_LEVEL_CHOICES, default="INFO")
    return parser


def config_from_args(args: argparse.Namespace) -> RunnerConfig:
    return RunnerConfig.from_env(
        entry=args.entry,
        headless=False if args.headed else None,
        timeout_s=args.timeout,
        poll_s=args.poll,
        screenshots_dir=args.screenshots_dir,
        screenshots=False if args.no_screenshots else None,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = config_from_args(args)

    try:
        result = run_quiz_scenario(config)
    except SessionInitError as e:
        logger.error(str(e))
        return EXIT_SESSION_ERROR

    if args.report is not None:
        args.report.parent.mkdir(parents=True, exist_ok=True)
        args.report.write_text(result.model_dump_json(indent=2))
        logger.info(f"Report written to {args.report}")

    if result.passed:
        print(f"PASSED ({len(result.checkpoints)} checkpoints, {result.duration_ms}ms)")
        return EXIT_PASSED

    failure = result.failure
    where = f"checkpoint {failure.checkpoint}" if failure and failure.checkpoint else "setup"
    print(f"FAILED at {where}: {failure.message if failure else 'unknown error'}")
    return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
