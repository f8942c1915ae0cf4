#!/usr/bin/env python3
"""
main.py
=======
Command-line entry point of the traffic-signaling judge.

Reads ``<input>`` and ``<input>.out.txt``, evaluates the submission and
prints the insights report or writes it next to the input.

Environment overrides: ``JUDGE_LOG_LEVEL`` (default ``WARNING``) and
``JUDGE_LOG_FILE`` (default ``judge.log``; empty disables the file).
"""

import logging
import math
import os
import sys
import tracemalloc
from typing import List, Optional

import config
from logging_setup import setup_logging
from report.diagnostics import ElapsedTimer, memory_usage_message
from report.render import render_report
from report.tables import write_car_csv
from sim.judge import evaluate, read_inputs

log = logging.getLogger("main")

USAGE = f"""Usage:
  traffic-judge <input-file-path> [output-to-stdout] [debug] [cars-csv]

Options:
  input-file-path   The path of the input data set.
  output-to-stdout  Write the insights to stdout (1) or file (0) [default: 1].
  debug             Log memory usage and elapsed time information [default: 0].
  cars-csv          Also write per-car results to <input>{config.CARS_CSV_SUFFIX} [default: 0].

Examples:
  traffic-judge data/a.txt
    This will parse the given input data set (data/a.txt)
    with its submission (data/a.txt{config.SUBMISSION_SUFFIX}) then evaluate and
    print the insights to the stdout.

  traffic-judge data/d.txt 0
    This will parse the given input data set (data/d.txt)
    with its submission (data/d.txt{config.SUBMISSION_SUFFIX}) then evaluate and
    create a file (data/d.txt{config.INSIGHTS_SUFFIX}) containing insights.
"""


def _flag(value: str) -> Optional[bool]:
    """Parse a numeric CLI flag: any non-zero number is on, ``None`` when it
    is not a number."""
    try:
        number = float(value)
    except ValueError:
        return None
    if math.isnan(number):
        return None
    return number != 0


def _log_level(debug: bool) -> int:
    if debug:
        return logging.INFO
    name = os.environ.get("JUDGE_LOG_LEVEL", config.DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, name, logging.WARNING)


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    file_path = args[0] if args else ""
    flags = [_flag(a) for a in args[1:4]]

    if not file_path or any(f is None for f in flags):
        print(USAGE)
        return 0

    to_stdout, debug, cars_csv = (flags + [True, False, False][len(flags):])[:3]

    setup_logging(
        _log_level(debug),
        log_file=os.environ.get("JUDGE_LOG_FILE", config.LOG_FILE),
    )
    if debug:
        tracemalloc.start()
    timer = ElapsedTimer(enabled=debug)

    try:
        dataset_text, submission_text = read_inputs(
            file_path, file_path + config.SUBMISSION_SUFFIX,
        )
        evaluation = evaluate(dataset_text, submission_text)

        if to_stdout:
            print(render_report(evaluation.insights, color=True))
        else:
            out_path = file_path + config.INSIGHTS_SUFFIX
            with open(out_path, "w", encoding="utf-8") as fh:
                fh.write(render_report(evaluation.insights, color=False))
            log.info("Insights written to %s", out_path)

        if cars_csv:
            write_car_csv(evaluation.city, file_path + config.CARS_CSV_SUFFIX)

        if debug:
            log.info(memory_usage_message())
        timer.log("Elapsed time").reset()
    except Exception as exc:
        log.error("Evaluation failed: %s", exc)
        log.debug("Traceback", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        if debug:
            tracemalloc.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
