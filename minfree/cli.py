from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path

from .finder import find_smallest_free, search
from .reporting import render_report, summarize_results, write_csv, write_text
from .runner import run_suite


_SEP_RE = re.compile(r"[\s,]+")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="minfree", description="Smallest free number")
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    find = sub.add_parser("find", help="Smallest free number of a list")
    find.add_argument("numbers", nargs="*", type=int, help="Non-negative integers")
    find.add_argument(
        "--input",
        default="",
        help="Read numbers from this file instead (whitespace or comma separated)",
    )

    trace = sub.add_parser("trace", help="Print each search step")
    trace.add_argument("numbers", nargs="*", type=int, help="Non-negative integers")
    trace.add_argument(
        "--input",
        default="",
        help="Read numbers from this file instead (whitespace or comma separated)",
    )

    run = sub.add_parser("run", help="Run a suite of cases and report Ok/Failed")
    run.add_argument(
        "--config",
        default="",
        help="Suite YAML path (if empty, runs the built-in suite)",
    )
    run.add_argument(
        "--output",
        default="",
        help="Write per-case results CSV to this path (sep=';')",
    )
    run.add_argument(
        "--summary-out",
        default="",
        help="Write per-group summary CSV to this path (sep=';')",
    )
    run.add_argument(
        "--report-out",
        default="",
        help="Write the Expected/Got report lines to this path",
    )
    run.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print one line per case",
    )

    return p


def read_numbers(path: str | Path) -> list[int]:
    text = Path(path).read_text(encoding="utf-8")
    out: list[int] = []
    for tok in _SEP_RE.split(text.strip()):
        if not tok:
            continue
        try:
            out.append(int(tok))
        except ValueError:
            raise ValueError(f"{path}: not an integer: {tok!r}") from None
    return out


def _numbers_from_args(args: argparse.Namespace) -> list[int]:
    if args.input:
        if args.numbers:
            raise ValueError(
                "give numbers either as arguments or with --input, not both"
            )
        return read_numbers(args.input)
    return list(args.numbers)


def _run(args: argparse.Namespace) -> int:
    if args.cmd == "find":
        print(find_smallest_free(_numbers_from_args(args)))
        return 0

    if args.cmd == "trace":
        result = search(_numbers_from_args(args))
        for i, s in enumerate(result.steps):
            side = "right" if s.in_right else "left"
            print(
                f"step={i} start={s.start} length={s.length} pv={s.pv} "
                f"left_len={s.left_len} -> {side}"
            )
        print(f"result={result.value}")
        return 0

    if args.cmd == "run":
        results, summary = run_suite(config_path=(args.config or None))

        if not args.quiet:
            sys.stdout.write(render_report(results))

        if args.output:
            write_csv(results, args.output)
            print(f"wrote_results={args.output}")

        if args.summary_out:
            write_csv(summarize_results(results), args.summary_out)
            print(f"wrote_summary={args.summary_out}")

        if args.report_out:
            write_text(args.report_out, render_report(results))
            print(f"wrote_report={args.report_out}")

        print(f"cases={summary.cases}")
        print(f"ok={summary.ok}")
        print(f"failed={summary.failed}")
        return 0 if summary.all_ok else 1

    raise AssertionError(f"Unhandled command: {args.cmd}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        return _run(args)
    except (ValueError, TypeError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
