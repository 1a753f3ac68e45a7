from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import pandas as pd

from .cases import FreeNumberCase, default_cases
from .config import build_cases, load_config
from .finder import find_smallest_free
from .reporting import STATUS_OK, result_status


logger = logging.getLogger(__name__)

RESULT_COLUMNS = [
    "label",
    "group",
    "size",
    "expected",
    "actual",
    "status",
    "elapsed_ms",
]


@dataclass(frozen=True)
class RunSummary:
    cases: int
    ok: int
    failed: int
    failed_labels: tuple[str, ...]

    @property
    def all_ok(self) -> bool:
        return self.failed == 0


def run_cases(cases: Sequence[FreeNumberCase]) -> tuple[pd.DataFrame, RunSummary]:
    rows: list[dict[str, object]] = []
    for case in cases:
        t0 = time.perf_counter()
        actual = find_smallest_free(case.numbers)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0

        status = result_status(case.expected, actual)
        if status != STATUS_OK:
            logger.warning(
                "Case %r failed: expected %d, got %d", case.label, case.expected, actual
            )
        rows.append(
            {
                "label": case.label,
                "group": case.group,
                "size": len(case.numbers),
                "expected": int(case.expected),
                "actual": int(actual),
                "status": status,
                "elapsed_ms": elapsed_ms,
            }
        )

    out = pd.DataFrame(rows, columns=RESULT_COLUMNS)
    failed = out.loc[out["status"] != STATUS_OK, "label"].astype(str).tolist()

    summary = RunSummary(
        cases=int(len(out)),
        ok=int(len(out) - len(failed)),
        failed=int(len(failed)),
        failed_labels=tuple(failed),
    )
    logger.info(
        "Ran %d cases: %d ok, %d failed", summary.cases, summary.ok, summary.failed
    )
    return out, summary


def run_suite(
    *, config_path: str | Path | None = None
) -> tuple[pd.DataFrame, RunSummary]:
    """Run the suite at ``config_path``, or the built-in suite when None."""

    if config_path is None:
        cases = default_cases()
    else:
        cfg = load_config(config_path)
        logger.info("Loaded suite %s (version %s)", config_path, cfg.version)
        cases = build_cases(cfg)
    return run_cases(cases)
