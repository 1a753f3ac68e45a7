from __future__ import annotations

from pathlib import Path

import pandas as pd


STATUS_OK = "Ok"
STATUS_FAILED = "Failed"

_REPORT_COLS = ["label", "expected", "actual"]
_SUMMARY_COLS = ["group", "status", "size", "elapsed_ms"]


def result_status(expected: int, actual: int) -> str:
    return STATUS_OK if expected == actual else STATUS_FAILED


def format_result_line(label: str, expected: int, actual: int) -> str:
    return (
        f"{label} Expected: {int(expected)} Got: {int(actual)} "
        f"{result_status(expected, actual)}"
    )


def _require_columns(df: pd.DataFrame, cols: list[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise KeyError(f"Missing columns in results df: {missing}")


def render_report(results: pd.DataFrame) -> str:
    """One ``<label> Expected: <e> Got: <a> <status>`` line per result row."""

    _require_columns(results, _REPORT_COLS)
    lines = [
        format_result_line(str(row.label), row.expected, row.actual)
        for row in results.itertuples(index=False)
    ]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def summarize_results(results: pd.DataFrame) -> pd.DataFrame:
    """Aggregate a result table per ``group``.

    Columns: group, n_cases, n_ok, n_failed, size_max, elapsed_ms_mean,
    elapsed_ms_std. Groups keep their first-seen order.
    """

    _require_columns(results, _SUMMARY_COLS)

    ok = results["status"].eq(STATUS_OK)
    tmp = results.assign(_ok=ok.astype(int), _failed=(~ok).astype(int))
    grp = tmp.groupby("group", sort=False, dropna=False)

    out = grp.agg(
        n_cases=("status", "size"),
        n_ok=("_ok", "sum"),
        n_failed=("_failed", "sum"),
        size_max=("size", "max"),
        elapsed_ms_mean=("elapsed_ms", "mean"),
        elapsed_ms_std=("elapsed_ms", "std"),
    ).reset_index()
    # std of a single-case group is NaN; report it as zero spread.
    out["elapsed_ms_std"] = out["elapsed_ms_std"].fillna(0.0)
    return out


def write_csv(df: pd.DataFrame, path: str | Path, *, sep: str = ";") -> None:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False, sep=sep)


def write_text(path: str | Path, content: str) -> None:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(content, encoding="utf-8")
