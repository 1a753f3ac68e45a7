from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from .cases import FreeNumberCase, missing_each_cases, missing_single_case


DEFAULT_SUITE_PATH = Path(__file__).resolve().parent / "default_suite.yaml"


@dataclass(frozen=True)
class MissingSingleSpec:
    upper: int
    exclude: int


@dataclass(frozen=True)
class MissingEachSpec:
    upper: int


@dataclass(frozen=True)
class SuiteConfig:
    version: str
    cases: tuple[FreeNumberCase, ...] = ()
    missing_single: tuple[MissingSingleSpec, ...] = ()
    missing_each: tuple[MissingEachSpec, ...] = ()


def _as_mapping(x: Any, *, field: str) -> Mapping[str, Any]:
    if x is None:
        return {}
    if not isinstance(x, Mapping):
        raise TypeError(f"{field} must be a mapping, got {type(x).__name__}")
    return x


def _as_items(x: Any, *, field: str) -> list[Mapping[str, Any]]:
    if x is None:
        return []
    if not isinstance(x, list):
        raise TypeError(f"{field} must be a list, got {type(x).__name__}")
    return [_as_mapping(item, field=f"{field}[{i}]") for i, item in enumerate(x)]


def _as_int(x: Any, *, field: str) -> int:
    # YAML booleans are ints in Python; reject them explicitly.
    if isinstance(x, bool) or not isinstance(x, int):
        raise TypeError(f"{field} must be an integer, got {x!r}")
    return x


def _load_cases(suite: Mapping[str, Any]) -> tuple[FreeNumberCase, ...]:
    out: list[FreeNumberCase] = []
    for i, item in enumerate(_as_items(suite.get("cases"), field="suite.cases")):
        field = f"suite.cases[{i}]"
        label = str(item.get("label") or "").strip()
        if not label:
            raise ValueError(f"{field}.label must be non-empty")

        raw_numbers = item.get("numbers")
        if raw_numbers is None:
            raw_numbers = []
        if not isinstance(raw_numbers, list):
            raise TypeError(f"{field}.numbers must be a list")
        numbers = tuple(
            _as_int(v, field=f"{field}.numbers[{j}]") for j, v in enumerate(raw_numbers)
        )

        if "expected" not in item:
            raise ValueError(f"Missing required config: {field}.expected")
        expected = _as_int(item["expected"], field=f"{field}.expected")

        out.append(FreeNumberCase(label=label, numbers=numbers, expected=expected))
    return tuple(out)


def _load_missing_single(suite: Mapping[str, Any]) -> tuple[MissingSingleSpec, ...]:
    items = _as_items(suite.get("missing_single"), field="suite.missing_single")
    out: list[MissingSingleSpec] = []
    for i, item in enumerate(items):
        field = f"suite.missing_single[{i}]"
        upper = _as_int(item.get("upper"), field=f"{field}.upper")
        exclude = _as_int(item.get("exclude"), field=f"{field}.exclude")
        if not (0 <= exclude <= upper):
            raise ValueError(
                f"Invalid {field}: expected 0 <= exclude <= upper, got {exclude} and {upper}"
            )
        out.append(MissingSingleSpec(upper=upper, exclude=exclude))
    return tuple(out)


def _load_missing_each(suite: Mapping[str, Any]) -> tuple[MissingEachSpec, ...]:
    items = _as_items(suite.get("missing_each"), field="suite.missing_each")
    out: list[MissingEachSpec] = []
    for i, item in enumerate(items):
        upper = _as_int(item.get("upper"), field=f"suite.missing_each[{i}].upper")
        if upper < 0:
            raise ValueError(f"suite.missing_each[{i}].upper must be >= 0")
        out.append(MissingEachSpec(upper=upper))
    return tuple(out)


def load_config(path: str | Path) -> SuiteConfig:
    """Load a suite YAML file into typed dataclasses."""

    p = Path(path)
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, Mapping):
        raise TypeError("Config root must be a mapping")

    version = str(data.get("version", "")).strip()
    if not version:
        raise ValueError("Missing required config: version")

    suite = _as_mapping(data.get("suite"), field="suite")
    cfg = SuiteConfig(
        version=version,
        cases=_load_cases(suite),
        missing_single=_load_missing_single(suite),
        missing_each=_load_missing_each(suite),
    )
    if not (cfg.cases or cfg.missing_single or cfg.missing_each):
        raise ValueError("Suite must define at least one case")
    return cfg


def build_cases(cfg: SuiteConfig) -> list[FreeNumberCase]:
    out = list(cfg.cases)
    out.extend(missing_single_case(s.upper, s.exclude) for s in cfg.missing_single)
    for s in cfg.missing_each:
        out.extend(missing_each_cases(s.upper))
    return out
