"""Timed pairwise comparisons across many algorithms, for diagnostics.

This is the low-level counterpart of :mod:`strrank.ranking`: instead of
ordering candidates it reports the raw score every selected algorithm gives
each ``(query, candidate)`` pair, together with how long the comparison took.
Strings are compared exactly as given (no normalization).
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum, Flag
from functools import reduce
from typing import Any, Iterable, List, Mapping, Optional, Sequence

import pandas as pd
from tabulate import tabulate

from .algorithms import Alg, Category, algorithms_for


logger = logging.getLogger(__name__)

ArgsMap = Mapping[str, Sequence[Any]]


class Families(Flag):
    """Bit set of algorithm categories to include in a run."""

    DISTANCE = 1
    NORMALIZED_DISTANCE = 2
    NORMALIZED_SIMILARITY = 4
    METRIC_DISTANCE = 8
    ALL = 15

    @classmethod
    def parse(cls, names: Iterable[str | Category]) -> "Families":
        """Combine category names or labels into one flag value."""

        selected = [cls[Category.resolve(name).name] for name in names]
        return reduce(lambda acc, flag: acc | flag, selected, cls(0))


class SortMode(Enum):
    CATEGORY = "category"
    TIME = "time"
    RESULT = "result"
    ALGORITHM = "algorithm"

    @classmethod
    def parse(cls, value: "SortMode | str") -> "SortMode":
        if isinstance(value, SortMode):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            choices = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown sort mode '{value}' (expected one of: {choices})") from exc


@dataclass(frozen=True)
class ComparisonResult:
    alg: Alg
    s1: str
    s2: str
    result: float
    time_ns: int

    @property
    def is_sentinel(self) -> bool:
        return self.result == self.alg.sentinel

    def formatted_result(self) -> str:
        return "n/a" if self.is_sentinel else f"{self.result:f}"

    def as_row(self) -> dict[str, Any]:
        return {
            "algorithm": self.alg.label(),
            "category": self.alg.category_label(),
            "query": self.s1,
            "candidate": self.s2,
            "result": self.result,
            "time_ns": self.time_ns,
        }


def parse_algorithms(families: Families = Families.ALL) -> List[Alg]:
    """Expand ``families`` to algorithms in catalogue order."""

    algs: List[Alg] = []
    for category in Category:
        if Families[category.name] in families:
            algs.extend(algorithms_for(category))
    return algs


def _args_for(alg: Alg, args: Optional[ArgsMap]) -> Sequence[Any]:
    if not args:
        return ()
    return tuple(args.get(alg.label(), ()))


def perform_test_with(instance: Optional[Any], s1: str, s2: str, alg: Alg) -> ComparisonResult:
    """Time one comparison using an already built ``instance``."""

    started = time.perf_counter_ns()
    result = alg.score(instance, s1, s2)
    elapsed = time.perf_counter_ns() - started
    return ComparisonResult(alg, s1, s2, result, elapsed)


def perform_test(s1: str, s2: str, alg: Alg, *args: Any) -> ComparisonResult:
    return perform_test_with(alg.build(*args), s1, s2, alg)


def make_test(
    s1: str,
    s2: str,
    algs: Optional[Iterable[Alg]] = None,
    args: Optional[ArgsMap] = None,
    families: Families = Families.ALL,
) -> List[ComparisonResult]:
    """Compare one pair with every selected algorithm.

    ``algs`` takes precedence over ``families``. ``args`` maps an algorithm
    label (e.g. ``"QGRAM"``) to the build arguments to use for it.
    """

    selected = list(algs) if algs is not None else parse_algorithms(families)
    return [perform_test(s1, s2, alg, *_args_for(alg, args)) for alg in selected]


def make_tests(
    s1: str,
    candidates: Iterable[str],
    algs: Optional[Iterable[Alg]] = None,
    args: Optional[ArgsMap] = None,
    families: Families = Families.ALL,
) -> List[List[ComparisonResult]]:
    """Run :func:`make_test` for each candidate; one result list per candidate."""

    selected = list(algs) if algs is not None else parse_algorithms(families)
    results = [make_test(s1, s2, selected, args) for s2 in candidates]
    logger.debug(
        "Ran %d comparison(s) across %d algorithm(s)",
        sum(len(row) for row in results),
        len(selected),
    )
    return results


def sort_results(
    results: Sequence[ComparisonResult],
    mode: SortMode | str = SortMode.CATEGORY,
    descending: bool = True,
) -> List[ComparisonResult]:
    mode = SortMode.parse(mode)
    if mode is SortMode.CATEGORY:
        return sorted(results, key=lambda r: r.alg.type_code)
    if mode is SortMode.RESULT:
        return sorted(results, key=lambda r: r.result, reverse=descending)
    if mode is SortMode.TIME:
        return sorted(results, key=lambda r: r.time_ns, reverse=descending)
    return list(results)


def results_to_frame(
    results: Sequence[ComparisonResult] | Sequence[Sequence[ComparisonResult]],
) -> pd.DataFrame:
    """Flatten one or many result lists into a DataFrame (one row per comparison)."""

    rows: List[dict[str, Any]] = []
    for entry in results:
        if isinstance(entry, ComparisonResult):
            rows.append(entry.as_row())
        else:
            rows.extend(result.as_row() for result in entry)
    columns = ["algorithm", "category", "query", "candidate", "result", "time_ns"]
    return pd.DataFrame(rows, columns=columns)


def _format_table(results: Sequence[ComparisonResult]) -> str:
    frame = results_to_frame(results)
    if frame.empty:
        return "(no data)"
    frame["result"] = [result.formatted_result() for result in results]
    records = frame.to_dict(orient="records")
    return tabulate(
        records,
        headers="keys",
        tablefmt="rounded_grid",
        showindex=False,
        disable_numparse=True,
    )


def format_results(
    results: Sequence[Sequence[ComparisonResult]],
    mode: SortMode | str = SortMode.ALGORITHM,
    descending: bool = True,
) -> str:
    """Render :func:`make_tests` output as titled tables.

    ``ALGORITHM`` mode prints one table per algorithm across all candidates;
    the other modes print one table per candidate, sorted by ``mode``.
    """

    mode = SortMode.parse(mode)
    rows = [list(row) for row in results if row]
    if not rows:
        return "(no data)"

    sections: List[str] = []
    if mode is SortMode.ALGORITHM:
        for index, result in enumerate(rows[0]):
            group = [row[index] for row in rows]
            sections.append(f"---------- {result.alg} ----------\n{_format_table(group)}")
    else:
        for row in rows:
            ordered = sort_results(row, mode, descending)
            sections.append(f"---------- {row[0].s2} ----------\n{_format_table(ordered)}")
    return "\n\n".join(sections)


__all__ = [
    "ComparisonResult",
    "Families",
    "SortMode",
    "format_results",
    "make_test",
    "make_tests",
    "parse_algorithms",
    "perform_test",
    "perform_test_with",
    "results_to_frame",
    "sort_results",
]
