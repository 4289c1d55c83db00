"""Pairwise string comparators backed by RapidFuzz.

Every comparator is immutable once built and exposes ``distance`` and/or
``similarity`` taking two already-normalized strings. Edit-distance style
measures delegate to :mod:`rapidfuzz.distance`; shingle based measures and
the weighted/positional variants RapidFuzz does not ship are computed here.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

import numpy as np
import textdistance
from rapidfuzz.distance import OSA, DamerauLevenshtein, Indel, Jaro, LCSseq
from rapidfuzz.distance import Levenshtein as _Levenshtein

SubstitutionCost = Callable[[str, str], float]
CharacterCost = Callable[[str], float]

_SPACE_RUN = re.compile(r"\s+")
_WINKLER_SCALING = 0.1
_WINKLER_PREFIX = 4
_NGRAM_PAD = "\n"

# Profiles are passed in as Counters, so qval is unused; as_set counts
# distinct shingles only.
_SET_JACCARD = textdistance.Jaccard(as_set=True, external=False)
_SET_SORENSEN = textdistance.Sorensen(as_set=True, external=False)


def _unit_cost(_char: str) -> float:
    return 1.0


def shingle_profile(value: str, k: int) -> Counter[str]:
    """Count the ``k``-shingles of ``value`` after collapsing whitespace runs."""

    text = _SPACE_RUN.sub(" ", value)
    return Counter(text[i : i + k] for i in range(len(text) - k + 1))


class Levenshtein:
    def distance(self, s1: str, s2: str) -> float:
        return float(_Levenshtein.distance(s1, s2))


class NormalizedLevenshtein:
    """Levenshtein distance divided by the length of the longer string."""

    def distance(self, s1: str, s2: str) -> float:
        return float(_Levenshtein.normalized_distance(s1, s2))

    def similarity(self, s1: str, s2: str) -> float:
        return 1.0 - self.distance(s1, s2)


class Damerau:
    """Unrestricted Damerau-Levenshtein distance (adjacent transpositions)."""

    def distance(self, s1: str, s2: str) -> float:
        return float(DamerauLevenshtein.distance(s1, s2))


class OptimalStringAlignment:
    """Restricted edit distance: no substring is edited more than once."""

    def distance(self, s1: str, s2: str) -> float:
        return float(OSA.distance(s1, s2))


class LongestCommonSubsequence:
    """``len(s1) + len(s2) - 2 * lcs(s1, s2)``."""

    def distance(self, s1: str, s2: str) -> float:
        return float(Indel.distance(s1, s2))


class MetricLCS:
    """``1 - lcs(s1, s2) / max(len(s1), len(s2))``."""

    def distance(self, s1: str, s2: str) -> float:
        return float(LCSseq.normalized_distance(s1, s2))


@dataclass(frozen=True)
class JaroWinkler:
    """Jaro similarity with the Winkler common-prefix bonus.

    The bonus is only applied once the plain Jaro similarity exceeds
    ``threshold``.
    """

    threshold: float = 0.7

    def similarity(self, s1: str, s2: str) -> float:
        if s1 == s2:
            return 1.0
        jaro = float(Jaro.similarity(s1, s2))
        if jaro <= self.threshold:
            return jaro
        prefix = 0
        for a, b in zip(s1[:_WINKLER_PREFIX], s2[:_WINKLER_PREFIX]):
            if a != b:
                break
            prefix += 1
        scaling = min(_WINKLER_SCALING, 1.0 / max(len(s1), len(s2)))
        return jaro + scaling * prefix * (1.0 - jaro)

    def distance(self, s1: str, s2: str) -> float:
        return 1.0 - self.similarity(s1, s2)


@dataclass(frozen=True)
class NGram:
    """Kondrak's positional n-gram distance, normalized to ``[0, 1]``."""

    n: int = 2

    def __post_init__(self) -> None:
        if self.n <= 0:
            raise ValueError("n must be positive")

    def distance(self, s1: str, s2: str) -> float:
        if s1 == s2:
            return 0.0
        sl, tl = len(s1), len(s2)
        if sl == 0 or tl == 0:
            return 1.0
        n = self.n
        longest = max(sl, tl)
        if sl < n or tl < n:
            matches = sum(1 for a, b in zip(s1, s2) if a == b)
            return 1.0 - matches / longest

        padded = _NGRAM_PAD * (n - 1) + s1
        prev = [float(i) for i in range(sl + 1)]
        cur = [0.0] * (sl + 1)
        for j in range(1, tl + 1):
            if j < n:
                gram = _NGRAM_PAD * (n - j) + s2[:j]
            else:
                gram = s2[j - n : j]
            cur[0] = float(j)
            for i in range(1, sl + 1):
                cost = 0
                total = n
                for offset in range(n):
                    ch = padded[i - 1 + offset]
                    if ch != gram[offset]:
                        cost += 1
                    elif ch == _NGRAM_PAD:
                        total -= 1
                cur[i] = min(cur[i - 1] + 1, prev[i] + 1, prev[i - 1] + cost / total)
            prev, cur = cur, prev
        return prev[sl] / longest


@dataclass(frozen=True)
class _ShingleMeasure:
    k: int = 3

    def __post_init__(self) -> None:
        if self.k <= 0:
            raise ValueError("k must be positive")

    def profile(self, value: str) -> Counter[str]:
        return shingle_profile(value, self.k)


class QGram(_ShingleMeasure):
    """L1 distance between the shingle count profiles."""

    def distance(self, s1: str, s2: str) -> float:
        if s1 == s2:
            return 0.0
        p1, p2 = self.profile(s1), self.profile(s2)
        return float(sum(abs(p1[key] - p2[key]) for key in p1.keys() | p2.keys()))


class Cosine(_ShingleMeasure):
    def similarity(self, s1: str, s2: str) -> float:
        if s1 == s2:
            return 1.0
        if len(s1) < self.k or len(s2) < self.k:
            return 0.0
        p1, p2 = self.profile(s1), self.profile(s2)
        keys = list(p1.keys() | p2.keys())
        v1 = np.fromiter((p1[key] for key in keys), dtype=float, count=len(keys))
        v2 = np.fromiter((p2[key] for key in keys), dtype=float, count=len(keys))
        denom = float(np.linalg.norm(v1) * np.linalg.norm(v2))
        if denom == 0.0:
            return 0.0
        return float(np.dot(v1, v2)) / denom

    def distance(self, s1: str, s2: str) -> float:
        return 1.0 - self.similarity(s1, s2)


class Jaccard(_ShingleMeasure):
    """Shingle-set intersection over union; the distance is a metric."""

    def similarity(self, s1: str, s2: str) -> float:
        if s1 == s2:
            return 1.0
        p1, p2 = self.profile(s1), self.profile(s2)
        if not p1 or not p2:
            return 0.0
        return float(_SET_JACCARD(p1, p2))

    def distance(self, s1: str, s2: str) -> float:
        return 1.0 - self.similarity(s1, s2)


class SorensenDice(_ShingleMeasure):
    def similarity(self, s1: str, s2: str) -> float:
        if s1 == s2:
            return 1.0
        p1, p2 = self.profile(s1), self.profile(s2)
        if not p1 or not p2:
            return 0.0
        return float(_SET_SORENSEN(p1, p2))

    def distance(self, s1: str, s2: str) -> float:
        return 1.0 - self.similarity(s1, s2)


def substitution_cost_fn(costs: Any) -> Optional[SubstitutionCost]:
    """Coerce a substitution cost table into ``(a, b) -> cost``.

    Accepts a callable, an object with a ``cost(a, b)`` method, or a mapping
    keyed by ``(a, b)`` tuples or two-character strings. Pairs missing from a
    mapping cost ``1.0``. Returns ``None`` for anything else.
    """

    if isinstance(costs, Mapping):
        table: dict[Tuple[str, str], float] = {}
        for key, value in costs.items():
            if isinstance(key, tuple) and len(key) == 2:
                pair = (str(key[0]), str(key[1]))
            elif isinstance(key, str) and len(key) == 2:
                pair = (key[0], key[1])
            else:
                return None
            table[pair] = float(value)
        return lambda a, b: table.get((a, b), 1.0)
    method = getattr(costs, "cost", None)
    if callable(method):
        return method
    if callable(costs):
        return costs
    return None


def insdel_cost_fns(costs: Any) -> Optional[Tuple[CharacterCost, CharacterCost]]:
    """Coerce an insertion/deletion cost table into ``(insertion, deletion)``.

    Accepts an object exposing ``insertion_cost(c)`` and ``deletion_cost(c)``
    or a ``char -> cost`` mapping used for both operations (missing
    characters cost ``1.0``). Returns ``None`` for anything else.
    """

    if isinstance(costs, Mapping):
        table = {str(key): float(value) for key, value in costs.items()}
        fn: CharacterCost = lambda c: table.get(c, 1.0)
        return fn, fn
    insertion = getattr(costs, "insertion_cost", None)
    deletion = getattr(costs, "deletion_cost", None)
    if callable(insertion) and callable(deletion):
        return insertion, deletion
    return None


@dataclass(frozen=True)
class WeightedLevenshtein:
    """Levenshtein distance with per-character operation costs."""

    substitution: SubstitutionCost
    insertion: CharacterCost = field(default=_unit_cost)
    deletion: CharacterCost = field(default=_unit_cost)

    def distance(self, s1: str, s2: str) -> float:
        if s1 == s2:
            return 0.0
        if not s1:
            return float(sum(self.insertion(c) for c in s2))
        if not s2:
            return float(sum(self.deletion(c) for c in s1))

        prev = [0.0] * (len(s2) + 1)
        for j, ch in enumerate(s2, start=1):
            prev[j] = prev[j - 1] + self.insertion(ch)

        for a in s1:
            deletion = self.deletion(a)
            cur = [prev[0] + deletion]
            for j, b in enumerate(s2, start=1):
                cost = 0.0 if a == b else self.substitution(a, b)
                cur.append(
                    min(cur[j - 1] + self.insertion(b), prev[j] + deletion, prev[j - 1] + cost)
                )
            prev = cur
        return float(prev[-1])


__all__ = [
    "Cosine",
    "Damerau",
    "Jaccard",
    "JaroWinkler",
    "Levenshtein",
    "LongestCommonSubsequence",
    "MetricLCS",
    "NGram",
    "NormalizedLevenshtein",
    "OptimalStringAlignment",
    "QGram",
    "SorensenDice",
    "WeightedLevenshtein",
    "insdel_cost_fns",
    "shingle_profile",
    "substitution_cost_fn",
]
