"""Algorithm descriptors grouped by how their scores are interpreted.

An :class:`Alg` names one comparison algorithm inside a :class:`Category`.
It knows how to build a configured comparator from optional positional
arguments (:meth:`Alg.build`) and how to turn that comparator's output into
a comparable float (:meth:`Alg.score`). Keeping the two steps apart lets a
caller build one comparator and reuse it for a whole batch.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, Callable, Iterator, Optional, Sequence

from . import measures
from .errors import UnknownAlgorithmError, UnknownCategoryError


logger = logging.getLogger(__name__)


Builder = Callable[..., Optional[Any]]


class Category(Enum):
    """Family of an algorithm; decides the ranking direction."""

    DISTANCE = (10, "Distance", False)
    NORMALIZED_DISTANCE = (11, "Normalized distance", False)
    NORMALIZED_SIMILARITY = (12, "Normalized similarity", True)
    METRIC_DISTANCE = (13, "Metric distance", False)

    def __init__(self, type_code: int, label: str, bigger_is_better: bool) -> None:
        self.type_code = type_code
        self.label = label
        self.bigger_is_better = bigger_is_better

    @property
    def sentinel(self) -> float:
        """Worst possible score for this category."""

        return -math.inf if self.bigger_is_better else math.inf

    def passes(self, score: float, deadline: float) -> bool:
        """Return True when ``score`` is at least as good as ``deadline``."""

        if self.bigger_is_better:
            return score >= deadline
        return score <= deadline

    def best_of(self, score: float, other: float) -> float:
        return max(score, other) if self.bigger_is_better else min(score, other)

    @classmethod
    def resolve(cls, value: "Category | str") -> "Category":
        """Accept a member, its enum name, or its label (case-insensitive)."""

        if isinstance(value, Category):
            return value
        if not isinstance(value, str):
            raise TypeError(f"Cannot resolve category from {type(value)!r}")
        key = value.strip().replace("-", "_").replace(" ", "_").upper()
        for member in cls:
            if member.name == key or member.label.upper().replace(" ", "_") == key:
                return member
        raise UnknownCategoryError(value)


@dataclass(frozen=True)
class Alg:
    """Descriptor for one algorithm within a category."""

    name: str
    category: Category
    builder: Builder = field(repr=False, compare=False)
    measure: str = "distance"

    def label(self) -> str:
        return self.name

    def category_label(self) -> str:
        return self.category.label

    @property
    def type_code(self) -> int:
        return self.category.type_code

    @property
    def bigger_is_better(self) -> bool:
        return self.category.bigger_is_better

    @property
    def sentinel(self) -> float:
        return self.category.sentinel

    def build(self, *args: Any) -> Optional[Any]:
        """Build a comparator, falling back to defaults for unusable arguments.

        Returns ``None`` only when the algorithm has no parameterless form and
        ``args`` do not provide what it needs.
        """

        instance = self.builder(*args)
        if instance is None:
            logger.debug("Could not build %s from %d argument(s)", self, len(args))
        return instance

    def score(self, instance: Optional[Any], s1: str, s2: str) -> float:
        """Compare ``s1`` and ``s2`` with a comparator built by :meth:`build`.

        A missing comparator yields :attr:`sentinel` instead of failing.
        """

        if instance is None:
            return self.sentinel
        return float(getattr(instance, self.measure)(s1, s2))

    def compare(self, s1: str, s2: str, *args: Any) -> float:
        """Build then score; rebuilds on every call, so avoid it for batches."""

        return self.score(self.build(*args), s1, s2)

    def __str__(self) -> str:
        return f"{self.name} ({self.category.label})"


def _positive_int(args: Sequence[Any], index: int) -> Optional[int]:
    if len(args) <= index:
        return None
    value = args[index]
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _real(args: Sequence[Any], index: int) -> Optional[float]:
    if len(args) <= index:
        return None
    value = args[index]
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    return float(value)


def _sized(factory: Callable[..., Any]) -> Builder:
    """Builder for shingle/gram measures taking an optional positive size."""

    def build(*args: Any) -> Any:
        size = _positive_int(args, 0)
        return factory(size) if size is not None else factory()

    return build


def _plain(factory: Callable[[], Any]) -> Builder:
    def build(*_args: Any) -> Any:
        return factory()

    return build


def _build_jaro_winkler(*args: Any) -> measures.JaroWinkler:
    threshold = _real(args, 0)
    if threshold is None:
        return measures.JaroWinkler()
    return measures.JaroWinkler(threshold)


def _build_weighted_levenshtein(*args: Any) -> Optional[measures.WeightedLevenshtein]:
    substitution = measures.substitution_cost_fn(args[0]) if args else None
    if substitution is None:
        return None
    insdel = measures.insdel_cost_fns(args[1]) if len(args) > 1 else None
    if insdel is None:
        return measures.WeightedLevenshtein(substitution)
    insertion, deletion = insdel
    return measures.WeightedLevenshtein(substitution, insertion, deletion)


_cosine = _sized(measures.Cosine)
_jaccard = _sized(measures.Jaccard)
_sorensen_dice = _sized(measures.SorensenDice)
_nlevenshtein = _plain(measures.NormalizedLevenshtein)
_metric_lcs = _plain(measures.MetricLCS)


class DistAlg:
    """Unbounded distances; smaller is better."""

    LCS = Alg("LCS", Category.DISTANCE, _plain(measures.LongestCommonSubsequence))
    OSA = Alg("OSA", Category.DISTANCE, _plain(measures.OptimalStringAlignment))
    QGRAM = Alg("QGRAM", Category.DISTANCE, _sized(measures.QGram))
    WLEVENSHTEIN = Alg("WLEVENSHTEIN", Category.DISTANCE, _build_weighted_levenshtein)


class NormDistAlg:
    """Distances in ``[0, 1]``; smaller is better."""

    COSINE = Alg("COSINE", Category.NORMALIZED_DISTANCE, _cosine)
    JACCARD = Alg("JACCARD", Category.NORMALIZED_DISTANCE, _jaccard)
    JAROWINKLER = Alg("JAROWINKLER", Category.NORMALIZED_DISTANCE, _build_jaro_winkler)
    METRICLCS = Alg("METRICLCS", Category.NORMALIZED_DISTANCE, _metric_lcs)
    NGRAM = Alg("NGRAM", Category.NORMALIZED_DISTANCE, _sized(measures.NGram))
    NLEVENSHTEIN = Alg("NLEVENSHTEIN", Category.NORMALIZED_DISTANCE, _nlevenshtein)
    SORENSENDICE = Alg("SORENSENDICE", Category.NORMALIZED_DISTANCE, _sorensen_dice)


class NormSimAlg:
    """Similarities in ``[0, 1]``; larger is better."""

    COSINE = Alg("COSINE", Category.NORMALIZED_SIMILARITY, _cosine, "similarity")
    JACCARD = Alg("JACCARD", Category.NORMALIZED_SIMILARITY, _jaccard, "similarity")
    JAROWINKLER = Alg(
        "JAROWINKLER", Category.NORMALIZED_SIMILARITY, _build_jaro_winkler, "similarity"
    )
    NLEVENSHTEIN = Alg(
        "NLEVENSHTEIN", Category.NORMALIZED_SIMILARITY, _nlevenshtein, "similarity"
    )
    SORENSENDICE = Alg(
        "SORENSENDICE", Category.NORMALIZED_SIMILARITY, _sorensen_dice, "similarity"
    )


class MetricDistAlg:
    """Distances satisfying the triangle inequality; smaller is better."""

    DAMERAU = Alg("DAMERAU", Category.METRIC_DISTANCE, _plain(measures.Damerau))
    JACCARD = Alg("JACCARD", Category.METRIC_DISTANCE, _jaccard)
    LEVENSHTEIN = Alg("LEVENSHTEIN", Category.METRIC_DISTANCE, _plain(measures.Levenshtein))
    METRICLCS = Alg("METRICLCS", Category.METRIC_DISTANCE, _metric_lcs)


# Spellings used by earlier releases of the catalogue.
_NAME_ALIASES = {"JAROWRINKLER": "JAROWINKLER"}

_FAMILIES: dict[Category, type] = {
    Category.DISTANCE: DistAlg,
    Category.NORMALIZED_DISTANCE: NormDistAlg,
    Category.NORMALIZED_SIMILARITY: NormSimAlg,
    Category.METRIC_DISTANCE: MetricDistAlg,
}


def algorithms_for(category: Category | str) -> list[Alg]:
    """Return the algorithms of ``category`` in declaration order."""

    family = _FAMILIES[Category.resolve(category)]
    return [value for value in vars(family).values() if isinstance(value, Alg)]


def iter_algorithms() -> Iterator[Alg]:
    for category in Category:
        yield from algorithms_for(category)


def get_algorithm(category: Category | str, name: str) -> Alg:
    """Look up an algorithm by category and (case-insensitive) name."""

    resolved = Category.resolve(category)
    key = name.strip().upper()
    key = _NAME_ALIASES.get(key, key)
    for alg in algorithms_for(resolved):
        if alg.name == key:
            return alg
    raise UnknownAlgorithmError(resolved.label, name)


__all__ = [
    "Alg",
    "Category",
    "DistAlg",
    "MetricDistAlg",
    "NormDistAlg",
    "NormSimAlg",
    "algorithms_for",
    "get_algorithm",
    "iter_algorithms",
]
