"""Rank candidates against a query and slice the ordered result."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
)

from . import scoring
from .algorithms import Alg
from .candidates import CandidateAdapter
from .config import RankingConfig, coerce_config
from .normalize import normalize


logger = logging.getLogger(__name__)

T = TypeVar("T")
KeyFn = Optional[Callable[[Any], str]]


@dataclass(frozen=True)
class ScoredCandidate(Generic[T]):
    """A caller-owned candidate tagged with its score and normalized text."""

    candidate: T
    score: float
    text: str


def _check_query(query: Any) -> None:
    if not isinstance(query, str):
        raise TypeError(f"query must be a str, got {type(query).__name__}")


class Ranker:
    """Build an algorithm instance once and rank any number of batches with it."""

    def __init__(
        self,
        alg: Alg,
        *args: Any,
        delimiters: Optional[Iterable[str]] = None,
        instance: Optional[Any] = None,
    ) -> None:
        if not isinstance(alg, Alg):
            raise TypeError(f"alg must be an Alg descriptor, got {type(alg).__name__}")
        self.alg = alg
        self.delimiters: Optional[tuple[str, ...]] = (
            tuple(delimiters) if delimiters is not None else None
        )
        self.instance = instance if instance is not None else alg.build(*args)
        if self.instance is None:
            logger.warning(
                "Could not build %s from %d argument(s); every candidate scores %s",
                alg,
                len(args),
                alg.sentinel,
            )

    @classmethod
    def from_config(cls, config: "RankingConfig | Mapping[str, Any] | None") -> "Ranker":
        """Build a ranker from a :class:`RankingConfig` or its keyword mapping."""

        ranking = coerce_config(config, RankingConfig, "ranking")
        return cls(
            ranking.resolve_algorithm(),
            *ranking.args,
            delimiters=ranking.delimiters,
        )

    def score(self, query: str, text: str) -> float:
        """Score two already-normalized strings with this ranker's policy."""

        if self.delimiters is not None:
            return scoring.score_with_splits(
                query, text, self.delimiters, self.instance, self.alg
            )
        return scoring.score(query, text, self.instance, self.alg)

    def rank(
        self, query: str, candidates: Iterable[T], *, key: KeyFn = None
    ) -> List[ScoredCandidate[T]]:
        """Score every candidate and return them best first.

        Ties are broken by the candidates' natural ordering when the batch
        supports one, otherwise by their lowercase comparable string.
        """

        _check_query(query)
        items = list(candidates)
        adapter: CandidateAdapter[T] = CandidateAdapter(items, key)
        norm_query = normalize(query)

        scored: List[ScoredCandidate[T]] = []
        for candidate in items:
            text = normalize(adapter.extract_string(candidate))
            scored.append(ScoredCandidate(candidate, self.score(norm_query, text), text))

        direction = -1.0 if self.alg.bigger_is_better else 1.0

        def order(a: ScoredCandidate[T], b: ScoredCandidate[T]) -> int:
            left, right = direction * a.score, direction * b.score
            if left != right:
                return -1 if left < right else 1
            return adapter.compare(a.candidate, b.candidate)

        scored.sort(key=cmp_to_key(order))
        logger.debug("Ranked %d candidate(s) with %s", len(scored), self.alg)
        return scored

    def deadline_cut(self, ranked: Sequence[ScoredCandidate[Any]], deadline: float) -> int:
        """Length of the leading run of ``ranked`` whose scores pass ``deadline``."""

        category = self.alg.category
        for index, item in enumerate(ranked):
            if not category.passes(item.score, deadline):
                return index
        return len(ranked)

    def best_match(
        self, query: str, candidates: Iterable[T], *, key: KeyFn = None
    ) -> Optional[T]:
        ranked = self.rank(query, candidates, key=key)
        return ranked[0].candidate if ranked else None

    def top_n_matches(
        self, query: str, candidates: Iterable[T], n: int, *, key: KeyFn = None
    ) -> List[T]:
        ranked = self.rank(query, candidates, key=key)
        return [item.candidate for item in ranked[: max(0, n)]]

    def with_deadline(
        self, query: str, candidates: Iterable[T], deadline: float, *, key: KeyFn = None
    ) -> List[T]:
        ranked = self.rank(query, candidates, key=key)
        cut = self.deadline_cut(ranked, deadline)
        return [item.candidate for item in ranked[:cut]]

    def top_matches_with_deadline(
        self,
        query: str,
        candidates: Iterable[T],
        n: int,
        deadline: float,
        *,
        key: KeyFn = None,
    ) -> List[T]:
        ranked = self.rank(query, candidates, key=key)
        cut = min(self.deadline_cut(ranked, deadline), max(0, n))
        return [item.candidate for item in ranked[:cut]]


def rank(
    query: str,
    candidates: Iterable[T],
    alg: Alg,
    *args: Any,
    delimiters: Optional[Iterable[str]] = None,
    instance: Optional[Any] = None,
    key: KeyFn = None,
) -> List[ScoredCandidate[T]]:
    """Return every candidate with its score, best first."""

    ranker = Ranker(alg, *args, delimiters=delimiters, instance=instance)
    return ranker.rank(query, candidates, key=key)


def best_match(
    query: str,
    candidates: Iterable[T],
    alg: Alg,
    *args: Any,
    delimiters: Optional[Iterable[str]] = None,
    instance: Optional[Any] = None,
    key: KeyFn = None,
) -> Optional[T]:
    """Return the single best candidate, or ``None`` when there are none."""

    ranker = Ranker(alg, *args, delimiters=delimiters, instance=instance)
    return ranker.best_match(query, candidates, key=key)


def top_n_matches(
    query: str,
    candidates: Iterable[T],
    n: int,
    alg: Alg,
    *args: Any,
    delimiters: Optional[Iterable[str]] = None,
    instance: Optional[Any] = None,
    key: KeyFn = None,
) -> List[T]:
    """Return the first ``min(n, len(candidates))`` candidates; ``n <= 0`` yields none."""

    ranker = Ranker(alg, *args, delimiters=delimiters, instance=instance)
    return ranker.top_n_matches(query, candidates, n, key=key)


def with_deadline(
    query: str,
    candidates: Iterable[T],
    deadline: float,
    alg: Alg,
    *args: Any,
    delimiters: Optional[Iterable[str]] = None,
    instance: Optional[Any] = None,
    key: KeyFn = None,
) -> List[T]:
    """Return the best-first prefix of candidates whose score passes ``deadline``."""

    ranker = Ranker(alg, *args, delimiters=delimiters, instance=instance)
    return ranker.with_deadline(query, candidates, deadline, key=key)


def top_matches_with_deadline(
    query: str,
    candidates: Iterable[T],
    n: int,
    deadline: float,
    alg: Alg,
    *args: Any,
    delimiters: Optional[Iterable[str]] = None,
    instance: Optional[Any] = None,
    key: KeyFn = None,
) -> List[T]:
    ranker = Ranker(alg, *args, delimiters=delimiters, instance=instance)
    return ranker.top_matches_with_deadline(query, candidates, n, deadline, key=key)


__all__ = [
    "Ranker",
    "ScoredCandidate",
    "best_match",
    "rank",
    "top_matches_with_deadline",
    "top_n_matches",
    "with_deadline",
]
