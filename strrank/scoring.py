"""Score a normalized query against one normalized candidate string."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from .algorithms import Alg


def split_literal(text: str, delimiter: str) -> List[str]:
    """Split ``text`` on the literal ``delimiter``, dropping trailing empty pieces.

    An empty delimiter never splits: the whole text is returned as the only
    segment.
    """

    if not delimiter:
        return [text]
    parts = text.split(delimiter)
    while parts and not parts[-1]:
        parts.pop()
    return parts


def score(query: str, candidate: str, instance: Optional[Any], alg: Alg) -> float:
    return alg.score(instance, query, candidate)


def score_with_splits(
    query: str,
    candidate: str,
    delimiters: Iterable[str],
    instance: Optional[Any],
    alg: Alg,
) -> float:
    """Best score over the split segments of ``candidate`` and the whole string.

    For every delimiter the first segment is skipped; each following segment
    is scored against ``query``. The unsplit candidate is always scored too.
    """

    category = alg.category
    best = category.sentinel
    for delimiter in delimiters:
        for segment in split_literal(candidate, delimiter)[1:]:
            best = category.best_of(best, alg.score(instance, query, segment))
    return category.best_of(best, alg.score(instance, query, candidate))


__all__ = ["score", "score_with_splits", "split_literal"]
