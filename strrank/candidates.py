"""Extract comparable strings and tie-break keys from ranking candidates."""

from __future__ import annotations

from typing import Any, Callable, Generic, Optional, Protocol, Sequence, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Stringable(Protocol):
    """Candidate that exposes the string it should be compared by."""

    def comparable_string(self) -> str: ...


def _defines_ordering(cls: type) -> bool:
    return getattr(cls, "__lt__", object.__lt__) is not object.__lt__


class CandidateAdapter(Generic[T]):
    """Read-only view over how a batch of candidates is compared and tie-broken.

    Natural ordering is tried first on score ties when every candidate in the
    batch has the same type and that type defines ``__lt__``. Pairs it cannot
    decide fall back to the lowercase comparable string, as do all ties in
    mixed or unordered batches.
    """

    def __init__(
        self,
        candidates: Sequence[T],
        key: Optional[Callable[[T], str]] = None,
    ) -> None:
        self._key = key
        kinds = {type(candidate) for candidate in candidates}
        self.natural_order = len(kinds) == 1 and _defines_ordering(next(iter(kinds)))

    def extract_string(self, candidate: T) -> str:
        if self._key is not None:
            return self._key(candidate)
        if isinstance(candidate, str):
            return candidate
        if isinstance(candidate, Stringable):
            return candidate.comparable_string()
        raise TypeError(
            f"Cannot compare candidate of type {type(candidate).__name__!r}; "
            "pass key= or implement comparable_string()"
        )

    def sort_key_lowercase(self, candidate: T) -> str:
        lowercase = getattr(candidate, "lowercase_string", None)
        if self._key is None and callable(lowercase):
            return lowercase()
        return self.extract_string(candidate).lower()

    def fallback_key(self, candidate: T) -> tuple[str, str, str]:
        """Total order used when natural ordering is unavailable or undecided."""

        return (
            self.sort_key_lowercase(candidate),
            self.extract_string(candidate),
            repr(candidate),
        )

    def compare(self, a: T, b: T) -> int:
        """Three-way tie-break between two candidates with equal scores.

        Natural ordering wins when it decides the pair. A raising ``<``, or a
        partial order that leaves two unequal candidates unordered, falls
        back to :meth:`fallback_key`.
        """

        if self.natural_order:
            try:
                if a < b:  # type: ignore[operator]
                    return -1
                if b < a:  # type: ignore[operator]
                    return 1
                if a == b:
                    return 0
            except TypeError:
                pass
        key_a, key_b = self.fallback_key(a), self.fallback_key(b)
        return (key_a > key_b) - (key_a < key_b)


__all__ = ["CandidateAdapter", "Stringable"]
