"""Canonical text form used before any comparison."""

from __future__ import annotations

import unicodedata


def strip_diacritics(value: str) -> str:
    """Decompose ``value`` (NFD) and drop combining marks."""

    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(value: str) -> str:
    """Return the lowercase, diacritic-free form of ``value``."""

    return strip_diacritics(value).lower()


__all__ = ["normalize", "strip_diacritics"]
