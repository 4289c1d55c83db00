from __future__ import annotations


class StrRankError(RuntimeError):
    """Base error for strrank failures."""


class UnknownAlgorithmError(StrRankError, KeyError):
    """Raised when a category/algorithm name pair cannot be resolved."""

    def __init__(self, category: str, name: str):
        self.category = category
        self.name = name
        super().__init__(f"Unknown algorithm '{name}' for category '{category}'")

    def __str__(self) -> str:
        return self.args[0]


class ConfigError(StrRankError, ValueError):
    """Raised when a configuration file or section is malformed."""


class UnknownCategoryError(StrRankError, KeyError):
    """Raised when a category name or label cannot be resolved."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown algorithm category '{category}'")

    def __str__(self) -> str:
        return self.args[0]
