from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional, Type, TypeVar

import tomllib

from .algorithms import Alg, get_algorithm
from .errors import ConfigError


@dataclass
class RankingConfig:
    """Algorithm choice and selection bounds for ranking runs."""

    category: str = "normalized_similarity"
    algorithm: str = "JAROWINKLER"
    args: list[Any] = field(default_factory=list)
    delimiters: Optional[list[str]] = None
    top_n: Optional[int] = None
    deadline: Optional[float] = None

    def __post_init__(self) -> None:
        self.args = list(self.args)
        if self.delimiters is not None:
            self.delimiters = [str(delimiter) for delimiter in self.delimiters]

    def resolve_algorithm(self) -> Alg:
        return get_algorithm(self.category, self.algorithm)


@dataclass
class BenchmarkConfig:
    """Options for the diagnostic comparison report."""

    families: list[str] = field(
        default_factory=lambda: [
            "distance",
            "normalized_distance",
            "normalized_similarity",
            "metric_distance",
        ]
    )
    args: dict[str, list[Any]] = field(default_factory=dict)
    sort_mode: str = "algorithm"
    descending: bool = True


@dataclass
class AppConfig:
    """Full application configuration tree."""

    ranking: RankingConfig = field(default_factory=RankingConfig)
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)


def _coerce_section(section: Mapping[str, Any] | None, cls: type[Any]) -> Any:
    if section is None:
        return cls()
    if not isinstance(section, Mapping):
        raise TypeError(f"Expected a mapping for {cls.__name__}, got {type(section)!r}")
    kwargs: MutableMapping[str, Any] = dict(section)
    return cls(**kwargs)


def load_config(path: str | Path) -> AppConfig:
    """Load configuration from a TOML file."""

    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("rb") as fh:
        try:
            raw: Mapping[str, Any] = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {config_path}: {exc}") from exc

    return AppConfig(
        ranking=_coerce_section(raw.get("ranking"), RankingConfig),
        benchmark=_coerce_section(raw.get("benchmark"), BenchmarkConfig),
    )


T = TypeVar("T")


def coerce_config(config: Any, cls: Type[T], label: str) -> T:
    """Normalise arbitrary configuration inputs into dataclass instances."""

    if config is None:
        return cls()
    if isinstance(config, cls):
        return config
    if isinstance(config, Mapping):
        return cls(**config)
    raise TypeError(
        f"{label} must be a {cls.__name__} or a mapping of keyword arguments"
    )


__all__ = [
    "AppConfig",
    "BenchmarkConfig",
    "RankingConfig",
    "coerce_config",
    "load_config",
]
