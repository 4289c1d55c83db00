"""Public package interface for strrank."""

from .algorithms import (
    Alg,
    Category,
    DistAlg,
    MetricDistAlg,
    NormDistAlg,
    NormSimAlg,
    algorithms_for,
    get_algorithm,
    iter_algorithms,
)
from .candidates import CandidateAdapter, Stringable
from .config import AppConfig, BenchmarkConfig, RankingConfig, coerce_config, load_config
from .errors import ConfigError, StrRankError, UnknownAlgorithmError, UnknownCategoryError
from .normalize import normalize
from .ranking import (
    Ranker,
    ScoredCandidate,
    best_match,
    rank,
    top_matches_with_deadline,
    top_n_matches,
    with_deadline,
)
from .scoring import score_with_splits

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Alg",
    "Category",
    "DistAlg",
    "MetricDistAlg",
    "NormDistAlg",
    "NormSimAlg",
    "algorithms_for",
    "get_algorithm",
    "iter_algorithms",
    "CandidateAdapter",
    "Stringable",
    "AppConfig",
    "BenchmarkConfig",
    "RankingConfig",
    "coerce_config",
    "load_config",
    "ConfigError",
    "StrRankError",
    "UnknownAlgorithmError",
    "UnknownCategoryError",
    "normalize",
    "Ranker",
    "ScoredCandidate",
    "best_match",
    "rank",
    "top_matches_with_deadline",
    "top_n_matches",
    "with_deadline",
    "score_with_splits",
]
