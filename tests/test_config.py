from pathlib import Path

import pytest

from strrank.algorithms import NormDistAlg, NormSimAlg
from strrank.config import AppConfig, BenchmarkConfig, RankingConfig, coerce_config, load_config
from strrank.errors import ConfigError, UnknownAlgorithmError


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "strrank.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults() -> None:
    config = AppConfig()
    assert config.ranking.resolve_algorithm() is NormSimAlg.JAROWINKLER
    assert config.ranking.top_n is None
    assert config.benchmark.sort_mode == "algorithm"
    assert len(config.benchmark.families) == 4


def test_load_config(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
[ranking]
category = "normalized_distance"
algorithm = "NGRAM"
args = [3]
delimiters = ["-", "."]
top_n = 2
deadline = 0.5

[benchmark]
families = ["distance"]
sort_mode = "result"

[benchmark.args]
QGRAM = [2]
""",
    )
    config = load_config(path)
    assert config.ranking.resolve_algorithm() is NormDistAlg.NGRAM
    assert config.ranking.args == [3]
    assert config.ranking.delimiters == ["-", "."]
    assert config.ranking.top_n == 2
    assert config.ranking.deadline == 0.5
    assert config.benchmark.families == ["distance"]
    assert config.benchmark.args == {"QGRAM": [2]}
    assert config.benchmark.descending is True


def test_missing_sections_use_defaults(tmp_path: Path) -> None:
    config = load_config(_write(tmp_path, "[ranking]\nalgorithm = 'COSINE'\n"))
    assert config.ranking.resolve_algorithm() is NormSimAlg.COSINE
    assert config.benchmark == BenchmarkConfig()


def test_unknown_key_raises(tmp_path: Path) -> None:
    with pytest.raises(TypeError):
        load_config(_write(tmp_path, "[ranking]\nbogus = 1\n"))


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "[ranking\n"))


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.toml")


def test_unknown_algorithm_in_config() -> None:
    with pytest.raises(UnknownAlgorithmError):
        RankingConfig(category="distance", algorithm="JAROWINKLER").resolve_algorithm()


def test_coerce_config() -> None:
    assert coerce_config(None, RankingConfig, "ranking") == RankingConfig()
    existing = RankingConfig(algorithm="COSINE")
    assert coerce_config(existing, RankingConfig, "ranking") is existing
    assert coerce_config({"top_n": 3}, RankingConfig, "ranking").top_n == 3
    with pytest.raises(TypeError):
        coerce_config(["top_n"], RankingConfig, "ranking")
