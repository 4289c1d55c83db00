import math

import pytest

from strrank import measures
from strrank.algorithms import (
    Category,
    DistAlg,
    MetricDistAlg,
    NormDistAlg,
    NormSimAlg,
    algorithms_for,
    get_algorithm,
    iter_algorithms,
)
from strrank.errors import UnknownAlgorithmError, UnknownCategoryError


def test_category_direction_and_sentinels() -> None:
    assert Category.NORMALIZED_SIMILARITY.bigger_is_better
    assert Category.NORMALIZED_SIMILARITY.sentinel == -math.inf
    for category in (Category.DISTANCE, Category.NORMALIZED_DISTANCE, Category.METRIC_DISTANCE):
        assert not category.bigger_is_better
        assert category.sentinel == math.inf
    assert [category.type_code for category in Category] == [10, 11, 12, 13]


def test_category_passes_is_inclusive() -> None:
    assert Category.NORMALIZED_DISTANCE.passes(0.4, 0.4)
    assert not Category.NORMALIZED_DISTANCE.passes(0.41, 0.4)
    assert Category.NORMALIZED_SIMILARITY.passes(0.4, 0.4)
    assert not Category.NORMALIZED_SIMILARITY.passes(0.39, 0.4)


def test_category_resolve_accepts_names_and_labels() -> None:
    assert Category.resolve("normalized_similarity") is Category.NORMALIZED_SIMILARITY
    assert Category.resolve("Normalized similarity") is Category.NORMALIZED_SIMILARITY
    assert Category.resolve("metric-distance") is Category.METRIC_DISTANCE
    with pytest.raises(UnknownCategoryError):
        Category.resolve("fuzzy")


def test_catalogue_membership() -> None:
    assert [alg.name for alg in algorithms_for(Category.DISTANCE)] == [
        "LCS",
        "OSA",
        "QGRAM",
        "WLEVENSHTEIN",
    ]
    assert [alg.name for alg in algorithms_for("normalized_similarity")] == [
        "COSINE",
        "JACCARD",
        "JAROWINKLER",
        "NLEVENSHTEIN",
        "SORENSENDICE",
    ]
    assert len(list(iter_algorithms())) == 20


def test_same_name_in_two_categories_are_distinct() -> None:
    assert NormSimAlg.COSINE != NormDistAlg.COSINE
    assert str(NormDistAlg.NLEVENSHTEIN) == "NLEVENSHTEIN (Normalized distance)"


def test_get_algorithm() -> None:
    assert get_algorithm("normalized similarity", "jarowinkler") is NormSimAlg.JAROWINKLER
    assert get_algorithm(Category.METRIC_DISTANCE, "LEVENSHTEIN") is MetricDistAlg.LEVENSHTEIN
    with pytest.raises(UnknownAlgorithmError) as excinfo:
        get_algorithm("distance", "COSINE")
    assert "COSINE" in str(excinfo.value)
    with pytest.raises(KeyError):
        get_algorithm("distance", "missing")


def test_identical_strings_score_best_value() -> None:
    text = "authenticator"
    for alg in iter_algorithms():
        if alg is DistAlg.WLEVENSHTEIN:
            continue
        expected = 1.0 if alg.bigger_is_better else 0.0
        assert alg.compare(text, text) == pytest.approx(expected), alg


def test_build_uses_defaults_for_unusable_arguments() -> None:
    assert NormDistAlg.NGRAM.build() == measures.NGram(2)
    assert NormDistAlg.NGRAM.build(3) == measures.NGram(3)
    assert NormDistAlg.NGRAM.build(0) == measures.NGram(2)
    assert NormDistAlg.NGRAM.build("three") == measures.NGram(2)
    assert NormDistAlg.NGRAM.build(True) == measures.NGram(2)
    assert DistAlg.QGRAM.build(-4) == measures.QGram()


def test_jaro_winkler_threshold_argument() -> None:
    assert NormSimAlg.JAROWINKLER.build().threshold == 0.7
    assert NormSimAlg.JAROWINKLER.build(0.9).threshold == 0.9
    assert NormSimAlg.JAROWINKLER.build(1).threshold == 1.0
    assert NormSimAlg.JAROWINKLER.build("high").threshold == 0.7


def test_weighted_levenshtein_needs_a_cost_table() -> None:
    assert DistAlg.WLEVENSHTEIN.build() is None
    assert DistAlg.WLEVENSHTEIN.build("not a table") is None
    assert DistAlg.WLEVENSHTEIN.compare("a", "b") == math.inf

    instance = DistAlg.WLEVENSHTEIN.build({("a", "b"): 0.5})
    assert instance is not None
    assert DistAlg.WLEVENSHTEIN.score(instance, "a", "b") == pytest.approx(0.5)


def test_missing_instance_scores_sentinel() -> None:
    assert NormSimAlg.NLEVENSHTEIN.score(None, "a", "a") == -math.inf
    assert NormDistAlg.NLEVENSHTEIN.score(None, "a", "a") == math.inf


def test_similarity_and_distance_variants_agree() -> None:
    sim = NormSimAlg.NLEVENSHTEIN.compare("vault", "aut")
    dist = NormDistAlg.NLEVENSHTEIN.compare("vault", "aut")
    assert sim + dist == pytest.approx(1.0)


def test_get_algorithm_accepts_legacy_jaro_winkler_spelling() -> None:
    assert get_algorithm("normalized_distance", "JAROWRINKLER") is NormDistAlg.JAROWINKLER
    assert get_algorithm("normalized_similarity", "jarowrinkler") is NormSimAlg.JAROWINKLER
    with pytest.raises(UnknownAlgorithmError):
        get_algorithm("distance", "JAROWRINKLER")
