import pytest

from strrank import measures


def test_edit_distances() -> None:
    assert measures.Levenshtein().distance("kitten", "sitting") == 3.0
    assert measures.NormalizedLevenshtein().distance("kitten", "sitting") == pytest.approx(3 / 7)
    assert measures.NormalizedLevenshtein().similarity("kitten", "sitting") == pytest.approx(4 / 7)


def test_damerau_allows_unrestricted_transpositions() -> None:
    assert measures.Damerau().distance("ca", "ac") == 1.0
    assert measures.Damerau().distance("ca", "abc") == 2.0
    assert measures.OptimalStringAlignment().distance("ca", "abc") == 3.0


def test_lcs_based_distances() -> None:
    assert measures.LongestCommonSubsequence().distance("AGCAT", "GAC") == 4.0
    assert measures.MetricLCS().distance("ABCDEFG", "ABCDEFHJKL") == pytest.approx(0.4)


def test_jaro_winkler_prefix_bonus_respects_threshold() -> None:
    assert measures.JaroWinkler().similarity("martha", "marhta") == pytest.approx(0.961111, abs=1e-5)
    strict = measures.JaroWinkler(threshold=0.99)
    assert strict.similarity("martha", "marhta") == pytest.approx(0.944444, abs=1e-5)
    assert measures.JaroWinkler().distance("same", "same") == 0.0


def test_shingle_profile_collapses_whitespace() -> None:
    profile = measures.shingle_profile("a  b", 2)
    assert profile == {"a ": 1, " b": 1}


def test_qgram_distance() -> None:
    assert measures.QGram(2).distance("ABCD", "ABCE") == 2.0
    assert measures.QGram().distance("same", "same") == 0.0


def test_bigram_set_measures() -> None:
    assert measures.Cosine(2).similarity("aut", "vault") == pytest.approx(0.353553, abs=1e-6)
    assert measures.Jaccard(2).similarity("aut", "vault") == pytest.approx(0.2)
    assert measures.SorensenDice(2).similarity("aut", "vault") == pytest.approx(1 / 3)


def test_shingle_measures_on_short_strings() -> None:
    assert measures.Cosine(3).similarity("ab", "ac") == 0.0
    assert measures.Jaccard(3).similarity("ab", "ac") == 0.0
    assert measures.SorensenDice(3).distance("ab", "ac") == 1.0


def test_shingle_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        measures.QGram(0)
    with pytest.raises(ValueError):
        measures.NGram(-1)


def test_ngram_distance() -> None:
    ngram = measures.NGram(2)
    assert ngram.distance("abc", "abc") == 0.0
    assert ngram.distance("", "abc") == 1.0
    assert ngram.distance("abc", "abd") == pytest.approx(1 / 6)


def test_ngram_strings_shorter_than_n() -> None:
    ngram = measures.NGram(3)
    assert ngram.distance("ab", "ax") == pytest.approx(0.5)
    assert ngram.distance("ab", "xy") == 1.0


def test_weighted_levenshtein_uses_cost_tables() -> None:
    sub = measures.substitution_cost_fn({("a", "o"): 0.5})
    assert sub is not None
    weighted = measures.WeightedLevenshtein(sub)
    assert weighted.distance("bat", "bot") == pytest.approx(0.5)
    assert weighted.distance("bat", "bit") == pytest.approx(1.0)


def test_weighted_levenshtein_insertion_and_deletion_costs() -> None:
    sub = measures.substitution_cost_fn({"ao": 0.5})
    insdel = measures.insdel_cost_fns({"s": 0.25})
    assert sub is not None and insdel is not None
    weighted = measures.WeightedLevenshtein(sub, *insdel)
    assert weighted.distance("bat", "bats") == pytest.approx(0.25)
    assert weighted.distance("bats", "bat") == pytest.approx(0.25)
    assert weighted.distance("", "ss") == pytest.approx(0.5)
    assert weighted.distance("bot", "bat") == pytest.approx(1.0)


def test_cost_table_coercion() -> None:
    class Costs:
        def cost(self, a: str, b: str) -> float:
            return 0.1

        def insertion_cost(self, c: str) -> float:
            return 2.0

        def deletion_cost(self, c: str) -> float:
            return 3.0

    assert measures.substitution_cost_fn(Costs())("x", "y") == 0.1
    insertion, deletion = measures.insdel_cost_fns(Costs())
    assert (insertion("x"), deletion("x")) == (2.0, 3.0)
    assert measures.substitution_cost_fn(lambda a, b: 0.7)("a", "b") == 0.7
    assert measures.substitution_cost_fn(42) is None
    assert measures.substitution_cost_fn({"abc": 1.0}) is None
    assert measures.insdel_cost_fns("not a table") is None


def test_set_measures_count_distinct_shingles() -> None:
    assert measures.Jaccard(2).similarity("aaaa", "aab") == pytest.approx(0.5)
    assert measures.SorensenDice(2).similarity("aaaa", "aab") == pytest.approx(2 / 3)
    assert measures.Jaccard(2).similarity("a  b", "a b") == 1.0
