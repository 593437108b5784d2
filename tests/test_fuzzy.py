from types import MappingProxyType

import pytest

from resume_parser.core.fuzzy import FuzzyMatcher, levenshtein_distance, matches, similarity, VARIATIONS


class TestLevenshtein:

    @pytest.mark.parametrize("a,b,expected", [
        ("", "", 0),
        ("abc", "", 3),
        ("kitten", "sitting", 3),
        ("engineer", "enginer", 1),
        ("flaw", "lawn", 2),
    ])
    def test_distance(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected
        assert levenshtein_distance(b, a) == expected

    def test_similarity(self):
        assert similarity("", "") == 1.0
        assert similarity("python", "python") == 1.0
        assert similarity("engineer", "enginer") == pytest.approx(0.875)
        assert similarity("abc", "xyz") == 0.0


class TestMatches:

    def test_synonym_spelling(self):
        assert matches("Frontend Developer", "front-end")

    def test_edit_distance_fallback(self):
        assert matches("Enginer", "Engineer", threshold=0.7)

    def test_unrelated(self):
        assert not matches("Sales", "Engineering")

    def test_substring_is_case_insensitive(self):
        assert matches("Senior PYTHON Developer", "python dev")

    def test_every_query_word_must_match(self):
        assert matches("Senior Python Developer", "senior developer")
        assert not matches("Senior Python Developer", "junior accountant")

    def test_prefix_and_suffix(self):
        assert matches("Kubernetes Administrator", "admin kube")
        assert matches("Software Engineering", "soft ring")

    def test_punctuation_only_word_never_matches(self):
        assert not matches("C++ Developer", "developer ++")

    def test_threshold_is_respected(self):
        assert not matches("Enginer", "Engineer", threshold=0.9)


class TestEnhancedMatch:

    @pytest.fixture
    def matcher(self):
        return FuzzyMatcher()

    def test_key_in_query_variant_in_text(self, matcher):
        assert matcher.enhanced_match("Senior Software Eng", "engineer")

    def test_key_in_text_variant_in_query(self, matcher):
        assert matcher.enhanced_match("Frontend Developer", "front-end")

    def test_remote_synonyms(self, matcher):
        assert matcher.enhanced_match("Work from home, US only", "remote")

    def test_falls_back_to_fuzzy(self, matcher):
        assert matcher.enhanced_match("Data Scientist", "scientst")
        assert not matcher.enhanced_match("Sales Lead", "Plumber")

    def test_module_shortcut(self):
        assert matches("Back-End Engineer", "backend", enhanced=True)

    def test_custom_table(self):
        matcher = FuzzyMatcher(variations={"k8s": ("kubernetes",)})
        assert matcher.enhanced_match("Kubernetes platform team", "k8s")


def test_variations_table_is_read_only():
    assert isinstance(VARIATIONS, MappingProxyType)
    with pytest.raises(TypeError):
        VARIATIONS["qa"] = ("quality assurance",)
