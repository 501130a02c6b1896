"""Unit tests for predicate selection and result ordering."""

import pytest

from concordance.domain.model import ConcordanceHit
from concordance.search.query import (
    AllContexts,
    ByDocument,
    ByWord,
    ByWordAndDocument,
    build_predicates,
    normalize_terms,
    sort_hits,
)


class TestNormalizeTerms:
    @pytest.mark.parametrize("values", [[""], [], ["  "], ["", " "]])
    def test_wildcard_forms(self, values):
        assert normalize_terms(values) is None

    def test_values_are_trimmed_and_blanks_dropped(self):
        assert normalize_terms([" cat ", "", "dog"]) == ["cat", "dog"]


class TestBuildPredicates:
    def test_both_wildcard(self):
        assert build_predicates([""], [""]) == [AllContexts()]

    def test_words_only(self):
        assert build_predicates(["Quick", " fox "], [""]) == [ByWord("quick"), ByWord("fox")]

    def test_documents_only(self):
        assert build_predicates([""], [" test ", "Other"]) == [ByDocument("test"), ByDocument("Other")]

    def test_cross_product_of_documents_and_words(self):
        predicates = build_predicates(["a", "B"], ["d1", "d2"])
        assert predicates == [
            ByWordAndDocument(word="a", document="d1"),
            ByWordAndDocument(word="b", document="d1"),
            ByWordAndDocument(word="a", document="d2"),
            ByWordAndDocument(word="b", document="d2"),
        ]

    def test_repeated_inputs_are_kept(self):
        assert build_predicates(["cat", "cat"], [""]) == [ByWord("cat"), ByWord("cat")]


class TestSortHits:
    def test_sorted_case_insensitively_by_context(self):
        hits = [
            ConcordanceHit("l1", "banana"),
            ConcordanceHit("l2", "Apple"),
            ConcordanceHit("l3", "apricot"),
        ]
        assert [hit.context for hit in sort_hits(hits)] == ["Apple", "apricot", "banana"]

    def test_ties_keep_retrieval_order(self):
        hits = [ConcordanceHit("first", "Same"), ConcordanceHit("second", "same")]
        assert [hit.line for hit in sort_hits(hits)] == ["first", "second"]
