"""
Tests for bigramlm.counting: unigram/bigram counting and the occurrence list.
"""

import pytest

from bigramlm.corpus import END_TOKEN, START_TOKEN
from bigramlm.counting import bigram_key, count_frequencies
from bigramlm.errors import EmptyCorpusError


class TestCountFrequencies:

    def test_example_counts(self, two_sentence_corpus):
        counts = count_frequencies(two_sentence_corpus)

        assert counts.unigram_counts["the"] == 2
        assert counts.bigram_counts["<s> the"] == 2
        assert counts.bigram_counts["the cat"] == 1
        assert counts.bigram_counts["ran </s>"] == 1

    def test_token_count_conservation(self, period_corpus):
        """Unigram counts without the start marker add up to the token total."""
        counts = count_frequencies(period_corpus)

        total_tokens = sum(len(sent) for sent in period_corpus)
        counted = sum(c for tok, c in counts.unigram_counts.items() if tok != START_TOKEN)
        assert counted == total_tokens
        assert counts.num_tokens == total_tokens

    def test_start_marker_counts_sentences(self, period_corpus):
        counts = count_frequencies(period_corpus)

        assert counts.unigram_counts[START_TOKEN] == len(period_corpus)
        assert counts.num_sentences == len(period_corpus)

    def test_end_marker_not_a_unigram(self, two_sentence_corpus):
        counts = count_frequencies(two_sentence_corpus)

        assert END_TOKEN not in counts.unigram_counts

    def test_literal_start_marker_is_replaced(self):
        counts = count_frequencies([["<s>", "a"], ["<s>", "b"], ["<s>", "c"]])

        assert counts.unigram_counts[START_TOKEN] == 3

    def test_occurrences_in_corpus_order(self, two_sentence_corpus):
        counts = count_frequencies(two_sentence_corpus)

        assert counts.bigram_occurrences[:4] == (
            ("<s>", "the"), ("the", "cat"), ("cat", "sat"), ("sat", "</s>"))
        assert len(counts.bigram_occurrences) == sum(len(s) + 1 for s in two_sentence_corpus)
        assert sum(counts.bigram_counts.values()) == len(counts.bigram_occurrences)

    def test_empty_sentence_yields_start_end_bigram(self):
        counts = count_frequencies([[]])

        assert counts.bigram_counts == {"<s> </s>": 1}
        assert counts.unigram_counts == {START_TOKEN: 1}

    def test_empty_corpus_raises(self):
        with pytest.raises(EmptyCorpusError):
            count_frequencies([])

    def test_progress_callback(self):
        calls = []
        corpus = [["w"]] * 250

        count_frequencies(corpus, progress_callback=lambda cur, tot: calls.append((cur, tot)))

        assert calls == [(100, 250), (200, 250), (250, 250)]

    def test_tables_are_read_only(self, two_sentence_corpus):
        counts = count_frequencies(two_sentence_corpus)

        with pytest.raises(TypeError):
            counts.unigram_counts["the"] = 10

    def test_bigram_key(self):
        assert bigram_key("a", "b") == "a b"
