"""
Bigram Language Model Implementation

This module contains the BigramLanguageModel class, which turns the raw
counts of a training corpus into unigram and bigram log-probabilities
under a smoothing policy. A built model is immutable.
"""

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .corpus import Corpus
from .counting import FrequencyCounts, ProgressCallback, bigram_key, count_frequencies
from .errors import DegenerateModelError, MalformedTokenError
from .smoothing import Smoother, SmoothingMethod, get_smoother


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnigramRecord:
    """A vocabulary entry."""
    token: str
    count: int
    log_probability: float


@dataclass(frozen=True)
class BigramRecord:
    """A bigram table entry, keyed by ``"first_word second_word"``."""
    first_word: str
    second_word: str
    count: int
    log_probability: float

    @property
    def key(self) -> str:
        return bigram_key(self.first_word, self.second_word)

    @staticmethod
    def split_key(key: str) -> Tuple[str, str]:
        """
        Split a bigram key into its two tokens.

        Raises:
            MalformedTokenError: If the key is not exactly two non-empty
                                 tokens separated by a single space
        """
        parts = key.split(" ")
        if len(parts) != 2 or not all(parts):
            raise MalformedTokenError(f"Bigram key {key!r} does not split into two tokens")
        return parts[0], parts[1]


def log_probability(probability: float) -> float:
    """
    Natural log of a probability, storing 0 when the probability is exactly
    0 or 1.

    A probability of 0 would otherwise give -inf; storing 0 makes such an
    event a no-op in sentence-level sums.
    """
    if probability == 0 or probability == 1:
        return 0.0
    return math.log(probability)


class BigramLanguageModel:
    """
    Unigram and bigram language model

    Attributes:
        vocabulary: token -> UnigramRecord
        bigrams: ``"w1 w2"`` -> BigramRecord
        counts: The FrequencyCounts the model was built from
        smoothing_method: The smoothing method that produced the bigram table
    """

    def __init__(self, counts: FrequencyCounts,
                 vocabulary: Dict[str, UnigramRecord],
                 bigrams: Dict[str, BigramRecord],
                 smoothing_method: SmoothingMethod,
                 smoother: Smoother):
        self.counts = counts
        self.vocabulary: Mapping[str, UnigramRecord] = MappingProxyType(vocabulary)
        self.bigrams: Mapping[str, BigramRecord] = MappingProxyType(bigrams)
        self.smoothing_method = smoothing_method
        self.smoother = smoother

        self._by_pair: Dict[Tuple[str, str], BigramRecord] = {
            (record.first_word, record.second_word): record for record in bigrams.values()
        }
        self._by_first: Dict[str, List[BigramRecord]] = {}
        for record in bigrams.values():
            self._by_first.setdefault(record.first_word, []).append(record)

    @classmethod
    def from_counts(cls, counts: FrequencyCounts,
                    smoothing: SmoothingMethod = SmoothingMethod.NONE) -> 'BigramLanguageModel':
        """
        Build the model from frequency counts.

        Args:
            counts: Output of the frequency counter
            smoothing: Smoothing method for the bigram table

        Returns:
            The built model

        Raises:
            DegenerateModelError: If a denominator is zero or missing
            MalformedTokenError: If a bigram key is malformed
        """
        smoother = get_smoother(smoothing, len(counts.unigram_counts))
        vocabulary = cls._unigram_records(counts.unigram_counts)
        bigrams = cls._bigram_records(counts.bigram_counts, counts.unigram_counts, smoother)

        logger.info("Built model: %d unigram types, %d bigram types, smoothing=%s",
                    len(vocabulary), len(bigrams), smoothing.value)
        return cls(counts, vocabulary, bigrams, smoothing, smoother)

    @classmethod
    def train(cls, sentences: Corpus,
              smoothing: SmoothingMethod = SmoothingMethod.NONE,
              progress_callback: Optional[ProgressCallback] = None) -> 'BigramLanguageModel':
        """Count the training sentences and build the model in one step."""
        return cls.from_counts(count_frequencies(sentences, progress_callback), smoothing)

    @staticmethod
    def _unigram_records(unigram_counts: Mapping[str, int]) -> Dict[str, UnigramRecord]:
        total = sum(unigram_counts.values())
        if total <= 0:
            raise DegenerateModelError("Unigram counts sum to zero")

        return {
            token: UnigramRecord(token, count, log_probability(count / total))
            for token, count in unigram_counts.items()
        }

    @staticmethod
    def _bigram_records(bigram_counts: Mapping[str, int],
                        unigram_counts: Mapping[str, int],
                        smoother: Smoother) -> Dict[str, BigramRecord]:
        # One denominator lookup per distinct first word instead of a
        # vocabulary scan per bigram
        split_keys = {key: BigramRecord.split_key(key) for key in bigram_counts}
        denominators: Dict[str, int] = {}
        for first, _ in split_keys.values():
            if first in denominators:
                continue
            context_count = unigram_counts.get(first, 0)
            if context_count <= 0:
                raise DegenerateModelError(
                    f"Bigram context {first!r} has no unigram count to divide by")
            denominators[first] = context_count

        records = {}
        for key, raw_count in bigram_counts.items():
            first, second = split_keys[key]
            count = smoother.adjust_count(raw_count)
            probability = smoother.smooth(count, denominators[first])
            records[key] = BigramRecord(first, second, count, log_probability(probability))
        return records

    @property
    def bigram_occurrences(self) -> Tuple[Tuple[str, str], ...]:
        return self.counts.bigram_occurrences

    def unigram_log_probability(self, token: str) -> Optional[float]:
        """Stored log-probability of ``token``, or None if it is unseen."""
        record = self.vocabulary.get(token)
        return record.log_probability if record is not None else None

    def bigram_log_probability(self, first_word: str, second_word: str) -> Optional[float]:
        """
        Stored log-probability of ``(first_word, second_word)``.

        For a pair missing from the table, the smoother may supply an
        estimate (Laplace smoothing does when ``first_word`` is known);
        otherwise None is returned and the caller decides.
        """
        record = self._by_pair.get((first_word, second_word))
        if record is not None:
            return record.log_probability

        context = self.vocabulary.get(first_word)
        if context is not None:
            probability = self.smoother.unseen(context.count)
            if probability is not None:
                return log_probability(probability)
        return None

    def next_word_distribution(self, first_word: str,
                               top_k: int = 10) -> List[Tuple[str, float]]:
        """
        Observed successors of a word with their probabilities.

        Returns:
            List of (word, probability) tuples, sorted by probability
        """
        probs = [(r.second_word, math.exp(r.log_probability))
                 for r in self._by_first.get(first_word, [])]
        probs.sort(key=lambda x: x[1], reverse=True)
        return probs[:top_k]

    def top_unigrams(self, top_k: int = 10) -> List[Tuple[str, int]]:
        """Get the most frequent tokens."""
        ranked = sorted(self.vocabulary.values(), key=lambda r: r.count, reverse=True)
        return [(r.token, r.count) for r in ranked[:top_k]]

    def top_bigrams(self, top_k: int = 10) -> List[Tuple[str, int]]:
        """Get the most frequent bigrams (counts after smoothing)."""
        ranked = sorted(self.bigrams.values(), key=lambda r: r.count, reverse=True)
        return [(r.key, r.count) for r in ranked[:top_k]]

    def stats(self) -> Dict:
        return {
            'smoothing': self.smoothing_method.value,
            'vocab_size': len(self.vocabulary),
            'num_sentences': self.counts.num_sentences,
            'num_tokens': self.counts.num_tokens,
            'unique_bigrams': len(self.bigrams),
            'total_bigrams': len(self.counts.bigram_occurrences),
        }
