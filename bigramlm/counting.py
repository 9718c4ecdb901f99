"""
Frequency Counting

A single pass over the training corpus producing the unigram count table,
the bigram count table and the flat list of bigram occurrences the
sentence generator samples from.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple

from .corpus import START_TOKEN, Corpus, sentence_bigrams, validate_corpus


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def bigram_key(first_word: str, second_word: str) -> str:
    """Key under which a bigram is stored in the bigram table."""
    return f"{first_word} {second_word}"


@dataclass(frozen=True)
class FrequencyCounts:
    """
    Raw counts collected from a training corpus.

    Attributes:
        unigram_counts: token -> count, including the synthetic start marker
        bigram_counts: ``"w1 w2"`` -> count, sentences wrapped in both markers
        bigram_occurrences: every extracted pair, in corpus order
        num_sentences: number of training sentences
        num_tokens: number of raw tokens (no markers)
    """
    unigram_counts: Mapping[str, int]
    bigram_counts: Mapping[str, int]
    bigram_occurrences: Tuple[Tuple[str, str], ...]
    num_sentences: int
    num_tokens: int


def count_frequencies(sentences: Corpus,
                      progress_callback: Optional[ProgressCallback] = None) -> FrequencyCounts:
    """
    Count unigrams and bigrams in the training data.

    Unigrams are counted from the raw tokens only. The start marker is then
    injected with a count equal to the number of sentences, standing in for
    one start-of-sentence event per sentence; the end marker never enters
    the unigram table. Bigrams are counted over each sentence wrapped as
    ``<s> ... </s>``.

    Args:
        sentences: List of tokenized sentences
        progress_callback: Optional callback(current, total) for progress

    Returns:
        FrequencyCounts for the corpus

    Raises:
        EmptyCorpusError: If there are no sentences
    """
    validate_corpus(sentences, "training corpus")

    total = len(sentences)
    unigram_counts: Counter = Counter()
    bigram_counts: Counter = Counter()
    occurrences = []
    num_tokens = 0

    for idx, sent in enumerate(sentences):
        unigram_counts.update(sent)
        num_tokens += len(sent)

        for first, second in sentence_bigrams(sent):
            bigram_counts[bigram_key(first, second)] += 1
            occurrences.append((first, second))

        if progress_callback and (idx + 1) % 100 == 0:
            progress_callback(idx + 1, total)

    # Replaces, not adds to, any literal start marker seen in the input
    unigram_counts[START_TOKEN] = total

    if progress_callback:
        progress_callback(total, total)

    logger.debug("Counted %d tokens, %d unigram types, %d bigram types over %d sentences",
                 num_tokens, len(unigram_counts), len(bigram_counts), total)

    return FrequencyCounts(
        unigram_counts=MappingProxyType(dict(unigram_counts)),
        bigram_counts=MappingProxyType(dict(bigram_counts)),
        bigram_occurrences=tuple(occurrences),
        num_sentences=total,
        num_tokens=num_tokens,
    )
