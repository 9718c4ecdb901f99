"""
Test Corpus Evaluation

Scores every test sentence under the unigram and the bigram model,
aggregates average sentence probabilities and, on request, perplexity.

Events missing from the model contribute log-probability 0 under the
default UnseenPolicy.NEUTRAL, i.e. they are treated as certain rather than
impossible. This inflates the probability of out-of-vocabulary material;
UnseenPolicy.STRICT scores them as impossible instead.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, NamedTuple, Optional

from .config import UnseenPolicy
from .corpus import Corpus, Sentence, add_sentence_markers, sentence_text, validate_corpus
from .errors import DegenerateModelError
from .model import BigramLanguageModel


logger = logging.getLogger(__name__)


def _exp(value: float) -> float:
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


def _unseen_log_probability(policy: UnseenPolicy) -> float:
    if policy == UnseenPolicy.STRICT:
        return -math.inf
    return 0.0


@dataclass(frozen=True)
class SentenceEvaluation:
    """Log-probabilities of one test sentence under both models."""
    sentence_text: str
    unigram_log_prob: float
    bigram_log_prob: float

    @property
    def unigram_probability(self) -> float:
        return _exp(self.unigram_log_prob)

    @property
    def bigram_probability(self) -> float:
        return _exp(self.bigram_log_prob)


class Perplexity(NamedTuple):
    unigram: float
    bigram: float


@dataclass
class CorpusEvaluation:
    """
    Aggregated evaluation of a test corpus.

    ``per_sentence`` is keyed by sentence text, so repeated sentences share
    one entry; the averages and totals still count every occurrence.
    """
    per_sentence: Dict[str, SentenceEvaluation] = field(default_factory=dict)
    avg_unigram_prob: float = 0.0
    avg_bigram_prob: float = 0.0
    total_unigram_log_prob: float = 0.0
    total_bigram_log_prob: float = 0.0
    num_sentences: int = 0
    num_tokens: int = 0
    perplexity: Optional[Perplexity] = None

    @property
    def unigram_corpus_probability(self) -> float:
        return _exp(self.total_unigram_log_prob)

    @property
    def bigram_corpus_probability(self) -> float:
        return _exp(self.total_bigram_log_prob)


def unigram_sentence_log_prob(model: BigramLanguageModel, tokens: Sentence,
                              unseen_policy: UnseenPolicy = UnseenPolicy.NEUTRAL) -> float:
    """Sum of unigram log-probabilities of ``<s>`` followed by the sentence."""
    total = 0.0
    for token in add_sentence_markers(tokens, end=False):
        value = model.unigram_log_probability(token)
        total += value if value is not None else _unseen_log_probability(unseen_policy)
    return total


def bigram_sentence_log_prob(model: BigramLanguageModel, tokens: Sentence,
                             unseen_policy: UnseenPolicy = UnseenPolicy.NEUTRAL) -> float:
    """Sum of bigram log-probabilities over ``<s> ... </s>``."""
    marked = add_sentence_markers(tokens)
    total = 0.0
    for first, second in zip(marked, marked[1:]):
        value = model.bigram_log_probability(first, second)
        total += value if value is not None else _unseen_log_probability(unseen_policy)
    return total


def evaluate_sentence(model: BigramLanguageModel, tokens: Sentence,
                      unseen_policy: UnseenPolicy = UnseenPolicy.NEUTRAL) -> SentenceEvaluation:
    return SentenceEvaluation(
        sentence_text=sentence_text(tokens),
        unigram_log_prob=unigram_sentence_log_prob(model, tokens, unseen_policy),
        bigram_log_prob=bigram_sentence_log_prob(model, tokens, unseen_policy),
    )


def compute_perplexity(corpus_probability: float, n: int) -> float:
    """
    Perplexity = (1 / P(corpus)) ^ (1 / N)

    Args:
        corpus_probability: Product of all sentence probabilities
        n: Number of predicted events (test tokens + test sentences)

    Returns:
        Perplexity; ``math.inf`` when the corpus probability underflowed to 0
    """
    if n <= 0:
        raise DegenerateModelError("Perplexity needs at least one predicted event")
    if corpus_probability == 0:
        return math.inf
    # exp(-ln P / N) == (1 / P) ^ (1 / N), without forming 1 / P
    return _exp(-math.log(corpus_probability) / n)


def evaluate(model: BigramLanguageModel, sentences: Corpus,
             compute_perplexity_scores: bool = False,
             unseen_policy: UnseenPolicy = UnseenPolicy.NEUTRAL) -> CorpusEvaluation:
    """
    Evaluate a test corpus.

    Args:
        model: Built language model
        sentences: Tokenized test sentences
        compute_perplexity_scores: Whether to compute perplexity
        unseen_policy: Scoring of events missing from the model

    Returns:
        CorpusEvaluation with per-sentence scores and corpus aggregates

    Raises:
        EmptyCorpusError: If there are no test sentences
    """
    validate_corpus(sentences, "test corpus")

    result = CorpusEvaluation()
    unigram_prob_sum = 0.0
    bigram_prob_sum = 0.0

    for tokens in sentences:
        scored = evaluate_sentence(model, tokens, unseen_policy)
        result.per_sentence[scored.sentence_text] = scored

        unigram_prob_sum += scored.unigram_probability
        bigram_prob_sum += scored.bigram_probability
        result.total_unigram_log_prob += scored.unigram_log_prob
        result.total_bigram_log_prob += scored.bigram_log_prob
        result.num_sentences += 1
        result.num_tokens += len(tokens)

    result.avg_unigram_prob = unigram_prob_sum / result.num_sentences
    result.avg_bigram_prob = bigram_prob_sum / result.num_sentences

    if compute_perplexity_scores:
        n = result.num_tokens + result.num_sentences
        result.perplexity = Perplexity(
            unigram=compute_perplexity(result.unigram_corpus_probability, n),
            bigram=compute_perplexity(result.bigram_corpus_probability, n),
        )
        if math.isinf(result.perplexity.unigram) or math.isinf(result.perplexity.bigram):
            logger.warning("Test corpus probability underflowed to 0; perplexity is infinite")

    logger.info("Evaluated %d test sentences (%d tokens)",
                result.num_sentences, result.num_tokens)
    return result
