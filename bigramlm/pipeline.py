"""
Analysis Pipeline

count -> build model -> evaluate test corpus -> generate sentences.
Every stage receives its inputs explicitly, so independent analyses never
share state.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .config import ModelConfig
from .corpus import Corpus, validate_corpus
from .counting import count_frequencies
from .evaluation import CorpusEvaluation, Perplexity, SentenceEvaluation, evaluate
from .generation import SentenceGenerator
from .model import BigramLanguageModel


logger = logging.getLogger(__name__)

StageCallback = Callable[[int, int, str], None]


@dataclass
class AnalysisResult:
    """
    Everything one analysis run produces.

    Attributes:
        per_sentence: sentence text -> SentenceEvaluation
        avg_unigram_prob: Mean raw unigram sentence probability
        avg_bigram_prob: Mean raw bigram sentence probability
        perplexity: Unigram and bigram perplexity, if requested
        generated_sentences: Generated sentences, if requested
        model_stats: Statistics of the model the test corpus was scored with
    """
    per_sentence: Dict[str, SentenceEvaluation]
    avg_unigram_prob: float
    avg_bigram_prob: float
    perplexity: Optional[Perplexity] = None
    generated_sentences: Optional[List[str]] = None
    model_stats: Optional[Dict] = None

    def sentence_probabilities(self) -> Dict[str, List[float]]:
        """sentence text -> [unigram probability, bigram probability]"""
        return {
            text: [scored.unigram_probability, scored.bigram_probability]
            for text, scored in self.per_sentence.items()
        }


def analyze(train_sentences: Corpus, test_sentences: Corpus,
            config: Optional[ModelConfig] = None,
            progress_callback: Optional[StageCallback] = None) -> AnalysisResult:
    """
    Build a model from the training corpus and analyse the test corpus.

    Args:
        train_sentences: Tokenized training sentences
        test_sentences: Tokenized test sentences
        config: Analysis settings (defaults to ModelConfig())
        progress_callback: Optional callback(current, total, stage) for progress

    Returns:
        AnalysisResult

    Raises:
        EmptyCorpusError: If either corpus is empty
        DegenerateModelError: If a probability denominator is zero
        GenerationDeadEndError: If generation hits a dead end it cannot recover from
    """
    config = config or ModelConfig()
    validate_corpus(train_sentences, "training corpus")
    validate_corpus(test_sentences, "test corpus")

    start_time = time.perf_counter()
    total_stages = 4

    def report(stage_idx: int, stage: str):
        if progress_callback:
            progress_callback(stage_idx, total_stages, stage)

    report(0, "Counting n-grams")
    counts = count_frequencies(train_sentences)

    report(1, "Building models")
    model = BigramLanguageModel.from_counts(counts, config.smoothing_method)

    report(2, "Scoring test corpus")
    evaluation: CorpusEvaluation = evaluate(
        model, test_sentences,
        compute_perplexity_scores=config.compute_perplexity,
        unseen_policy=config.unseen_policy,
    )

    generated = None
    if config.sentences_to_generate > 0:
        report(3, "Generating sentences")
        generator = SentenceGenerator(
            model.bigram_occurrences,
            seed=config.seed,
            dead_end_policy=config.dead_end_policy,
            max_restarts=config.max_restarts,
        )
        generated = generator.generate(config.sentences_to_generate)

    report(4, "Complete")
    logger.info("Analysis finished in %.0f ms", (time.perf_counter() - start_time) * 1000)

    return AnalysisResult(
        per_sentence=evaluation.per_sentence,
        avg_unigram_prob=evaluation.avg_unigram_prob,
        avg_bigram_prob=evaluation.avg_bigram_prob,
        perplexity=evaluation.perplexity,
        generated_sentences=generated,
        model_stats=model.stats(),
    )
