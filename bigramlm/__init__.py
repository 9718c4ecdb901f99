"""
Bigram Language Model Package

Unigram and bigram language models estimated from a tokenized corpus,
evaluated on a held-out corpus, with random sentence generation.
"""

from .config import DeadEndPolicy, ModelConfig, UnseenPolicy
from .counting import FrequencyCounts, count_frequencies
from .errors import (
    DegenerateModelError, EmptyCorpusError, GenerationDeadEndError,
    LanguageModelError, MalformedTokenError
)
from .evaluation import CorpusEvaluation, Perplexity, SentenceEvaluation, evaluate
from .generation import SentenceGenerator
from .model import BigramLanguageModel, BigramRecord, UnigramRecord
from .pipeline import AnalysisResult, analyze
from .smoothing import SmoothingMethod

__version__ = "0.1.0"
__all__ = [
    "AnalysisResult", "BigramLanguageModel", "BigramRecord", "CorpusEvaluation",
    "DeadEndPolicy", "DegenerateModelError", "EmptyCorpusError", "FrequencyCounts",
    "GenerationDeadEndError", "LanguageModelError", "MalformedTokenError", "ModelConfig",
    "Perplexity", "SentenceEvaluation", "SentenceGenerator", "SmoothingMethod",
    "UnigramRecord", "UnseenPolicy", "analyze", "count_frequencies", "evaluate",
]
