"""
Analysis configuration.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .smoothing import SmoothingMethod


class UnseenPolicy(Enum):
    """How events missing from the model are scored during evaluation."""
    NEUTRAL = "neutral"  # log-probability 0, i.e. probability 1
    STRICT = "strict"    # log-probability -inf, i.e. probability 0


class DeadEndPolicy(Enum):
    """What the generator does when the current token has no successor."""
    RAISE = "raise"
    RESTART = "restart"


@dataclass(frozen=True)
class ModelConfig:
    """
    Settings for one analysis run.

    Attributes:
        smoothing_enabled: Add one to every observed bigram count
        compute_perplexity: Compute unigram and bigram perplexity of the test corpus
        sentences_to_generate: Number of sentences to sample (0 disables generation)
        full_laplace: With smoothing enabled, use corrected Laplace smoothing
                      instead of observed-type add-one
        unseen_policy: Scoring of unseen unigrams/bigrams during evaluation
        seed: Seed for the generator's random number generator
        dead_end_policy: Generator behaviour on a token with no successor
        max_restarts: Restarts allowed per sentence under DeadEndPolicy.RESTART
    """
    smoothing_enabled: bool = False
    compute_perplexity: bool = False
    sentences_to_generate: int = 0
    full_laplace: bool = False
    unseen_policy: UnseenPolicy = UnseenPolicy.NEUTRAL
    seed: Optional[int] = None
    dead_end_policy: DeadEndPolicy = DeadEndPolicy.RAISE
    max_restarts: int = 100

    def __post_init__(self):
        if self.sentences_to_generate < 0:
            raise ValueError("sentences_to_generate must be at least 0")
        if self.max_restarts < 0:
            raise ValueError("max_restarts must be at least 0")
        if self.full_laplace and not self.smoothing_enabled:
            raise ValueError("full_laplace requires smoothing_enabled")

    @property
    def smoothing_method(self) -> SmoothingMethod:
        if not self.smoothing_enabled:
            return SmoothingMethod.NONE
        if self.full_laplace:
            return SmoothingMethod.LAPLACE
        return SmoothingMethod.OBSERVED_ADD_ONE
