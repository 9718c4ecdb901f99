"""
Smoothing Methods for the Bigram Model

The default smoothing adds one to the count of every bigram type that was
actually observed. It neither creates the unseen vocabulary x vocabulary
combinations nor widens the denominator, so it is an incomplete additive
scheme. Full Laplace smoothing is available as a separate, explicitly
selected method.
"""

from enum import Enum
from typing import Optional


class SmoothingMethod(Enum):
    """Available smoothing methods."""
    NONE = "none"
    OBSERVED_ADD_ONE = "observed_add_one"  # +1 on observed bigram types only
    LAPLACE = "laplace"                    # Corrected add-one over the vocabulary


class Smoother:
    """Base class for smoothing implementations."""

    def __init__(self, vocab_size: int):
        self.vocab_size = vocab_size

    def adjust_count(self, count: int) -> int:
        """Return the count stored in the bigram table."""
        return count

    def smooth(self, count: int, context_count: int) -> float:
        """Return P(w2|w1) given the adjusted bigram count and count(w1)."""
        raise NotImplementedError

    def unseen(self, context_count: int) -> Optional[float]:
        """Probability of a bigram absent from the table, or None to defer."""
        return None


class NoSmoothing(Smoother):
    """No smoothing - raw maximum likelihood estimation."""

    def smooth(self, count: int, context_count: int) -> float:
        return count / context_count


class ObservedAddOneSmoothing(Smoother):
    """
    Observed-type add-one smoothing

    count*(w1, w2) = count(w1, w2) + 1, for observed (w1, w2) only
    P(w2|w1) = count*(w1, w2) / count(w1)

    The denominator is left untouched, so a conditional distribution may sum
    to more than one.
    """

    def adjust_count(self, count: int) -> int:
        return count + 1

    def smooth(self, count: int, context_count: int) -> float:
        return count / context_count


class LaplaceSmoothing(Smoother):
    """
    Laplace (Add-One) Smoothing

    P(w2|w1) = (count(w1, w2) + 1) / (count(w1) + V)

    Where V is the vocabulary size. Unseen pairs get 1 / (count(w1) + V).
    """

    def adjust_count(self, count: int) -> int:
        return count + 1

    def smooth(self, count: int, context_count: int) -> float:
        return count / (context_count + self.vocab_size)

    def unseen(self, context_count: int) -> Optional[float]:
        return 1 / (context_count + self.vocab_size)


def get_smoother(method: SmoothingMethod, vocab_size: int) -> Smoother:
    """Factory function to create the appropriate smoother."""
    if method == SmoothingMethod.NONE:
        return NoSmoothing(vocab_size)
    elif method == SmoothingMethod.OBSERVED_ADD_ONE:
        return ObservedAddOneSmoothing(vocab_size)
    elif method == SmoothingMethod.LAPLACE:
        return LaplaceSmoothing(vocab_size)
    else:
        raise ValueError(f"Unknown smoothing method: {method}")
