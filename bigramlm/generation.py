"""
Random Sentence Generation

Samples sentences from a first-order Markov chain over the bigrams seen in
training. Successors are drawn uniformly from the flat list of bigram
occurrences, so a pair seen k times is k times as likely to be chosen.
"""

import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple

from .config import DeadEndPolicy
from .corpus import END_TOKEN, START_TOKEN, TERMINAL_TOKEN
from .errors import EmptyCorpusError, GenerationDeadEndError


logger = logging.getLogger(__name__)


def strip_sentence_markers(words: Sequence[str]) -> str:
    """Drop a leading start marker and a trailing end marker and join the rest."""
    words = list(words)
    if words and words[0] == START_TOKEN:
        words = words[1:]
    if words and words[-1] == END_TOKEN:
        words = words[:-1]
    return " ".join(words)


class SentenceGenerator:
    """
    Random-walk sentence generator.

    A sentence starts from a uniformly chosen ``<s> w`` occurrence and
    extends with a uniformly chosen occurrence starting with the current
    last token, until a chosen pair contains the terminal ``.`` token.

    If the current token has no recorded successor (typically ``</s>`` of a
    training sentence that did not end in ``.``), the default
    ``DeadEndPolicy.RAISE`` raises GenerationDeadEndError. Under
    ``DeadEndPolicy.RESTART`` the sentence is discarded and started over,
    at most ``max_restarts`` times, before the error is raised.
    """

    def __init__(self, bigram_occurrences: Sequence[Tuple[str, str]],
                 seed: Optional[int] = None,
                 dead_end_policy: DeadEndPolicy = DeadEndPolicy.RAISE,
                 max_restarts: int = 100):
        if not bigram_occurrences:
            raise EmptyCorpusError("No bigram occurrences to generate from")

        self.dead_end_policy = dead_end_policy
        self.max_restarts = max_restarts
        self._random = random.Random(seed)

        self._successors: Dict[str, List[Tuple[str, str]]] = {}
        for pair in bigram_occurrences:
            self._successors.setdefault(pair[0], []).append(pair)

    def _walk(self) -> List[str]:
        starts = self._successors.get(START_TOKEN)
        if not starts:
            raise GenerationDeadEndError(START_TOKEN)

        first, tail = self._random.choice(starts)
        words = [first, tail]

        while True:
            candidates = self._successors.get(tail)
            if not candidates:
                raise GenerationDeadEndError(tail, " ".join(words))

            first, tail = self._random.choice(candidates)
            words.append(tail)

            if TERMINAL_TOKEN in (first, tail):
                return words

    def generate_sentence(self) -> str:
        """
        Generate one sentence.

        Raises:
            GenerationDeadEndError: On a dead end (after exhausting restarts
                                    under DeadEndPolicy.RESTART)
        """
        restarts = 0
        while True:
            try:
                return strip_sentence_markers(self._walk())
            except GenerationDeadEndError as e:
                if self.dead_end_policy != DeadEndPolicy.RESTART or restarts >= self.max_restarts:
                    raise
                restarts += 1
                logger.warning("Dead end at %r, restarting sentence (%d/%d)",
                               e.token, restarts, self.max_restarts)

    def generate(self, count: int) -> List[str]:
        """Generate ``count`` sentences."""
        if count < 0:
            raise ValueError("count must be at least 0")

        sentences = [self.generate_sentence() for _ in range(count)]
        logger.info("Generated %d sentences", len(sentences))
        return sentences
