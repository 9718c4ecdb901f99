"""
Exceptions raised by the language model pipeline.

Every error is local to one analysis run; nothing is retried automatically
except generator restarts under ``DeadEndPolicy.RESTART``.
"""


class LanguageModelError(ValueError):
    """Base class for language model failures."""


class EmptyCorpusError(LanguageModelError):
    """Raised when a training or test corpus contains no sentences."""


class DegenerateModelError(LanguageModelError):
    """Raised when a probability would be computed over a zero denominator."""


class MalformedTokenError(LanguageModelError):
    """Raised when a bigram key does not split into exactly two tokens."""


class GenerationDeadEndError(LanguageModelError):
    """Raised when the generator reaches a token with no outgoing bigram."""

    def __init__(self, token: str, partial: str = ""):
        self.token = token
        self.partial = partial
        message = f"No bigram continues from token {token!r}"
        if partial:
            message += f" (generated so far: {partial!r})"
        super().__init__(message)
