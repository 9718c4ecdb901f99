import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


@pytest.fixture
def two_sentence_corpus():
    return [["the", "cat", "sat"], ["the", "dog", "ran"]]


@pytest.fixture
def period_corpus():
    """Every sentence ends in the terminal token, so generation never dead-ends."""
    return [
        ["the", "cat", "sat", "."],
        ["the", "dog", "ran", "."],
        ["a", "cat", "ran", "."],
        ["the", "cat", "ran", "home", "."],
    ]


@pytest.fixture
def nltk_tokenizers():
    """Skip unless the nltk sentence/word tokenizer models are installed."""
    nltk = pytest.importorskip("nltk")
    for resource in ("tokenizers/punkt", "tokenizers/punkt_tab"):
        try:
            nltk.data.find(resource)
        except LookupError:
            pytest.skip(f"nltk resource {resource} is not installed")


@pytest.fixture
def clean_logging():
    yield
    for handler in logging.root.handlers[:]:
        handler.close()
        logging.root.removeHandler(handler)
    logging.root.setLevel(logging.WARNING)
