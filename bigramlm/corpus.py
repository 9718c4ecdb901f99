"""
Corpus Loading and Preprocessing

This module turns raw text into the sentence-segmented, tokenized corpora
the language model is trained and evaluated on, and holds the boundary
marker helpers shared by the counter, the evaluator and the generator.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import nltk
from nltk.corpus import brown

from .errors import EmptyCorpusError


logger = logging.getLogger(__name__)

# Special tokens
START_TOKEN = "<s>"
END_TOKEN = "</s>"
TERMINAL_TOKEN = "."

DEFAULT_ENCODING = "cp1252"

Sentence = Sequence[str]
Corpus = Sequence[Sentence]


def ensure_nltk_data(corpora: Tuple[str, ...] = ()) -> None:
    """
    Download required NLTK data if not present.

    Args:
        corpora: Extra corpus names (e.g. ``("brown",)``) to make available
                 besides the sentence/word tokenizer models.
    """
    resources = [('tokenizers/punkt', 'punkt'),
                 ('tokenizers/punkt_tab', 'punkt_tab')]
    resources += [(f'corpora/{name}', name) for name in corpora]

    for path, package in resources:
        try:
            nltk.data.find(path)
        except LookupError:
            logger.info("Downloading NLTK resource %s...", package)
            nltk.download(package, quiet=True)


def tokenize_text(text: str, lowercase: bool = False) -> List[List[str]]:
    """
    Split raw text into sentences and each sentence into tokens.

    Args:
        text: Raw input text
        lowercase: Whether to lowercase the text first

    Returns:
        List of sentences, each a list of tokens. Sentences that tokenize
        to nothing are dropped.
    """
    if lowercase:
        text = text.lower()

    sentences = []
    for sent in nltk.sent_tokenize(text):
        tokens = nltk.word_tokenize(sent)
        if tokens:
            sentences.append(tokens)

    return sentences


def load_corpus_file(path: Union[str, Path], encoding: str = DEFAULT_ENCODING,
                     lowercase: bool = False) -> List[List[str]]:
    """
    Read a text file and tokenize it into sentences.

    Args:
        path: Path of the text file
        encoding: File encoding (default cp1252, the encoding of the classic
                  course datasets)
        lowercase: Whether to lowercase the text

    Returns:
        List of tokenized sentences

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid in ``encoding``
    """
    path = Path(path)
    text = path.read_text(encoding=encoding)

    ensure_nltk_data()
    sentences = tokenize_text(text, lowercase=lowercase)

    logger.info("Loaded %d sentences (%d tokens) from %s",
                len(sentences), sum(len(s) for s in sentences), path)
    return sentences


def load_brown_corpus(categories: Optional[List[str]] = None,
                      lowercase: bool = False,
                      min_sentence_length: int = 3) -> Tuple[List[List[str]], Dict]:
    """
    Training sentences from the Brown corpus.

    Args:
        categories: Brown categories to draw from (e.g. ['news', 'fiction']);
                    all categories when empty or None
        lowercase: Whether to lowercase every token
        min_sentence_length: Sentences shorter than this are skipped

    Returns:
        Tuple of (sentences, stats) where stats holds ``num_sentences``,
        ``total_tokens``, ``skipped_sentences`` and the ``categories`` used
    """
    ensure_nltk_data(("brown",))

    selected = list(categories) if categories else list(brown.categories())

    sentences = []
    skipped = 0
    for sent in brown.sents(categories=selected):
        if len(sent) < min_sentence_length:
            skipped += 1
            continue
        sentences.append([w.lower() for w in sent] if lowercase else list(sent))

    stats = {
        'num_sentences': len(sentences),
        'total_tokens': sum(len(s) for s in sentences),
        'skipped_sentences': skipped,
        'categories': selected,
    }
    logger.info("Loaded %d Brown sentences (%d tokens, %d too short) from %s",
                stats['num_sentences'], stats['total_tokens'], skipped, ", ".join(selected))

    return sentences, stats


def add_sentence_markers(tokens: Sentence, end: bool = True) -> List[str]:
    """
    Wrap a sentence in boundary markers.

    Args:
        tokens: Tokens of the sentence
        end: Whether to append the end marker as well as the start marker

    Returns:
        ``[<s>] + tokens (+ [</s>])``
    """
    marked = [START_TOKEN] + list(tokens)
    if end:
        marked.append(END_TOKEN)
    return marked


def sentence_bigrams(tokens: Sentence) -> List[Tuple[str, str]]:
    """Adjacent token pairs of a sentence wrapped in both markers."""
    marked = add_sentence_markers(tokens)
    return list(zip(marked, marked[1:]))


def sentence_text(tokens: Sentence) -> str:
    """Render a tokenized sentence the way results are keyed."""
    return " ".join(tokens)


def validate_corpus(corpus: Corpus, name: str = "corpus") -> None:
    """Raise EmptyCorpusError when ``corpus`` holds no sentences."""
    if corpus is None or len(corpus) == 0:
        raise EmptyCorpusError(f"The {name} contains no sentences")
