#!/usr/bin/env python3
"""
Unigram / Bigram Language Model Analysis Script

Build unigram and bigram models from a training text, score a test text
against them, and optionally compute perplexity and generate sentences.

Usage:
    python analyze.py --train train.txt test.txt results.txt -P -S -G 5
    python analyze.py --brown news fiction -- test.txt -P
"""

import argparse
import logging
import sys

from rich.console import Console
from rich.markup import escape

from bigramlm import DeadEndPolicy, LanguageModelError, ModelConfig, UnseenPolicy
from bigramlm.corpus import DEFAULT_ENCODING, load_brown_corpus, load_corpus_file
from bigramlm.log_utils import setup_logging
from bigramlm.report import run_analysis_cli


logger = logging.getLogger("bigramlm.analyze")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evaluate unigram and bigram language models on a test text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --train train.txt test.txt results.txt
  %(prog)s --train train.txt test.txt results.txt -P -S -G 10 --seed 7
  %(prog)s --brown news -- test.txt -P --restart-on-dead-end -G 3

Switches:
  -P          compute unigram and bigram perplexity of the test text
  -S          add one to every observed bigram count
  -G N        randomly generate N sentences from the bigram model
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '-t', '--train',
        type=str,
        help='Text file containing the training dataset'
    )
    source.add_argument(
        '--brown',
        type=str,
        nargs='*',
        metavar='CATEGORY',
        help='Train on the Brown corpus (optionally restricted to categories)'
    )

    parser.add_argument('test', help='Text file containing the test dataset')
    parser.add_argument('output', nargs='?', default=None,
                        help='File to store the analysis results in')

    parser.add_argument('-P', '--perplexity', action='store_true',
                        help='Compute perplexity of the test dataset')
    parser.add_argument('-S', '--smoothing', action='store_true',
                        help='Smooth the bigram model')
    parser.add_argument('-G', '--generate', type=int, default=0, metavar='N',
                        help='Number of sentences to generate (default: 0)')

    parser.add_argument('--laplace', action='store_true',
                        help='With -S, use full Laplace smoothing instead of '
                             'observed-bigram add-one')
    parser.add_argument('--strict-unseen', action='store_true',
                        help='Score unseen test events as impossible instead of neutral')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for sentence generation')
    parser.add_argument('--restart-on-dead-end', action='store_true',
                        help='Restart a generated sentence instead of failing on a dead end')
    parser.add_argument('--max-restarts', type=int, default=100,
                        help='Restarts allowed per generated sentence (default: 100)')

    parser.add_argument('--encoding', type=str, default=DEFAULT_ENCODING,
                        help=f'Encoding of the input files (default: {DEFAULT_ENCODING})')
    parser.add_argument('--lowercase', action='store_true',
                        help='Lowercase all text before tokenizing')
    parser.add_argument('--log-level', type=str, default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Console log level (default: WARNING)')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Write a detailed log to this file')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.laplace and not args.smoothing:
        parser.error("--laplace requires -S/--smoothing")

    setup_logging(args.log_level, args.log_file)
    console = Console()

    try:
        config = ModelConfig(
            smoothing_enabled=args.smoothing,
            compute_perplexity=args.perplexity,
            sentences_to_generate=args.generate,
            full_laplace=args.laplace,
            unseen_policy=UnseenPolicy.STRICT if args.strict_unseen else UnseenPolicy.NEUTRAL,
            seed=args.seed,
            dead_end_policy=(DeadEndPolicy.RESTART if args.restart_on_dead_end
                             else DeadEndPolicy.RAISE),
            max_restarts=args.max_restarts,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        with console.status("[cyan]Loading datasets..."):
            if args.brown is not None:
                train_sentences, brown_stats = load_brown_corpus(categories=args.brown or None,
                                                                 lowercase=args.lowercase)
                training_source = (f"Brown corpus ({', '.join(brown_stats['categories'])}; "
                                   f"{brown_stats['skipped_sentences']:,} short sentences skipped)")
            else:
                train_sentences = load_corpus_file(args.train, encoding=args.encoding,
                                                   lowercase=args.lowercase)
                training_source = args.train
            test_sentences = load_corpus_file(args.test, encoding=args.encoding,
                                              lowercase=args.lowercase)

        run_analysis_cli(train_sentences, test_sentences, config,
                         output_path=args.output, console=console,
                         training_source=training_source)
    except (LanguageModelError, OSError, UnicodeDecodeError) as e:
        logger.debug("Analysis failed", exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
