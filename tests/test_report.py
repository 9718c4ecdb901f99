"""
Tests for bigramlm.report and bigramlm.log_utils.
"""

import io
import logging
import math

from rich.console import Console
from rich.logging import RichHandler

from bigramlm.config import ModelConfig
from bigramlm.evaluation import Perplexity, SentenceEvaluation
from bigramlm.log_utils import setup_logging
from bigramlm.pipeline import AnalysisResult
from bigramlm.report import create_stats_table, render_analysis, run_analysis_cli, write_report


def make_result(**overrides):
    fields = dict(
        per_sentence={"the cat sat": SentenceEvaluation("the cat sat", math.log(0.25), math.log(0.5))},
        avg_unigram_prob=0.25,
        avg_bigram_prob=0.5,
    )
    fields.update(overrides)
    return AnalysisResult(**fields)


def render_to_text(result):
    console = Console(file=io.StringIO(), width=120, color_system=None)
    render_analysis(result, console)
    return console.file.getvalue()


class TestRenderAnalysis:

    def test_sections(self):
        text = render_to_text(make_result())

        assert "the cat sat" in text
        assert "Average unigram probability" in text
        assert "0.25" in text
        assert "Perplexity" not in text
        assert "Randomly Generated Sentences" not in text

    def test_optional_sections(self):
        result = make_result(perplexity=Perplexity(math.inf, 1.5),
                             generated_sentences=["a cat ran ."])

        text = render_to_text(result)

        assert "Unigram perplexity" in text
        assert "inf" in text
        assert "a cat ran ." in text

    def test_write_report(self, tmp_path):
        path = tmp_path / "results.txt"

        write_report(make_result(generated_sentences=["a dog sat ."]), path)

        content = path.read_text(encoding="utf-8")
        assert "the cat sat" in content
        assert "a dog sat ." in content

    def test_stats_table(self):
        table = create_stats_table({'vocab_size': 1200, 'smoothing': 'none', 'ratio': 0.5})

        assert table.row_count == 3


class TestRunAnalysisCli:

    def test_prints_and_saves(self, period_corpus, tmp_path):
        console = Console(file=io.StringIO(), width=120, color_system=None)
        path = tmp_path / "out.txt"
        config = ModelConfig(compute_perplexity=True, sentences_to_generate=2, seed=4)

        result = run_analysis_cli(period_corpus, period_corpus[:2], config,
                                  output_path=path, console=console)

        assert len(result.generated_sentences) == 2
        assert "Model Statistics" in console.file.getvalue()
        assert "Bigram perplexity" in path.read_text(encoding="utf-8")

    def test_shows_training_source(self, period_corpus):
        console = Console(file=io.StringIO(), width=120, color_system=None)

        run_analysis_cli(period_corpus, period_corpus[:2], ModelConfig(), console=console,
                         training_source="Brown corpus (news; 4 short sentences skipped)")

        output = console.file.getvalue()
        assert "Training Source" in output
        assert "Brown corpus (news; 4 short sentences skipped)" in output


class TestLogUtils:

    def test_setup_logging_with_file(self, tmp_path, clean_logging):
        log_file = tmp_path / "logs" / "analysis.log"

        logger = setup_logging("INFO", log_file)
        logger.debug("detail line")

        handlers = logging.getLogger().handlers
        assert any(isinstance(h, RichHandler) for h in handlers)
        assert any(isinstance(h, logging.FileHandler) for h in handlers)
        for handler in handlers:
            handler.flush()
        assert "detail line" in log_file.read_text(encoding="utf-8")

    def test_setup_logging_console_only(self, clean_logging):
        setup_logging(logging.WARNING)

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_module_loggers_reach_the_rich_console(self, clean_logging):
        console = Console(file=io.StringIO(), width=120, color_system=None)

        package_logger = setup_logging(logging.INFO, console=console)
        logging.getLogger("bigramlm.counting").info("counted 3 sentences")

        assert package_logger.name == "bigramlm"
        assert not package_logger.handlers
        assert "counted 3 sentences" in console.file.getvalue()
