"""
Tests for the analyze.py command line entry point.
"""

import pytest

import analyze


@pytest.fixture
def fake_corpora(monkeypatch, period_corpus):
    corpora = {"train.txt": period_corpus, "test.txt": period_corpus[:2], "empty.txt": []}

    def fake_load(path, encoding="cp1252", lowercase=False):
        return corpora[path]

    monkeypatch.setattr(analyze, "load_corpus_file", fake_load)
    return corpora


class TestMain:

    def test_full_run(self, fake_corpora, tmp_path, clean_logging):
        out = tmp_path / "results.txt"

        code = analyze.main(["--train", "train.txt", "test.txt", str(out),
                             "-P", "-S", "-G", "2", "--seed", "1"])

        assert code == 0
        content = out.read_text(encoding="utf-8")
        assert "Average bigram probability" in content
        assert "Bigram perplexity" in content
        assert "Randomly Generated Sentences" in content

    def test_without_output_file(self, fake_corpora, clean_logging):
        assert analyze.main(["--train", "train.txt", "test.txt"]) == 0

    def test_empty_test_corpus_fails(self, fake_corpora, clean_logging, capsys):
        code = analyze.main(["--train", "train.txt", "empty.txt"])

        assert code == 1
        assert "test corpus" in capsys.readouterr().out

    def test_laplace_requires_smoothing(self, fake_corpora, clean_logging):
        with pytest.raises(SystemExit):
            analyze.main(["--train", "train.txt", "test.txt", "--laplace"])

    def test_negative_generate_rejected(self, fake_corpora, clean_logging):
        with pytest.raises(SystemExit):
            analyze.main(["--train", "train.txt", "test.txt", "-G", "-1"])

    def test_training_source_required(self, clean_logging):
        with pytest.raises(SystemExit):
            analyze.main(["test.txt"])

    def test_parser_switches(self):
        args = analyze.build_parser().parse_args(
            ["--train", "a.txt", "b.txt", "c.txt", "-P", "-S", "-G", "3"])

        assert args.perplexity and args.smoothing
        assert args.generate == 3
        assert args.output == "c.txt"


class TestInputFiles:

    def test_reads_cp1252_files_by_default(self, tmp_path, nltk_tokenizers, clean_logging, capsys):
        path = tmp_path / "cafe.txt"
        path.write_bytes("Café closed. It rained.".encode("cp1252"))

        code = analyze.main(["--train", str(path), str(path)])

        assert code == 0
        assert "Café closed ." in capsys.readouterr().out

    def test_undecodable_file_reports_error(self, tmp_path, clean_logging, capsys):
        path = tmp_path / "cafe.txt"
        path.write_bytes("Café closed.".encode("cp1252"))

        code = analyze.main(["--train", str(path), str(path), "--encoding", "utf-8"])

        assert code == 1
        out = capsys.readouterr().out
        assert "Error:" in out
        assert "codec" in out

    def test_brown_training_source_is_shown(self, monkeypatch, fake_corpora, period_corpus,
                                            clean_logging, capsys):
        requested = {}

        def fake_brown(categories=None, lowercase=False):
            requested["categories"] = categories
            return period_corpus, {'num_sentences': len(period_corpus), 'total_tokens': 12,
                                   'skipped_sentences': 2, 'categories': ["news"]}

        monkeypatch.setattr(analyze, "load_brown_corpus", fake_brown)

        code = analyze.main(["--brown", "news", "--", "test.txt"])

        assert code == 0
        assert requested["categories"] == ["news"]
        out = capsys.readouterr().out
        assert "Brown corpus (news" in out
        assert "2 short sentences skipped" in out
