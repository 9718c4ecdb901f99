"""
Analysis Reporting with Rich Terminal UI

Renders analysis results as Rich tables and panels, runs an analysis with
progress display, and saves the rendered report as plain text.
"""

import io
import math
from pathlib import Path
from typing import Dict, Optional, Union

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn, TimeElapsedColumn
)
from rich.table import Table

from .config import ModelConfig
from .corpus import Corpus
from .pipeline import AnalysisResult, analyze


def _fmt(value: float) -> str:
    if math.isinf(value):
        return "inf"
    return f"{value:.6g}"


def create_stats_table(stats: Dict) -> Table:
    """Create a Rich table displaying model statistics."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="green")
    table.add_column("Value", style="yellow", justify="right")

    for key, value in stats.items():
        display_key = key.replace('_', ' ').title()

        if isinstance(value, float):
            display_value = f"{value:,.4f}"
        elif isinstance(value, int):
            display_value = f"{value:,}"
        else:
            display_value = str(value)

        table.add_row(display_key, display_value)

    return table


def create_sentence_table(result: AnalysisResult) -> Table:
    table = Table(box=box.SIMPLE_HEAD, header_style="bold cyan", expand=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Sentence", ratio=1, overflow="fold")
    table.add_column("Unigram Prob", justify="right", style="yellow")
    table.add_column("Bigram Prob", justify="right", style="yellow")

    for idx, (text, scored) in enumerate(result.per_sentence.items(), start=1):
        table.add_row(str(idx), escape(text),
                      _fmt(scored.unigram_probability), _fmt(scored.bigram_probability))

    return table


def render_analysis(result: AnalysisResult, console: Console) -> None:
    """Print sentence probabilities, averages, perplexity and generated sentences."""
    console.print(Panel(create_sentence_table(result),
                        title="[bold]Test Sentences[/bold]", border_style="blue"))

    averages = Table(box=box.SIMPLE, show_header=False)
    averages.add_column("Metric", style="cyan")
    averages.add_column("Value", justify="right")
    averages.add_row("Average unigram probability", _fmt(result.avg_unigram_prob))
    averages.add_row("Average bigram probability", _fmt(result.avg_bigram_prob))
    console.print(Panel(averages, title="[bold]Probability[/bold]", border_style="green"))

    if result.perplexity is not None:
        perplexity = Table(box=box.SIMPLE, show_header=False)
        perplexity.add_column("Model", style="cyan")
        perplexity.add_column("Perplexity", justify="right")
        perplexity.add_row("Unigram perplexity", _fmt(result.perplexity.unigram))
        perplexity.add_row("Bigram perplexity", _fmt(result.perplexity.bigram))
        console.print(Panel(perplexity, title="[bold]Perplexity[/bold]", border_style="yellow"))

    if result.generated_sentences is not None:
        lines = "\n".join(escape(s) for s in result.generated_sentences) or "[dim](none)[/dim]"
        console.print(Panel(lines, title="[bold]Randomly Generated Sentences[/bold]",
                            border_style="magenta"))


def write_report(result: AnalysisResult, path: Union[str, Path], width: int = 100) -> None:
    """Render ``result`` and save it to ``path`` as plain text."""
    console = Console(record=True, file=io.StringIO(), width=width)
    render_analysis(result, console)
    console.save_text(str(path))


def run_analysis_cli(train_sentences: Corpus, test_sentences: Corpus,
                     config: ModelConfig,
                     output_path: Optional[Union[str, Path]] = None,
                     console: Optional[Console] = None,
                     training_source: Optional[str] = None) -> AnalysisResult:
    """
    Run an analysis with progress display and print the report.

    Args:
        train_sentences: Tokenized training sentences
        test_sentences: Tokenized test sentences
        config: Analysis settings
        output_path: Where to save the plain-text report, if anywhere
        console: Console to print to
        training_source: Description of where the training text came from

    Returns:
        The AnalysisResult
    """
    console = console or Console()

    console.print()
    console.print(Panel.fit(
        "[bold blue]Unigram / Bigram Language Model Analysis[/bold blue]",
        border_style="blue"
    ))

    config_table = Table(box=box.SIMPLE, show_header=False)
    config_table.add_column("Setting", style="cyan")
    config_table.add_column("Value", style="white", overflow="fold")
    if training_source:
        config_table.add_row("Training Source", escape(training_source))
    config_table.add_row("Training Sentences", f"{len(train_sentences):,}")
    config_table.add_row("Test Sentences", f"{len(test_sentences):,}")
    config_table.add_row("Smoothing Method", config.smoothing_method.value)
    config_table.add_row("Unseen Events", config.unseen_policy.value)
    config_table.add_row("Perplexity", "yes" if config.compute_perplexity else "no")
    config_table.add_row("Sentences To Generate", str(config.sentences_to_generate))
    console.print(Panel(config_table, title="[bold]Configuration[/bold]", border_style="green"))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True
    ) as progress:
        task = progress.add_task("[cyan]Analysing...", total=4)

        def update_progress(current, total, stage=""):
            progress.update(task, completed=current, total=total,
                            description=f"[cyan]{stage}")

        result = analyze(train_sentences, test_sentences, config,
                         progress_callback=update_progress)

    console.print("[green]✓[/green] Analysis complete!")
    console.print()

    if result.model_stats:
        console.print(Panel(create_stats_table(result.model_stats),
                            title="[bold]Model Statistics[/bold]", border_style="yellow"))

    render_analysis(result, console)

    if output_path:
        write_report(result, output_path)
        console.print(f"[green]✓[/green] Report saved to: [bold]{output_path}[/bold]")

    return result
