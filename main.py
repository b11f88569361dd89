#!/usr/bin/env python3
"""N-gram chart generator CLI.

Usage:
    python main.py charts
    python main.py charts --corpus ~/ngrams --reference eng_wiki_1m --output target
    python main.py stats --corpus ~/ngrams
"""

import sys
from pathlib import Path

import click
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from config import Config
from analysis.aggregates import AggregateEngine
from core.errors import CorpusLoadError
from core.loader import CorpusLoader
from pipeline import ChartPipeline
from utils.progress import create_progress_callback


def parse_resolution(res_str: str) -> tuple:
    """Parse resolution string like '1920x1080'."""
    try:
        w, h = res_str.lower().split("x")
        return (int(w), int(h))
    except ValueError:
        raise click.BadParameter(f"expected WIDTHxHEIGHT, got {res_str!r}")


def resolve_config(corpus, reference, no_reference, output=None) -> Config:
    """Environment defaults overridden by command line options."""
    config = Config.from_env()
    if corpus:
        config.corpus_dir = Path(corpus)
    if reference:
        config.reference_dir = Path(reference)
    if no_reference:
        config.reference_dir = None
    if output:
        config.output_dir = Path(output)
    return config


def load_corpora(config: Config):
    """Load subject and reference corpus. Exits on load errors."""
    loader = CorpusLoader()
    try:
        subject = loader.load(config.corpus_dir)
        reference = loader.load(config.reference_dir) if config.reference_dir else None
    except CorpusLoadError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    return subject, reference


@click.group()
def cli():
    """Unique n-gram and occurrence charts for n-gram frequency corpora."""
    load_dotenv()


@cli.command()
@click.option("--corpus", type=click.Path(file_okay=False), help="Corpus directory (default: $NGRAMS_DIR or ~/ngrams)")
@click.option("--reference", type=click.Path(file_okay=False), help="Reference corpus directory (default: $NGRAMS_REFERENCE_DIR or eng_wiki_1m)")
@click.option("--no-reference", is_flag=True, help="Skip all referenced charts")
@click.option("--output", type=click.Path(file_okay=False), help="Output directory (default: $NGRAMS_OUTPUT_DIR or target)")
@click.option("--resolution", default="1920x1080", help="Canvas size (e.g. 1920x1080)")
@click.option("--workers", default=1, type=int, help="Parallel chart workers")
@click.option("--overviews", is_flag=True, help="Also write PNG line overviews")
@click.option("--quiet", is_flag=True, help="Do not print per-chart progress")
def charts(corpus, reference, no_reference, output, resolution, workers, overviews, quiet):
    """Load corpora and write all charts."""
    config = resolve_config(corpus, reference, no_reference, output)
    config.canvas_size = parse_resolution(resolution)
    config.workers = workers
    config.overviews = overviews

    subject, reference_set = load_corpora(config)
    click.echo(f"Corpus: {config.corpus_dir} ({', '.join(str(len(t)) for t in subject)} entries)")
    if reference_set is not None:
        click.echo(f"Reference: {config.reference_dir} ({', '.join(str(len(t)) for t in reference_set)} entries)")

    pipeline = ChartPipeline(config)
    result = pipeline.run(subject, reference_set, on_progress=create_progress_callback(quiet=quiet))

    click.echo(f"\nCharts written: {len(result.written)} to {config.output_dir}")
    if not result.ok:
        click.echo(f"Charts failed: {len(result.failed)}", err=True)
        for request, error in result.failed:
            click.echo(f"  {request.file_name}: {error}", err=True)
        sys.exit(1)


@cli.command()
@click.option("--corpus", type=click.Path(file_okay=False), help="Corpus directory (default: $NGRAMS_DIR or ~/ngrams)")
@click.option("--reference", type=click.Path(file_okay=False), help="Reference corpus directory")
@click.option("--no-reference", is_flag=True, help="Ignore the reference corpus")
def stats(corpus, reference, no_reference):
    """Print unique counts, growth ratios, maxima and scale divisors."""
    config = resolve_config(corpus, reference, no_reference)
    subject, reference_set = load_corpora(config)

    aggregate = AggregateEngine().snapshot(subject, reference_set)

    click.echo(f"Corpus: {subject.name}")
    click.echo(f"  {'length':>6} {'unique':>10} {'increase':>9} {'max':>12} {'divisor':>8}")
    divisors = aggregate.scale_divisors or (None,) * len(aggregate.maxima)
    for (length, unique), (_, ratio), maximum, divisor in zip(
        aggregate.unique_counts, aggregate.growth_ratios, aggregate.maxima, divisors
    ):
        maximum = "-" if maximum is None else maximum
        divisor = "-" if divisor is None else divisor
        click.echo(f"  {length:>6} {unique:>10} {ratio:>9} {maximum:>12} {divisor:>8}")
    if reference_set is not None:
        click.echo(f"\nReference: {reference_set.name}")


if __name__ == "__main__":
    cli()
