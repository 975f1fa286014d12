"""CLI for kbmatch."""

import logging
from pathlib import Path

import click

from .matching import KnowledgeBaseMatcher, compare_methods, compare_stemming, tokenize
from .parser import load_corpus


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable info logging")
def cli(verbose: bool):
    """kbmatch - Jaccard matching against a knowledge base."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")


@cli.command()
@click.argument("corpus_path", type=click.Path(exists=True, path_type=Path))
@click.argument("query", type=str)
@click.option("--top-k", "-k", type=int, default=5, help="Number of results")
@click.option(
    "--min-similarity", type=float, default=0.0, help="Drop matches scoring below this"
)
@click.option(
    "--asymmetric", is_flag=True, help="Rank by query coverage only (no blend)"
)
@click.option("--lazy", is_flag=True, help="Tokenize documents on first access")
@click.option(
    "--cache-capacity", type=int, default=None, help="Lazy document cache capacity"
)
@click.option("--workers", type=int, default=1, help="Threads used to score shards")
def match(
    corpus_path: Path,
    query: str,
    top_k: int,
    min_similarity: float,
    asymmetric: bool,
    lazy: bool,
    cache_capacity: int | None,
    workers: int,
):
    """Find the documents in CORPUS_PATH that best match QUERY."""
    try:
        corpus = load_corpus(corpus_path)
        matcher = KnowledgeBaseMatcher(corpus, lazy=lazy, cache_capacity=cache_capacity)
        results = matcher.find_best_matches(
            query,
            top_k,
            min_similarity=min_similarity,
            use_asymmetric=asymmetric,
            workers=workers,
        )
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc

    click.echo(f"Query: {query}")
    click.echo(f"Found {len(results)} matches:\n")
    for rank, result in enumerate(results, 1):
        click.echo(f"{rank}. [{result.similarity:.4f}] #{result.index} {result.preview(70)}")
    if lazy:
        click.echo(f"\nLazy cache size: {matcher.cache_size()}")


@cli.command()
@click.argument("text1", type=str)
@click.argument("text2", type=str)
def compare(text1: str, text2: str):
    """Compare TEXT1 (query) and TEXT2 (document) with every method."""
    scores = compare_methods(text1, text2)
    stemming = compare_stemming(text1, text2)

    click.echo("Without stemming:")
    click.echo(f"  asymmetric={scores.asymmetric:.4f}  symmetric={scores.symmetric:.4f}")
    click.echo("With stemming:")
    click.echo(
        f"  asymmetric={scores.asymmetric_stemmed:.4f}  "
        f"symmetric={scores.symmetric_stemmed:.4f}"
    )
    click.echo(
        f"Stemming gain: asymmetric={scores.asymmetric_gain:+.4f}  "
        f"symmetric={stemming.improvement:+.4f}"
    )
    click.echo(f"Reverse asymmetric: {scores.reverse_asymmetric:.4f}")


@cli.command()
@click.argument("text", type=str)
@click.option("--no-stemming", is_flag=True, help="Skip the stemmer")
def tokens(text: str, no_stemming: bool):
    """Print the token set of TEXT."""
    for token in sorted(tokenize(text, not no_stemming)):
        click.echo(token)


if __name__ == "__main__":
    cli()
