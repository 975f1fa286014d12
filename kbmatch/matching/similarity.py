"""Symmetric, asymmetric and hybrid Jaccard similarity."""

from __future__ import annotations

from typing import AbstractSet

from .context import MatchingContext, get_default_context
from .types import MethodScores, SimilarityComparison


def jaccard_similarity(
    set_a: AbstractSet[str] | None, set_b: AbstractSet[str] | None
) -> float:
    """|A & B| / |A | B|; 0.0 when either set is empty or missing."""
    if not set_a or not set_b:
        return 0.0

    if len(set_a) <= len(set_b):
        smaller, larger = set_a, set_b
    else:
        smaller, larger = set_b, set_a

    intersection = sum(1 for token in smaller if token in larger)
    union = len(set_a) + len(set_b) - intersection
    if union == 0:
        return 0.0
    return intersection / union


def asymmetric_jaccard_similarity(
    query_set: AbstractSet[str] | None, document_set: AbstractSet[str] | None
) -> float:
    """Fraction of query tokens present in the document.

    Document tokens outside the query are ignored, so long documents are
    not penalized. Not symmetric.
    """
    if not query_set or document_set is None:
        return 0.0
    covered = sum(1 for token in query_set if token in document_set)
    return covered / len(query_set)


def _identical_score(text: str) -> float:
    # Identical texts score 1.0 without tokenizing, even when punctuation-only
    # text like "!!!" would tokenize to nothing; only blank text scores 0.0.
    return 0.0 if not text.strip() else 1.0


def string_similarity(
    text1: str | None,
    text2: str | None,
    stemming: bool = True,
    *,
    context: MatchingContext | None = None,
) -> float:
    """Symmetric Jaccard similarity over the token sets of two texts."""
    if text1 is None or text2 is None:
        return 0.0
    if text1 == text2:
        return _identical_score(text1)

    ctx = context or get_default_context()
    return jaccard_similarity(
        ctx.tokenize_frozen(text1, stemming), ctx.tokenize_frozen(text2, stemming)
    )


def asymmetric_string_similarity(
    query: str | None,
    document: str | None,
    stemming: bool = True,
    *,
    context: MatchingContext | None = None,
) -> float:
    """Query-coverage similarity over the token sets of two texts."""
    if query is None or document is None:
        return 0.0
    if query == document:
        return _identical_score(query)

    ctx = context or get_default_context()
    return asymmetric_jaccard_similarity(
        ctx.tokenize_frozen(query, stemming), ctx.tokenize_frozen(document, stemming)
    )


def hybrid_similarity(
    query: str | None,
    document: str | None,
    weight: float,
    *,
    context: MatchingContext | None = None,
) -> float:
    """Blend ``weight * asymmetric + (1 - weight) * symmetric`` (stemmed).

    Raises:
        ValueError: if ``weight`` lies outside [0, 1].
    """
    if not 0.0 <= weight <= 1.0:
        raise ValueError(f"Asymmetric weight must be between 0 and 1, got {weight}")

    symmetric = string_similarity(query, document, True, context=context)
    asymmetric = asymmetric_string_similarity(query, document, True, context=context)
    return weight * asymmetric + (1.0 - weight) * symmetric


def compare_stemming(
    text1: str,
    text2: str,
    *,
    context: MatchingContext | None = None,
) -> SimilarityComparison:
    """Symmetric similarity of two texts with and without stemming."""
    return SimilarityComparison(
        text1=text1,
        text2=text2,
        without_stemming=string_similarity(text1, text2, False, context=context),
        with_stemming=string_similarity(text1, text2, True, context=context),
    )


def compare_methods(
    query: str,
    document: str,
    *,
    context: MatchingContext | None = None,
) -> MethodScores:
    """Score a query/document pair with every method side by side."""
    return MethodScores(
        asymmetric=asymmetric_string_similarity(query, document, False, context=context),
        symmetric=string_similarity(query, document, False, context=context),
        asymmetric_stemmed=asymmetric_string_similarity(
            query, document, True, context=context
        ),
        symmetric_stemmed=string_similarity(query, document, True, context=context),
        reverse_asymmetric=asymmetric_string_similarity(
            document, query, True, context=context
        ),
    )
