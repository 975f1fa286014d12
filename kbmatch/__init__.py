"""kbmatch - Jaccard token-set matching for knowledge-base lookups."""

from .matching import (
    KnowledgeBaseMatcher,
    MatchResult,
    asymmetric_jaccard_similarity,
    asymmetric_string_similarity,
    cache_statistics,
    clear_all_caches,
    hybrid_similarity,
    jaccard_similarity,
    string_similarity,
    tokenize,
)

__all__ = [
    "KnowledgeBaseMatcher",
    "MatchResult",
    "asymmetric_jaccard_similarity",
    "asymmetric_string_similarity",
    "cache_statistics",
    "clear_all_caches",
    "hybrid_similarity",
    "jaccard_similarity",
    "string_similarity",
    "tokenize",
]
