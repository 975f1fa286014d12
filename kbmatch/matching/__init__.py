"""Tokenization, stemming, similarity scoring and top-K matching."""

from .cache import LRUCache
from .config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from .context import (
    MatchingContext,
    cache_statistics,
    clear_all_caches,
    get_default_context,
)
from .matcher import KnowledgeBaseMatcher
from .similarity import (
    asymmetric_jaccard_similarity,
    asymmetric_string_similarity,
    compare_methods,
    compare_stemming,
    hybrid_similarity,
    jaccard_similarity,
    string_similarity,
)
from .tokenize import tokenize
from .types import CacheStatistics, MatchResult, MethodScores, SimilarityComparison

__all__ = [
    "DEFAULT_MATCHING_CONFIG",
    "CacheStatistics",
    "KnowledgeBaseMatcher",
    "LRUCache",
    "MatchResult",
    "MatchingConfig",
    "MatchingContext",
    "MethodScores",
    "SimilarityComparison",
    "asymmetric_jaccard_similarity",
    "asymmetric_string_similarity",
    "cache_statistics",
    "clear_all_caches",
    "compare_methods",
    "compare_stemming",
    "get_default_context",
    "hybrid_similarity",
    "jaccard_similarity",
    "string_similarity",
    "tokenize",
]
