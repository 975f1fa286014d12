"""Shared tokenization state: vocabularies, stemmer and the two LRU caches."""

import logging
import os
import sys
import threading
from typing import Hashable

from .cache import LRUCache
from .config import DEFAULT_MATCHING_CONFIG, MatchingConfig
from .stemmer import Stemmer
from .tokenize import Tokenizer
from .types import CacheStatistics

log = logging.getLogger(__name__)


def approximate_memory_usage_percent() -> float:
    """Peak (not current) resident memory as a percentage of physical memory.

    Informational only; 0.0 where the platform cannot report it.
    """
    try:
        import resource
    except ImportError:
        return 0.0
    try:
        page_size = os.sysconf("SC_PAGE_SIZE")
        phys_pages = os.sysconf("SC_PHYS_PAGES")
    except (AttributeError, ValueError, OSError):
        return 0.0
    total = page_size * phys_pages
    if total <= 0:
        return 0.0
    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS and kilobytes elsewhere.
    if sys.platform != "darwin":
        peak *= 1024
    return min(100.0, peak * 100.0 / total)


class MatchingContext:
    """Owns the token-set cache and stem cache shared by matchers.

    Build one per composition root and pass it to matchers and similarity
    functions; callers that pass nothing share :func:`get_default_context`.
    """

    def __init__(self, config: MatchingConfig = DEFAULT_MATCHING_CONFIG):
        self.config = config
        self.token_cache: LRUCache[Hashable, frozenset[str]] = LRUCache(
            config.cache_capacity
        )
        self.stem_cache: LRUCache[str, str] = LRUCache(config.cache_capacity)
        self.stemmer = Stemmer(self.stem_cache)
        self.tokenizer = Tokenizer(
            self.token_cache,
            self.stemmer.stem,
            long_text_threshold=config.long_text_threshold,
            min_word_length=config.min_word_length,
        )

    def tokenize(self, text: str | None, stemming: bool = True) -> set[str]:
        return self.tokenizer.tokenize(text, stemming)

    def tokenize_frozen(self, text: str | None, stemming: bool = True) -> frozenset[str]:
        return self.tokenizer.tokenize_frozen(text, stemming)

    def stem(self, word: str) -> str:
        return self.stemmer.stem(word)

    def clear_caches(self) -> None:
        self.token_cache.clear()
        self.stem_cache.clear()
        log.debug("Cleared token and stem caches")

    def statistics(self) -> CacheStatistics:
        return CacheStatistics(
            token_cache_size=self.token_cache.size(),
            stem_cache_size=self.stem_cache.size(),
            capacity=self.config.cache_capacity,
            approximate_memory_usage_percent=approximate_memory_usage_percent(),
        )


_default_context: MatchingContext | None = None
_default_lock = threading.Lock()


def get_default_context() -> MatchingContext:
    """Return the process default context, creating it on first use."""
    global _default_context
    with _default_lock:
        if _default_context is None:
            _default_context = MatchingContext(MatchingConfig.from_env())
        return _default_context


def reset_default_context(context: MatchingContext | None = None) -> None:
    """Replace the process default context (``None`` rebuilds lazily)."""
    global _default_context
    with _default_lock:
        _default_context = context


def clear_all_caches() -> None:
    get_default_context().clear_caches()


def cache_statistics() -> CacheStatistics:
    return get_default_context().statistics()
