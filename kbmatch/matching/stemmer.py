"""Heuristic suffix stemmer backed by a rule table and an LRU cache."""

from typing import Mapping

from .cache import LRUCache
from .vocabulary import STEM_RULES, is_protected


def strip_suffix(word: str) -> str:
    """Fallback suffix heuristic for words missing from the rule table."""
    if word.endswith("ing") and len(word) > 5:
        return word[:-3]
    if word.endswith("ed") and len(word) > 4:
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss") and len(word) > 3:
        return word[:-1]
    return word


class Stemmer:
    """Reduce lower-cased words to an approximate base form.

    Resolution order is cache, then rule table, then :func:`strip_suffix`.
    Words of two characters or fewer and protected vocabulary pass through
    without touching the cache.
    """

    def __init__(
        self,
        cache: LRUCache[str, str],
        rules: Mapping[str, str] = STEM_RULES,
    ):
        self.cache = cache
        self.rules = rules

    def stem(self, word: str) -> str:
        if not word or len(word) <= 2:
            return word
        if is_protected(word):
            return word

        cached = self.cache.get(word)
        if cached is not None:
            return cached

        stemmed = self.rules.get(word)
        if stemmed is None:
            stemmed = strip_suffix(word)

        self.cache.put(word, stemmed)
        return stemmed
