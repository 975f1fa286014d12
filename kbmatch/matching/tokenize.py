"""Pattern-based tokenization into normalized token sets."""

from __future__ import annotations

import hashlib
import re
from typing import TYPE_CHECKING, Callable, Hashable

from .cache import LRUCache
from .config import DEFAULT_MATCHING_CONFIG

if TYPE_CHECKING:
    from .context import MatchingContext

_CLEANUP_RE = re.compile(r"[^\w\s\-.]")
_WS_RE = re.compile(r"\s+")
# Leading \b binds only the first alternative, trailing \b only the second.
_MIXED_RE = re.compile(r"\b[A-Za-z]+[0-9]+|[0-9]+[A-Za-z]+\b")
_NUMBER_RE = re.compile(r"\b[0-9]+\b")


def preprocess_text(text: str | None) -> str:
    """Replace disallowed characters with spaces and collapse whitespace."""
    if not text:
        return ""
    cleaned = _CLEANUP_RE.sub(" ", text)
    return _WS_RE.sub(" ", cleaned).strip()


def _word_pattern(min_length: int) -> re.Pattern[str]:
    return re.compile(rf"\b[A-Za-z]{{{min_length},}}\b")


class _SpanMask:
    """Tracks which character offsets an earlier pass already consumed."""

    def __init__(self, length: int):
        self._used = bytearray(length)

    def overlaps(self, start: int, end: int) -> bool:
        return any(self._used[start:end])

    def mark(self, start: int, end: int) -> None:
        self._used[start:end] = b"\x01" * (end - start)


def extract_tokens(
    text: str,
    *,
    stem: Callable[[str], str] | None = None,
    min_word_length: int = DEFAULT_MATCHING_CONFIG.min_word_length,
) -> set[str]:
    """Extract tokens from already preprocessed text.

    Passes run in priority order: mixed alphanumeric runs, then whole
    alphabetic words, then whole numbers. Word and number matches must sit
    on word boundaries, so letters glued to digits or underscores (the
    "beta" in "v2beta", "foo_bar") yield nothing beyond the mixed token.
    A match that touches a span consumed by an earlier pass is skipped.
    Numbers are never stemmed.
    """
    tokens: set[str] = set()
    mask = _SpanMask(len(text))

    for pattern, stemmable in (
        (_MIXED_RE, True),
        (_word_pattern(min_word_length), True),
        (_NUMBER_RE, False),
    ):
        for match in pattern.finditer(text):
            start, end = match.span()
            if mask.overlaps(start, end):
                continue
            token = match.group()
            if stemmable:
                token = token.lower()
                if stem is not None:
                    token = stem(token)
            tokens.add(token)
            mask.mark(start, end)

    return tokens


def cache_key(
    text: str,
    stemming: bool,
    long_text_threshold: int = DEFAULT_MATCHING_CONFIG.long_text_threshold,
) -> tuple[str, bool, bool]:
    """Build a token-cache key; long texts are keyed by digest."""
    if len(text) > long_text_threshold:
        digest = hashlib.blake2b(text.encode("utf-8"), digest_size=16).hexdigest()
        return (digest, stemming, True)
    return (text, stemming, False)


class Tokenizer:
    """Tokenize text into sets, memoizing whole-text results."""

    def __init__(
        self,
        cache: LRUCache[Hashable, frozenset[str]],
        stem: Callable[[str], str],
        *,
        long_text_threshold: int = DEFAULT_MATCHING_CONFIG.long_text_threshold,
        min_word_length: int = DEFAULT_MATCHING_CONFIG.min_word_length,
    ):
        self.cache = cache
        self.stem = stem
        self.long_text_threshold = long_text_threshold
        self.min_word_length = min_word_length

    def tokenize(self, text: str | None, stemming: bool = True) -> set[str]:
        """Return a fresh token set; the cached instance is never exposed."""
        return set(self.tokenize_frozen(text, stemming))

    def tokenize_frozen(self, text: str | None, stemming: bool = True) -> frozenset[str]:
        if not text:
            return frozenset()

        key = cache_key(text, stemming, self.long_text_threshold)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        processed = preprocess_text(text)
        if not processed:
            return frozenset()

        tokens = frozenset(
            extract_tokens(
                processed,
                stem=self.stem if stemming else None,
                min_word_length=self.min_word_length,
            )
        )
        self.cache.put(key, tokens)
        return tokens


def tokenize(
    text: str | None,
    stemming: bool = True,
    *,
    context: MatchingContext | None = None,
) -> set[str]:
    """Tokenize ``text`` using ``context`` or the process default."""
    if context is None:
        from .context import get_default_context

        context = get_default_context()
    return context.tokenize(text, stemming)
