"""Typed results for similarity scoring and knowledge-base matching."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MatchResult:
    index: int
    text: str
    similarity: float

    def preview(self, width: int = 50) -> str:
        """Document text shortened to ``width`` characters."""
        if len(self.text) <= width:
            return self.text
        return self.text[: max(0, width - 3)] + "..."


@dataclass(frozen=True)
class SimilarityComparison:
    text1: str
    text2: str
    without_stemming: float
    with_stemming: float

    @property
    def improvement(self) -> float:
        return self.with_stemming - self.without_stemming


@dataclass(frozen=True)
class MethodScores:
    """Asymmetric and symmetric scores, with and without stemming."""

    asymmetric: float
    symmetric: float
    asymmetric_stemmed: float
    symmetric_stemmed: float
    reverse_asymmetric: float

    @property
    def asymmetric_gain(self) -> float:
        return self.asymmetric_stemmed - self.asymmetric

    @property
    def symmetric_gain(self) -> float:
        return self.symmetric_stemmed - self.symmetric


@dataclass(frozen=True)
class CacheStatistics:
    token_cache_size: int
    stem_cache_size: int
    capacity: int
    approximate_memory_usage_percent: float

    def to_dict(self) -> dict:
        return {
            "tokenCacheSize": self.token_cache_size,
            "stemCacheSize": self.stem_cache_size,
            "capacity": self.capacity,
            "approximateMemoryUsagePercent": self.approximate_memory_usage_percent,
        }
