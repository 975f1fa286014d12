"""Configuration for token-set matching."""

from dataclasses import dataclass, fields
import os


@dataclass(frozen=True)
class MatchingConfig:
    """Constants controlling caching, tokenization and score blending."""

    cache_capacity: int = 10000
    long_text_threshold: int = 200
    min_word_length: int = 2

    asymmetric_weight: float = 0.7
    lazy_cache_capacity: int = 1000

    def __post_init__(self) -> None:
        if self.cache_capacity <= 0:
            raise ValueError(
                f"cache_capacity must be positive, got {self.cache_capacity}"
            )
        if self.lazy_cache_capacity <= 0:
            raise ValueError(
                f"lazy_cache_capacity must be positive, got {self.lazy_cache_capacity}"
            )
        if self.long_text_threshold < 0:
            raise ValueError(
                f"long_text_threshold must be >= 0, got {self.long_text_threshold}"
            )
        if self.min_word_length < 1:
            raise ValueError(
                f"min_word_length must be >= 1, got {self.min_word_length}"
            )
        if not 0.0 <= self.asymmetric_weight <= 1.0:
            raise ValueError(
                f"asymmetric_weight must be between 0 and 1, got {self.asymmetric_weight}"
            )

    @property
    def symmetric_weight(self) -> float:
        """Weight given to plain Jaccard in the default blend."""
        return 1.0 - self.asymmetric_weight

    @classmethod
    def from_env(cls, prefix: str = "KBMATCH_") -> "MatchingConfig":
        """Build a config, overriding defaults from ``KBMATCH_*`` variables."""
        overrides: dict[str, int | float] = {}
        for item in fields(cls):
            raw = os.environ.get(f"{prefix}{item.name.upper()}")
            if raw is None or not raw.strip():
                continue
            caster = float if item.type in (float, "float") else int
            try:
                overrides[item.name] = caster(raw.strip())
            except ValueError as exc:
                raise ValueError(
                    f"Invalid value for {prefix}{item.name.upper()}: {raw!r}"
                ) from exc
        return cls(**overrides)


DEFAULT_MATCHING_CONFIG = MatchingConfig()
