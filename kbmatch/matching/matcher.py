"""Top-K knowledge-base matching over precomputed token sets."""

from concurrent.futures import ThreadPoolExecutor
import heapq
import logging
from types import MappingProxyType
from typing import Iterable

from .cache import LRUCache
from .config import MatchingConfig
from .context import MatchingContext, get_default_context
from .similarity import asymmetric_jaccard_similarity, jaccard_similarity
from .types import MatchResult

log = logging.getLogger(__name__)

# (score, -index) orders the heap ascending by score; ties keep the lower index.
_HeapEntry = tuple[float, int]


def _offer(heap: list[_HeapEntry], entry: _HeapEntry, capacity: int) -> None:
    """Push into a bounded min-heap, replacing the minimum only if beaten."""
    if len(heap) < capacity:
        heapq.heappush(heap, entry)
    elif entry[0] > heap[0][0]:
        heapq.heapreplace(heap, entry)


def _shard_ranges(size: int, shards: int) -> list[range]:
    step, extra = divmod(size, shards)
    ranges: list[range] = []
    start = 0
    for shard in range(shards):
        end = start + step + (1 if shard < extra else 0)
        if end > start:
            ranges.append(range(start, end))
        start = end
    return ranges


class KnowledgeBaseMatcher:
    """Rank an immutable corpus of documents against short queries.

    In eager mode every document is tokenized at construction. In lazy mode
    documents are tokenized on first access and held in a private LRU cache
    of ``cache_capacity`` entries.
    """

    def __init__(
        self,
        corpus: Iterable[str],
        lazy: bool = False,
        cache_capacity: int | None = None,
        *,
        context: MatchingContext | None = None,
        config: MatchingConfig | None = None,
    ):
        self.context = context or get_default_context()
        self.config = config or self.context.config
        self.corpus: tuple[str, ...] = tuple(corpus)
        self.lazy = lazy

        if lazy:
            capacity = (
                self.config.lazy_cache_capacity
                if cache_capacity is None
                else cache_capacity
            )
            self._lazy_cache: LRUCache[int, frozenset[str]] | None = LRUCache(capacity)
            self._eager_tokens = MappingProxyType({})
            log.info(
                f"Lazy matcher over {len(self.corpus)} documents (cache capacity {capacity})"
            )
        else:
            self._lazy_cache = None
            self._eager_tokens = MappingProxyType(
                {
                    index: self.context.tokenize_frozen(document, True)
                    for index, document in enumerate(self.corpus)
                }
            )
            log.info(f"Preprocessed {len(self.corpus)} documents")

    def __len__(self) -> int:
        return len(self.corpus)

    def _tokenize_document(self, index: int) -> frozenset[str]:
        return self.context.tokenize_frozen(self.corpus[index], True)

    def document_tokens(self, index: int) -> frozenset[str]:
        """Token set of the document at ``index``."""
        if self._lazy_cache is not None:
            return self._lazy_cache.get_or_compute(index, self._tokenize_document)
        return self._eager_tokens[index]

    def score(
        self,
        query_tokens: frozenset[str],
        document_tokens: frozenset[str],
        use_asymmetric: bool = False,
    ) -> float:
        asymmetric = asymmetric_jaccard_similarity(query_tokens, document_tokens)
        if use_asymmetric:
            return asymmetric
        symmetric = jaccard_similarity(query_tokens, document_tokens)
        return (
            self.config.asymmetric_weight * asymmetric
            + self.config.symmetric_weight * symmetric
        )

    def _top_k_in(
        self,
        indices: range,
        query_tokens: frozenset[str],
        top_k: int,
        min_similarity: float,
        use_asymmetric: bool,
    ) -> list[_HeapEntry]:
        heap: list[_HeapEntry] = []
        for index in indices:
            similarity = self.score(
                query_tokens, self.document_tokens(index), use_asymmetric
            )
            if similarity < min_similarity:
                continue
            _offer(heap, (similarity, -index), top_k)
        return heap

    def find_best_matches(
        self,
        query: str | None,
        top_k: int,
        min_similarity: float = 0.0,
        use_asymmetric: bool = False,
        workers: int = 1,
    ) -> list[MatchResult]:
        """Return up to ``top_k`` matches in descending similarity order.

        Args:
            query: Query text; ``None`` yields no matches.
            top_k: Maximum results, clamped to the corpus size.
            min_similarity: Documents scoring below this are dropped.
            use_asymmetric: Rank by query coverage only instead of the
                configured asymmetric/symmetric blend.
            workers: Shard the corpus across this many threads.

        Raises:
            ValueError: if ``workers`` is less than 1.
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if query is None or top_k <= 0 or not self.corpus:
            return []

        top_k = min(top_k, len(self.corpus))
        query_tokens = self.context.tokenize_frozen(query, True)

        if workers == 1:
            heap = self._top_k_in(
                range(len(self.corpus)),
                query_tokens,
                top_k,
                min_similarity,
                use_asymmetric,
            )
        else:
            heap = self._sharded_top_k(
                query_tokens, top_k, min_similarity, use_asymmetric, workers
            )

        ranked = sorted(heap, reverse=True)
        return [
            MatchResult(index=-neg_index, text=self.corpus[-neg_index], similarity=score)
            for score, neg_index in ranked
        ]

    def _sharded_top_k(
        self,
        query_tokens: frozenset[str],
        top_k: int,
        min_similarity: float,
        use_asymmetric: bool,
        workers: int,
    ) -> list[_HeapEntry]:
        shards = _shard_ranges(len(self.corpus), workers)
        log.debug(f"Scoring {len(self.corpus)} documents in {len(shards)} shards")

        with ThreadPoolExecutor(max_workers=len(shards)) as pool:
            shard_heaps = list(
                pool.map(
                    lambda indices: self._top_k_in(
                        indices, query_tokens, top_k, min_similarity, use_asymmetric
                    ),
                    shards,
                )
            )

        merged: list[_HeapEntry] = []
        for shard_heap in shard_heaps:
            for entry in shard_heap:
                _offer(merged, entry, top_k)
        return merged

    def best_match(
        self, query: str | None, min_similarity: float = 0.0
    ) -> MatchResult | None:
        """Single highest-scoring document, if any passes ``min_similarity``."""
        matches = self.find_best_matches(query, 1, min_similarity)
        return matches[0] if matches else None

    def clear_cache(self) -> None:
        """Drop lazily computed token sets; eager token sets are fixed."""
        if self._lazy_cache is not None:
            self._lazy_cache.clear()
            log.debug("Cleared lazy document cache")

    def cache_size(self) -> int:
        if self._lazy_cache is not None:
            return self._lazy_cache.size()
        return len(self._eager_tokens)
