"""Tests for shared caches and process-wide diagnostics."""

import sys
from types import SimpleNamespace

import pytest

from kbmatch.matching import context as context_module
from kbmatch.matching.config import MatchingConfig
from kbmatch.matching.context import (
    MatchingContext,
    cache_statistics,
    clear_all_caches,
    get_default_context,
    reset_default_context,
)
from kbmatch.matching.matcher import KnowledgeBaseMatcher
from kbmatch.matching.similarity import string_similarity
from kbmatch.matching.tokenize import tokenize


@pytest.fixture
def default_context():
    fresh = MatchingContext()
    reset_default_context(fresh)
    yield fresh
    reset_default_context()


def test_module_functions_use_default_context(default_context):
    assert get_default_context() is default_context

    tokenize("users running jobs")
    stats = cache_statistics()

    assert stats.token_cache_size == 1
    assert stats.stem_cache_size == 3
    assert stats.capacity == default_context.config.cache_capacity


def test_clear_all_caches(default_context):
    string_similarity("reset password", "password reset guide")
    assert default_context.token_cache.size() == 2

    clear_all_caches()

    stats = cache_statistics()
    assert stats.token_cache_size == 0
    assert stats.stem_cache_size == 0


def test_statistics_dict_keys(default_context):
    payload = cache_statistics().to_dict()

    assert set(payload) == {
        "tokenCacheSize",
        "stemCacheSize",
        "capacity",
        "approximateMemoryUsagePercent",
    }
    assert 0.0 <= payload["approximateMemoryUsagePercent"] <= 100.0


def test_memory_figure_falls_back_to_zero(monkeypatch):
    def _unsupported(name):
        raise ValueError(name)

    monkeypatch.setattr(context_module.os, "sysconf", _unsupported)
    assert context_module.approximate_memory_usage_percent() == 0.0


@pytest.mark.parametrize(
    "platform, max_rss",
    [("linux", 1024), ("darwin", 1024 * 1024)],
)
def test_memory_figure_scales_peak_rss_by_platform(monkeypatch, platform, max_rss):
    # 1 MiB peak out of 100 MiB physical memory, reported in platform units.
    sizes = {"SC_PAGE_SIZE": 1024, "SC_PHYS_PAGES": 100 * 1024}
    fake_resource = SimpleNamespace(
        RUSAGE_SELF=0,
        getrusage=lambda who: SimpleNamespace(ru_maxrss=max_rss),
    )
    monkeypatch.setitem(sys.modules, "resource", fake_resource)
    monkeypatch.setattr(context_module.os, "sysconf", sizes.__getitem__)
    monkeypatch.setattr(context_module.sys, "platform", platform)

    assert context_module.approximate_memory_usage_percent() == pytest.approx(1.0)


def test_token_cache_is_bounded():
    context = MatchingContext(MatchingConfig(cache_capacity=5))
    for i in range(20):
        context.tokenize(f"document number {i} about testing")

    assert context.token_cache.size() == 5
    assert context.stem_cache.size() <= 5


def test_matchers_share_context_caches():
    context = MatchingContext()
    first = KnowledgeBaseMatcher(["reset user password"], context=context)
    second = KnowledgeBaseMatcher(["reset user password"], context=context)

    assert context.token_cache.size() == 1
    assert first.find_best_matches("password", 1) == second.find_best_matches(
        "password", 1
    )


def test_independent_contexts_do_not_share_state():
    first = MatchingContext()
    second = MatchingContext()
    first.tokenize("running servers")

    assert first.token_cache.size() == 1
    assert second.token_cache.size() == 0
    assert second.stem("running") == "run"
