"""Corpus file loading."""

from .corpus import load_corpus, parse_corpus_yaml

__all__ = ["load_corpus", "parse_corpus_yaml"]
