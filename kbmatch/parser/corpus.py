"""Load knowledge-base documents from text or YAML files."""

import logging
from pathlib import Path
from typing import Any

import yaml

log = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt"}
YAML_SUFFIXES = {".yaml", ".yml"}

# Mapping entries contribute the first of these fields that holds text.
DOCUMENT_FIELDS = ("question", "text", "title")


def _document_from_entry(entry: Any, position: int) -> str | None:
    if isinstance(entry, str):
        return entry.strip() or None
    if isinstance(entry, dict):
        for key in DOCUMENT_FIELDS:
            value = entry.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    log.warning(f"Skipping corpus entry {position}: no document text")
    return None


def parse_corpus_yaml(content: str) -> list[str]:
    """Parse a YAML corpus.

    Accepts a list of strings, a list of mappings with a ``question``,
    ``text`` or ``title`` field, or a mapping whose ``documents`` key holds
    either kind of list.

    Raises:
        ValueError: if the YAML is malformed or has another shape.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid corpus YAML: {exc}") from exc

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("documents")
    if not isinstance(data, list):
        raise ValueError("Corpus YAML must be a list or a mapping with 'documents'")

    documents: list[str] = []
    for position, entry in enumerate(data):
        document = _document_from_entry(entry, position)
        if document is not None:
            documents.append(document)
    return documents


def parse_corpus_text(content: str) -> list[str]:
    """One document per non-blank line."""
    return [line.strip() for line in content.splitlines() if line.strip()]


def load_corpus(path: str | Path) -> list[str]:
    """Load an ordered corpus from ``path``.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
        ValueError: for unsupported file types or malformed YAML.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Corpus not found: {path}")

    suffix = path.suffix.lower()
    content = path.read_text(encoding="utf-8")

    if suffix in YAML_SUFFIXES:
        documents = parse_corpus_yaml(content)
    elif suffix in TEXT_SUFFIXES:
        documents = parse_corpus_text(content)
    else:
        raise ValueError(f"Unsupported corpus file type: {path.suffix or path.name}")

    log.info(f"Loaded {len(documents)} documents from {path}")
    return documents
