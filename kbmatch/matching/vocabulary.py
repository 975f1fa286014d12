"""Fixed vocabularies for the heuristic stemmer.

Tuned to a software-support vocabulary (login, install, database, ...).
"""

from types import MappingProxyType

STOP_WORDS = frozenset(
    "the a an and or but in on at to for of with by is are was were be been "
    "have has had do does did will would could should may might can this that "
    "these those".split()
)

# Domain terms that must never be suffix-stripped ("settings" stays "settings").
RESERVED_TERMS = frozenset(
    "database algorithm software hardware network security encryption "
    "programming debugging testing deployment configuration installation "
    "analytics kubernetes docker microservices api json xml html javascript "
    "python java framework library repository version interface dashboard "
    "menu button dialog settings preferences login logout signup password "
    "username email verification".split()
)

_VERB_FORMS = (
    ("showing", "show"),
    ("started", "start"),
    ("running", "run"),
    ("connecting", "connect"),
    ("installing", "install"),
    ("configuring", "configure"),
    ("processing", "process"),
    ("loading", "load"),
    ("saving", "save"),
    ("updating", "update"),
    ("creating", "create"),
    ("deleting", "delete"),
    ("testing", "test"),
    ("debugging", "debug"),
    ("monitoring", "monitor"),
    ("editing", "edit"),
    ("authenticating", "authenticate"),
    ("authorizing", "authorize"),
    ("deploying", "deploy"),
    ("migrating", "migrate"),
    ("working", "work"),
    ("failing", "fail"),
    ("crashing", "crash"),
    ("logging", "log"),
    ("backing", "backup"),
    ("recovering", "recover"),
    ("resetting", "reset"),
)

_NOUN_PLURALS = (
    ("users", "user"),
    ("systems", "system"),
    ("passwords", "password"),
    ("accounts", "account"),
    ("files", "file"),
    ("errors", "error"),
    ("problems", "problem"),
    ("issues", "issue"),
    ("applications", "application"),
    ("connections", "connection"),
    ("configurations", "configuration"),
    ("permissions", "permission"),
    ("settings", "setting"),
    ("databases", "database"),
    ("servers", "server"),
    ("networks", "network"),
    ("services", "service"),
    ("processes", "process"),
)

_IRREGULAR = (
    ("ran", "run"),
    ("went", "go"),
    ("came", "come"),
    ("saw", "see"),
    ("got", "get"),
)


def _build_stem_rules() -> dict[str, str]:
    rules: dict[str, str] = {}
    for inflected, base in _VERB_FORMS:
        rules[inflected] = base
        rules[base + "s"] = base
        rules[base + "ed"] = base
    for plural, singular in _NOUN_PLURALS:
        rules[plural] = singular
    for irregular, base in _IRREGULAR:
        rules[irregular] = base
    return rules


STEM_RULES = MappingProxyType(_build_stem_rules())


def is_protected(word: str) -> bool:
    """True for stop words and reserved terms, which are never stemmed."""
    return word in STOP_WORDS or word in RESERVED_TERMS
