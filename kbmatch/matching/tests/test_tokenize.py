import pytest

from kbmatch.matching.context import MatchingContext
from kbmatch.matching.tokenize import cache_key, extract_tokens, preprocess_text, tokenize


@pytest.fixture
def context():
    return MatchingContext()


def test_empty_and_none_yield_empty_set(context):
    assert tokenize(None, context=context) == set()
    assert tokenize("", context=context) == set()
    assert tokenize("  !!! ", context=context) == set()


def test_preprocess_collapses_whitespace_and_punctuation():
    assert preprocess_text("  Hello,\t\tworld!  ") == "Hello world"
    assert preprocess_text("e-mail v1.2") == "e-mail v1.2"


def test_words_are_lowercased_without_stemming(context):
    tokens = tokenize("User forgot LOGIN password", stemming=False, context=context)
    assert tokens == {"user", "forgot", "login", "password"}


def test_stemming_applies_to_words(context):
    tokens = tokenize("Users are running databases", context=context)
    assert tokens == {"user", "are", "run", "database"}


def test_numbers_are_kept_and_never_stemmed(context):
    assert tokenize("14 Days left", stemming=False, context=context) == {
        "14",
        "days",
        "left",
    }
    assert tokenize("14 Days left", context=context) == {"14", "day", "left"}
    assert tokenize("version 3.14", stemming=False, context=context) == {
        "version",
        "3",
        "14",
    }


def test_single_letters_are_dropped(context):
    assert tokenize("I saw a bug", stemming=False, context=context) == {"saw", "bug"}


def test_mixed_alphanumeric_tokens(context):
    assert tokenize("Win10", stemming=False, context=context) == {"win10"}
    assert tokenize("2FA", stemming=False, context=context) == {"2fa"}
    assert tokenize("abc123def", stemming=False, context=context) == {"abc123"}


def test_adjacent_mixed_tokens_resolve_overlap(context):
    assert tokenize("v2beta", stemming=False, context=context) == {"v2"}
    tokens = tokenize("Upgrade to v2beta beta2 now", stemming=False, context=context)
    assert tokens == {"upgrade", "to", "v2", "beta2", "now"}


def test_letters_glued_to_digits_need_word_boundaries():
    # Neither "1a" nor "a2" ends on a boundary, and the bare digits are glued.
    assert extract_tokens("1a2") == set()
    assert extract_tokens("v2beta2") == {"v2"}
    assert extract_tokens("2fa-code") == {"2fa", "code"}


def test_underscores_join_words_while_hyphens_and_periods_split(context):
    assert tokenize("foo_bar", stemming=False, context=context) == set()
    tokens = tokenize("foo_bar e-mail v1.2", stemming=False, context=context)
    assert tokens == {"mail", "v1", "2"}


def test_tokenize_is_idempotent_across_cache_states(context):
    text = "Installing software updates failed twice"
    cold = tokenize(text, context=context)
    warm = tokenize(text, context=context)

    assert cold == warm
    context.clear_caches()
    assert tokenize(text, context=context) == cold


def test_returned_sets_are_copies(context):
    first = tokenize("reset password", context=context)
    first.add("tampered")

    assert "tampered" not in tokenize("reset password", context=context)


def test_stemming_flag_is_part_of_cache_key(context):
    assert tokenize("running", stemming=True, context=context) == {"run"}
    assert tokenize("running", stemming=False, context=context) == {"running"}
    assert context.token_cache.size() == 2


def test_long_texts_are_keyed_by_digest():
    long_text = "word " * 100
    key = cache_key(long_text, True, long_text_threshold=200)

    assert key[0] != long_text
    assert key[1:] == (True, True)
    assert cache_key("short", False, long_text_threshold=200) == ("short", False, False)
    assert cache_key(long_text, True, 200) == key


def test_long_text_round_trips_through_cache(context):
    long_text = " ".join(f"item{i} word" for i in range(60))
    first = tokenize(long_text, stemming=False, context=context)
    second = tokenize(long_text, stemming=False, context=context)

    assert first == second
    assert "item59" in first
    assert "word" in first
