"""Tests for the borrowed-word classifier."""

from wordlookup.loanwords import BorrowedWordClassifier, is_loanword
from wordlookup.model import Definition, Sense, WordEntry


def make_entry(*texts, word="w", language="es", etymology=None):
    return WordEntry(
        word=word,
        language=language,
        etymology=etymology,
        senses=(Sense("noun", tuple(Definition(t) for t in texts)),),
    )


class TestCommonWords:
    """Ultra-common default-language words."""

    def test_hello_rejected_without_indicators(self):
        """'hello' is rejected for another language even with clean definitions."""
        entry = make_entry("a greeting", word="hello")
        assert is_loanword([entry], "es", "hello")

    def test_case_and_whitespace_ignored(self):
        """The query is trimmed and compared case-insensitively."""
        assert is_loanword([], "fr", "  Thanks ")

    def test_default_language_never_rejected(self):
        """Nothing is a loanword in the default language."""
        entry = make_entry("Borrowed from French.", word="hello")
        assert not is_loanword([entry], "en", "hello")


class TestIndicators:
    """Borrowing phrases in definitions and in the serialized entry."""

    def test_definition_indicator(self):
        """A definition mentioning its source language is rejected."""
        assert is_loanword([make_entry("From English weekend.")], "es", "weekend")

    def test_definition_sanitized_first(self):
        """Markup between the words of a phrase does not hide it."""
        assert is_loanword([make_entry("''Borrowed'' from English.")], "es", "x")

    def test_serialized_indicator(self):
        """The narrow markers are found anywhere in the entry."""
        entry = make_entry("a sport", etymology="Anglicism; from football.")
        assert is_loanword(entry, "es", "fútbol")

    def test_etymology_origin_not_enough(self):
        """An ordinary etymology naming a source language is not a borrowing."""
        entry = make_entry("house, dwelling", word="casa", etymology="From Latin casa (hut).")
        assert not is_loanword([entry], "es", "casa")

    def test_clean_entry(self):
        """Native vocabulary passes."""
        assert not is_loanword([make_entry("dwelling", word="casa")], "es", "casa")

    def test_matching_indicator(self):
        """The first matching phrase is reported."""
        classifier = BorrowedWordClassifier()
        assert classifier.matching_indicator("An ENGLISH TERM for it") == "english term"
        assert classifier.matching_indicator("a house") is None


class TestOverrides:
    """Per-instance lists."""

    def test_custom_common_words(self):
        """Common words may be replaced."""
        classifier = BorrowedWordClassifier(common_words=["casa"])
        assert classifier.is_loanword([], "es", "Casa")
        assert not classifier.is_loanword([], "es", "hello")

    def test_custom_indicators(self):
        """Indicator phrases may be replaced."""
        classifier = BorrowedWordClassifier(indicators=["préstamo"], serialized_indicators=[])
        assert classifier.is_loanword([make_entry("Préstamo del inglés.")], "es", "x")
        assert not classifier.is_loanword([make_entry("Borrowed from English.")], "es", "x")

    def test_custom_default_language(self):
        """The default language decides which requests are exempt."""
        classifier = BorrowedWordClassifier(default_language="es", common_words=["hola"])
        assert not classifier.is_loanword([], "es", "hola")
        assert classifier.is_loanword([], "en", "hola")
