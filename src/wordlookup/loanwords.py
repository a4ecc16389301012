"""
Borrowed-word classification.

A request for native vocabulary in language L should not be answered with
an entry that only exists because L borrowed the word (typically from
English). Two signals are used:

  - the query is one of a handful of ultra-common default-language words
    (hello, yes, thanks, ...), which are rejected outright;
  - a definition mentions a borrowing phrase ("borrowed from", "anglicism",
    "from French", ...), or the serialized entry contains one of a narrower
    set of unambiguous markers.

This is a heuristic. Missing a loanword is acceptable; the phrase lists are
kept short and literal to avoid rejecting genuine entries.
"""

import logging
from typing import Iterable, Optional, Union

from wordlookup.model import WordEntry
from wordlookup.tables import TABLES
from wordlookup.wikitext.sanitize import sanitize


logger = logging.getLogger(__name__)


class BorrowedWordClassifier:
    """
    Decide whether an entry is a loanword in the requested language.

    Usage:
        classifier = BorrowedWordClassifier(default_language="en")
        classifier.is_loanword([entry], "es", "hello")   # True

    Every list can be overridden per instance; the defaults come from the
    table file.
    """

    def __init__(
        self,
        default_language: str = "en",
        common_words: Optional[Iterable[str]] = None,
        indicators: Optional[Iterable[str]] = None,
        serialized_indicators: Optional[Iterable[str]] = None,
    ):
        self.default_language = default_language.lower()
        self.common_words = frozenset(
            w.casefold() for w in (TABLES.common_default_words if common_words is None else common_words)
        )
        self.indicators = tuple(
            p.lower() for p in (TABLES.borrowing_indicators if indicators is None else indicators)
        )
        self.serialized_indicators = tuple(
            p.lower()
            for p in (
                TABLES.serialized_borrowing_indicators if serialized_indicators is None else serialized_indicators
            )
        )

    def matching_indicator(self, text: str) -> Optional[str]:
        """Return the first definition indicator found in text, if any."""
        text = text.lower()
        for phrase in self.indicators:
            if phrase in text:
                return phrase
        return None

    def is_loanword(
        self,
        entries: Union[WordEntry, Iterable[WordEntry]],
        target_language: str,
        queried_word: str,
    ) -> bool:
        """
        Classify entries found for queried_word in target_language.

        Args:
            entries: One entry or several
            target_language: Language the user asked for
            queried_word: Word as typed by the user

        Returns:
            True if the result should be rejected as a borrowing
        """
        if (target_language or "").lower() == self.default_language:
            return False

        if (queried_word or "").strip().casefold() in self.common_words:
            logger.info(f"'{queried_word}' is a common {self.default_language} word, rejecting for {target_language}")
            return True

        if isinstance(entries, WordEntry):
            entries = [entries]

        for entry in entries:
            serialized = entry.to_json().decode("utf-8").lower()
            for phrase in self.serialized_indicators:
                if phrase in serialized:
                    logger.info(f"Entry '{entry.word}' mentions '{phrase}', treating as loanword")
                    return True

            for text in entry.definition_texts():
                phrase = self.matching_indicator(sanitize(text))
                if phrase:
                    logger.info(f"Definition of '{entry.word}' mentions '{phrase}', treating as loanword")
                    return True

        return False


def is_loanword(entries, target_language: str, queried_word: str, default_language: str = "en") -> bool:
    """Classify with the default tables."""
    return BorrowedWordClassifier(default_language).is_loanword(entries, target_language, queried_word)
