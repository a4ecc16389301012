"""
Lookup orchestration.

One lookup walks at most two languages:

    requested language ──present──> extract ──> loanword check ──> Found
          │                                          └──────────> RejectedAsLoanword
          └─absent or empty──> default language (once) ──present──> ... (isFallback)
                                        └─absent or empty──> NotFound

A transport failure on the requested language is reported as SourceError.
A transport failure on the fallback attempt, coming after a clean miss on
the requested language, is reported as NotFound: the miss is the more
specific answer.
"""

import logging
from typing import Optional

from wordlookup.config import DEFAULT_CONFIG, LookupConfig
from wordlookup.errors import EmptyQueryError, TransportError
from wordlookup.loanwords import BorrowedWordClassifier
from wordlookup.model import (
    Found,
    LookupResult,
    NotFound,
    RawResponse,
    RejectedAsLoanword,
    ResponseKind,
    SourceError,
    WordEntry,
)
from wordlookup.normalize import SchemaNormalizer
from wordlookup.sources.base import DictionarySource
from wordlookup.wikitext.sections import SectionExtractor


logger = logging.getLogger(__name__)


class DictionaryLookup:
    """
    Turn raw upstream answers for (word, language) into one LookupResult.

    Usage:
        with WiktionarySource() as source:
            lookup = DictionaryLookup(source)
            result = lookup.lookup("casa", "es")
            if result.ok:
                print(result.entry.senses)

    The source is the only collaborator with side effects; everything else
    is built from config and the static tables.
    """

    def __init__(
        self,
        source: DictionarySource,
        config: Optional[LookupConfig] = None,
        normalizer: Optional[SchemaNormalizer] = None,
        extractor: Optional[SectionExtractor] = None,
        classifier: Optional[BorrowedWordClassifier] = None,
    ):
        self.source = source
        self.config = config or DEFAULT_CONFIG
        self.normalizer = normalizer or SchemaNormalizer(self.config)
        self.extractor = extractor or SectionExtractor(self.config)
        self.classifier = classifier or BorrowedWordClassifier(self.config.default_language)

    # =========================================================================
    # Entry point
    # =========================================================================

    def lookup(self, word: str, language: Optional[str] = None) -> LookupResult:
        """
        Look up word in language, falling back to the default language once.

        Args:
            word: Word as typed by the user
            language: Requested language code; the default language if omitted

        Returns:
            Found, NotFound, RejectedAsLoanword or SourceError

        Raises:
            EmptyQueryError: If word is empty or blank
        """
        word = (word or "").strip()
        if not word:
            raise EmptyQueryError("Cannot look up an empty word")
        language = (language or "").strip().lower() or self.config.default_language
        default = self.config.default_language

        try:
            entry = self.attempt(word, language)
        except TransportError as e:
            logger.warning(f"Lookup of '{word}' ({language}) failed: {e}")
            return SourceError(reason=str(e))

        if entry is None:
            if language == default:
                logger.info(f"No entry for '{word}' in {language}")
                return NotFound()

            logger.info(f"No entry for '{word}' in {language}, trying {default}")
            try:
                entry = self.attempt(word, default, is_fallback=True)
            except TransportError as e:
                logger.warning(f"Fallback lookup of '{word}' ({default}) failed: {e}")
                return NotFound()
            if entry is None:
                logger.info(f"No entry for '{word}' in {default} either")
                return NotFound()

        if self.classifier.is_loanword(entry, language, word):
            logger.info(f"Rejecting '{word}' for {language} as a loanword")
            return RejectedAsLoanword(language=language)

        return Found(entry=entry)

    # =========================================================================
    # One language
    # =========================================================================

    def attempt(self, word: str, language: str, is_fallback: bool = False) -> Optional[WordEntry]:
        """
        Fetch and extract word in one language.

        Returns None when the source has nothing or the answer has nothing
        to show. TransportError from the source propagates.
        """
        raw = self.source.fetch_raw(word, language)
        if raw is None:
            return None

        entry = self.build_entry(raw, word, language, is_fallback)
        if entry is None or not entry.has_content:
            logger.debug(f"Answer for '{word}' ({language}) has no usable content")
            return None
        return entry

    def build_entry(self, raw: RawResponse, word: str, language: str, is_fallback: bool = False) -> Optional[WordEntry]:
        """Route a raw response to the normalizer or the extractor."""
        if raw.kind is ResponseKind.STRUCTURED:
            return self.normalizer.normalize(
                raw.payload, language=language, source_url=raw.source_url, is_fallback=is_fallback
            )

        extraction = self.extractor.extract(raw.payload if isinstance(raw.payload, str) else "", language)
        raw_extract = extraction.raw_extract
        if not extraction.senses and not raw_extract and raw.summary:
            raw_extract = _truncate_summary(raw.summary, self.config)

        return WordEntry(
            word=(raw.title or word).strip() or word,
            language=language,
            pronunciations=extraction.pronunciations,
            etymology=extraction.etymology,
            senses=extraction.senses,
            raw_extract=raw_extract,
            source_url=raw.source_url,
            is_fallback=is_fallback,
        )


def _truncate_summary(summary: str, config: LookupConfig) -> Optional[str]:
    text = " ".join(summary.split())
    if len(text) <= config.min_raw_extract_length:
        return None
    return text[: config.max_raw_extract_length]
