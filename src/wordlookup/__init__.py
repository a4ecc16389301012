"""
Dictionary lookup engine.

Turns answers from uncoordinated upstream dictionaries into one canonical
WordEntry:

- normalize: structured records whose field names vary between sources
- wikitext: raw Wiktionary pages (sections, templates, links)
- loanwords: rejects entries that only exist as borrowings
- lookup: fallback orchestration, primary language then default language

The sources package holds the requests-based upstream adapters.
"""

from wordlookup.config import LookupConfig, load_config
from wordlookup.errors import EmptyQueryError, TransportError, WordLookupError
from wordlookup.lookup import DictionaryLookup
from wordlookup.model import (
    Definition,
    Found,
    LookupResult,
    NotFound,
    RawResponse,
    RejectedAsLoanword,
    ResponseKind,
    Sense,
    SourceError,
    WordEntry,
)

__all__ = [
    "DictionaryLookup",
    "LookupConfig",
    "load_config",
    "WordLookupError",
    "TransportError",
    "EmptyQueryError",
    "Definition",
    "Sense",
    "WordEntry",
    "RawResponse",
    "ResponseKind",
    "Found",
    "NotFound",
    "RejectedAsLoanword",
    "SourceError",
    "LookupResult",
]
