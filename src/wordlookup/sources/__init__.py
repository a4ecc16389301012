"""
Upstream dictionary sources.

A source answers fetch_raw(word, language) with:

    RawResponse   the upstream has an entry (structured record or wikitext)
    None          the upstream cleanly reports that the word is absent
    raises TransportError when the upstream could not be asked or answered
    with something unusable

The lookup engine only depends on this protocol. Two requests-based
adapters are provided:

- wiktionary: MediaWiki query API of the language's Wiktionary edition
- freedictionary: freedictionaryapi.com structured entries
"""

from wordlookup.sources.base import DictionarySource, HttpSource
from wordlookup.sources.freedictionary import FreeDictionarySource
from wordlookup.sources.wiktionary import WiktionarySource

__all__ = [
    "DictionarySource",
    "HttpSource",
    "FreeDictionarySource",
    "WiktionarySource",
]
