"""
freedictionaryapi.com source.

    GET https://freedictionaryapi.com/api/v1/entries/{language}/{word}

Answers with a record (or a list of records) carrying "word" and "entries";
404 means the word is unknown for that language.
"""

import logging
from collections.abc import Mapping
from typing import Optional
from urllib.parse import quote

from wordlookup.model import RawResponse, ResponseKind
from wordlookup.sources.base import HttpSource


logger = logging.getLogger(__name__)


ENTRIES_URL = "https://freedictionaryapi.com/api/v1/entries/{language}/{word}"


class FreeDictionarySource(HttpSource):
    """Fetch structured entries from freedictionaryapi.com."""

    name = "freedictionary"

    def entries_url(self, word: str, language: str) -> str:
        return ENTRIES_URL.format(language=quote(language), word=quote(word))

    def fetch_raw(self, word: str, language: str) -> Optional[RawResponse]:
        url = self.entries_url(word, language)
        response = self.get(url)
        if response.status_code == 404:
            logger.debug(f"No {language} entry for '{word}'")
            return None

        data = self.decode(response)
        if not data:
            return None
        if isinstance(data, Mapping) and not data.get("word") and not data.get("entries"):
            return None

        source = data.get("source") if isinstance(data, Mapping) else None
        source_url = source.get("url") if isinstance(source, Mapping) else None
        return RawResponse(ResponseKind.STRUCTURED, data, source_url=source_url or url)
