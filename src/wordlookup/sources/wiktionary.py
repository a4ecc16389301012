"""
Wiktionary source.

Asks the MediaWiki query API of the Wiktionary edition serving the language
for the page's current wikitext plus the plain-text intro extract:

    GET https://es.wiktionary.org/w/api.php?action=query&titles=casa
        &prop=revisions|extracts&rvprop=content&rvslots=main
        &exintro=1&explaintext=1&redirects=1&format=json

A missing page comes back with page id "-1" (or a "missing" key) and is a
clean miss. The wikitext is handed over as a MARKUP response; the extract
travels along as its summary.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import quote

from wordlookup.errors import TransportError
from wordlookup.model import RawResponse, ResponseKind
from wordlookup.sources.base import HttpSource
from wordlookup.tables import wiki_prefix


logger = logging.getLogger(__name__)


API_URL = "https://{prefix}.wiktionary.org/w/api.php"
PAGE_URL = "https://{prefix}.wiktionary.org/wiki/{title}"


def page_url(word: str, language: str) -> str:
    """Human-readable page URL for word on the language's edition."""
    return PAGE_URL.format(prefix=wiki_prefix(language), title=quote(word))


def query_params(word: str) -> dict:
    return {
        "action": "query",
        "titles": word,
        "prop": "revisions|extracts",
        "rvprop": "content",
        "rvslots": "main",
        "redirects": "1",
        "exintro": "1",
        "explaintext": "1",
        "format": "json",
        "origin": "*",
    }


def _page_wikitext(page: Mapping) -> Optional[str]:
    """Wikitext of the first revision, or None when absent."""
    revisions = page.get("revisions")
    if not isinstance(revisions, list) or not revisions:
        return None
    revision = revisions[0]
    if not isinstance(revision, Mapping):
        return None
    slots = revision.get("slots")
    if isinstance(slots, Mapping) and isinstance(slots.get("main"), Mapping):
        content = slots["main"].get("*", slots["main"].get("content"))
    else:
        # Older API layout without slots
        content = revision.get("*")
    return content if isinstance(content, str) and content.strip() else None


def parse_query_response(data: Any, word: str, language: str) -> Optional[RawResponse]:
    """
    Turn a decoded query API answer into a RawResponse.

    Returns None for a missing page or a page without wikitext; raises
    TransportError when the answer has no "query.pages" mapping at all.
    """
    query = data.get("query") if isinstance(data, Mapping) else None
    pages = query.get("pages") if isinstance(query, Mapping) else None
    if not isinstance(pages, Mapping):
        raise TransportError("wiktionary answer has no pages")

    for page_id, page in pages.items():
        if not isinstance(page, Mapping):
            continue
        if str(page_id) == "-1" or "missing" in page or "invalid" in page:
            return None

        wikitext = _page_wikitext(page)
        if wikitext is None:
            logger.debug(f"Page for '{word}' ({language}) has no wikitext")
            return None

        title = page.get("title") if isinstance(page.get("title"), str) else word
        extract = page.get("extract")
        return RawResponse(
            kind=ResponseKind.MARKUP,
            payload=wikitext,
            source_url=page_url(title, language),
            title=title,
            summary=extract.strip() if isinstance(extract, str) and extract.strip() else None,
        )
    return None


class WiktionarySource(HttpSource):
    """
    Fetch raw wikitext from the Wiktionary edition of the requested language.

    Languages without an edition of their own in the table are asked on the
    English edition.
    """

    name = "wiktionary"

    def api_url(self, language: str) -> str:
        return API_URL.format(prefix=wiki_prefix(language))

    def fetch_raw(self, word: str, language: str) -> Optional[RawResponse]:
        response = self.get(self.api_url(language), params=query_params(word))
        data = self.decode(response)
        return parse_query_response(data, word, language)
