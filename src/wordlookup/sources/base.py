"""Source protocol and the shared requests plumbing."""

import logging
from typing import Any, Optional, Protocol, runtime_checkable

import requests

from wordlookup.config import DEFAULT_CONFIG, LookupConfig
from wordlookup.errors import TransportError
from wordlookup.model import RawResponse


logger = logging.getLogger(__name__)


@runtime_checkable
class DictionarySource(Protocol):
    """Anything that can fetch a raw upstream answer for a word."""

    def fetch_raw(self, word: str, language: str) -> Optional[RawResponse]:
        ...


class HttpSource:
    """
    Base for sources talking JSON over HTTP.

    Owns a requests.Session (created on demand unless one is passed in) and
    closes it when used as a context manager:

        with WiktionarySource() as source:
            raw = source.fetch_raw("casa", "es")
    """

    name = "http"

    def __init__(self, config: LookupConfig = DEFAULT_CONFIG, session: Optional[requests.Session] = None):
        self.config = config
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": config.user_agent,
        })

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def get(self, url: str, params: Optional[dict] = None) -> requests.Response:
        """GET url, mapping network failures to TransportError."""
        try:
            return self.session.get(url, params=params, timeout=self.config.request_timeout)
        except requests.RequestException as e:
            logger.warning(f"{self.name} request failed: {e}")
            raise TransportError(f"{self.name} could not be reached: {e}") from e

    def decode(self, response: requests.Response) -> Any:
        """Raise for non-2xx statuses and return the decoded JSON body."""
        if not 200 <= response.status_code < 300:
            logger.warning(f"{self.name} answered HTTP {response.status_code}")
            raise TransportError(f"{self.name} answered HTTP {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{self.name} returned malformed JSON: {e}")
            raise TransportError(f"{self.name} returned malformed JSON") from e
