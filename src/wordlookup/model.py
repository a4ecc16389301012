"""
Canonical word-entry model and lookup results.

Every upstream answer, whatever its shape, ends up as a WordEntry:

    WordEntry
      ├── pronunciations   ("/ɹʌn/", ...)
      ├── etymology        (bounded prose or None)
      ├── senses           (Sense per part of speech)
      │     └── definitions (Definition: text, example, synonyms)
      └── raw_extract      (prose summary, only when there are no senses)

Entries are frozen once built. to_dict() gives the camelCase shape the UI
and history layers store; to_json() serializes it with orjson.

A lookup answers with exactly one of Found, NotFound, RejectedAsLoanword or
SourceError.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

import orjson


# =============================================================================
# Entry model
# =============================================================================


@dataclass(frozen=True)
class Definition:
    """One definition line."""

    text: str
    example: Optional[str] = None
    synonyms: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "example": self.example,
            "synonyms": list(self.synonyms),
        }


@dataclass(frozen=True)
class Sense:
    """Definitions grouped under one part of speech."""

    part_of_speech: str
    definitions: tuple[Definition, ...] = ()

    def to_dict(self) -> dict:
        return {
            "partOfSpeech": self.part_of_speech,
            "definitions": [d.to_dict() for d in self.definitions],
        }


def make_sense(part_of_speech: str, definitions, limit: int) -> Optional[Sense]:
    """
    Build a Sense from candidate definitions.

    Definitions with blank text are dropped and at most `limit` are kept.
    Returns None when nothing usable is left.
    """
    kept = []
    for definition in definitions:
        if isinstance(definition, str):
            definition = Definition(text=definition)
        text = definition.text.strip()
        if not text:
            continue
        if text != definition.text:
            definition = Definition(text=text, example=definition.example, synonyms=definition.synonyms)
        kept.append(definition)
        if len(kept) >= limit:
            break

    if not kept:
        return None
    return Sense(part_of_speech=part_of_speech, definitions=tuple(kept))


@dataclass(frozen=True)
class WordEntry:
    """A canonical dictionary entry for one headword in one language."""

    word: str
    language: str
    pronunciations: tuple[str, ...] = ()
    etymology: Optional[str] = None
    senses: tuple[Sense, ...] = ()
    raw_extract: Optional[str] = None
    source_url: Optional[str] = None
    is_fallback: bool = False

    @property
    def has_content(self) -> bool:
        """True when there is something to show: senses or a prose extract."""
        return bool(self.senses) or bool(self.raw_extract and self.raw_extract.strip())

    @property
    def primary_pronunciation(self) -> Optional[str]:
        return self.pronunciations[0] if self.pronunciations else None

    def definition_texts(self) -> list[str]:
        """All definition texts, in order."""
        return [d.text for sense in self.senses for d in sense.definitions]

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "language": self.language,
            "pronunciations": list(self.pronunciations),
            "etymology": self.etymology,
            "senses": [s.to_dict() for s in self.senses],
            "rawExtract": self.raw_extract,
            "sourceUrl": self.source_url,
            "isFallback": self.is_fallback,
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict(), option=orjson.OPT_SORT_KEYS)

    @classmethod
    def from_dict(cls, d: dict) -> "WordEntry":
        """Rebuild an entry from the to_dict() shape (e.g. stored history)."""
        senses = []
        for s in d.get("senses") or []:
            definitions = tuple(
                Definition(
                    text=item.get("text", ""),
                    example=item.get("example"),
                    synonyms=tuple(item.get("synonyms") or ()),
                )
                for item in s.get("definitions") or []
            )
            senses.append(Sense(part_of_speech=s.get("partOfSpeech", ""), definitions=definitions))

        return cls(
            word=d["word"],
            language=d.get("language", ""),
            pronunciations=tuple(d.get("pronunciations") or ()),
            etymology=d.get("etymology"),
            senses=tuple(senses),
            raw_extract=d.get("rawExtract"),
            source_url=d.get("sourceUrl"),
            is_fallback=bool(d.get("isFallback", False)),
        )


# =============================================================================
# Raw upstream responses
# =============================================================================


class ResponseKind(Enum):
    """Which extraction path a raw response needs."""

    STRUCTURED = "structured"
    MARKUP = "markup"


@dataclass(frozen=True)
class RawResponse:
    """
    An upstream answer as handed over by a dictionary source.

    payload is a nested mapping/list for STRUCTURED responses and a wikitext
    string for MARKUP ones. title is the headword the source reports, and
    summary an optional plain-text extract the source already rendered.
    """

    kind: ResponseKind
    payload: Any
    source_url: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any, source_url: Optional[str] = None, **kwargs) -> "RawResponse":
        """Discriminate the response kind by inspecting the payload's structure."""
        if isinstance(payload, (bytes, bytearray)):
            payload = payload.decode("utf-8", errors="replace")
        if isinstance(payload, str):
            return cls(ResponseKind.MARKUP, payload, source_url=source_url, **kwargs)
        if isinstance(payload, (dict, list, tuple)):
            return cls(ResponseKind.STRUCTURED, payload, source_url=source_url, **kwargs)
        raise TypeError(f"Unrecognized payload type: {type(payload).__name__}")


# =============================================================================
# Lookup results
# =============================================================================


@dataclass(frozen=True)
class Found:
    entry: WordEntry
    kind: str = field(default="found", init=False)
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class NotFound:
    kind: str = field(default="not_found", init=False)
    ok: bool = field(default=False, init=False)


@dataclass(frozen=True)
class RejectedAsLoanword:
    """The entry exists but is a borrowing; language is the one requested."""

    language: str
    kind: str = field(default="rejected_as_loanword", init=False)
    ok: bool = field(default=False, init=False)


@dataclass(frozen=True)
class SourceError:
    """The source failed; the user may retry."""

    reason: str
    kind: str = field(default="source_error", init=False)
    ok: bool = field(default=False, init=False)


LookupResult = Union[Found, NotFound, RejectedAsLoanword, SourceError]
