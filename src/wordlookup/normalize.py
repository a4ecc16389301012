"""
Cross-schema normalization of structured dictionary records.

Structured sources agree on almost nothing: one nests definitions under
"meanings", another under "entries", a third returns a bare "definitions"
list or a single "definition" string. A record is inspected once here and
turned into a WordEntry; no loosely typed value leaves this module.

Sense resolution tries these strategies in order and keeps the first that
yields at least one usable sense:

    sense_list          {"meanings": [{"partOfSpeech": ..., "definitions": [...]}]}
                        {"entries":  [...same...]}
    bare_definitions    {"partOfSpeech": ..., "definitions": [...]}
    senses              {"senses": [{"definition": ...}, {"definitions": [...]}]}
    single_definition   {"definition": "..."}
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from wordlookup.config import DEFAULT_CONFIG, LookupConfig
from wordlookup.model import Definition, Sense, WordEntry, make_sense
from wordlookup.tables import normalize_pos


logger = logging.getLogger(__name__)


SENSE_LIST_FIELDS = ("entries", "meanings")
DEFINITION_TEXT_FIELDS = ("definition", "text", "meaning", "value", "content")
POS_FIELDS = ("partOfSpeech", "part_of_speech", "pos")


# =============================================================================
# Record boundary
# =============================================================================


def select_record(payload: Any) -> Optional[Mapping]:
    """
    Pick the record to normalize from a structured payload.

    Sources answer with either a single mapping or a list of them; for a list
    the first mapping carrying a headword is used.
    """
    if isinstance(payload, Mapping):
        return payload
    if isinstance(payload, (list, tuple)):
        for item in payload:
            if isinstance(item, Mapping) and _headword(item):
                return item
    return None


def _headword(record: Mapping) -> Optional[str]:
    word = record.get("word")
    if isinstance(word, str) and word.strip():
        return word.strip()
    return None


def _string(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def _part_of_speech(item: Mapping, default: str = "") -> str:
    for key in POS_FIELDS:
        value = _string(item.get(key))
        if value:
            return normalize_pos(value)
    return default


# =============================================================================
# Definitions
# =============================================================================


def normalize_definition(item: Any) -> Optional[Definition]:
    """
    Normalize one raw definition item.

    Strings are the definition text; mappings use the first present of
    definition/text/meaning/value/content, carrying example and synonyms.
    Returns None when there is no text.
    """
    if isinstance(item, str):
        text = item.strip()
        return Definition(text=text) if text else None

    if not isinstance(item, Mapping):
        return None

    text = None
    for key in DEFINITION_TEXT_FIELDS:
        text = _string(item.get(key))
        if text:
            break
    if not text:
        return None

    example = _string(item.get("example"))
    if not example:
        example = next((e.strip() for e in _list(item.get("examples")) if _string(e)), None)

    synonyms = tuple(s.strip() for s in _list(item.get("synonyms")) if _string(s))
    return Definition(text=text, example=example, synonyms=synonyms)


def _definitions_of(item: Mapping) -> list[Definition]:
    """Definitions carried by one sense-like record, whatever the field layout."""
    raw = item.get("definitions")
    if isinstance(raw, (list, tuple)) and raw:
        candidates = list(raw)
    elif isinstance(raw, (str, Mapping)):
        candidates = [raw]
    elif _string(item.get("definition")):
        candidates = [item["definition"]]
    elif _list(item.get("senses")):
        candidates = _list(item.get("senses"))
    else:
        candidates = [item[key] for key in ("text", "meaning") if _string(item.get(key))][:1]

    definitions = []
    for candidate in candidates:
        definition = normalize_definition(candidate)
        if definition:
            definitions.append(definition)
    return definitions


# =============================================================================
# Normalizer
# =============================================================================


class SchemaNormalizer:
    """
    Reshape a structured record into a WordEntry.

    Usage:
        normalizer = SchemaNormalizer()
        entry = normalizer.normalize(record, language="es")
    """

    def __init__(self, config: LookupConfig = DEFAULT_CONFIG):
        self.config = config
        # Priority order; the first strategy producing a sense wins
        self.sense_strategies: tuple[tuple[str, Callable[[Mapping], list[Sense]]], ...] = (
            ("sense_list", self.senses_from_sense_list),
            ("bare_definitions", self.senses_from_bare_definitions),
            ("senses", self.senses_from_senses),
            ("single_definition", self.senses_from_single_definition),
        )

    def _sense(self, part_of_speech: str, definitions: list[Definition]) -> Optional[Sense]:
        return make_sense(part_of_speech, definitions, self.config.max_definitions)

    # =========================================================================
    # Sense strategies
    # =========================================================================

    def senses_from_sense_list(self, record: Mapping) -> list[Sense]:
        for key in SENSE_LIST_FIELDS:
            items = [i for i in _list(record.get(key)) if isinstance(i, Mapping)]
            if not items:
                continue
            default_pos = _part_of_speech(record)
            senses = [self._sense(_part_of_speech(i, default_pos), _definitions_of(i)) for i in items]
            senses = [s for s in senses if s]
            if senses:
                return senses
        return []

    def senses_from_bare_definitions(self, record: Mapping) -> list[Sense]:
        raw = _list(record.get("definitions"))
        definitions = [d for d in (normalize_definition(i) for i in raw) if d]
        sense = self._sense(_part_of_speech(record), definitions)
        return [sense] if sense else []

    def senses_from_senses(self, record: Mapping) -> list[Sense]:
        default_pos = _part_of_speech(record)
        senses = []
        for item in _list(record.get("senses")):
            if isinstance(item, str):
                sense = self._sense(default_pos, [Definition(text=item)])
            elif isinstance(item, Mapping):
                sense = self._sense(_part_of_speech(item, default_pos), _definitions_of(item))
            else:
                sense = None
            if sense:
                senses.append(sense)
        return senses

    def senses_from_single_definition(self, record: Mapping) -> list[Sense]:
        text = _string(record.get("definition"))
        if not text:
            return []
        sense = self._sense(_part_of_speech(record), [Definition(text=text)])
        return [sense] if sense else []

    # =========================================================================
    # Entry-level fields
    # =========================================================================

    @staticmethod
    def pronunciations(record: Mapping) -> tuple[str, ...]:
        """Pronunciation from whichever accepted shape is present."""
        value = record.get("pronunciation")
        text = None
        if isinstance(value, str):
            text = _string(value)
        elif isinstance(value, Mapping):
            text = _string(value.get("text"))
        elif isinstance(value, (list, tuple)) and value:
            first = value[0]
            text = _string(first.get("text")) if isinstance(first, Mapping) else _string(first)

        if not text:
            text = _string(record.get("phonetic"))
        if not text:
            # dictionaryapi.dev: "phonetics"; freedictionaryapi.com: per-entry "pronunciations"
            candidates = _list(record.get("phonetics")) + _list(record.get("pronunciations"))
            for key in SENSE_LIST_FIELDS:
                for entry in _list(record.get(key)):
                    if isinstance(entry, Mapping):
                        candidates.extend(_list(entry.get("pronunciations")))
            for item in candidates:
                text = _string(item.get("text")) if isinstance(item, Mapping) else _string(item)
                if text:
                    break

        return (text,) if text else ()

    @staticmethod
    def source_url(record: Mapping) -> Optional[str]:
        source = record.get("source")
        if isinstance(source, Mapping) and _string(source.get("url")):
            return _string(source.get("url"))
        for url in _list(record.get("sourceUrls")):
            if _string(url):
                return _string(url)
        return None

    # =========================================================================
    # Entry point
    # =========================================================================

    def normalize(self, payload: Any, language: str = "", source_url: Optional[str] = None,
                  is_fallback: bool = False) -> Optional[WordEntry]:
        """
        Normalize a structured payload.

        Args:
            payload: Mapping, or list of mappings, as decoded from the wire
            language: Language the record was fetched for
            source_url: URL to use when the record names none
            is_fallback: Whether the record came from the fallback language

        Returns:
            WordEntry, or None when the record has no headword
        """
        record = select_record(payload)
        if record is None:
            return None
        word = _headword(record)
        if not word:
            return None

        senses: list[Sense] = []
        for name, strategy in self.sense_strategies:
            senses = strategy(record)
            if senses:
                logger.debug(f"Sense strategy '{name}' resolved {len(senses)} senses for '{word}'")
                break

        return WordEntry(
            word=word,
            language=language,
            pronunciations=self.pronunciations(record),
            senses=tuple(senses),
            source_url=self.source_url(record) or source_url,
            is_fallback=is_fallback,
        )


_DEFAULT_NORMALIZER = SchemaNormalizer()


def normalize_record(payload: Any, language: str = "") -> Optional[WordEntry]:
    """Normalize with the default configuration."""
    return _DEFAULT_NORMALIZER.normalize(payload, language=language)
