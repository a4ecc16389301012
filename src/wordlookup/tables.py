"""
Static heuristic tables.

Part-of-speech aliases, etymology heading labels, template lists, the
common-word list and the borrowing-indicator phrases all live in
data/tables.yaml. They are loaded once at import time into read-only
structures (tuples, frozensets, MappingProxyType) and shared by every lookup.

Required keys are checked on load so that a broken table file fails loudly
at import rather than silently producing empty extractions.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from wordlookup.errors import TableError


TABLES_PATH = Path(__file__).parent / "data" / "tables.yaml"

REQUIRED_KEYS = (
    "languages",
    "pos_aliases",
    "section_templates",
    "etymology_headings",
    "inline_templates",
    "crossref_templates",
    "pronunciation_templates",
    "common_default_words",
    "serialized_borrowing_indicators",
    "borrowing_indicators",
)


# =============================================================================
# YAML utilities
# =============================================================================


def flatten_list(items: list[Any]) -> list[str]:
    """
    Flatten a list that may contain nested lists from YAML alias references.

    borrowing_indicators references the serialized list with an alias,
    which YAML loads as a nested list:

        ['anglicism', ...] inside ['...', 'from english', ...]

    This returns one flat list of strings, order preserved.
    """
    result: list[str] = []
    for item in items:
        if isinstance(item, list):
            result.extend(flatten_list(item))
        else:
            result.append(str(item))
    return result


def _load_yaml(path: Path) -> dict:
    """Load the table file with a clear error message if missing or invalid."""
    if not path.exists():
        raise TableError(f"Required table file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TableError(f"Invalid YAML in {path}: {e}")

    if not isinstance(data, dict):
        raise TableError(f"Table file {path} must contain a mapping")

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise TableError(f"Table file {path} is missing keys: {', '.join(missing)}")
    return data


# =============================================================================
# Table dataclasses
# =============================================================================


@dataclass(frozen=True)
class Language:
    """A supported language and the Wiktionary edition serving it."""

    code: str
    name: str
    wiki: str


@dataclass(frozen=True)
class PronunciationTemplate:
    """Where a pronunciation template keeps its transcription arguments."""

    name: str
    skip: int = 0
    count: Optional[int] = None
    named: tuple[str, ...] = ()


@dataclass(frozen=True)
class Tables:
    """All heuristic tables, read-only."""

    languages: Mapping[str, Language]
    pos_aliases: Mapping[str, str]
    pos_aliases_folded: Mapping[str, str]
    section_templates: frozenset[str]
    etymology_headings: tuple[tuple[str, re.Pattern], ...]
    inline_templates: Mapping[str, int]
    crossref_templates: tuple[str, ...]
    pronunciation_templates: Mapping[str, PronunciationTemplate]
    common_default_words: frozenset[str]
    serialized_borrowing_indicators: tuple[str, ...]
    borrowing_indicators: tuple[str, ...]

    @property
    def english_pos_headings(self) -> tuple[str, ...]:
        """Capitalized alias keys, in table order."""
        return tuple(label for label in self.pos_aliases if label[:1].isupper())


def build_tables(data: dict) -> Tables:
    """Convert raw table data into immutable structures."""
    languages = {
        code.lower(): Language(code=code.lower(), name=info["name"], wiki=info.get("wiki", code))
        for code, info in data["languages"].items()
    }

    pos_aliases = {str(k): str(v) for k, v in data["pos_aliases"].items()}
    # Case-insensitive view; the first spelling listed wins
    folded: dict[str, str] = {}
    for label, tag in pos_aliases.items():
        folded.setdefault(label.casefold(), tag)

    etymology = tuple(
        (code.lower(), re.compile(rf"^(?:{label})\s*\d*$", re.IGNORECASE))
        for code, label in data["etymology_headings"].items()
    )

    pronunciation = {}
    for name, layout in data["pronunciation_templates"].items():
        layout = layout or {}
        pronunciation[name.lower()] = PronunciationTemplate(
            name=name,
            skip=int(layout.get("skip", 0)),
            count=layout.get("count"),
            named=tuple(flatten_list(layout.get("named", []))),
        )

    return Tables(
        languages=MappingProxyType(languages),
        pos_aliases=MappingProxyType(pos_aliases),
        pos_aliases_folded=MappingProxyType(folded),
        section_templates=frozenset(s.lower() for s in flatten_list(data["section_templates"])),
        etymology_headings=etymology,
        inline_templates=MappingProxyType(
            {str(k).lower(): int(v) for k, v in data["inline_templates"].items()}
        ),
        crossref_templates=tuple(s.lower() for s in flatten_list(data["crossref_templates"])),
        pronunciation_templates=MappingProxyType(pronunciation),
        common_default_words=frozenset(s.casefold() for s in flatten_list(data["common_default_words"])),
        serialized_borrowing_indicators=tuple(
            s.lower() for s in flatten_list(data["serialized_borrowing_indicators"])
        ),
        borrowing_indicators=tuple(s.lower() for s in flatten_list(data["borrowing_indicators"])),
    )


def load_tables(path: Path = TABLES_PATH) -> Tables:
    """Load and build the tables from a YAML file."""
    return build_tables(_load_yaml(path))


TABLES = load_tables()


def normalize_pos(label: str) -> str:
    """
    Map a raw part-of-speech label to its normalized tag.

    Tries an exact (case-sensitive) match first, then a case-insensitive one,
    and falls back to the raw label lower-cased.

    >>> normalize_pos("Noun")
    'noun'
    >>> normalize_pos("Sustantivo")
    'noun'
    >>> normalize_pos("Gerund")
    'gerund'
    """
    label = (label or "").strip()
    if label in TABLES.pos_aliases:
        return TABLES.pos_aliases[label]
    folded = label.casefold()
    if folded in TABLES.pos_aliases_folded:
        return TABLES.pos_aliases_folded[folded]
    return label.lower()


def language_name(code: str) -> str:
    """Display name for a language code, or the upper-cased code if unknown."""
    language = TABLES.languages.get((code or "").lower())
    return language.name if language else (code or "").upper()


def wiki_prefix(code: str) -> str:
    """Wiktionary subdomain for a language code (English edition if unknown)."""
    language = TABLES.languages.get((code or "").lower())
    return language.wiki if language else "en"
