"""
Section extraction from raw Wiktionary pages.

Given the wikitext of one page, recover:

    pronunciations  from pronunciation templates and /.../ transcriptions
    etymology       from the first etymology-like section with real prose
    senses          from the first strategy that yields anything:
                      1. template-headed sections   === {{sustantivo|es}} ===
                         with ";1: gloss" lines (Spanish/Portuguese editions)
                      2. plain English headings     ===Noun===
                         with "# gloss" lines
                      3. any "# gloss" line on the page, tagged "definition"
    raw_extract     the first few prose lines, only when there are no senses

Pronunciation and etymology run regardless of which sense strategy wins.
Nothing here raises on odd input; missing data comes back empty.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from wordlookup.config import DEFAULT_CONFIG, LookupConfig
from wordlookup.model import Sense, make_sense
from wordlookup.tables import TABLES, normalize_pos
from wordlookup.wikitext.parser import Heading, Template, find_headings, find_templates
from wordlookup.wikitext.sanitize import sanitize


logger = logging.getLogger(__name__)


# =============================================================================
# Patterns
# =============================================================================

# /rʌn/ style transcriptions anywhere on the page; not path segments of URLs
SLASH_TRANSCRIPTION = re.compile(r"(?<![/:\w])/[^/\n<>{}\[\]|=]{2,20}/(?![/\w])")

# Heading whose whole title is a template, optionally with a language argument
TEMPLATE_HEADING = re.compile(r"^\{\{([^{}|]+)((?:\|[^{}]*)?)\}\}$")

# ;1: gloss   (numbered gloss lines of template-headed sections)
NUMBERED_GLOSS = re.compile(r"^;[ \t]*\d+[ \t]*:[ \t]*(.+)$", re.MULTILINE)

# # gloss    (but not ##, #*, #: sub-items, nor #REDIRECT stubs)
DEFINITION_LINE = re.compile(
    r"^#(?![#*:]|(?i:redirect\w*|redirecci[oó]n|weiterleitung)\b)[ \t]*([^#*:\s].*)$", re.MULTILINE
)

# Lines that are structure rather than prose
NON_PROSE_PREFIXES = ("=", "{{", "{|", "|", "!", "*", "#", ";", ":")

GENERIC_POS = "definition"


@dataclass(frozen=True)
class Extraction:
    """What a page yielded; empty collections when nothing was found."""

    pronunciations: tuple[str, ...] = ()
    etymology: Optional[str] = None
    senses: tuple[Sense, ...] = ()
    raw_extract: Optional[str] = None

    @property
    def has_content(self) -> bool:
        return bool(self.senses) or bool(self.raw_extract)


# =============================================================================
# Extractor
# =============================================================================


class SectionExtractor:
    """
    Extract pronunciations, etymology and senses from wikitext.

    Usage:
        extractor = SectionExtractor()
        result = extractor.extract(wikitext, language="es")
    """

    def __init__(self, config: LookupConfig = DEFAULT_CONFIG):
        self.config = config
        # Priority order of sense strategies; the first non-empty result wins
        self.sense_strategies: tuple[tuple[str, Callable[[str, list[Heading]], list[Sense]]], ...] = (
            ("template_headings", self.senses_from_template_headings),
            ("english_headings", self.senses_from_english_headings),
            ("numbered_lines", self.senses_from_numbered_lines),
        )

    def extract(self, markup: str, language: str = "en") -> Extraction:
        """
        Extract everything from one page.

        Args:
            markup: Raw wikitext of the page
            language: Language of the Wiktionary edition the page came from

        Returns:
            Extraction
        """
        if not markup or not markup.strip():
            return Extraction()

        headings = find_headings(markup)
        pronunciations = self.extract_pronunciations(markup)
        etymology = self.extract_etymology(markup, headings, language)

        senses: list[Sense] = []
        for name, strategy in self.sense_strategies:
            senses = strategy(markup, headings)
            if senses:
                logger.debug(f"Sense strategy '{name}' produced {len(senses)} senses")
                break

        raw_extract = None if senses else self.extract_raw(markup)

        return Extraction(
            pronunciations=tuple(pronunciations),
            etymology=etymology,
            senses=tuple(senses),
            raw_extract=raw_extract,
        )

    # =========================================================================
    # Pronunciation
    # =========================================================================

    def extract_pronunciations(self, markup: str) -> list[str]:
        """Template transcriptions first, then slash-delimited spans; deduplicated."""
        found: list[str] = []

        def add(value: str):
            value = value.strip()
            if value and value not in found:
                found.append(value)

        def is_pronunciation(template: Template) -> bool:
            return template.name.lower() in TABLES.pronunciation_templates

        for template in find_templates(markup, is_pronunciation):
            for transcription in _template_transcriptions(template):
                add(transcription)

        for match in SLASH_TRANSCRIPTION.finditer(markup):
            add(match.group(0))

        return found

    # =========================================================================
    # Etymology
    # =========================================================================

    def extract_etymology(self, markup: str, headings: list[Heading], language: str = "en") -> Optional[str]:
        """
        First etymology section with enough prose.

        Labels for the page's own language are tried first, then the other
        known labels in table order. A heading matches when its title is the
        label, optionally followed by a number ("Etymology 2").
        """
        language = (language or "").lower()
        ordered = sorted(TABLES.etymology_headings, key=lambda item: item[0] != language)

        for _, title_pattern in ordered:
            for heading in headings:
                if not title_pattern.match(heading.title.strip()):
                    continue
                text = sanitize(heading.body(markup))
                if len(text) > self.config.min_etymology_length:
                    return text[: self.config.max_etymology_length]
        return None

    # =========================================================================
    # Senses
    # =========================================================================

    def senses_from_template_headings(self, markup: str, headings: list[Heading]) -> list[Sense]:
        """Method 1: headings like === {{sustantivo masculino|es}} === with ;N: lines."""
        senses = []
        for heading in headings:
            match = TEMPLATE_HEADING.match(heading.title.strip())
            if not match:
                continue

            category = match.group(1).strip()
            if category.lower() in TABLES.section_templates:
                # {{S|nom|fr}}: the section name is the first argument
                args = [a.strip() for a in match.group(2)[1:].split("|") if a.strip()]
                if not args:
                    continue
                category = args[0]

            body = heading.body(markup)
            glosses = [sanitize(m.group(1)) for m in NUMBERED_GLOSS.finditer(body)]
            sense = make_sense(normalize_pos(category), glosses, self.config.max_definitions)
            if sense:
                senses.append(sense)
        return senses

    def senses_from_english_headings(self, markup: str, headings: list[Heading]) -> list[Sense]:
        """Method 2: ===Noun=== style headings with # lines."""
        senses = []
        for label in TABLES.english_pos_headings:
            for heading in headings:
                if heading.level < 3 or heading.title.strip() != label:
                    continue
                body = heading.body(markup)
                glosses = [sanitize(m.group(1)) for m in DEFINITION_LINE.finditer(body)]
                sense = make_sense(normalize_pos(label), glosses, self.config.max_definitions)
                if sense:
                    senses.append(sense)
        return senses

    def senses_from_numbered_lines(self, markup: str, headings: list[Heading]) -> list[Sense]:
        """Method 3: any # line on the page, as one generic sense."""
        glosses = [sanitize(m.group(1)) for m in DEFINITION_LINE.finditer(markup)]
        glosses = [g for g in glosses if len(g) > 5]
        sense = make_sense(GENERIC_POS, glosses, self.config.max_definitions)
        return [sense] if sense else []

    # =========================================================================
    # Raw extract
    # =========================================================================

    def extract_raw(self, markup: str) -> Optional[str]:
        """First few prose lines when there is nothing structured to show."""
        lines = []
        for line in markup.split("\n"):
            if len(line) > self.config.min_raw_extract_length and not line.lstrip().startswith(NON_PROSE_PREFIXES):
                lines.append(line)
                if len(lines) >= self.config.raw_extract_lines:
                    break

        cleaned = [text for text in (sanitize(line) for line in lines) if text]
        joined = " ".join(cleaned)
        if len(joined) > self.config.min_raw_extract_length:
            return joined[: self.config.max_raw_extract_length]
        return None


def _template_transcriptions(template: Template) -> list[str]:
    """Transcription arguments of one pronunciation template."""
    layout = TABLES.pronunciation_templates[template.name.lower()]
    values = []

    positional = template.get_positional()[layout.skip :]
    if layout.count is not None:
        positional = positional[: layout.count]
    values.extend(positional)

    for key in layout.named:
        value = template.get_named(key)
        if value:
            values.append(value)

    return [v for v in values if v.strip()]


# =============================================================================
# Module-level convenience functions
# =============================================================================

_DEFAULT_EXTRACTOR = SectionExtractor()


def extract_sections(markup: str, language: str = "en") -> Extraction:
    """Extract with the default configuration."""
    return _DEFAULT_EXTRACTOR.extract(markup, language)
