"""
Wiktionary markup handling.

- parser: recursive descent over templates and wikilinks, heading spans
- sanitize: markup fragment to display prose
- sections: pronunciation, etymology and sense extraction from a whole page
"""

from wordlookup.wikitext.parser import Template, Wikilink, WikitextParser, find_headings, find_templates
from wordlookup.wikitext.sanitize import sanitize
from wordlookup.wikitext.sections import Extraction, SectionExtractor, extract_sections

__all__ = [
    "Template",
    "Wikilink",
    "WikitextParser",
    "find_headings",
    "find_templates",
    "sanitize",
    "Extraction",
    "SectionExtractor",
    "extract_sections",
]
