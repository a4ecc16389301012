"""
Markup-to-plain-text sanitizer.

Turns one fragment of Wiktionary markup (a definition line, an etymology
block) into display prose. The passes run in a fixed order and each one
assumes the earlier ones already ran:

    1. inline templates    {{l|es|casa}}            -> casa
    2. cross-references    {{sinónimo|hogar}}       -> (removed)
    3. other templates     {{lb|en|informal}}       -> (removed)
    4. wikilinks           [[house|houses]]         -> houses
    5. emphasis            '''run'''                -> run
    6. tags and residue    <ref>..</ref>, stray ]]  -> (removed)
    7. whitespace          collapsed and trimmed

The output never contains "{{", "}}", "[[", "]]" or an angle-bracket tag.
"""

import re

from wordlookup.tables import TABLES
from wordlookup.wikitext.parser import WikitextParser, strip_templates


# Innermost template: no braces inside, so nested templates resolve bottom-up
INNER_TEMPLATE = re.compile(r"\{\{([^{}|]+)((?:\|[^{}]*)?)\}\}")

WIKILINK = re.compile(r"\[\[([^\[\]|]*)(?:\|([^\[\]]*))?\]\]")
BOLD = re.compile(r"'''(.+?)'''")
ITALIC = re.compile(r"''(.+?)''")
TAG = re.compile(r"<[^<>]*>")
WHITESPACE = re.compile(r"\s+")

RESIDUE = ("{{", "}}", "[[", "]]")


def _positional(params: str) -> list[str]:
    """Positional arguments of a '|...' template tail; wikilinks keep their text."""
    if not params:
        return []
    template = WikitextParser("{{_" + params + "}}").parse_template()
    return template.get_positional() if template else []


def resolve_inline_templates(text: str) -> str:
    """Replace known inline templates with their display argument."""

    def replace(match: re.Match) -> str:
        name = match.group(1).strip().lower()
        index = TABLES.inline_templates.get(name)
        if index is None:
            return match.group(0)
        args = _positional(match.group(2))
        if index < len(args) and args[index]:
            return args[index]
        return match.group(0)

    # Repeat so that a resolved inner template exposes its parent
    previous = None
    while text != previous:
        previous = text
        text = INNER_TEMPLATE.sub(replace, text)
    return text


def remove_crossref_templates(text: str) -> str:
    """Delete synonym/related/antonym annotation templates with their arguments."""

    def replace(match: re.Match) -> str:
        name = match.group(1).strip().lower()
        if name.startswith(TABLES.crossref_templates):
            return ""
        return match.group(0)

    return INNER_TEMPLATE.sub(replace, text)


def resolve_wikilinks(text: str) -> str:
    """[[target|alias]] -> alias, [[target]] -> target (without #anchor)."""

    def replace(match: re.Match) -> str:
        alias = match.group(2)
        if alias and alias.strip():
            return alias
        target = match.group(1)
        return target.split("#", 1)[0] or target

    previous = None
    while text != previous:
        previous = text
        text = WIKILINK.sub(replace, text)
    return text


def strip_residue(text: str) -> str:
    """Remove angle-bracket tags and any leftover template/link brackets."""
    previous = None
    while text != previous:
        previous = text
        text = TAG.sub("", text)
        for token in RESIDUE:
            text = text.replace(token, "")
    return text


def sanitize(raw: str) -> str:
    """
    Strip structural and formatting markup, leaving readable prose.

    Args:
        raw: Markup fragment; None and "" are accepted

    Returns:
        Plain text (possibly empty)
    """
    if not raw:
        return ""

    text = resolve_inline_templates(raw)
    text = remove_crossref_templates(text)
    text = strip_templates(text)
    text = resolve_wikilinks(text)
    text = BOLD.sub(r"\1", text)
    text = ITALIC.sub(r"\1", text)
    text = strip_residue(text)
    return WHITESPACE.sub(" ", text).strip()
