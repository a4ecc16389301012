"""
Recursive descent primitives for Wiktionary markup.

Wiktionary pages have no formal grammar, but the three constructs the
extractor depends on nest predictably enough for a small parser:

    content     ::= (template | wikilink | text)*
    template    ::= "{{" name ("|" param)* "}}"
    param       ::= (template | wikilink | param_char)*
    wikilink    ::= "[[" target ("#" anchor)? ("|" display)? "]]"

Headings (== Title ==) are line-oriented and found with a regex instead.

Unterminated constructs never raise: an unclosed "{{" or "[[" is treated
as literal text so that the rest of the line survives.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Optional


# =============================================================================
# Data structures
# =============================================================================


@dataclass
class Wikilink:
    """A parsed wikilink: [[target#anchor|display]]"""

    target: str
    anchor: Optional[str] = None
    display: Optional[str] = None

    def text(self) -> str:
        """Return display text if present, otherwise target."""
        return self.display if self.display is not None else self.target


@dataclass
class Template:
    """A parsed template: {{name|param1|param2|...}}"""

    name: str
    params: list[str] = field(default_factory=list)

    def get_positional(self) -> list[str]:
        """Return only positional parameters (no '=' in them)."""
        return [p for p in self.params if "=" not in p]

    def get_named(self, key: str) -> Optional[str]:
        """Get a named parameter value."""
        prefix = f"{key}="
        for p in self.params:
            if p.startswith(prefix):
                return p[len(prefix) :].strip()
        return None


@dataclass
class Heading:
    """A section heading and the span of its body in the page text."""

    level: int
    title: str
    start: int
    body_start: int
    body_end: int

    def body(self, text: str) -> str:
        return text[self.body_start : self.body_end]


HEADING = re.compile(r"^(={2,6})[ \t]*(.+?)[ \t]*\1[ \t]*$", re.MULTILINE)


# =============================================================================
# Parser class
# =============================================================================


class WikitextParser:
    """
    Recursive descent parser over one fragment of markup.

    Usage:
        parser = WikitextParser(text)
        templates = parser.parse_templates()
        plain = WikitextParser(text).strip_templates()
    """

    def __init__(self, text: str):
        self.text = text or ""
        self.pos = 0
        self.length = len(self.text)

    # =========================================================================
    # Core parsing primitives
    # =========================================================================

    def peek(self, n: int = 1) -> str:
        return self.text[self.pos : self.pos + n]

    def at_end(self) -> bool:
        return self.pos >= self.length

    def match(self, expected: str) -> bool:
        return self.text.startswith(expected, self.pos)

    def consume_if(self, expected: str) -> bool:
        if self.match(expected):
            self.pos += len(expected)
            return True
        return False

    def consume_until(self, terminators: str) -> str:
        """Consume characters until a terminator character or a nested opener."""
        start = self.pos
        while not self.at_end() and self.peek() not in terminators:
            if self.match("{{") or self.match("[["):
                break
            self.pos += 1
        return self.text[start : self.pos]

    # =========================================================================
    # Grammar productions
    # =========================================================================

    def parse_templates(self) -> list[Template]:
        """Return every top-level template in the fragment, in order."""
        templates = []
        while not self.at_end():
            if self.match("{{"):
                start = self.pos
                template = self.parse_template()
                if template is None:
                    self.pos = start + 2
                else:
                    templates.append(template)
            elif self.match("[["):
                start = self.pos
                if self.parse_wikilink() is None:
                    self.pos = start + 2
            else:
                self.pos += 1
        return templates

    def parse_template(self) -> Optional[Template]:
        """
        Parse a template: {{name|param1|param2|...}}

        Returns None (position undefined) if the template is never closed.
        """
        if not self.consume_if("{{"):
            return None

        name = self.parse_template_name()
        params = []
        while not self.at_end() and not self.match("}}"):
            if self.consume_if("|"):
                params.append(self.parse_param())
            else:
                return None

        if not self.consume_if("}}"):
            return None
        return Template(name=name.strip(), params=params)

    def parse_template_name(self) -> str:
        chars = []
        while not self.at_end():
            if self.match("|") or self.match("}}"):
                break
            if self.match("{{"):
                if not self.skip_template():
                    break
                continue
            chars.append(self.text[self.pos])
            self.pos += 1
        return "".join(chars)

    def parse_param(self) -> str:
        """
        Parse a template parameter (until | or }}).

        Nested templates are dropped; nested wikilinks contribute their text.
        """
        parts = []
        while not self.at_end():
            if self.match("|") or self.match("}}"):
                break
            if self.match("{{"):
                start = self.pos
                if not self.skip_template():
                    self.pos = start + 2
                    parts.append("{{")
            elif self.match("[["):
                start = self.pos
                wikilink = self.parse_wikilink()
                if wikilink is None:
                    self.pos = start + 2
                    parts.append("[[")
                else:
                    parts.append(wikilink.text())
            else:
                parts.append(self.text[self.pos])
                self.pos += 1
        return "".join(parts).strip()

    def parse_wikilink(self) -> Optional[Wikilink]:
        """Parse a wikilink: [[target#anchor|display]]; None if never closed."""
        if not self.consume_if("[["):
            return None

        target = self.consume_until("#|]\n")
        anchor = None
        display = None

        if self.consume_if("#"):
            anchor = self.consume_until("|]\n")

        if self.consume_if("|"):
            parts = []
            while not self.at_end() and not self.match("]]") and self.peek() != "\n":
                if self.match("{{"):
                    start = self.pos
                    if not self.skip_template():
                        self.pos = start + 2
                elif self.match("[["):
                    start = self.pos
                    inner = self.parse_wikilink()
                    if inner is None:
                        self.pos = start + 2
                    else:
                        parts.append(inner.text())
                else:
                    parts.append(self.text[self.pos])
                    self.pos += 1
            display = "".join(parts)

        if not self.consume_if("]]"):
            return None
        return Wikilink(target=target, anchor=anchor, display=display if display else None)

    def skip_template(self) -> bool:
        """
        Skip over a template without building its structure.

        Returns False, leaving the position at the end of input, if the
        template is never closed.
        """
        if not self.consume_if("{{"):
            return False

        depth = 1
        while not self.at_end():
            if self.match("{{"):
                depth += 1
                self.pos += 2
            elif self.match("}}"):
                depth -= 1
                self.pos += 2
                if depth == 0:
                    return True
            else:
                self.pos += 1
        return False

    # =========================================================================
    # Rewriting
    # =========================================================================

    def strip_templates(self) -> str:
        """Return the fragment with every (nesting-aware) template removed."""
        parts = []
        self.pos = 0
        while not self.at_end():
            if self.match("{{"):
                start = self.pos
                if not self.skip_template():
                    # Unclosed: keep going after the opener
                    self.pos = start + 2
            else:
                parts.append(self.text[self.pos])
                self.pos += 1
        return "".join(parts)


# =============================================================================
# Module-level convenience functions
# =============================================================================


def find_templates(text: str, predicate: Callable[[Template], bool]) -> list[Template]:
    """Return the top-level templates in text accepted by predicate."""
    return [t for t in WikitextParser(text).parse_templates() if predicate(t)]


def strip_templates(text: str) -> str:
    """Remove every template from text, including nested ones."""
    return WikitextParser(text).strip_templates()


def find_headings(text: str) -> list[Heading]:
    """
    Find all section headings in page text.

    A heading's body runs from the line after it to the next heading line of
    any level (or the end of the page).
    """
    matches = list(HEADING.finditer(text or ""))
    headings = []
    for i, m in enumerate(matches):
        body_start = m.end() + 1 if m.end() < len(text) else m.end()
        body_end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        headings.append(
            Heading(
                level=len(m.group(1)),
                title=m.group(2),
                start=m.start(),
                body_start=min(body_start, body_end),
                body_end=body_end,
            )
        )
    return headings
