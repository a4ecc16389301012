#!/usr/bin/env python3
"""
lookup_word.py - Look up a word against a live upstream and show the result

Runs the full lookup (fetch, extract, loanword check, fallback) and renders
the entry with rich. Useful when tuning the heuristic tables against real
pages.

Usage:
    # Spanish Wiktionary
    python tools/lookup_word.py casa --language es

    # freedictionaryapi.com instead of Wiktionary
    python tools/lookup_word.py run --source freedictionary

    # Dump the entry as JSON (history storage shape)
    python tools/lookup_word.py maison --language fr --json

Arguments:
    word               Word to look up
    --language CODE    Requested language (default: configured default)
    --source NAME      wiktionary (default) or freedictionary
    --config FILE      YAML config file (default: $WORDLOOKUP_CONFIG)
    --json             Print the entry as JSON instead of a table
    --verbose          Log extraction decisions
"""

import argparse
import logging
import sys

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from wordlookup import DictionaryLookup, Found, LookupResult, load_config
from wordlookup.sources import FreeDictionarySource, WiktionarySource
from wordlookup.tables import language_name


SOURCES = {
    "wiktionary": WiktionarySource,
    "freedictionary": FreeDictionarySource,
}

console = Console()


def render(result: LookupResult, language: str) -> Panel:
    """Build a panel for a lookup result."""
    if not isinstance(result, Found):
        messages = {
            "not_found": "No entry found, even in the fallback language.",
            "rejected_as_loanword": f"Entry exists but is borrowed into {language_name(language)}.",
            "source_error": f"Source failed: {getattr(result, 'reason', '')}",
        }
        return Panel(Text(messages[result.kind], style="yellow"), title=result.kind, border_style="yellow")

    entry = result.entry
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("POS", style="cyan", no_wrap=True)
    table.add_column("#", justify="right")
    table.add_column("Definition")

    for sense in entry.senses:
        for i, definition in enumerate(sense.definitions, 1):
            text = escape(definition.text)
            if definition.example:
                text += f"\n[dim]e.g. {escape(definition.example)}[/dim]"
            table.add_row(sense.part_of_speech if i == 1 else "", str(i), text)

    lines = []
    if entry.pronunciations:
        lines.append(f"[bold]Pronunciation:[/bold] {escape(', '.join(entry.pronunciations))}")
    if entry.etymology:
        lines.append(f"[bold]Etymology:[/bold] {escape(entry.etymology)}")
    if entry.raw_extract:
        lines.append(f"[bold]Extract:[/bold] {escape(entry.raw_extract)}")
    if entry.source_url:
        lines.append(f"[dim]{entry.source_url}[/dim]")
    if entry.is_fallback:
        lines.append(f"[yellow]Shown from {language_name(entry.language)}, not {language_name(language)}[/yellow]")

    header = Text.from_markup("\n".join(lines)) if lines else Text("")
    body = Table.grid()
    body.add_row(header)
    if entry.senses:
        body.add_row(table)

    title = f"{entry.word} ({language_name(entry.language)})"
    return Panel(body, title=title, border_style="green")


def main():
    parser = argparse.ArgumentParser(description="Look up a word and show the normalized entry")
    parser.add_argument("word", help="Word to look up")
    parser.add_argument("--language", help="Requested language code")
    parser.add_argument("--source", choices=sorted(SOURCES), default="wiktionary")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--json", action="store_true", help="Print the entry as JSON")
    parser.add_argument("--verbose", action="store_true", help="Log extraction decisions")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    config = load_config(args.config)
    language = (args.language or config.default_language).lower()

    with SOURCES[args.source](config) as source:
        result = DictionaryLookup(source, config).lookup(args.word, language)

    if args.json:
        if isinstance(result, Found):
            print(result.entry.to_json().decode("utf-8"))
        else:
            print(f'{{"kind": "{result.kind}"}}')
    else:
        console.print(render(result, language))

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
