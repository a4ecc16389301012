"""Pytest configuration and shared fixtures."""
import pytest

from wordlookup.model import RawResponse


class FakeSource:
    """
    Dictionary source answering from a {(word, language): answer} table.

    An answer may be a RawResponse, a raw payload (dict/list/str, wrapped
    with RawResponse.from_payload), None for a clean miss, or an exception
    instance to raise. Unlisted pairs are misses. Every call is recorded.
    """

    def __init__(self, answers=None):
        self.answers = dict(answers or {})
        self.calls = []

    def fetch_raw(self, word, language):
        self.calls.append((word, language))
        answer = self.answers.get((word, language))
        if isinstance(answer, Exception):
            raise answer
        if answer is None or isinstance(answer, RawResponse):
            return answer
        return RawResponse.from_payload(answer)


@pytest.fixture
def fake_source():
    """Factory for FakeSource instances."""
    return FakeSource


@pytest.fixture
def spanish_casa_wikitext():
    """Spanish Wiktionary page with a template-headed noun section."""
    return (
        "== {{lengua|es}} ==\n"
        "{{pron-graf|fone=ˈka.sa}}\n"
        "\n"
        "=== Etimología ===\n"
        "{{etimología|la|casa|choza}}. Del latín ''casa'' (\"choza, cabaña\").\n"
        "\n"
        "=== {{sustantivo femenino|es}} ===\n"
        ";1: [[edificio|Edificio]] para habitar.\n"
        "{{sinónimo|hogar|vivienda}}\n"
        ";2: Lugar donde alguien vive.\n"
    )


@pytest.fixture
def english_run_wikitext():
    """English Wiktionary page with plain POS headings under a numbered etymology."""
    return (
        "==English==\n"
        "\n"
        "===Pronunciation===\n"
        "* {{IPA|en|/ɹʌn/}}\n"
        "\n"
        "===Etymology 1===\n"
        "From Middle English {{m|enm|rinnen}}, from Old English {{m|ang|rinnan}}.\n"
        "\n"
        "====Verb====\n"
        "{{en-verb|runs|running|ran|run}}\n"
        "\n"
        "# To [[move]] swiftly.\n"
        "#* {{quote-book|en|year=1900|passage=He ran.}}\n"
        "# To [[operate]] a machine.\n"
        "## To be in operation.\n"
        "#: The engine is running.\n"
        "\n"
        "====Noun====\n"
        "{{en-noun}}\n"
        "\n"
        "# An act of running.\n"
    )


@pytest.fixture
def numbered_only_wikitext():
    """Page whose definitions sit under an unrecognized heading."""
    return (
        "==Meaning==\n"
        "# The first meaning of the word.\n"
        "# The second meaning of the word.\n"
        "# The third meaning of the word.\n"
    )


@pytest.fixture
def run_record():
    """dictionaryapi.dev style record."""
    return {
        "word": "run",
        "phonetic": "/ɹʌn/",
        "meanings": [
            {
                "partOfSpeech": "verb",
                "definitions": [{"definition": "to move fast"}],
            }
        ],
    }


@pytest.fixture
def casa_record():
    """freedictionaryapi.com style record."""
    return {
        "word": "casa",
        "entries": [
            {
                "language": {"code": "es", "name": "Spanish"},
                "partOfSpeech": "noun",
                "pronunciations": [{"type": "ipa", "text": "/ˈkasa/"}],
                "senses": [
                    {
                        "definition": "house",
                        "examples": ["Mi casa es su casa."],
                        "synonyms": ["hogar"],
                    },
                    {"definition": "home"},
                ],
            }
        ],
        "source": {"url": "https://en.wiktionary.org/wiki/casa"},
    }
