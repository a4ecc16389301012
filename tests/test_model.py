"""Tests for the canonical entry model and raw responses."""

import dataclasses

import orjson
import pytest

from wordlookup.model import (
    Definition,
    Found,
    NotFound,
    RawResponse,
    RejectedAsLoanword,
    ResponseKind,
    Sense,
    SourceError,
    WordEntry,
    make_sense,
)


@pytest.fixture
def entry():
    return WordEntry(
        word="casa",
        language="es",
        pronunciations=("/ˈkasa/", "ˈka.sa"),
        etymology="Del latín casa.",
        senses=(Sense("noun", (Definition("house", "Mi casa.", ("hogar",)),)),),
        source_url="https://es.wiktionary.org/wiki/casa",
    )


class TestMakeSense:
    """Building senses from candidate definitions."""

    def test_trims_and_drops_blank(self):
        """Texts are trimmed and blanks removed."""
        sense = make_sense("noun", ["  house ", "", "   ", Definition(" home ", "ex")], 5)
        assert sense.definitions == (Definition("house"), Definition("home", "ex"))

    def test_cap(self):
        """At most `limit` definitions are kept."""
        assert len(make_sense("noun", [f"d{i}" for i in range(9)], 5).definitions) == 5

    def test_nothing_usable(self):
        """No usable definitions means no sense."""
        assert make_sense("noun", ["", " "], 5) is None


class TestWordEntry:
    """Entry helpers and serialization."""

    def test_frozen(self, entry):
        """Entries cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.word = "other"

    def test_has_content(self, entry):
        """Senses or a non-blank extract count as content."""
        assert entry.has_content
        assert WordEntry("w", "en", raw_extract="Some prose about w.").has_content
        assert not WordEntry("w", "en", raw_extract="   ").has_content
        assert not WordEntry("w", "en", pronunciations=("/w/",)).has_content

    def test_primary_pronunciation(self, entry):
        """The first pronunciation, if any."""
        assert entry.primary_pronunciation == "/ˈkasa/"
        assert WordEntry("w", "en").primary_pronunciation is None

    def test_to_dict_shape(self, entry):
        """camelCase keys for the UI and history layers."""
        d = entry.to_dict()
        assert set(d) == {
            "word", "language", "pronunciations", "etymology",
            "senses", "rawExtract", "sourceUrl", "isFallback",
        }
        assert d["senses"] == [{
            "partOfSpeech": "noun",
            "definitions": [{"text": "house", "example": "Mi casa.", "synonyms": ["hogar"]}],
        }]
        assert d["isFallback"] is False

    def test_to_json(self, entry):
        """JSON bytes with sorted keys."""
        data = entry.to_json()
        assert isinstance(data, bytes)
        assert orjson.loads(data) == entry.to_dict()
        assert data.index(b'"etymology"') < data.index(b'"word"')

    def test_from_dict(self, entry):
        """Stored history rebuilds the same entry."""
        assert WordEntry.from_dict(orjson.loads(entry.to_json())) == entry


class TestRawResponse:
    """Response kind discrimination."""

    def test_markup(self):
        """Strings are markup."""
        raw = RawResponse.from_payload("== x ==", source_url="https://a.example")
        assert raw.kind is ResponseKind.MARKUP
        assert raw.source_url == "https://a.example"

    def test_bytes_decoded(self):
        """Bytes are decoded as UTF-8 markup."""
        raw = RawResponse.from_payload("año".encode("utf-8"))
        assert raw == RawResponse(ResponseKind.MARKUP, "año")

    @pytest.mark.parametrize("payload", [{"word": "x"}, [{"word": "x"}]])
    def test_structured(self, payload):
        """Mappings and lists are structured."""
        assert RawResponse.from_payload(payload).kind is ResponseKind.STRUCTURED

    def test_unknown(self):
        """Other payloads are refused."""
        with pytest.raises(TypeError):
            RawResponse.from_payload(42)


class TestResults:
    """Result variants."""

    def test_kinds(self, entry):
        """Each variant has a kind and only Found is ok."""
        results = [Found(entry), NotFound(), RejectedAsLoanword("es"), SourceError("down")]
        assert [r.kind for r in results] == ["found", "not_found", "rejected_as_loanword", "source_error"]
        assert [r.ok for r in results] == [True, False, False, False]
