"""Tests for configuration loading and the static tables."""

from types import MappingProxyType

import pytest

from wordlookup.config import (
    CONFIG_ENV,
    DEFAULT_LANGUAGE_ENV,
    LookupConfig,
    config_from_mapping,
    load_config,
)
from wordlookup.errors import ConfigError, TableError
from wordlookup.tables import (
    TABLES,
    flatten_list,
    language_name,
    load_tables,
    normalize_pos,
    wiki_prefix,
)


@pytest.fixture
def clean_env(monkeypatch):
    """No configuration from the environment."""
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.delenv(DEFAULT_LANGUAGE_ENV, raising=False)
    return monkeypatch


class TestLookupConfig:
    """Config dataclass validation."""

    def test_defaults(self):
        """Defaults match the documented limits."""
        config = LookupConfig()
        assert config.default_language == "en"
        assert config.max_definitions == 5
        assert config.max_etymology_length == 500
        assert config.max_raw_extract_length == 300
        assert config.request_timeout == 10.0

    def test_language_normalized(self):
        """The default language is trimmed and lower-cased."""
        assert LookupConfig(default_language=" ES ").default_language == "es"

    @pytest.mark.parametrize("kwargs", [
        {"default_language": " "},
        {"max_definitions": 0},
        {"request_timeout": 0},
    ])
    def test_invalid(self, kwargs):
        """Unusable values are rejected."""
        with pytest.raises(ConfigError):
            LookupConfig(**kwargs)


class TestLoadConfig:
    """YAML files and environment overrides."""

    def test_no_file(self, clean_env):
        """Without a file the defaults are used."""
        assert load_config() == LookupConfig()

    def test_missing_file(self, clean_env, tmp_path):
        """A path that does not exist falls back to defaults."""
        assert load_config(tmp_path / "absent.yaml") == LookupConfig()

    def test_lookup_section(self, clean_env, tmp_path):
        """Values under 'lookup:' override the defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("lookup:\n  default_language: es\n  max_definitions: 3\n", encoding="utf-8")
        config = load_config(path)
        assert config.default_language == "es"
        assert config.max_definitions == 3
        assert config.max_etymology_length == 500

    def test_path_from_environment(self, clean_env, tmp_path):
        """$WORDLOOKUP_CONFIG names the file."""
        path = tmp_path / "config.yaml"
        path.write_text("request_timeout: 2.5\n", encoding="utf-8")
        clean_env.setenv(CONFIG_ENV, str(path))
        assert load_config().request_timeout == 2.5

    def test_language_override(self, clean_env):
        """$WORDLOOKUP_DEFAULT_LANGUAGE wins over the file."""
        clean_env.setenv(DEFAULT_LANGUAGE_ENV, "FR")
        assert load_config().default_language == "fr"

    def test_unknown_key(self):
        """Misspelled keys are reported."""
        with pytest.raises(ConfigError, match="max_defs"):
            config_from_mapping({"max_defs": 3})

    def test_wrong_type(self):
        """Values of the wrong type are reported as ConfigError."""
        with pytest.raises(ConfigError):
            config_from_mapping({"max_definitions": "five"})

    def test_not_a_mapping(self, clean_env, tmp_path):
        """A YAML list is not a configuration."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)


class TestTables:
    """Heuristic tables loaded from YAML."""

    def test_read_only(self):
        """Tables cannot be modified at runtime."""
        assert isinstance(TABLES.pos_aliases, MappingProxyType)
        with pytest.raises(TypeError):
            TABLES.pos_aliases["Noun"] = "verb"

    def test_indicator_lists(self):
        """The serialized list is part of the definition list."""
        assert set(TABLES.serialized_borrowing_indicators) == {"anglicism", "borrowed from", "loanword"}
        assert set(TABLES.serialized_borrowing_indicators) <= set(TABLES.borrowing_indicators)
        assert "yes" in TABLES.common_default_words

    @pytest.mark.parametrize("label,tag", [
        ("Noun", "noun"),
        ("noun", "noun"),
        ("sustantivo masculino", "noun"),
        ("Sustantivo Femenino", "noun"),
        ("verbe", "verb"),
        ("Gerund", "gerund"),
        ("", ""),
    ])
    def test_normalize_pos(self, label, tag):
        """Exact match, then case-insensitive, then the label lower-cased."""
        assert normalize_pos(label) == tag

    def test_languages(self):
        """Codes map to names and Wiktionary editions."""
        assert language_name("es") == "Spanish"
        assert language_name("xx") == "XX"
        assert wiki_prefix("FR") == "fr"
        assert wiki_prefix("xx") == "en"

    def test_flatten_list(self):
        """Alias references are flattened in order."""
        assert flatten_list([["a", "b"], "c", [["d"]]]) == ["a", "b", "c", "d"]

    def test_missing_file(self, tmp_path):
        """A missing table file fails loudly."""
        with pytest.raises(TableError, match="not found"):
            load_tables(tmp_path / "tables.yaml")

    def test_missing_keys(self, tmp_path):
        """Missing keys are named."""
        path = tmp_path / "tables.yaml"
        path.write_text("languages: {}\n", encoding="utf-8")
        with pytest.raises(TableError, match="pos_aliases"):
            load_tables(path)
