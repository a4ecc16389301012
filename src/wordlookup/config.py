"""
Lookup configuration.

Defaults reproduce the limits the dictionary page has always used (five
definitions per sense, 500-character etymologies, 300-character extracts,
English as the fallback language). A YAML file can override any of them:

    lookup:
      default_language: en
      max_definitions: 5
      request_timeout: 10

The file is taken from the explicit path, else from $WORDLOOKUP_CONFIG.
$WORDLOOKUP_DEFAULT_LANGUAGE overrides the default language last.
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Union

import yaml

from wordlookup.errors import ConfigError


logger = logging.getLogger(__name__)

CONFIG_ENV = "WORDLOOKUP_CONFIG"
DEFAULT_LANGUAGE_ENV = "WORDLOOKUP_DEFAULT_LANGUAGE"


@dataclass(frozen=True)
class LookupConfig:
    """Limits and defaults shared by the extractor, normalizer and sources."""

    default_language: str = "en"
    max_definitions: int = 5
    max_etymology_length: int = 500
    min_etymology_length: int = 10
    max_raw_extract_length: int = 300
    min_raw_extract_length: int = 20
    raw_extract_lines: int = 3
    request_timeout: float = 10.0
    user_agent: str = "wordlookup/0.1 (language-learning dictionary)"

    def __post_init__(self):
        if not self.default_language or not self.default_language.strip():
            raise ConfigError("default_language must not be empty")
        if self.max_definitions < 1:
            raise ConfigError(f"max_definitions must be positive, got {self.max_definitions}")
        if self.request_timeout <= 0:
            raise ConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        object.__setattr__(self, "default_language", self.default_language.strip().lower())


DEFAULT_CONFIG = LookupConfig()


def config_from_mapping(data: dict) -> LookupConfig:
    """Build a LookupConfig from a mapping, rejecting unknown keys."""
    if "lookup" in data and isinstance(data["lookup"], dict):
        data = data["lookup"]

    known = {f.name for f in fields(LookupConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    try:
        return LookupConfig(**data)
    except TypeError as e:
        raise ConfigError(f"Invalid configuration: {e}")


def load_config(path: Optional[Union[str, Path]] = None) -> LookupConfig:
    """
    Load configuration from YAML, falling back to defaults.

    Args:
        path: Config file; if omitted, $WORDLOOKUP_CONFIG is consulted

    Returns:
        LookupConfig
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV)

    config = DEFAULT_CONFIG
    if path:
        path = Path(path)
        if not path.exists():
            logger.info(f"No config file found at {path}, using defaults")
        else:
            try:
                with open(path, encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}")
            if not isinstance(data, dict):
                raise ConfigError(f"Config file {path} must contain a mapping")
            config = config_from_mapping(data)
            logger.debug(f"Loaded lookup config from {path}")

    language = os.environ.get(DEFAULT_LANGUAGE_ENV)
    if language:
        config = replace(config, default_language=language)

    return config
