"""
Exceptions raised by wordlookup.

Only two kinds of failure ever reach a caller of DictionaryLookup.lookup():
an EmptyQueryError for a blank query (raised before any source is called),
and upstream failures, which arrive as TransportError from a source and are
turned into a SourceError result. Everything else in the extraction path
degrades to empty values instead of raising.
"""


class WordLookupError(Exception):
    """Base class for all wordlookup exceptions."""
    pass


class TransportError(WordLookupError):
    """Raised by a dictionary source when the upstream could not be reached
    or answered with something that is neither an entry nor a clean miss."""
    pass


class EmptyQueryError(WordLookupError, ValueError):
    """Raised when a lookup is requested for an empty or blank word."""
    pass


class TableError(WordLookupError):
    """Raised when the heuristic table file is missing or invalid."""
    pass


class ConfigError(WordLookupError):
    """Raised when a configuration file cannot be used."""
    pass
