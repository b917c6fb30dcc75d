"""Exception hierarchy for stringsource.

Lookups that simply find nothing return None. The exceptions below are
reserved for caller errors.
"""


class StringSourceError(Exception):
    """Base exception for all stringsource errors."""


class MalformedPositionError(StringSourceError, TypeError):
    """Raised when a position argument is not a ``{line, column}`` structure."""


class CommandError(StringSourceError, ValueError):
    """Raised when a value command is built or applied with bad input."""


class SourceTextUnavailableError(StringSourceError, ValueError):
    """Raised when an original line/column is requested without the source text."""
