"""
Error Types

All errors raised by the cipher engine are configuration or programmer
errors. They derive from ValueError so callers that already guard
parameter checks with ``except ValueError`` keep working.
"""


class FeistelError(ValueError):
    """Base class for all cipher engine errors."""


class InvalidBlockWidthError(FeistelError):
    """Block width is not usable, or a block does not fit the configured width."""


class InvalidSubkeyError(FeistelError):
    """A subkey does not fit the half-block width."""


class InvalidSubkeyCountError(InvalidSubkeyError):
    """The subkey sequence length differs from the configured round count."""


class InvalidMasterKeyError(FeistelError):
    """The master key is negative or wider than the schedule accepts."""


class UnencodableInputError(FeistelError):
    """Text cannot be represented in (or recovered from) the chosen byte encoding."""
