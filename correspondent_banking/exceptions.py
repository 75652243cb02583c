"""Capability Errors.

Errors raised by the capability engine and its stores. Each one also derives
from the matching built-in exception so callers catching RuntimeError,
FileNotFoundError or ValueError keep working.

Configuration errors are programming errors: the engine was queried before a
store was configured. They are never turned into empty results.
"""


class CapabilityError(Exception):
    """Base exception for all capability errors."""
    pass


class EngineNotConfiguredError(CapabilityError, RuntimeError):
    """A query was issued before a capabilities store was configured."""
    pass


class CapabilitySourceNotFoundError(CapabilityError, FileNotFoundError):
    """The backing capabilities file does not exist."""
    pass


class CapabilityParseError(CapabilityError, ValueError):
    """The capabilities source content is malformed."""
    pass
