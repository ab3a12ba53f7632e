"""Exception types raised by snipnotes components."""


class SnipnotesError(Exception):
    """Base class for recoverable snipnotes errors."""


class StoreError(SnipnotesError):
    """The SQLite store could not complete an operation."""


class CodeStoreError(SnipnotesError):
    """A code snippet file could not be read or written."""


class ProviderError(SnipnotesError):
    """A remote search provider failed (network or parse error)."""


class ExportError(SnipnotesError):
    """Export data could not be serialized or written."""
