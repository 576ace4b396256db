"""Exceptions raised by the corpus core."""


class LivewireDocsError(Exception):
    """Base class for corpus errors."""


class StorageError(LivewireDocsError):
    """A record could not be written to the data directory."""


class UpdateError(LivewireDocsError):
    """An update run could not proceed (nothing discovered, page unavailable)."""
