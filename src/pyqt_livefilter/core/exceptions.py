"""Live filter exceptions."""


class LiveFilterError(Exception):
    """Base class for errors raised by pyqt-livefilter."""


class InvalidQueryError(LiveFilterError):
    """Raised when a pattern builder cannot turn query text into a pattern."""


class CollectionError(LiveFilterError):
    """Raised when an observable collection is asked for an impossible operation."""
