"""
Core PyQt6 utilities.

Pure PyQt6 building blocks with no filtering logic of their own:
the observable record collection, the trailing debounce timer and
the exception hierarchy.
"""

from .debounce_timer import DebounceTimer, debounce, DEFAULT_WAIT_MS
from .exceptions import LiveFilterError, InvalidQueryError, CollectionError
from .observable_collection import ObservableCollection, ResetOptions, Record

__all__ = [
    "DebounceTimer",
    "debounce",
    "DEFAULT_WAIT_MS",
    "LiveFilterError",
    "InvalidQueryError",
    "CollectionError",
    "ObservableCollection",
    "ResetOptions",
    "Record",
]
