"""
pyqt-livefilter: client-side incremental filtering for PyQt6 record views.

Narrows a live, observable record collection to the records matching a
free-text query, in-process, and restores the unfiltered collection exactly
on clear.

Architecture:
- Tier 1 (Core): ObservableCollection, DebounceTimer, exceptions
- Tier 2 (Protocols): search box contract, paginator protocol, configuration
- Tier 3 (Services): matcher builder, shadow synchronizer, ClientSideFilter
- Tier 4 (Widgets): SearchBox and RecordTableView

Key Features:
- Shadow copy of unfiltered data that filter resets can never corrupt
- Case-insensitive any-token matching, metacharacters escaped by default
- Independently debounced search and clear
"""

__version__ = "0.1.0"

from pyqt_livefilter.core import (
    ObservableCollection,
    ResetOptions,
    DebounceTimer,
    debounce,
    LiveFilterError,
    InvalidQueryError,
    CollectionError,
)
from pyqt_livefilter.protocols import LiveFilterConfig, set_filter_config, get_filter_config
from pyqt_livefilter.services import (
    ClientSideFilter,
    FilterState,
    build_matcher,
    build_pattern,
    build_raw_pattern,
)

__all__ = [
    "__version__",
    "ObservableCollection",
    "ResetOptions",
    "DebounceTimer",
    "debounce",
    "LiveFilterError",
    "InvalidQueryError",
    "CollectionError",
    "LiveFilterConfig",
    "set_filter_config",
    "get_filter_config",
    "ClientSideFilter",
    "FilterState",
    "build_matcher",
    "build_pattern",
    "build_raw_pattern",
]
