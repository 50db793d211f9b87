"""
Client-side filter engine.

Narrows a live ObservableCollection to the records matching the text of a
search box, and restores it on clear, without ever losing the unfiltered data.

Key features:
1. Shadow copy of the unfiltered collection, kept in sync by ShadowSynchronizer
2. Filter-induced resets are tagged reindex=False so the shadow ignores them
3. Search and clear are debounced independently (one timer per operation)
4. Pattern and matcher strategies are injectable callables
"""

import logging
from enum import Enum
from typing import Any, List, Optional, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_livefilter.core.debounce_timer import DebounceTimer, debounce
from pyqt_livefilter.core.exceptions import InvalidQueryError
from pyqt_livefilter.core.observable_collection import ObservableCollection, Record
from pyqt_livefilter.protocols.filter_config import LiveFilterConfig, get_filter_config
from pyqt_livefilter.protocols.pagination import Paginator
from pyqt_livefilter.protocols.search_box import SearchBoxContract
from pyqt_livefilter.services.matcher_builder import (
    MatcherBuilder,
    PatternBuilder,
    build_matcher,
    build_pattern,
)
from pyqt_livefilter.services.shadow_sync_service import ShadowSynchronizer

logger = logging.getLogger(__name__)

# Distinguishes "fields not given" from fields=None (search every field)
_UNSET: Any = object()


class FilterState(Enum):
    """Lifecycle of a ClientSideFilter."""
    IDLE = "idle"          # No query applied, live collection is unfiltered
    PENDING = "pending"    # A debounced search or clear is armed
    APPLIED = "applied"    # Live collection shows the matches of a query


class ClientSideFilter(QObject):
    """
    Searches a collection for records matching the search box query, client side.

    Callers (and the search box wiring) use the debounced handles:
        engine.search()   # filter on the current query after the quiet period
        engine.clear()    # clear the box and restore the unfiltered collection

    apply_search() / apply_clear() run immediately.

    Usage:
        people = ObservableCollection(records)
        box = SearchBox(placeholder="Search people")
        engine = ClientSideFilter(people, box, fields=["name", "city"])
        ...
        engine.dispose()
    """

    filter_applied = pyqtSignal(str, int)  # query, match count
    filter_cleared = pyqtSignal()
    state_changed = pyqtSignal(object)  # FilterState

    def __init__(
        self,
        collection: ObservableCollection,
        search_box: SearchBoxContract,
        *,
        paginator: Optional[Paginator] = None,
        config: Optional[LiveFilterConfig] = None,
        fields: Optional[Sequence[str]] = _UNSET,
        wait_ms: Optional[int] = None,
        matcher_builder: Optional[MatcherBuilder] = None,
        pattern_builder: Optional[PatternBuilder] = None,
        parent=None
    ):
        super().__init__(parent)
        config = config or get_filter_config()

        self.collection = collection
        self.search_box = search_box
        self.paginator = paginator

        self.fields: Optional[List[str]] = list(config.fields) if config.fields is not None else None
        if fields is not _UNSET:
            self.fields = list(fields) if fields is not None else None
        self.wait_ms: int = wait_ms if wait_ms is not None else config.wait_ms
        self.matcher_builder: MatcherBuilder = matcher_builder or config.matcher_builder or build_matcher
        self.pattern_builder: PatternBuilder = pattern_builder or config.pattern_builder or build_pattern

        self._state = FilterState.IDLE
        self._applied_query: Optional[str] = None
        self._disposed = False

        # One timer per operation: a pending search never swallows a clear
        self.search: DebounceTimer = debounce(self.apply_search, self.wait_ms)
        self.clear: DebounceTimer = debounce(self.apply_clear, self.wait_ms)

        self.shadow_collection = collection.clone()
        self._synchronizer = ShadowSynchronizer(collection, self.shadow_collection, self.is_query_active)

        self.search_box.connect_input_changed(self._on_input_changed)
        self.search_box.connect_submitted(self._on_submitted)
        self.search_box.connect_cleared(self._on_clear_requested)

        logger.debug(
            f"ClientSideFilter created over {len(collection)} records "
            f"(fields={self.fields}, wait_ms={self.wait_ms})"
        )

    # ========== STATE ==========

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def applied_query(self) -> Optional[str]:
        """The query the live collection is currently filtered by, None when unfiltered."""
        return self._applied_query

    def query(self) -> str:
        """Return the current search box text."""
        return self.search_box.query() or ""

    def is_query_active(self) -> bool:
        """True while the live collection holds a filtered view."""
        return self._applied_query is not None

    def shadow_records(self) -> List[Record]:
        """Snapshot of the unfiltered records, in unfiltered order."""
        return self.shadow_collection.records()

    def _set_state(self, state: FilterState) -> None:
        if state is self._state:
            return
        logger.debug(f"Filter state {self._state.value} -> {state.value}")
        self._state = state
        self.state_changed.emit(state)

    def _settled_state(self) -> FilterState:
        if self.search.is_pending or self.clear.is_pending:
            return FilterState.PENDING
        return FilterState.APPLIED if self._applied_query is not None else FilterState.IDLE

    # ========== OPERATIONS ==========

    def apply_search(self) -> None:
        """Filter the live collection by the current query, immediately.

        A blank query behaves as apply_clear(). If the pattern builder rejects
        the query the live collection is left as it was.
        """
        query = self.query()
        if not query.strip():
            self.apply_clear()
            return

        try:
            matcher = self.matcher_builder(query, fields=self.fields, pattern_builder=self.pattern_builder)
        except InvalidQueryError as e:
            logger.warning(f"Query {query!r} rejected, keeping current view: {e}")
            self._set_state(self._settled_state())
            return

        matches = self.shadow_collection.filter(matcher)
        self._go_to_first_page()
        self.collection.reset(matches, reindex=False)
        self._applied_query = query

        logger.debug(f"Search {query!r}: {len(matches)}/{len(self.shadow_collection)} records match")
        self._set_state(self._settled_state())
        self.filter_applied.emit(query, len(matches))

    def apply_clear(self) -> None:
        """Clear the search box and restore the unfiltered collection, immediately."""
        self.search_box.clear_input()
        self._go_to_first_page()
        self.collection.reset(self.shadow_collection.records(), reindex=False)
        self._applied_query = None

        logger.debug(f"Filter cleared: {len(self.shadow_collection)} records restored")
        self._set_state(self._settled_state())
        self.filter_cleared.emit()

    def _go_to_first_page(self) -> None:
        if self.paginator is not None:
            self.paginator.go_to_first_page(silent=True)

    # ========== SEARCH BOX EVENTS ==========

    def _schedule_search(self) -> None:
        self.search()
        self._set_state(FilterState.PENDING)

    def _on_input_changed(self, text: str) -> None:
        self._schedule_search()

    def _on_submitted(self) -> None:
        self._schedule_search()

    def _on_clear_requested(self) -> None:
        self.clear()
        self._set_state(FilterState.PENDING)

    # ========== TEARDOWN ==========

    def dispose(self) -> None:
        """Cancel pending operations and drop every subscription. Safe to call twice."""
        if self._disposed:
            return
        self.search.cancel()
        self.clear.cancel()
        self._synchronizer.disconnect()
        self.search_box.disconnect_callback(self._on_input_changed)
        self.search_box.disconnect_callback(self._on_submitted)
        self.search_box.disconnect_callback(self._on_clear_requested)
        self._disposed = True
        logger.debug("ClientSideFilter disposed")
