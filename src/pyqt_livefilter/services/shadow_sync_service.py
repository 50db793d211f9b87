"""
Shadow collection synchronization.

Keeps the filter's private, unfiltered copy of a live collection in step with
genuine data changes while ignoring the resets the filter performs itself.

Mirroring policy:
- add      -> add to shadow with the same requested position
- remove   -> remove from shadow (absent records are ignored)
- sort     -> resync shadow order, only while no query is active
- reset    -> resync shadow, only for reindexing full resets
"""

import logging
from typing import Any, Callable, List, Optional

from pyqt_livefilter.core.observable_collection import ObservableCollection, Record, ResetOptions

logger = logging.getLogger(__name__)


class ShadowSynchronizer:
    """
    Mirrors live collection mutations onto a shadow collection.

    Subscribes on construction; call disconnect() to tear the subscription down.
    Never writes to the live collection.

    Usage:
        shadow = live.clone()
        sync = ShadowSynchronizer(live, shadow, is_query_active=lambda: bool(box.query()))
        ...
        sync.disconnect()
    """

    def __init__(
        self,
        live: ObservableCollection,
        shadow: ObservableCollection,
        is_query_active: Callable[[], bool]
    ):
        self.live = live
        self.shadow = shadow
        self._is_query_active = is_query_active
        self._connected = False
        self.connect()

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        """Subscribe to the live collection's mutation signals."""
        if self._connected:
            return
        self.live.record_added.connect(self._on_added)
        self.live.record_removed.connect(self._on_removed)
        self.live.collection_sorted.connect(self._on_sorted)
        self.live.collection_reset.connect(self._on_reset)
        self._connected = True

    def disconnect(self) -> None:
        """Unsubscribe from the live collection. Safe to call twice."""
        if not self._connected:
            return
        self.live.record_added.disconnect(self._on_added)
        self.live.record_removed.disconnect(self._on_removed)
        self.live.collection_sorted.disconnect(self._on_sorted)
        self.live.collection_reset.disconnect(self._on_reset)
        self._connected = False

    # ========== SIGNAL HANDLERS ==========

    def _on_added(self, record: Record, at: Optional[int]) -> None:
        self.shadow.add(record, at=at)

    def _on_removed(self, record: Record, index: int) -> None:
        if not self.shadow.remove(record):
            logger.debug("Removed record was not in shadow collection")

    def _on_sorted(self) -> None:
        if self._is_query_active():
            # Live order is filtered order; resync once the query is cleared
            logger.debug("Live collection sorted while filtering; shadow order kept")
            return
        self.shadow.reset(self.live.records())

    def _on_reset(self, records: List[Record], options: Any) -> None:
        options = ResetOptions.coerce(options)
        if options.reindex and options.is_full:
            logger.debug(f"Reindexing reset; shadow resynced to {len(records)} records")
            self.shadow.reset(records)
        else:
            logger.debug(f"Ignoring reset for shadow ({options})")
