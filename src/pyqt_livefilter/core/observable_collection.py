"""
Observable ordered record collection.

An ObservableCollection is the live sequence a view renders. Every mutation
emits a Qt signal so observers (table views, the shadow synchronizer) can
react synchronously. Records are plain mappings and are tracked by identity:
the collection never copies them and never holds the same instance twice.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from pyqt_livefilter.core.exceptions import CollectionError

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]
SortKey = Callable[[Record], Any]


@dataclass(frozen=True)
class ResetOptions:
    """Metadata carried by a reset notification.

    Attributes:
        reindex: False when the reset only swaps in a filtered/unfiltered view
            and must not be treated as new data.
        start: First index of a windowed (partial) reset, None for a full reset.
        end: End index of a windowed (partial) reset, None for a full reset.
    """
    reindex: bool = True
    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def is_full(self) -> bool:
        return self.start is None and self.end is None

    @classmethod
    def coerce(cls, options: Any) -> "ResetOptions":
        """Normalize whatever a reset emitter passed into ResetOptions.

        Unrecognised option objects are classified as non-reindexing.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls(
                reindex=bool(options.get("reindex", True)),
                start=options.get("start", options.get("from")),
                end=options.get("end", options.get("to")),
            )
        logger.warning(f"Unclassifiable reset options {options!r}; treating as non-reindexing")
        return cls(reindex=False)


class ObservableCollection(QObject):
    """
    Ordered, observable sequence of records.

    Signals:
        record_added(record, at): after a record is inserted; `at` is the position
            the caller asked for (None when appended)
        record_removed(record, index): after a record is removed (index it had)
        collection_sorted(): after the order changed through sort()
        collection_reset(records, ResetOptions): after the contents were replaced

    Usage:
        people = ObservableCollection([{"name": "Alice"}, {"name": "Bob"}])
        people.record_added.connect(on_added)
        people.add({"name": "Carol"}, at=0)
    """

    record_added = pyqtSignal(object, object)
    record_removed = pyqtSignal(object, int)
    collection_sorted = pyqtSignal()
    collection_reset = pyqtSignal(object, object)

    def __init__(
        self,
        records: Optional[Iterable[Record]] = None,
        comparator: Optional[SortKey] = None,
        parent=None
    ):
        super().__init__(parent)
        self.comparator = comparator
        self._records: List[Record] = []
        for record in records or ():
            if self.index_of(record) < 0:
                self._records.append(record)

    # ========== READ ACCESS ==========

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    def __getitem__(self, index: int) -> Record:
        return self._records[index]

    def __contains__(self, record: object) -> bool:
        return self.index_of(record) >= 0

    def index_of(self, record: object) -> int:
        """Return the position of this exact record instance, or -1."""
        for i, existing in enumerate(self._records):
            if existing is record:
                return i
        return -1

    def records(self) -> List[Record]:
        """Return a snapshot list of the current records, in order."""
        return list(self._records)

    def filter(self, predicate: Callable[[Record], bool]) -> List[Record]:
        """Return the records matching predicate, preserving collection order."""
        return [record for record in self._records if predicate(record)]

    def clone(self) -> "ObservableCollection":
        """Structural copy: a new collection over the same record instances."""
        return ObservableCollection(self._records, comparator=self.comparator)

    # ========== MUTATION ==========

    def add(self, record: Record, at: Optional[int] = None) -> None:
        """Insert record at position `at` (appended when None).

        Adding a record that is already present is a no-op. With a comparator
        and no explicit position the collection re-sorts after inserting.
        """
        if self.index_of(record) >= 0:
            logger.debug("Ignoring add of a record already in the collection")
            return

        if at is None:
            index = len(self._records)
        else:
            index = max(0, min(at, len(self._records)))
        self._records.insert(index, record)
        self.record_added.emit(record, at)

        if self.comparator is not None and at is None:
            self.sort()

    def remove(self, record: Record) -> bool:
        """Remove this exact record instance. Returns False if it was absent."""
        index = self.index_of(record)
        if index < 0:
            logger.debug("Ignoring remove of a record not in the collection")
            return False
        del self._records[index]
        self.record_removed.emit(record, index)
        return True

    def sort(self, key: Optional[SortKey] = None, reverse: bool = False) -> None:
        """Sort in place by key, falling back to the collection comparator."""
        key = key or self.comparator
        if key is None:
            raise CollectionError("Cannot sort a collection without a key or comparator")
        self._records.sort(key=key, reverse=reverse)
        self.collection_sorted.emit()

    def reset(
        self,
        records: Iterable[Record],
        *,
        reindex: bool = True,
        start: Optional[int] = None,
        end: Optional[int] = None
    ) -> None:
        """Replace the whole contents and notify observers.

        Args:
            records: New contents, in order (duplicates by identity are dropped)
            reindex: False for view swaps that do not represent new data
            start: Window start marker for partial (paged) resets
            end: Window end marker for partial (paged) resets
        """
        new_records: List[Record] = []
        seen = set()
        for record in records:
            if id(record) not in seen:
                seen.add(id(record))
                new_records.append(record)
        self._records = new_records
        options = ResetOptions(reindex=reindex, start=start, end=end)
        logger.debug(f"Collection reset to {len(new_records)} records ({options})")
        self.collection_reset.emit(list(new_records), options)
