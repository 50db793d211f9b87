"""
Table widget rendering an ObservableCollection.

Repopulates on every collection signal, so whatever the collection holds
(filtered or unfiltered) is what the table shows. Pair it with a SearchBox
and a ClientSideFilter for a searchable record table.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from PyQt6.QtWidgets import (
    QAbstractItemView, QHeaderView, QLabel, QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget
)

from pyqt_livefilter.core.observable_collection import ObservableCollection, Record

logger = logging.getLogger(__name__)


@dataclass
class ColumnDef:
    """Declarative column configuration for record tables."""
    name: str
    key: str
    width: Optional[int] = None
    resizable: bool = True


class RecordTableView(QWidget):
    """
    Read-only table over an ObservableCollection.

    Provides:
    - Table widget with declarative columns
    - Status label "Showing n/total" when a total provider is given
    - Row -> record lookup for selection handling

    Usage:
        view = RecordTableView(people, [ColumnDef("Name", "name"), ColumnDef("City", "city")],
                               total_provider=lambda: len(engine.shadow_collection))
    """

    def __init__(
        self,
        collection: ObservableCollection,
        columns: List[ColumnDef],
        total_provider: Optional[Callable[[], int]] = None,
        parent=None
    ):
        super().__init__(parent)
        self.collection = collection
        self.columns = list(columns)
        self._total_provider = total_provider
        self._rows: List[Record] = []

        self._setup_ui()
        self._connect_collection()
        self.refresh()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)
        layout.setSpacing(5)

        self.status_label = QLabel("No items loaded")
        layout.addWidget(self.status_label)

        self.table_widget = QTableWidget()
        self.table_widget.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table_widget.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self._apply_column_config()
        layout.addWidget(self.table_widget, 1)  # Stretch to fill

    def _apply_column_config(self):
        self.table_widget.setColumnCount(len(self.columns))
        self.table_widget.setHorizontalHeaderLabels([col.name for col in self.columns])

        header = self.table_widget.horizontalHeader()
        for i, col in enumerate(self.columns):
            mode = QHeaderView.ResizeMode.Interactive if col.resizable else QHeaderView.ResizeMode.Fixed
            header.setSectionResizeMode(i, mode)
            if col.width:
                self.table_widget.setColumnWidth(i, col.width)

    def _connect_collection(self):
        self.collection.record_added.connect(self._on_collection_changed)
        self.collection.record_removed.connect(self._on_collection_changed)
        self.collection.collection_sorted.connect(self._on_collection_changed)
        self.collection.collection_reset.connect(self._on_collection_changed)

    def _on_collection_changed(self, *args):
        self.refresh()

    def refresh(self):
        """Repopulate the table from the collection."""
        self._rows = self.collection.records()
        self.table_widget.setRowCount(len(self._rows))

        for row, record in enumerate(self._rows):
            for col, column in enumerate(self.columns):
                value = record.get(column.key)
                table_item = QTableWidgetItem("" if value is None else str(value))
                self.table_widget.setItem(row, col, table_item)

        self._update_status()

    def _update_status(self):
        shown = len(self._rows)
        if self._total_provider is not None:
            self.status_label.setText(f"Showing {shown}/{self._total_provider()} items")
        else:
            self.status_label.setText(f"Showing {shown} items")

    def record_at(self, row: int) -> Record:
        """Return the record displayed in row."""
        return self._rows[row]

    def selected_records(self) -> List[Record]:
        rows = sorted({item.row() for item in self.table_widget.selectedItems()})
        return [self._rows[row] for row in rows]
